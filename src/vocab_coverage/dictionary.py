from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Dict, List, Set

from .models import Classification
from .plugin import ExpansionPlugin
from .tokenization import iter_words

LOGGER = logging.getLogger(__name__)


class Provenance(Enum):
    """Where a dictionary entry came from."""

    ORIGINAL = "original"
    EXPANDED = "expanded"


class DictionaryStore:
    """
    Known words for one analysis run, plus the forms derived from them by an
    optional ExpansionPlugin.

    Load every dictionary before calling ``expand()``; after that the store is
    only read while files are classified.
    """

    def __init__(self, plugin: ExpansionPlugin | None = None) -> None:
        self.plugin = plugin
        self._entries: Dict[str, Provenance] = {}

    def load_plugin(self, definition: ExpansionPlugin | Any | None) -> None:
        """Install expansion rules; None removes any expansion capability."""
        if definition is None or isinstance(definition, ExpansionPlugin):
            self.plugin = definition
        else:
            self.plugin = ExpansionPlugin.from_mapping(definition)

    def load_dictionary(self, text: str) -> int:
        """Merge the words of ``text`` as original entries. Returns the word count."""
        loaded = 0
        for word in iter_words(text.lower()):
            self._entries[word] = Provenance.ORIGINAL
            loaded += 1
        LOGGER.debug("Loaded %d dictionary words (%d unique total)", loaded, len(self))
        return loaded

    def expand(self) -> int:
        """
        Run the plugin layers over the current entries and add the surviving
        forms as expanded entries. Returns the number of entries added.

        Each layer only sees the forms produced by the previous layer; words a
        layer does not rewrite are dropped from the pipeline.
        """
        if self.plugin is None:
            return 0

        previous: Set[str] = set(self._entries)
        for layer, rules in self.plugin.ordered_layers():
            current: Set[str] = set()
            for rule in rules:
                for word in previous:
                    current.update(rule.apply(word))
            LOGGER.debug("Layer %s produced %d forms", layer, len(current))
            previous = current

        added = 0
        for word in previous:
            if word not in self._entries:
                self._entries[word] = Provenance.EXPANDED
                added += 1
        LOGGER.info("Dictionary expansion added %d forms", added)
        return added

    def classify(self, word: str) -> Classification:
        provenance = self._entries.get(word)
        if provenance is Provenance.ORIGINAL:
            return Classification.KNOWN
        if provenance is Provenance.EXPANDED:
            return Classification.MAYBE
        if self.is_expandable(word):
            return Classification.MAYBE
        return Classification.UNKNOWN

    def is_expandable(self, word: str) -> bool:
        """True when stripping one of the plugin prefixes leaves a dictionary key."""
        if self.plugin is None:
            return False
        return any(
            word.startswith(prefix) and word[len(prefix) :] in self._entries
            for prefix in self.plugin.prefixes
        )

    def provenance(self, word: str) -> Provenance | None:
        return self._entries.get(word)

    def words(self, provenance: Provenance | None = None) -> List[str]:
        """Sorted entries, optionally restricted to one provenance."""
        return sorted(
            word
            for word, source in self._entries.items()
            if provenance is None or source is provenance
        )

    @property
    def original_count(self) -> int:
        return sum(1 for source in self._entries.values() if source is Provenance.ORIGINAL)

    @property
    def expanded_count(self) -> int:
        return sum(1 for source in self._entries.values() if source is Provenance.EXPANDED)

    def __contains__(self, word: object) -> bool:
        return word in self._entries

    def __len__(self) -> int:
        return len(self._entries)
