from __future__ import annotations

from typing import Dict, Iterator, Tuple

from .models import Classification, TokenStats


class TokenStatsRegistry:
    """
    Flyweight store that hands out one shared TokenStats per lowercase word.

    A registry is scoped to one tokenization pass (one file); create a fresh
    one per file so occurrence counts do not leak between files.
    """

    def __init__(self) -> None:
        self._stats: Dict[str, TokenStats] = {}

    def get_or_create(self, word: str) -> TokenStats:
        """Return the shared stats for ``word`` and count this occurrence."""
        key = word.lower()
        stats = self._stats.get(key)
        if stats is None:
            stats = TokenStats(word=key)
            self._stats[key] = stats
        else:
            stats.count += 1
        return stats

    def get(self, word: str) -> TokenStats | None:
        """Look up stats without counting an occurrence."""
        return self._stats.get(word.lower())

    def table(self) -> Dict[str, Tuple[int, Classification]]:
        """Return ``{word: (count, classification)}`` in first-seen order."""
        return {
            word: (stats.count, stats.classification)
            for word, stats in self._stats.items()
        }

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and word.lower() in self._stats

    def __iter__(self) -> Iterator[TokenStats]:
        return iter(self._stats.values())

    def __len__(self) -> int:
        return len(self._stats)
