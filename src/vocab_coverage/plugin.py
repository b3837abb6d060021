from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping, Tuple

import yaml

LOGGER = logging.getLogger(__name__)

PLUGIN_SUFFIXES = (".json", ".yaml", ".yml")

# $1, ${name} and $$ group references used by older rule files.
_DOLLAR_REFERENCE = re.compile(r"\$(?:(\$)|(\d+)|\{(\w+)\})")


class PluginError(ValueError):
    """Raised when an expansion plugin definition is malformed."""


@dataclass(slots=True)
class ExpansionRule:
    """A compiled pattern together with its replacement templates."""

    pattern: re.Pattern[str]
    replacements: Tuple[str, ...]

    def apply(self, word: str) -> List[str]:
        """Return every rewritten form of ``word``; empty when the pattern misses."""
        if not self.pattern.search(word):
            return []
        return [self.pattern.sub(template, word) for template in self.replacements]


@dataclass(slots=True)
class ExpansionPlugin:
    """
    Language-specific morphological rewrite rules.

    ``layers`` maps a layer key to ``{pattern: [replacement, ...]}``. Layers
    run in plain string order of their keys, so "10" sorts before "2".
    ``prefixes`` feed the strip-the-prefix recognizability check.
    """

    layers: Dict[str, Dict[str, List[str]]] = field(default_factory=dict)
    prefixes: List[str] = field(default_factory=list)
    rules: Dict[str, List[ExpansionRule]] = field(
        init=False, repr=False, compare=False, default_factory=dict
    )

    def __post_init__(self) -> None:
        self.rules = {
            layer: [
                _compile_rule(layer, pattern, replacements)
                for pattern, replacements in patterns.items()
            ]
            for layer, patterns in self.layers.items()
        }

    @classmethod
    def from_mapping(cls, data: Any) -> "ExpansionPlugin":
        """Build a plugin from a ``patterns``/``prefixes`` record."""
        if not isinstance(data, Mapping):
            raise PluginError("Plugin definition must be a mapping.")
        lowered = {str(key).lower(): value for key, value in data.items()}
        patterns = lowered.get("patterns") or {}
        prefixes = lowered.get("prefixes") or []
        if not isinstance(patterns, Mapping):
            raise PluginError("Plugin 'patterns' must map layer names to rules.")
        if isinstance(prefixes, str) or not isinstance(prefixes, list):
            raise PluginError("Plugin 'prefixes' must be a list of strings.")

        layers: Dict[str, Dict[str, List[str]]] = {}
        for layer, rules in patterns.items():
            if not isinstance(rules, Mapping):
                raise PluginError(f"Layer '{layer}' must map patterns to replacements.")
            layers[str(layer)] = {
                str(pattern): _as_templates(layer, pattern, replacements)
                for pattern, replacements in rules.items()
            }
        return cls(layers=layers, prefixes=[str(prefix) for prefix in prefixes])

    def layer_keys(self) -> List[str]:
        """Return layer keys in processing order (lexicographic, not numeric)."""
        return sorted(self.layers)

    def ordered_layers(self) -> Iterator[Tuple[str, List[ExpansionRule]]]:
        for key in self.layer_keys():
            yield key, self.rules[key]


def translate_template(template: str) -> str:
    """Rewrite ``$1``/``${name}``/``$$`` references into ``re.sub`` syntax."""

    def _replace(match: re.Match[str]) -> str:
        if match.group(1):
            return "$"
        return rf"\g<{match.group(2) or match.group(3)}>"

    return _DOLLAR_REFERENCE.sub(_replace, template)


def load_plugin_file(path: str | Path) -> ExpansionPlugin | None:
    """
    Load a plugin from a JSON or YAML file.

    A missing file means "no expansion capability" and returns None. Read
    errors propagate; malformed content raises PluginError.
    """
    path = Path(path)
    if not path.exists():
        LOGGER.debug("No expansion plugin at %s", path)
        return None
    contents = path.read_text(encoding="utf-8")
    try:
        if path.suffix.lower() == ".json":
            data = json.loads(contents)
        else:
            data = yaml.safe_load(contents)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise PluginError(f"Unable to parse plugin {path}: {exc}") from exc
    plugin = ExpansionPlugin.from_mapping(data or {})
    LOGGER.info(
        "Loaded plugin %s (%d layers, %d prefixes)",
        path.name,
        len(plugin.layers),
        len(plugin.prefixes),
    )
    return plugin


def find_plugin_file(plugins_dir: str | Path, language: str) -> Path | None:
    """Return the first existing ``<language>.json|.yaml|.yml`` in ``plugins_dir``."""
    base = Path(plugins_dir)
    for suffix in PLUGIN_SUFFIXES:
        candidate = base / f"{language}{suffix}"
        if candidate.is_file():
            return candidate
    return None


def _as_templates(layer: object, pattern: object, value: object) -> List[str]:
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list):
        raise PluginError(
            f"Replacements for pattern '{pattern}' in layer '{layer}' must be a list."
        )
    return [str(item) for item in value]


def _compile_rule(layer: str, pattern: str, replacements: List[str]) -> ExpansionRule:
    try:
        compiled = re.compile(pattern)
    except re.error as exc:
        raise PluginError(
            f"Invalid pattern '{pattern}' in layer '{layer}': {exc}"
        ) from exc
    templates = tuple(translate_template(template) for template in replacements)
    for template in templates:
        try:
            compiled.sub(template, "")
        except (re.error, IndexError) as exc:
            raise PluginError(
                f"Invalid replacement '{template}' for pattern '{pattern}' "
                f"in layer '{layer}': {exc}"
            ) from exc
    return ExpansionRule(pattern=compiled, replacements=templates)
