from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, List, Mapping, MutableMapping

import yaml


@dataclass(slots=True)
class CoverageConfig:
    """Configuration options for an analysis run."""

    language: str = "default"
    root_dir: str = "."
    plugins_dir: str = "plugins"
    dictionary_paths: List[str] = field(default_factory=list)
    stylesheet_path: str | None = None
    output_dir: str | None = None
    write_html: bool = True
    progress: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Return a mutable dictionary representation of the configuration."""
        return dict(asdict(self))


def _build_kwargs(data: Mapping[str, Any]) -> dict[str, Any]:
    allowed = {field.name for field in fields(CoverageConfig)}
    kwargs = {key: data[key] for key in data if key in allowed}
    if "dictionary_paths" in kwargs:
        value = kwargs["dictionary_paths"]
        if isinstance(value, str):
            value = [value]
        kwargs["dictionary_paths"] = [str(item) for item in value or []]
    return kwargs


def config_from_dict(data: Mapping[str, Any] | None) -> CoverageConfig:
    """Build a CoverageConfig from a dictionary-like input."""
    if data is None:
        return CoverageConfig()
    return CoverageConfig(**_build_kwargs(data))


def config_from_yaml(path: str | Path) -> CoverageConfig:
    """Load configuration from a YAML file."""
    contents = Path(path).read_text(encoding="utf-8")
    parsed = yaml.safe_load(contents) or {}
    if not isinstance(parsed, MutableMapping):
        raise ValueError("Configuration YAML must define a mapping.")
    return config_from_dict(parsed)


def load_config(path: str | Path | None = None) -> CoverageConfig:
    """Load configuration from YAML when provided, otherwise return defaults."""
    if path is None:
        return CoverageConfig()
    return config_from_yaml(path)
