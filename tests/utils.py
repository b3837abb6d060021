from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping


def write_plugin(path: Path, patterns: Mapping[str, Any], prefixes: list[str]) -> Path:
    """Write an expansion plugin as JSON."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps({"Patterns": patterns, "Prefixes": prefixes}, ensure_ascii=False),
        encoding="utf-8",
    )
    return path


def write_workspace(root: Path, project: str = "novels") -> Path:
    """Create a small language workspace with one project."""
    corpus = root / "corpus" / project
    corpus.mkdir(parents=True)
    (corpus / "chapter1.txt").write_text(
        "I run while running.\nThe dog runs home.", encoding="utf-8"
    )
    (corpus / "chapter2.txt").write_text("Unhappy dogs bark.", encoding="utf-8")

    general = root / "dics"
    (general / project).mkdir(parents=True)
    (general / "general.txt").write_text("the\nhome\ndog\n", encoding="utf-8")
    (general / project / "Common.txt").write_text("run\nhappy\n", encoding="utf-8")

    write_plugin(
        root / "plugins" / "en.json",
        patterns={"1": {"^(run)$": ["$1ning", "$1s"], "^(dog)$": ["$1s"]}},
        prefixes=["un"],
    )
    return root
