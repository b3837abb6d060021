from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List

from ..plugin import find_plugin_file
from ..rendering import STYLESHEET_SUFFIX

CORPUS_DIR = "corpus"
DICTIONARY_DIR = "dics"
OUTPUT_DIR = "output"
COMMON_DICTIONARY = "Common.txt"
TEXT_SUFFIX = ".txt"

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class ProjectLayout:
    """
    Folder structure of one language workspace::

        <root>/corpus/<project>/*.txt     texts to analyze
        <root>/dics/*.txt                 general dictionaries
        <root>/dics/<project>/*.txt       project dictionaries
        <root>/output/<project>/*.html    annotated pages
        <plugins_dir>/<language>.json     expansion rules (optional)
        <plugins_dir>/<language>.css      page stylesheet (optional)
    """

    root: Path
    project: str
    language: str = "default"
    plugins_dir: Path | None = None

    @property
    def corpus_dir(self) -> Path:
        return self.root / CORPUS_DIR / self.project

    @property
    def general_dictionary_dir(self) -> Path:
        return self.root / DICTIONARY_DIR

    @property
    def project_dictionary_dir(self) -> Path:
        return self.root / DICTIONARY_DIR / self.project

    @property
    def output_dir(self) -> Path:
        return self.root / OUTPUT_DIR / self.project

    def resolved_plugins_dir(self) -> Path:
        if self.plugins_dir is None:
            return self.root / "plugins"
        if self.plugins_dir.is_absolute():
            return self.plugins_dir
        return self.root / self.plugins_dir

    def dictionary_paths(self) -> List[Path]:
        """Project dictionaries first, then the general ones."""
        return _list_text_files(self.project_dictionary_dir) + _list_text_files(
            self.general_dictionary_dir
        )

    def corpus_files(self) -> List[Path]:
        return _list_text_files(self.corpus_dir)

    def plugin_path(self) -> Path | None:
        return find_plugin_file(self.resolved_plugins_dir(), self.language)

    def stylesheet_path(self) -> Path:
        return self.resolved_plugins_dir() / f"{self.language}{STYLESHEET_SUFFIX}"

    def ensure_structure(self) -> None:
        """Create the corpus, dictionary and output folders of the project."""
        for directory in (self.corpus_dir, self.project_dictionary_dir, self.output_dir):
            directory.mkdir(parents=True, exist_ok=True)

    def add_word(self, word: str) -> Path:
        """Append ``word`` to the project's common dictionary and return its path."""
        self.project_dictionary_dir.mkdir(parents=True, exist_ok=True)
        path = self.project_dictionary_dir / COMMON_DICTIONARY
        with path.open("a", encoding="utf-8") as handle:
            handle.write(f"{word.strip()}\n")
        LOGGER.debug("Added %r to %s", word, path)
        return path


def list_projects(root: Path) -> List[str]:
    """Names of the project folders under ``<root>/corpus``."""
    corpus_root = root / CORPUS_DIR
    if not corpus_root.is_dir():
        return []
    return sorted(entry.name for entry in corpus_root.iterdir() if entry.is_dir())


def _list_text_files(directory: Path) -> List[Path]:
    if not directory.is_dir():
        return []
    return sorted(
        path
        for path in directory.iterdir()
        if path.is_file() and path.suffix.lower() == TEXT_SUFFIX
    )
