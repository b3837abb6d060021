from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence

from .classifier import classify_document
from .dictionary import DictionaryStore
from .models import Classification, Document, Paragraph
from .plugin import ExpansionPlugin
from .registry import TokenStatsRegistry
from .rendering import render_html
from .tokenization import Tokenizer
from .tree import known, maybe, size

LOGGER = logging.getLogger(__name__)

# Share of the progress bar spent on preparing dictionaries.
DICTIONARY_PROGRESS = 30.0

ProgressCallback = Callable[[float, Optional[str]], None]

TEXT_ENCODING = "utf-8-sig"


@dataclass(slots=True)
class FileAnalysis:
    """Classified document for one file with its aggregate counts."""

    name: str
    document: Document
    registry: TokenStatsRegistry
    size: int
    known: int
    maybe: int

    @property
    def unknown(self) -> int:
        return self.size - self.known - self.maybe

    def unknown_words(self) -> Dict[str, int]:
        """Unknown words with their counts, most frequent first."""
        unknown = [
            stats
            for stats in self.registry
            if stats.classification is Classification.UNKNOWN
        ]
        unknown.sort(key=lambda stats: (-stats.count, stats.word))
        return {stats.word: stats.count for stats in unknown}

    def to_dict(self) -> dict[str, Any]:
        return {
            "doc_id": self.name,
            "size": self.size,
            "known": self.known,
            "maybe": self.maybe,
            "unknown": self.unknown,
            "unknown_words": self.unknown_words(),
        }


@dataclass(slots=True)
class AnalysisFailure:
    """An input that could not be read during a run."""

    path: str
    reason: str


@dataclass(slots=True)
class AnalysisRun:
    """Everything produced by one analysis pass."""

    store: DictionaryStore
    files: Dict[str, FileAnalysis] = field(default_factory=dict)
    failures: List[AnalysisFailure] = field(default_factory=list)


def build_document(
    name: str, text: str, registry: TokenStatsRegistry | None = None
) -> Document:
    """Build an unclassified document tree with one paragraph per line."""
    tokenizer = Tokenizer(registry)
    document = Document(name=name)
    for line in text.splitlines():
        paragraph = Paragraph()
        for token in tokenizer.tokenize(line):
            paragraph.add_token(token)
        document.add_paragraph(paragraph)
    return document


def analyze_text(name: str, text: str, store: DictionaryStore) -> FileAnalysis:
    """Tokenize, classify and count a single text."""
    registry = TokenStatsRegistry()
    document = classify_document(build_document(name, text, registry), store)
    return FileAnalysis(
        name=name,
        document=document,
        registry=registry,
        size=size(document),
        known=known(document),
        maybe=maybe(document),
    )


def analyze_file(
    path: str | Path, store: DictionaryStore, name: str | None = None
) -> FileAnalysis:
    """Read and analyze a UTF-8 text file. Read errors propagate."""
    path = Path(path)
    LOGGER.debug("Analyzing the file: %s", path)
    text = path.read_text(encoding=TEXT_ENCODING)
    return analyze_text(name or path.name, text, store)


def prepare_dictionary(
    dictionary_paths: Iterable[str | Path],
    plugin: ExpansionPlugin | None = None,
    failures: List[AnalysisFailure] | None = None,
) -> DictionaryStore:
    """
    Load every readable dictionary into a new store and expand it.

    Unreadable dictionaries are logged, recorded in ``failures`` and skipped.
    """
    store = DictionaryStore(plugin)
    for dictionary_path in dictionary_paths:
        path = Path(dictionary_path)
        LOGGER.debug("Loading dictionary: %s", path)
        try:
            text = path.read_text(encoding=TEXT_ENCODING)
        except (OSError, UnicodeDecodeError) as exc:
            LOGGER.error("Can't read dictionary %s: %s", path, exc)
            if failures is not None:
                failures.append(AnalysisFailure(path=str(path), reason=str(exc)))
            continue
        store.load_dictionary(text)
    store.expand()
    LOGGER.info(
        "Dictionary ready: %d original and %d expanded words",
        store.original_count,
        store.expanded_count,
    )
    return store


def analyze_corpus(
    paths: Sequence[str | Path],
    store: DictionaryStore,
    progress: ProgressCallback | None = None,
    failures: List[AnalysisFailure] | None = None,
    root: Path | None = None,
    progress_start: float = 0.0,
) -> Dict[str, FileAnalysis]:
    """
    Analyze files one at a time against the shared store.

    Files are keyed by their path relative to ``root`` when given, otherwise
    by file name. Unreadable files are logged, recorded and skipped.
    """
    results: Dict[str, FileAnalysis] = {}
    percent = progress_start
    step = (100.0 - progress_start) / len(paths) if paths else 0.0
    for file_path in paths:
        path = Path(file_path)
        name = str(path.relative_to(root)) if root is not None else path.name
        percent += step
        try:
            results[name] = analyze_file(path, store, name=name)
        except (OSError, UnicodeDecodeError) as exc:
            LOGGER.error("Can't read file %s: %s", path, exc)
            if failures is not None:
                failures.append(AnalysisFailure(path=str(path), reason=str(exc)))
        if progress is not None:
            progress(percent, name)
    LOGGER.info("Analyzed %d of %d files", len(results), len(paths))
    return results


def run_analysis(
    dictionary_paths: Iterable[str | Path],
    corpus_paths: Sequence[str | Path],
    plugin: ExpansionPlugin | None = None,
    progress: ProgressCallback | None = None,
    root: Path | None = None,
) -> AnalysisRun:
    """Prepare the dictionary once, then analyze every corpus file with it."""
    if progress is not None:
        progress(0.0, None)
    failures: List[AnalysisFailure] = []
    store = prepare_dictionary(dictionary_paths, plugin, failures)
    if progress is not None:
        progress(DICTIONARY_PROGRESS, None)
    files = analyze_corpus(
        corpus_paths,
        store,
        progress=progress,
        failures=failures,
        root=root,
        progress_start=DICTIONARY_PROGRESS,
    )
    return AnalysisRun(store=store, files=files, failures=failures)


def write_html_report(
    analysis: FileAnalysis, output_dir: Path, stylesheet: str | None = None
) -> Path:
    """Render ``analysis`` to ``output_dir/<name>.html`` and return the path."""
    dest = output_dir / Path(analysis.name).with_suffix(".html")
    dest.parent.mkdir(parents=True, exist_ok=True)
    dest.write_text(render_html(analysis.document, stylesheet), encoding="utf-8")
    LOGGER.debug("Wrote %s", dest)
    return dest
