from pathlib import Path

from vocab_coverage.models import Classification
from vocab_coverage.pipeline import (
    DICTIONARY_PROGRESS,
    analyze_corpus,
    analyze_file,
    analyze_text,
    build_document,
    prepare_dictionary,
    run_analysis,
    write_html_report,
)
from vocab_coverage.plugin import load_plugin_file
from tests.utils import write_workspace


def test_build_document_makes_one_paragraph_per_line():
    """Every input line becomes one paragraph, empty lines included."""
    document = build_document("doc", "first line\r\nsecond\n\nfourth\n")
    assert len(document.paragraphs) == 4
    assert document.paragraphs[2].tokens == []
    assert "".join(t.text for t in document.paragraphs[0].tokens) == "first line"


def test_analyze_text_counts_and_unknown_report():
    """analyze_text counts words and reports unknown words by frequency."""
    store = prepare_dictionary([])
    store.load_dictionary("the")
    analysis = analyze_text("doc", "The fox saw the other fox. Fox!", store)

    assert (analysis.size, analysis.known, analysis.maybe, analysis.unknown) == (7, 2, 0, 5)
    assert analysis.unknown_words() == {"fox": 3, "other": 1, "saw": 1}
    assert analysis.registry.table()["the"] == (2, Classification.KNOWN)
    assert analysis.to_dict()["unknown"] == 5


def test_number_forms_do_not_count_as_words():
    """Fractions and superscripts do not add to the word count."""
    store = prepare_dictionary([])
    store.load_dictionary("add cup")
    analysis = analyze_text("recipe", "Add ½ cup", store)

    assert (analysis.size, analysis.known, analysis.unknown) == (2, 2, 0)
    assert analysis.unknown_words() == {}


def test_prepare_dictionary_skips_unreadable_files(tmp_path: Path):
    """Missing or undecodable dictionaries are skipped and recorded."""
    good = tmp_path / "good.txt"
    good.write_text("alpha beta", encoding="utf-8")
    bad = tmp_path / "bad.txt"
    bad.write_bytes(b"\xff\xfe\xfa broken")
    failures = []

    store = prepare_dictionary([tmp_path / "missing.txt", bad, good], failures=failures)

    assert store.words() == ["alpha", "beta"]
    assert [Path(f.path).name for f in failures] == ["missing.txt", "bad.txt"]


def test_prepare_dictionary_strips_byte_order_mark(tmp_path: Path):
    """A UTF-8 byte order mark does not leak into the first word."""
    path = tmp_path / "bom.txt"
    path.write_bytes(b"\xef\xbb\xbfword")
    assert prepare_dictionary([path]).words() == ["word"]


def test_run_analysis_over_workspace(tmp_path: Path):
    """A full run classifies each file and reports progress in order."""
    root = write_workspace(tmp_path)
    corpus = root / "corpus" / "novels"
    dictionaries = sorted((root / "dics").rglob("*.txt"))
    plugin = load_plugin_file(root / "plugins" / "en.json")
    reports = []

    run = run_analysis(
        dictionaries,
        sorted(corpus.glob("*.txt")),
        plugin=plugin,
        progress=lambda percent, name: reports.append((percent, name)),
        root=corpus,
    )

    assert run.failures == []
    chapter1 = run.files["chapter1.txt"]
    assert (chapter1.size, chapter1.known, chapter1.maybe, chapter1.unknown) == (8, 4, 2, 2)
    chapter2 = run.files["chapter2.txt"]
    assert (chapter2.size, chapter2.known, chapter2.maybe, chapter2.unknown) == (3, 0, 2, 1)

    assert reports[0] == (0.0, None)
    assert reports[1] == (DICTIONARY_PROGRESS, None)
    assert [name for _, name in reports[2:]] == ["chapter1.txt", "chapter2.txt"]
    assert reports[-1][0] == 100.0


def test_files_do_not_share_counts(tmp_path: Path):
    """Each file keeps its own occurrence counts."""
    root = write_workspace(tmp_path)
    corpus = root / "corpus" / "novels"
    store = prepare_dictionary([])
    results = analyze_corpus(sorted(corpus.glob("*.txt")), store)

    assert results["chapter1.txt"].registry.get("dog").count == 1
    assert results["chapter2.txt"].registry.get("dogs").count == 1
    assert "dog" not in results["chapter2.txt"].registry


def test_analyze_corpus_records_unreadable_files(tmp_path: Path):
    """An unreadable corpus file is recorded and the rest still run."""
    readable = tmp_path / "ok.txt"
    readable.write_text("hello", encoding="utf-8")
    failures = []

    results = analyze_corpus(
        [tmp_path / "gone.txt", readable], prepare_dictionary([]), failures=failures
    )

    assert list(results) == ["ok.txt"]
    assert len(failures) == 1
    assert failures[0].path.endswith("gone.txt")


def test_write_html_report(tmp_path: Path):
    """write_html_report writes a styled page named after the input."""
    source = tmp_path / "notes.txt"
    source.write_text("hello there", encoding="utf-8")
    analysis = analyze_file(source, prepare_dictionary([]))

    dest = write_html_report(analysis, tmp_path / "out", "p {}")

    assert dest == tmp_path / "out" / "notes.html"
    html = dest.read_text(encoding="utf-8")
    assert "<style>p {}</style>" in html
    assert 'class="UNKNOWN"' in html
