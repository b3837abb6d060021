import pytest

from vocab_coverage.models import (
    Classification,
    Document,
    Paragraph,
    Token,
    TokenKind,
    TokenStats,
)
from vocab_coverage.tree import iter_children, iter_tokens, iter_words, known, maybe, size


def _word(text: str, classification: Classification) -> Token:
    return Token(
        text=text,
        kind=TokenKind.WORD,
        stats=TokenStats(word=text.lower(), classification=classification),
    )


def _document() -> Document:
    first = Paragraph()
    first.add_token(_word("alpha", Classification.KNOWN))
    first.add_token(Token(text=", ", kind=TokenKind.NONWORD))
    first.add_token(_word("beta", Classification.MAYBE))
    second = Paragraph()
    second.add_token(_word("gamma", Classification.UNKNOWN))
    second.add_token(Token(text=".", kind=TokenKind.NONWORD))
    second.add_token(_word("delta", Classification.KNOWN))
    document = Document(name="doc")
    document.add_paragraph(first)
    document.add_paragraph(second)
    document.add_paragraph(Paragraph())
    return document


def test_aggregates_sum_over_paragraphs():
    """Document counts are the sums of paragraph counts."""
    document = _document()
    assert size(document) == 4
    assert known(document) == 2
    assert maybe(document) == 1
    assert size(document) == sum(size(p) for p in document.paragraphs)
    assert known(document) + maybe(document) + (
        size(document) - known(document) - maybe(document)
    ) == size(document)


def test_token_is_a_leaf():
    """A token has no children and counts only itself."""
    token = _word("alpha", Classification.KNOWN)
    assert list(iter_children(token)) == []
    assert list(iter_tokens(token)) == [token]
    assert (size(token), known(token), maybe(token)) == (1, 1, 0)

    gap = Token(text=" ", kind=TokenKind.NONWORD)
    assert (size(gap), known(gap), maybe(gap)) == (0, 0, 0)


def test_children_follow_ownership():
    """Documents hold paragraphs and paragraphs hold tokens."""
    document = _document()
    paragraphs = list(iter_children(document))
    assert paragraphs == document.paragraphs
    assert list(iter_children(paragraphs[0])) == paragraphs[0].tokens


def test_iterators_preserve_document_order():
    """Token iteration follows document order."""
    document = _document()
    assert [t.text for t in iter_tokens(document)] == [
        "alpha",
        ", ",
        "beta",
        "gamma",
        ".",
        "delta",
    ]
    assert [t.text for t in iter_words(document)] == ["alpha", "beta", "gamma", "delta"]


def test_aggregates_are_not_cached():
    """Counts follow classification changes made after building."""
    document = _document()
    assert known(document) == 2
    document.paragraphs[0].tokens[2].stats.classification = Classification.KNOWN
    assert known(document) == 3
    assert maybe(document) == 0


def test_document_only_owns_paragraphs():
    """Adding the wrong node type raises TypeError."""
    document = Document(name="doc")
    with pytest.raises(TypeError):
        document.add_paragraph(Token(text="x", kind=TokenKind.NONWORD))
    with pytest.raises(TypeError):
        Paragraph().add_token(Paragraph())
