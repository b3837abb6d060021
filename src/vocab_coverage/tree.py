from __future__ import annotations

from typing import Iterator, Union

from .models import Classification, Document, Paragraph, Token

Node = Union[Document, Paragraph, Token]


def iter_children(node: Node) -> Iterator[Node]:
    """Direct children of a node; tokens are leaves."""
    if isinstance(node, Document):
        return iter(node.paragraphs)
    if isinstance(node, Paragraph):
        return iter(node.tokens)
    return iter(())


def iter_tokens(node: Node) -> Iterator[Token]:
    """Lazily yield every token under ``node`` in document order."""
    if isinstance(node, Token):
        yield node
    elif isinstance(node, Paragraph):
        yield from node.tokens
    else:
        for paragraph in node.paragraphs:
            yield from paragraph.tokens


def iter_words(node: Node) -> Iterator[Token]:
    """Lazily yield the word tokens under ``node``."""
    return (token for token in iter_tokens(node) if token.is_word)


def size(node: Node) -> int:
    """Number of word tokens under ``node``."""
    return sum(1 for _ in iter_words(node))


def known(node: Node) -> int:
    return _count(node, Classification.KNOWN)


def maybe(node: Node) -> int:
    return _count(node, Classification.MAYBE)


def _count(node: Node, classification: Classification) -> int:
    return sum(1 for token in iter_tokens(node) if token.classification is classification)
