from __future__ import annotations

from typing import Iterator

import regex

from .models import Token, TokenKind
from .registry import TokenStatsRegistry

# Letters, optionally joined to more letters by one elision mark:
# apostrophe, double quote, Hebrew geresh (U+05F3) or gershayim (U+05F4).
WORD_PATTERN = regex.compile(r"\p{L}+(?:['\"׳״]\p{L}+)?")


class Tokenizer:
    """Split text into a loss-less sequence of word and non-word tokens."""

    def __init__(self, registry: TokenStatsRegistry | None = None) -> None:
        self.registry = registry if registry is not None else TokenStatsRegistry()

    def tokenize(self, text: str) -> Iterator[Token]:
        """Yield tokens whose texts concatenate back to ``text``."""
        position = 0
        for match in WORD_PATTERN.finditer(text):
            if match.start() != position:
                yield Token(text=text[position : match.start()], kind=TokenKind.NONWORD)
            word = match.group()
            yield Token(
                text=word,
                kind=TokenKind.WORD,
                stats=self.registry.get_or_create(word),
            )
            position = match.end()
        if position < len(text):
            yield Token(text=text[position:], kind=TokenKind.NONWORD)


def tokenize(text: str, registry: TokenStatsRegistry | None = None) -> Iterator[Token]:
    """Tokenize ``text``; a fresh registry is used unless one is supplied."""
    return Tokenizer(registry).tokenize(text)


def iter_words(text: str) -> Iterator[str]:
    """Yield only the word spans of ``text``, without occurrence bookkeeping."""
    for match in WORD_PATTERN.finditer(text):
        yield match.group()
