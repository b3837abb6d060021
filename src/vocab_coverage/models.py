from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class TokenKind(Enum):
    """Lexical category of a token."""

    WORD = "word"
    NONWORD = "nonword"


class Classification(Enum):
    """Per-unique-word verdict against the dictionary."""

    UNDECIDED = "undecided"
    KNOWN = "known"
    MAYBE = "maybe"
    UNKNOWN = "unknown"


@dataclass(slots=True)
class TokenStats:
    """
    Occurrence and classification record shared by every occurrence of the
    same lowercase word within one analyzed file.
    """

    word: str
    count: int = 1
    classification: Classification = Classification.UNDECIDED


@dataclass(slots=True)
class Token:
    """A word or non-word span of the source text."""

    text: str
    kind: TokenKind
    stats: TokenStats | None = None

    @property
    def is_word(self) -> bool:
        return self.kind is TokenKind.WORD

    @property
    def classification(self) -> Classification | None:
        if self.stats is None:
            return None
        return self.stats.classification


@dataclass(slots=True)
class Paragraph:
    """One line of the source file."""

    tokens: list[Token] = field(default_factory=list)

    def add_token(self, token: Token) -> None:
        if not isinstance(token, Token):
            raise TypeError(f"Paragraph can only hold tokens, got {type(token).__name__}")
        self.tokens.append(token)


@dataclass(slots=True)
class Document:
    """Root of the document tree for a single analyzed file."""

    name: str
    paragraphs: list[Paragraph] = field(default_factory=list)

    def add_paragraph(self, paragraph: Paragraph) -> None:
        if not isinstance(paragraph, Paragraph):
            raise TypeError(
                f"Document can only hold paragraphs, got {type(paragraph).__name__}"
            )
        self.paragraphs.append(paragraph)
