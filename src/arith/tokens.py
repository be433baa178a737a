"""Token kinds and token representation for the arith lexer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from arith.source import Span


class TokenKind(Enum):
    # Literals
    NUMBER = auto()

    # Operators
    PLUS = auto()
    MINUS = auto()
    ASTERISK = auto()
    SLASH = auto()

    # Punctuation
    LPAREN = auto()
    RPAREN = auto()


# Single-byte tokens, keyed by their source character.
ONE_BYTE_TOKENS: dict[str, TokenKind] = {
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.ASTERISK,
    "/": TokenKind.SLASH,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
}


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    value: str
    span: Span

    @property
    def number(self) -> int:
        """The integer value of a NUMBER token."""
        if self.kind != TokenKind.NUMBER:
            raise TypeError(f"{self.kind.name} token has no numeric value")
        return int(self.value)

    def __str__(self) -> str:
        return self.value
