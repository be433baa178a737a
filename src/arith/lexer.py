"""Lexer for the arith expression language.

Scans the UTF-8 bytes of the input with a single cursor and produces
tokens whose spans are byte offsets into that input. Whitespace is
dropped; the first byte that cannot start a token aborts the scan.
"""

from __future__ import annotations

import logging

from arith.errors import LexError
from arith.source import Span
from arith.tokens import ONE_BYTE_TOKENS, Token, TokenKind

logger = logging.getLogger(__name__)

_DIGITS = frozenset(b"0123456789")
_SPACES = frozenset(b" \t\n")
_ONE_BYTE = {ord(ch): kind for ch, kind in ONE_BYTE_TOKENS.items()}


class Lexer:
    """Tokenizes arith source text."""

    def __init__(self, source: str) -> None:
        self.source = source
        self.data = source.encode("utf-8")
        self.pos = 0
        self.tokens: list[Token] = []

    def lex(self) -> list[Token]:
        """Tokenize the entire source and return the token list."""
        while self.pos < len(self.data):
            byte = self.data[self.pos]
            if byte in _ONE_BYTE:
                self._lex_one_byte(byte)
            elif byte in _DIGITS:
                self._lex_number()
            elif byte in _SPACES:
                self._skip_spaces()
            else:
                logger.debug("invalid byte 0x%02x at offset %d", byte, self.pos)
                raise LexError.invalid_char(chr(byte), Span(self.pos, self.pos + 1))

        logger.debug("lexed %d token(s) from %d byte(s)", len(self.tokens), len(self.data))
        return self.tokens

    # ── Helpers ───────────────────────────────────────────────────

    def _emit(self, kind: TokenKind, start: int) -> Token:
        value = self.data[start:self.pos].decode("ascii")
        tok = Token(kind, value, Span(start, self.pos))
        self.tokens.append(tok)
        return tok

    def _consume_byte(self, expected: int) -> None:
        """Advance past ``expected``, failing if the cursor is elsewhere."""
        if self.pos >= len(self.data):
            raise LexError.eof(Span(self.pos, self.pos))
        actual = self.data[self.pos]
        if actual != expected:
            raise LexError.invalid_char(chr(actual), Span(self.pos, self.pos + 1))
        self.pos += 1

    def _skip_spaces(self) -> None:
        """Skip spaces, tabs and newlines."""
        while self.pos < len(self.data) and self.data[self.pos] in _SPACES:
            self.pos += 1

    # ── Tokens ───────────────────────────────────────────────────

    def _lex_one_byte(self, byte: int) -> None:
        start = self.pos
        self._consume_byte(byte)
        self._emit(_ONE_BYTE[byte], start)

    def _lex_number(self) -> None:
        start = self.pos
        while self.pos < len(self.data) and self.data[self.pos] in _DIGITS:
            self.pos += 1
        self._emit(TokenKind.NUMBER, start)


def lex(source: str) -> list[Token]:
    """Tokenize ``source``, raising :class:`LexError` on the first bad character."""
    return Lexer(source).lex()
