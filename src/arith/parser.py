"""Parser for the arith expression language.

Recursive descent with one token of look-ahead and no backtracking.
Each binary precedence level is a left fold over the level below it::

    expr  = expr3 ;
    expr3 = expr2, { ("+" | "-"), expr2 } ;
    expr2 = expr1, { ("*" | "/"), expr1 } ;
    expr1 = [ "+" | "-" ], atom ;
    atom  = number | "(", expr, ")" ;
"""

from __future__ import annotations

import logging
from typing import Callable

from arith.ast_nodes import (
    Ast,
    BinaryOp,
    BinaryOperator,
    Num,
    UnaryOp,
    binary,
    unary,
)
from arith.errors import ApplicationError, LexError, ParseError, ParseErrorKind
from arith.lexer import lex
from arith.source import Annotation
from arith.tokens import Token, TokenKind

logger = logging.getLogger(__name__)

# deepest parenthesis nesting accepted before the input is rejected
MAX_NESTING = 64

_ADDITIVE: dict[TokenKind, BinaryOp] = {
    TokenKind.PLUS: BinaryOp.ADD,
    TokenKind.MINUS: BinaryOp.SUB,
}

_MULTIPLICATIVE: dict[TokenKind, BinaryOp] = {
    TokenKind.ASTERISK: BinaryOp.MUL,
    TokenKind.SLASH: BinaryOp.DIV,
}

_UNARY: dict[TokenKind, UnaryOp] = {
    TokenKind.PLUS: UnaryOp.PLUS,
    TokenKind.MINUS: UnaryOp.MINUS,
}


class Parser:
    """Parses a list of tokens into a single expression AST."""

    def __init__(self, tokens: list[Token]) -> None:
        self.tokens = tokens
        self.pos = 0
        self.depth = 0

    # ── Token access ─────────────────────────────────────────────

    def _peek(self) -> Token | None:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def _next(self) -> Token | None:
        tok = self._peek()
        if tok is not None:
            self.pos += 1
        return tok

    # ── Top level ────────────────────────────────────────────────

    def parse(self) -> Ast:
        """Parse exactly one expression; leftover tokens are an error."""
        ast = self._parse_expr()
        tok = self._next()
        if tok is not None:
            logger.debug("redundant token %r after expression at %s", tok.value, tok.span)
            raise ParseError(ParseErrorKind.REDUNDANT_EXPRESSION, tok)
        logger.debug("parsed expression spanning %s", ast.span)
        return ast

    # ── Expressions ──────────────────────────────────────────────

    def _parse_expr(self) -> Ast:
        return self._parse_expr3()

    def _parse_expr3(self) -> Ast:
        """Addition and subtraction."""
        return self._parse_left_binop(self._parse_expr2, _ADDITIVE)

    def _parse_expr2(self) -> Ast:
        """Multiplication and division."""
        return self._parse_left_binop(self._parse_expr1, _MULTIPLICATIVE)

    def _parse_binop(self, operators: dict[TokenKind, BinaryOp]) -> BinaryOperator:
        """Consume an operator of the current precedence level."""
        tok = self._peek()
        if tok is None:
            raise ParseError(ParseErrorKind.EOF)
        if tok.kind not in operators:
            raise ParseError(ParseErrorKind.NOT_OPERATOR, tok)
        self.pos += 1
        return Annotation(operators[tok.kind], tok.span)

    def _parse_left_binop(
        self,
        subexpr: Callable[[], Ast],
        operators: dict[TokenKind, BinaryOp],
    ) -> Ast:
        """Fold ``subexpr (op subexpr)*`` into a left-associated tree."""
        left = subexpr()
        while self._peek() is not None:
            try:
                op = self._parse_binop(operators)
            except ParseError:
                # not an operator of this level; the caller decides what it is
                break
            right = subexpr()
            left = binary(op, left, right)
        return left

    def _parse_expr1(self) -> Ast:
        """An atom with at most one leading sign."""
        tok = self._peek()
        if tok is not None and tok.kind in _UNARY:
            self.pos += 1
            op = Annotation(_UNARY[tok.kind], tok.span)
            return unary(op, self._parse_atom())
        return self._parse_atom()

    def _parse_atom(self) -> Ast:
        tok = self._next()
        if tok is None:
            raise ParseError(ParseErrorKind.EOF)

        if tok.kind == TokenKind.NUMBER:
            return Num(tok.number, tok.span)

        if tok.kind == TokenKind.LPAREN:
            if self.depth >= MAX_NESTING:
                logger.debug("parenthesis at %s exceeds nesting limit %d", tok.span, MAX_NESTING)
                raise ParseError(
                    ParseErrorKind.UNEXPECTED_TOKEN,
                    tok,
                    detail=f"parentheses nested deeper than {MAX_NESTING} levels",
                )
            self.depth += 1
            expr = self._parse_expr()
            self.depth -= 1
            close = self._next()
            if close is None:
                raise ParseError(ParseErrorKind.UNCLOSED_OPEN_PAREN, tok)
            if close.kind != TokenKind.RPAREN:
                raise ParseError(ParseErrorKind.REDUNDANT_EXPRESSION, close)
            return expr

        raise ParseError(ParseErrorKind.NOT_EXPRESSION, tok)


def parse(tokens: list[Token]) -> Ast:
    """Parse ``tokens`` into an AST, raising :class:`ParseError` on bad syntax."""
    return Parser(tokens).parse()


def parse_text(source: str) -> Ast:
    """Lex and parse ``source``; either stage's failure becomes an ApplicationError."""
    try:
        return parse(lex(source))
    except (LexError, ParseError) as e:
        raise ApplicationError(e) from e
