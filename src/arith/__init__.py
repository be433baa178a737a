"""arith: lexer, parser and diagnostics for four-operator integer arithmetic."""

from __future__ import annotations

__version__ = "0.1.0"

from arith.errors import ApplicationError, EvalError, LexError, ParseError  # noqa: E402
from arith.lexer import lex  # noqa: E402
from arith.parser import parse, parse_text  # noqa: E402
from arith.source import Annotation, Span  # noqa: E402

__all__ = [
    "Annotation",
    "ApplicationError",
    "EvalError",
    "LexError",
    "ParseError",
    "Span",
    "__version__",
    "lex",
    "parse",
    "parse_text",
]
