"""Pygments lexer for arith expressions."""

from pygments import highlight as _pygments_highlight
from pygments.formatters import TerminalFormatter
from pygments.lexer import RegexLexer
from pygments.token import Error, Number, Operator, Punctuation, Text


class ArithLexer(RegexLexer):
    """Pygments lexer for the arith expression language."""

    name = "Arith"
    aliases = ["arith"]
    filenames = ["*.arith"]
    mimetypes = ["text/x-arith"]

    tokens = {
        "root": [
            # Whitespace the arith lexer skips
            (r"[ \t\n]+", Text),
            # Numbers
            (r"[0-9]+", Number.Integer),
            # Operators
            (r"[+\-*/]", Operator),
            # Punctuation
            (r"[()]", Punctuation),
            # Anything else is rejected by the arith lexer
            (r".", Error),
        ],
    }


def highlight(source: str) -> str:
    """Return ``source`` colored with ANSI escapes for a terminal."""
    return _pygments_highlight(source, ArithLexer(), TerminalFormatter()).rstrip("\n")
