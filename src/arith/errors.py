"""Error taxonomy and caret-style diagnostic rendering.

Lexer, parser and evaluator failures are exceptions derived from
:class:`ArithError`. Each one knows its diagnostic code and which span of
the original input to underline, so a caller holding only the input text
and the exception can render a full diagnostic without re-scanning.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto

from arith.source import Span
from arith.tokens import Token


class Severity(Enum):
    ERROR = "error"


# ANSI color codes
_COLORS = {
    Severity.ERROR: "\033[1;31m",  # bold red
}
_BOLD = "\033[1m"
_BLUE = "\033[1;34m"
_RESET = "\033[0m"


@dataclass(frozen=True)
class DiagnosticLabel:
    """Points to a span of the input text."""

    span: Span
    message: str = ""


@dataclass
class Diagnostic:
    """A single diagnostic message with optional labels and notes."""

    severity: Severity
    code: str
    message: str
    labels: list[DiagnosticLabel] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)


def annotate(source: str, span: Span) -> str:
    """Underline ``span`` of ``source`` with carets on the following line."""
    return f"{source}\n{' ' * span.start}{'^' * span.length}"


class DiagnosticRenderer:
    """Renders diagnostics against the input they were raised for."""

    def __init__(self, *, color: bool = True) -> None:
        self.color = color

    def _c(self, code: str) -> str:
        return code if self.color else ""

    def render(self, diag: Diagnostic, source: str) -> str:
        lines: list[str] = []
        color = _COLORS[diag.severity]

        # Header: error[E204]: message
        lines.append(
            f"{self._c(color)}{diag.severity.value}[{diag.code}]{self._c(_RESET)}"
            f"{self._c(_BOLD)}: {diag.message}{self._c(_RESET)}"
        )

        for label in diag.labels:
            text, _, carets = annotate(source, label.span).rpartition("\n")
            lines.append(text)
            padding, marks = carets[:label.span.start], carets[label.span.start:]
            line = f"{padding}{self._c(color)}{marks}{self._c(_RESET)}"
            if label.message:
                line += f" {self._c(color)}{label.message}{self._c(_RESET)}"
            lines.append(line)

        for note in diag.notes:
            lines.append(f"{self._c(_BLUE)}={self._c(_RESET)} note: {note}")

        return "\n".join(lines)


# ── Error taxonomy ───────────────────────────────────────────────


class ArithError(Exception):
    """Base class for every error raised by the arith pipeline."""

    code = "E000"

    def span_in(self, source: str) -> Span:
        """The span of ``source`` a diagnostic should underline; all of it by default."""
        return Span(0, len(source.encode("utf-8")))

    def label(self) -> str:
        """Text printed after the carets."""
        return ""

    def to_diagnostic(self, source: str) -> Diagnostic:
        return Diagnostic(
            severity=Severity.ERROR,
            code=self.code,
            message=str(self),
            labels=[DiagnosticLabel(self.span_in(source), self.label())],
        )


class LexErrorKind(Enum):
    INVALID_CHAR = auto()
    EOF = auto()


_LEX_CODES = {
    LexErrorKind.INVALID_CHAR: "E100",
    LexErrorKind.EOF: "E101",
}


class LexError(ArithError):
    """Raised by the lexer on the first character it cannot tokenize."""

    def __init__(self, kind: LexErrorKind, span: Span, char: str | None = None) -> None:
        self.kind = kind
        self.span = span
        self.char = char
        if kind == LexErrorKind.INVALID_CHAR:
            message = f"{span}: invalid character {char!r}"
        else:
            message = f"{span}: unexpected end of input"
        super().__init__(message)

    @classmethod
    def invalid_char(cls, char: str, span: Span) -> LexError:
        return cls(LexErrorKind.INVALID_CHAR, span, char)

    @classmethod
    def eof(cls, span: Span) -> LexError:
        return cls(LexErrorKind.EOF, span)

    @property
    def code(self) -> str:  # type: ignore[override]
        return _LEX_CODES[self.kind]

    def span_in(self, source: str) -> Span:
        return self.span


class ParseErrorKind(Enum):
    UNEXPECTED_TOKEN = auto()
    NOT_EXPRESSION = auto()
    NOT_OPERATOR = auto()
    UNCLOSED_OPEN_PAREN = auto()
    REDUNDANT_EXPRESSION = auto()
    EOF = auto()


_PARSE_CODES = {
    ParseErrorKind.UNEXPECTED_TOKEN: "E200",
    ParseErrorKind.NOT_EXPRESSION: "E201",
    ParseErrorKind.NOT_OPERATOR: "E202",
    ParseErrorKind.UNCLOSED_OPEN_PAREN: "E203",
    ParseErrorKind.REDUNDANT_EXPRESSION: "E204",
    ParseErrorKind.EOF: "E205",
}

_PARSE_MESSAGES = {
    ParseErrorKind.UNEXPECTED_TOKEN: "'{tok}' is not expected",
    ParseErrorKind.NOT_EXPRESSION: "'{tok}' is not start of expression",
    ParseErrorKind.NOT_OPERATOR: "'{tok}' is not an operator",
    ParseErrorKind.UNCLOSED_OPEN_PAREN: "'{tok}' is not closed",
    ParseErrorKind.REDUNDANT_EXPRESSION: "expression after '{tok}' is redundant",
}

_PARSE_LABELS = {
    ParseErrorKind.UNCLOSED_OPEN_PAREN: "expected ')' before end of input",
}


class ParseError(ArithError):
    """Raised by the parser; carries the offending token, or none at end of input."""

    def __init__(
        self,
        kind: ParseErrorKind,
        token: Token | None = None,
        detail: str | None = None,
    ) -> None:
        if (token is None) != (kind == ParseErrorKind.EOF):
            raise ValueError(f"{kind.name} parse error requires a token unless at end of input")
        self.kind = kind
        self.token = token
        self.detail = detail
        if token is None:
            message = "end of input"
        else:
            message = f"{token.span}: " + _PARSE_MESSAGES[kind].format(tok=token)
        super().__init__(message)

    @property
    def code(self) -> str:  # type: ignore[override]
        return _PARSE_CODES[self.kind]

    def label(self) -> str:
        if self.detail is not None:
            return self.detail
        return _PARSE_LABELS.get(self.kind, "")

    def span_in(self, source: str) -> Span:
        end = len(source.encode("utf-8"))
        if self.token is None:
            return Span(end, end + 1)
        if self.kind == ParseErrorKind.REDUNDANT_EXPRESSION:
            # everything after the valid prefix is redundant
            return Span(self.token.span.start, max(end, self.token.span.end))
        return self.token.span


class Stage(Enum):
    LEXER = "lexer"
    PARSER = "parser"


class ApplicationError(ArithError):
    """Umbrella error for text-to-AST parsing, tagged with the failing stage."""

    def __init__(self, error: LexError | ParseError) -> None:
        self.error = error
        self.stage = Stage.LEXER if isinstance(error, LexError) else Stage.PARSER
        super().__init__("parse error")

    @property
    def source(self) -> LexError | ParseError:
        """The underlying lexer or parser error."""
        return self.error

    @property
    def code(self) -> str:  # type: ignore[override]
        return self.error.code

    def span_in(self, source: str) -> Span:
        return self.error.span_in(source)

    def to_diagnostic(self, source: str) -> Diagnostic:
        diag = self.error.to_diagnostic(source)
        diag.notes.append(f"raised by the {self.stage.value}")
        return diag


class EvalErrorKind(Enum):
    DIVISION_BY_ZERO = auto()


class EvalError(ArithError):
    """Raised by the evaluator; the span is that of the failing binary node."""

    code = "E300"

    def __init__(self, kind: EvalErrorKind, span: Span) -> None:
        self.kind = kind
        self.span = span
        super().__init__("division by zero")

    def span_in(self, source: str) -> Span:
        return self.span

    def to_diagnostic(self, source: str) -> Diagnostic:
        diag = super().to_diagnostic(source)
        diag.notes.append("the right hand expression of the division evaluates to zero")
        return diag
