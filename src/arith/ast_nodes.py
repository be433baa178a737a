"""AST node definitions for the arith expression language."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from arith.source import Annotation, Span

# ── Operators ────────────────────────────────────────────────────


class UnaryOp(Enum):
    PLUS = "+"
    MINUS = "-"


class BinaryOp(Enum):
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"


UnaryOperator = Annotation[UnaryOp]
BinaryOperator = Annotation[BinaryOp]


# ── Expressions ──────────────────────────────────────────────────


@dataclass(frozen=True)
class Num:
    value: int
    span: Span


@dataclass(frozen=True)
class Unary:
    operator: UnaryOperator
    operand: Ast
    span: Span


@dataclass(frozen=True)
class Binary:
    operator: BinaryOperator
    left: Ast
    right: Ast
    span: Span


Ast = Union[Num, Unary, Binary]


def unary(operator: UnaryOperator, operand: Ast) -> Unary:
    """Build a unary node spanning its operator and operand."""
    return Unary(operator, operand, operator.span.merge(operand.span))


def binary(operator: BinaryOperator, left: Ast, right: Ast) -> Binary:
    """Build a binary node spanning both operands."""
    return Binary(operator, left, right, left.span.merge(right.span))
