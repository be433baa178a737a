"""Compiles an arith AST to reverse Polish notation."""

from __future__ import annotations

from arith.ast_nodes import Ast, Binary, BinaryOperator, Num, Unary, UnaryOperator


class RpnCompiler:
    """Walks the AST and emits postfix text.

    Numbers are emitted as decimal digits, unary signs as a prefix glued to
    their operand, and binary nodes as ``left right op``.
    """

    def compile(self, expr: Ast) -> str:
        buf: list[str] = []
        self._compile_inner(expr, buf)
        return "".join(buf)

    def _compile_inner(self, expr: Ast, buf: list[str]) -> None:
        if isinstance(expr, Num):
            buf.append(str(expr.value))
        elif isinstance(expr, Unary):
            self._compile_unary_op(expr.operator, buf)
            self._compile_inner(expr.operand, buf)
        elif isinstance(expr, Binary):
            self._compile_inner(expr.left, buf)
            buf.append(" ")
            self._compile_inner(expr.right, buf)
            buf.append(" ")
            self._compile_binary_op(expr.operator, buf)
        else:
            raise TypeError(f"not an arith AST node: {expr!r}")

    def _compile_unary_op(self, operator: UnaryOperator, buf: list[str]) -> None:
        buf.append(operator.value.value)

    def _compile_binary_op(self, operator: BinaryOperator, buf: list[str]) -> None:
        buf.append(operator.value.value)
