"""AST-walking pretty-printer for arith expressions.

Produces canonical infix text: one space around binary operators, no space
after a unary sign, and only the parentheses needed for the text to parse
back to the same tree.
"""

from __future__ import annotations

from arith.ast_nodes import Ast, Binary, BinaryOp, Num, Unary

# Operator precedence table (higher binds tighter)
_PRECEDENCE: dict[BinaryOp, int] = {
    BinaryOp.ADD: 1, BinaryOp.SUB: 1,
    BinaryOp.MUL: 2, BinaryOp.DIV: 2,
}


class ArithFormatter:
    """Format a parsed expression back to canonical source text."""

    def format(self, expr: Ast) -> str:
        return self._format_expr(expr)

    def _format_expr(self, expr: Ast, parent_prec: int = 0) -> str:
        if isinstance(expr, Num):
            return str(expr.value)
        if isinstance(expr, Unary):
            return self._format_unary(expr)
        if isinstance(expr, Binary):
            return self._format_binary(expr, parent_prec)
        raise TypeError(f"not an arith AST node: {expr!r}")

    def _format_unary(self, expr: Unary) -> str:
        sign = expr.operator.value.value
        # a sign applies to a single atom
        if isinstance(expr.operand, Num):
            return f"{sign}{expr.operand.value}"
        return f"{sign}({self._format_expr(expr.operand)})"

    def _format_binary(self, expr: Binary, parent_prec: int) -> str:
        prec = _PRECEDENCE[expr.operator.value]
        left = self._format_expr(expr.left, prec)
        # equal precedence on the right needs parens to keep left associativity
        right = self._format_expr(expr.right, prec + 1)
        result = f"{left} {expr.operator.value.value} {right}"
        if prec < parent_prec:
            return f"({result})"
        return result
