"""Tree-walking evaluator for arith ASTs."""

from __future__ import annotations

import logging

from arith.ast_nodes import Ast, Binary, BinaryOp, Num, Unary, UnaryOp
from arith.errors import EvalError, EvalErrorKind

logger = logging.getLogger(__name__)


class Interpreter:
    """Evaluates an AST to a signed integer."""

    def eval(self, expr: Ast) -> int:
        if isinstance(expr, Num):
            return expr.value
        if isinstance(expr, Unary):
            operand = self.eval(expr.operand)
            return self._eval_unary(expr.operator.value, operand)
        if isinstance(expr, Binary):
            left = self.eval(expr.left)
            right = self.eval(expr.right)
            return self._eval_binary(expr, left, right)
        raise TypeError(f"not an arith AST node: {expr!r}")

    def _eval_unary(self, op: UnaryOp, operand: int) -> int:
        if op is UnaryOp.MINUS:
            return -operand
        return operand

    def _eval_binary(self, expr: Binary, left: int, right: int) -> int:
        op = expr.operator.value
        if op is BinaryOp.ADD:
            return left + right
        if op is BinaryOp.SUB:
            return left - right
        if op is BinaryOp.MUL:
            return left * right
        if right == 0:
            logger.debug("division by zero at %s", expr.span)
            raise EvalError(EvalErrorKind.DIVISION_BY_ZERO, expr.span)
        # integer division truncates toward zero
        quotient = abs(left) // abs(right)
        return quotient if (left < 0) == (right < 0) else -quotient
