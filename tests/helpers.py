"""Shared test helpers for the arith test suite."""

from __future__ import annotations

from arith.ast_nodes import Ast, Binary, Num, Unary


def shape(ast: Ast) -> object:
    """Strip spans from an AST, leaving nested ``(op, children...)`` tuples."""
    if isinstance(ast, Num):
        return ast.value
    if isinstance(ast, Unary):
        return (ast.operator.value.value, shape(ast.operand))
    assert isinstance(ast, Binary)
    return (ast.operator.value.value, shape(ast.left), shape(ast.right))


def walk(ast: Ast):
    """Yield every node of the tree, parents before children."""
    yield ast
    if isinstance(ast, Unary):
        yield from walk(ast.operand)
    elif isinstance(ast, Binary):
        yield from walk(ast.left)
        yield from walk(ast.right)
