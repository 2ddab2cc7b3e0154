"""String-literal helpers over call argument lists."""

from __future__ import annotations

import dataclasses

from ..ast import CallExpression, Expr, StringLiteral


def join_string_literals(args: list[Expr]) -> list[Expr]:
    """Merge runs of adjacent string literals; other arguments keep their order."""
    result: list[Expr] = []
    for arg in args:
        if isinstance(arg, StringLiteral) and result and isinstance(result[-1], StringLiteral):
            prev = result[-1]
            result[-1] = StringLiteral(prev.loc, prev.value + arg.value)
        else:
            result.append(arg)
    return result


def append_string_argument(call: CallExpression, expr: Expr | str) -> CallExpression:
    """Copy of call with one more trailing argument; a str becomes a literal."""
    if isinstance(expr, str):
        expr = StringLiteral(None, expr)
    return dataclasses.replace(call, arguments=[*call.arguments, expr])
