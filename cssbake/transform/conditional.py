"""Environment-conditional expressions, evaluated by the generated code at run time."""

from __future__ import annotations

from ..ast import BinaryExpression, ConditionalExpression, Expr, Identifier, MemberExpression, StringLiteral


def is_production() -> Expr:
    """process.env.NODE_ENV === "production"."""
    return BinaryExpression(
        None,
        "===",
        MemberExpression(
            None,
            MemberExpression(None, Identifier(None, "process"), Identifier(None, "env")),
            Identifier(None, "NODE_ENV"),
        ),
        StringLiteral(None, "production"),
    )


def branch(production: Expr, development: Expr) -> ConditionalExpression:
    """production when NODE_ENV is "production" at run time, else development."""
    return ConditionalExpression(None, is_production(), production, development)


def dev_only_string(value: str) -> ConditionalExpression:
    """"" in production, value elsewhere."""
    return branch(StringLiteral(None, ""), StringLiteral(None, value))
