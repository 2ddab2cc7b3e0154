"""Guard helper injection: one per compilation unit, shared by every invocation."""

from __future__ import annotations

import logging

from ..ast import BlockStatement, FunctionDeclaration, Identifier, ReturnStatement, StringLiteral
from .context import CompilationUnit

log = logging.getLogger(__name__)

GUARD_NAME = "__EMOTION_STRINGIFIED_CSS_ERROR__"

CSS_OBJECT_STRINGIFIED_ERROR = (
    "You have tried to stringify object returned from `css` function. "
    "It isn't supposed to be used directly (e.g. as value of the `className` prop), "
    "but rather handed to emotion so it can handle it (e.g. as value of `css` prop)."
)


def guard_declaration(name: str) -> FunctionDeclaration:
    """function <name>() { return "<message>"; } printed on one line."""
    return FunctionDeclaration(
        None,
        Identifier(None, name),
        [],
        BlockStatement(None, [ReturnStatement(None, StringLiteral(None, CSS_OBJECT_STRINGIFIED_ERROR))]),
        compact=True,
    )


def ensure_guard(unit: CompilationUnit) -> Identifier:
    """Return a reference to the unit's guard helper, declaring it on first use."""
    if unit.guard_id is None:
        uid = unit.generate_uid(GUARD_NAME)
        unit.guard_id = Identifier(None, uid)
        unit.prelude.append(guard_declaration(uid))
        log.debug("declared guard helper %s", uid)
    return Identifier(None, unit.guard_id.name)
