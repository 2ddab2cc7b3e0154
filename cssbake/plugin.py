"""Traversal driver: find style invocations in a program and rewrite them."""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field

from .ast import (
    CallExpression,
    Expr,
    Identifier,
    ImportDeclaration,
    ImportNamespaceSpecifier,
    ImportSpecifier,
    Loc,
    MemberExpression,
    Node,
    Opaque,
    OpaqueStmt,
    Program,
    TaggedTemplateExpression,
)
from .estree import dump, load_node
from .label import CallSite
from .options import CallKind, Options
from .transform import CompilationUnit, transform_expression_with_styles

log = logging.getLogger(__name__)

# Position and comment metadata, not child nodes
_RAW_SKIP_KEYS = frozenset(
    {"loc", "range", "start", "end", "extra", "leadingComments", "trailingComments", "innerComments"}
)


def _is_raw_node(value: object) -> bool:
    return isinstance(value, dict) and isinstance(value.get("type"), str)


@dataclass
class TransformRecord:
    """One processed invocation, for reporting."""

    loc: Loc | None
    folded: bool
    pure: bool


@dataclass
class TransformResult:
    program: Program
    records: list[TransformRecord] = field(default_factory=list)
    guard_name: str | None = None


@dataclass
class _StyleBindings:
    """Local names bound to style functions by the program's imports."""

    direct: dict[str, CallKind] = field(default_factory=dict)
    namespaces: dict[str, dict[str, CallKind]] = field(default_factory=dict)

    def kind_of(self, callee: Expr) -> CallKind | None:
        if isinstance(callee, Identifier):
            return self.direct.get(callee.name)
        if (
            isinstance(callee, MemberExpression)
            and not callee.computed
            and isinstance(callee.object, Identifier)
            and isinstance(callee.property, Identifier)
        ):
            exports = self.namespaces.get(callee.object.name)
            if exports is not None:
                return exports.get(callee.property.name)
        return None


def find_style_bindings(program: Program, options: Options) -> _StyleBindings:
    bindings = _StyleBindings()
    for stmt in program.body:
        if not isinstance(stmt, ImportDeclaration):
            continue
        exports = options.style_functions(stmt.source.value)
        if not exports:
            continue
        for spec in stmt.specifiers:
            if isinstance(spec, ImportSpecifier) and spec.imported.name in exports:
                bindings.direct[spec.local.name] = exports[spec.imported.name]
            elif isinstance(spec, ImportNamespaceSpecifier):
                bindings.namespaces[spec.local.name] = exports
    return bindings


class _Driver:
    """Post-order walk; inner invocations are rewritten before outer ones."""

    def __init__(self, program: Program, options: Options) -> None:
        self.options = options
        self.unit = CompilationUnit.for_program(program)
        self.bindings = find_style_bindings(program, options)
        self.records: list[TransformRecord] = []

    def visit(self, node: Node, ancestors: list[Node]) -> Node:
        inner = ancestors + [node]
        if isinstance(node, (Opaque, OpaqueStmt)):
            self._visit_raw(node.raw, inner)
            return node
        for f in dataclasses.fields(node):
            if f.name == "loc":
                continue
            value = getattr(node, f.name)
            if isinstance(value, Node):
                setattr(node, f.name, self.visit(value, inner))
            elif isinstance(value, list):
                setattr(
                    node,
                    f.name,
                    [self.visit(item, inner) if isinstance(item, Node) else item for item in value],
                )
        return self._rewrite(node, ancestors)

    def _visit_raw(self, raw: dict, ancestors: list[Node]) -> None:
        """Descend into an unmodelled node's JSON, rewriting it in place."""
        for key, value in raw.items():
            if key in _RAW_SKIP_KEYS:
                continue
            if isinstance(value, list):
                for i, item in enumerate(value):
                    if _is_raw_node(item):
                        value[i] = self._visit_raw_node(item, ancestors)
            elif _is_raw_node(value):
                raw[key] = self._visit_raw_node(value, ancestors)

    def _visit_raw_node(self, raw: dict, ancestors: list[Node]) -> dict:
        """Load one raw child, visit it, and dump it back only if a style call changed."""
        before = len(self.records)
        node = self.visit(load_node(raw), ancestors)
        if isinstance(node, (Opaque, OpaqueStmt)) or len(self.records) == before:
            return raw
        log.debug("rewrote %s nested in unmodelled %s", raw["type"], type(ancestors[-1]).__name__)
        return dump(node)

    def _rewrite(self, node: Node, ancestors: list[Node]) -> Node:
        if isinstance(node, TaggedTemplateExpression):
            kind = self.bindings.kind_of(node.tag)
        elif isinstance(node, CallExpression):
            kind = self.bindings.kind_of(node.callee)
        else:
            return node
        if kind is None:
            return node
        outcome = transform_expression_with_styles(
            node,
            self.unit,
            self.options,
            CallSite(node, ancestors),
            kind.should_label,
        )
        self.records.append(TransformRecord(node.loc, outcome.node is not None, outcome.is_pure))
        if outcome.node is not None:
            return outcome.node
        rewritten = outcome.rewritten
        if outcome.is_pure and kind.annotate_as_pure and isinstance(rewritten, CallExpression):
            rewritten = dataclasses.replace(rewritten, pure=True)
        return rewritten


def transform_program(program: Program, options: Options) -> TransformResult:
    """Rewrite every style invocation in program (in place) and prepend helpers."""
    driver = _Driver(program, options)
    driver.visit(program, [])
    program.body = driver.unit.prelude + program.body
    guard = driver.unit.guard_id
    log.debug(
        "%s: %d style invocation(s), %d folded",
        options.filename or "<input>",
        len(driver.records),
        sum(1 for r in driver.records if r.folded),
    )
    return TransformResult(program, driver.records, guard.name if guard is not None else None)
