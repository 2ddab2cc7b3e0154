"""Generic child iteration and name collection over cssbake nodes."""

from __future__ import annotations

import dataclasses
from typing import Iterator

from .ast import (
    ArrowFunctionExpression,
    FunctionDeclaration,
    FunctionExpression,
    Identifier,
    ImportDefaultSpecifier,
    ImportNamespaceSpecifier,
    ImportSpecifier,
    Node,
    Opaque,
    OpaqueStmt,
    VariableDeclarator,
)


def children(node: Node) -> Iterator[Node]:
    """Direct child nodes in field order. Opaque payloads are not nodes."""
    for f in dataclasses.fields(node):
        if f.name == "loc":
            continue
        value = getattr(node, f.name)
        if isinstance(value, Node):
            yield value
        elif isinstance(value, list):
            for item in value:
                if isinstance(item, Node):
                    yield item


def _raw_identifier_names(raw: object, out: set[str]) -> None:
    if isinstance(raw, dict):
        if raw.get("type") == "Identifier" and isinstance(raw.get("name"), str):
            out.add(raw["name"])
        for value in raw.values():
            _raw_identifier_names(value, out)
    elif isinstance(raw, list):
        for item in raw:
            _raw_identifier_names(item, out)


def collect_names(node: Node, out: set[str]) -> None:
    """Every identifier name appearing anywhere under node."""
    if isinstance(node, Identifier):
        out.add(node.name)
    elif isinstance(node, (Opaque, OpaqueStmt)):
        _raw_identifier_names(node.raw, out)
    for child in children(node):
        collect_names(child, out)


_RAW_FUNCTION_TYPES = frozenset(
    {"FunctionDeclaration", "FunctionExpression", "ArrowFunctionExpression", "ClassDeclaration", "ClassExpression"}
)


def _raw_identifier(raw: object) -> str | None:
    if isinstance(raw, dict) and raw.get("type") == "Identifier" and isinstance(raw.get("name"), str):
        return raw["name"]
    return None


def _raw_bindings(raw: object, out: set[str]) -> None:
    """Declared names inside unmodelled JSON; only plain identifier patterns count."""
    if isinstance(raw, list):
        for item in raw:
            _raw_bindings(item, out)
        return
    if not isinstance(raw, dict):
        return
    kind = raw.get("type")
    names: list[str | None] = []
    if kind == "VariableDeclarator":
        names.append(_raw_identifier(raw.get("id")))
    elif kind in _RAW_FUNCTION_TYPES:
        names.append(_raw_identifier(raw.get("id")))
        names.extend(_raw_identifier(p) for p in raw.get("params") or [])
    elif kind == "CatchClause":
        names.append(_raw_identifier(raw.get("param")))
    out.update(name for name in names if name is not None)
    for value in raw.values():
        _raw_bindings(value, out)


def _add_param_bindings(params: list, out: set[str]) -> None:
    for param in params:
        if isinstance(param, Identifier):
            out.add(param.name)


def collect_bindings(node: Node, out: set[str]) -> None:
    """Names declared anywhere under node (variables, functions, params, imports)."""
    if isinstance(node, VariableDeclarator):
        if isinstance(node.id, Identifier):
            out.add(node.id.name)
    elif isinstance(node, FunctionDeclaration):
        if node.id is not None:
            out.add(node.id.name)
        _add_param_bindings(node.params, out)
    elif isinstance(node, FunctionExpression):
        if node.id is not None:
            out.add(node.id.name)
        _add_param_bindings(node.params, out)
    elif isinstance(node, ArrowFunctionExpression):
        _add_param_bindings(node.params, out)
    elif isinstance(node, (ImportSpecifier, ImportDefaultSpecifier, ImportNamespaceSpecifier)):
        out.add(node.local.name)
    elif isinstance(node, (Opaque, OpaqueStmt)):
        _raw_bindings(node.raw, out)
    for child in children(node):
        collect_bindings(child, out)
