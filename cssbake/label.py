"""Label resolution: a human-readable class-name suffix from call-site context."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import PurePosixPath

from .ast import (
    ArrowFunctionExpression,
    FunctionDeclaration,
    FunctionExpression,
    Identifier,
    Node,
    ObjectProperty,
    StringLiteral,
    VariableDeclarator,
)
from .options import Options

_INVALID_CLASS_NAME_CHARS = re.compile(r"[!\"#$%&'()*+,./:;<=>?@\[\]^`|}~{]")


@dataclass
class CallSite:
    """Where a style invocation sits: the node and its ancestors, outermost first."""

    node: Node
    ancestors: list[Node] = field(default_factory=list)


def sanitize_label_part(part: str) -> str:
    return _INVALID_CLASS_NAME_CHARS.sub("-", part.strip())


def _property_key_name(prop: ObjectProperty) -> str | None:
    if prop.computed:
        return None
    if isinstance(prop.key, Identifier):
        return prop.key.name
    if isinstance(prop.key, StringLiteral):
        return prop.key.value
    return None


def identifier_name(site: CallSite) -> str | None:
    """Name of the nearest enclosing binding: property, variable or function.

    Arrow functions are transparent, so `const Button = () => css...` is
    labelled Button.
    """
    for ancestor in reversed(site.ancestors):
        if isinstance(ancestor, VariableDeclarator):
            if isinstance(ancestor.id, Identifier):
                return ancestor.id.name
            return None
        if isinstance(ancestor, FunctionDeclaration):
            return ancestor.id.name if ancestor.id is not None else None
        if isinstance(ancestor, FunctionExpression):
            if ancestor.id is not None:
                return ancestor.id.name
            continue
        if isinstance(ancestor, ArrowFunctionExpression):
            continue
        if isinstance(ancestor, ObjectProperty):
            return _property_key_name(ancestor)
    return None


def format_label(name: str, label_format: str, filename: str) -> str:
    """Substitute [local], [filename] and [dirname] into label_format."""
    sanitized = sanitize_label_part(name)
    if not label_format:
        return sanitized
    path = PurePosixPath(filename.replace("\\", "/"))
    local_dirname = path.parent.name
    local_filename = path.stem
    if local_filename == "index":
        local_filename = local_dirname
    label = re.sub(r"\[local\]", lambda _: sanitized, label_format, flags=re.IGNORECASE)
    label = re.sub(
        r"\[filename\]",
        lambda _: sanitize_label_part(local_filename),
        label,
        flags=re.IGNORECASE,
    )
    label = re.sub(
        r"\[dirname\]",
        lambda _: sanitize_label_part(local_dirname),
        label,
        flags=re.IGNORECASE,
    )
    return label


def label_from_site(site: CallSite, options: Options) -> str | None:
    """Resolve the label for a call site, or None when no name is found."""
    name = identifier_name(site)
    if not name:
        return None
    return format_label(name, options.label_format, options.filename)
