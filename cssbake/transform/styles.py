"""Style invocation transform: fold static css into {name, styles}, else annotate.

Decision procedure for one invocation:

    tagged template -> call            (normalize)
    object args -> css strings         (simplify_object)
    adjacent strings joined            (join_string_literals)
    single string literal?  yes -> fast path: serialized object literal,
                                   dev branch adds map + toString guard
                            no  -> fallback: label / source map appended
                                   as NODE_ENV-conditional trailing args

Purity is tracked over the original arguments: one impure argument makes
the fallback result impure. The fast path is always pure.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass

from ..ast import CallExpression, Expr, Identifier, ObjectExpression, ObjectProperty, SpreadElement, StringLiteral
from ..label import CallSite, label_from_site
from ..options import Options
from ..serialize import StyleIdentity, serialize_styles
from ..source_maps import source_map_comment
from .conditional import branch, dev_only_string
from .context import CompilationUnit
from .guard import ensure_guard
from .normalize import normalize
from .purity import is_pure, simplify_object
from .strings import append_string_argument, join_string_literals

log = logging.getLogger(__name__)


@dataclass
class TransformOutcome:
    """Result for one invocation.

    node: wholesale replacement (fast path) or None.
    is_pure: False whenever any argument may have side effects.
    rewritten: the normalized call with its edited arguments, to splice in
    place of the original when node is None.
    """

    node: Expr | None
    is_pure: bool
    rewritten: Expr


def _identity_object(res: StyleIdentity, extra: list[ObjectProperty] | None = None) -> ObjectExpression:
    props = [
        ObjectProperty(None, Identifier(None, "name"), StringLiteral(None, res.name)),
        ObjectProperty(None, Identifier(None, "styles"), StringLiteral(None, res.styles)),
    ]
    if extra:
        props.extend(extra)
    return ObjectExpression(None, props)


def _fast_path(
    css: StringLiteral,
    label: str | None,
    source_map: str,
    unit: CompilationUnit,
    options: Options,
) -> Expr:
    css_string = css.value[:-1] if css.value.endswith(";") else css.value
    suffix = f";label:{label};" if label and options.auto_label == "always" else ""
    prod_node = _identity_object(serialize_styles([css_string + suffix]))
    if not source_map:
        return prod_node
    guard = ensure_guard(unit)
    dev_suffix = f";label:{label};" if label else ""
    dev_res = serialize_styles([css_string + dev_suffix])
    dev_node = _identity_object(
        dev_res,
        [
            ObjectProperty(None, Identifier(None, "map"), StringLiteral(None, source_map)),
            ObjectProperty(None, Identifier(None, "toString"), guard),
        ],
    )
    return branch(prod_node, dev_node)


def _append_diagnostics(
    call: CallExpression, label: str | None, source_map: str, options: Options
) -> CallExpression:
    if label:
        label_string = f";label:{label}"
        match options.auto_label:
            case "dev-only":
                call = append_string_argument(call, dev_only_string(label_string))
            case "always":
                call = append_string_argument(call, label_string)
    if source_map:
        call = append_string_argument(call, dev_only_string(source_map))
    return call


def transform_expression_with_styles(
    expr: Expr,
    unit: CompilationUnit,
    options: Options,
    site: CallSite,
    should_label: bool,
    source_map: str = "",
) -> TransformOutcome:
    """Rewrite one style invocation. Never raises for unrecognized shapes."""
    normalized, template_map = normalize(expr, options)
    if template_map:
        source_map = template_map
    if not isinstance(normalized, CallExpression):
        return TransformOutcome(None, False, expr)

    can_append_strings = not any(isinstance(arg, SpreadElement) for arg in normalized.arguments)
    pure = True
    args: list[Expr] = []
    for arg in normalized.arguments:
        if not is_pure(arg, unit):
            pure = False
        if isinstance(arg, ObjectExpression):
            arg = simplify_object(arg)
        args.append(arg)
    call = dataclasses.replace(normalized, arguments=join_string_literals(args))

    if can_append_strings and options.source_map and not source_map and call.loc is not None:
        source_map = source_map_comment(call.loc, options)

    label = None
    if should_label and options.auto_label != "never":
        label = label_from_site(site, options)

    if len(call.arguments) == 1 and isinstance(call.arguments[0], StringLiteral):
        log.debug("static style at %s folded (label=%s)", call.loc, label)
        return TransformOutcome(_fast_path(call.arguments[0], label, source_map, unit, options), True, call)

    if not can_append_strings:
        log.debug("style at %s has spread arguments; no diagnostics appended", call.loc)
        return TransformOutcome(None, pure, call)
    log.debug("dynamic style at %s kept as call (label=%s)", call.loc, label)
    return TransformOutcome(None, pure, _append_diagnostics(call, label, source_map, options))
