"""Side-effect analysis and object-literal simplification for style arguments."""

from __future__ import annotations

import re

from ..ast import (
    ArrayExpression,
    ArrowFunctionExpression,
    BinaryExpression,
    BooleanLiteral,
    ConditionalExpression,
    Expr,
    FunctionExpression,
    Identifier,
    LogicalExpression,
    NullLiteral,
    NumericLiteral,
    ObjectExpression,
    ObjectProperty,
    SpreadElement,
    StringLiteral,
    TemplateLiteral,
    UnaryExpression,
)
from .context import CompilationUnit

UNITLESS: frozenset[str] = frozenset(
    {
        "animationIterationCount",
        "aspectRatio",
        "borderImageOutset",
        "borderImageSlice",
        "borderImageWidth",
        "boxFlex",
        "boxFlexGroup",
        "boxOrdinalGroup",
        "columnCount",
        "columns",
        "flex",
        "flexGrow",
        "flexPositive",
        "flexShrink",
        "flexNegative",
        "flexOrder",
        "gridRow",
        "gridRowEnd",
        "gridRowSpan",
        "gridRowStart",
        "gridColumn",
        "gridColumnEnd",
        "gridColumnSpan",
        "gridColumnStart",
        "msGridRow",
        "msGridRowSpan",
        "msGridColumn",
        "msGridColumnSpan",
        "fontWeight",
        "lineHeight",
        "opacity",
        "order",
        "orphans",
        "scale",
        "tabSize",
        "widows",
        "zIndex",
        "zoom",
        "WebkitLineClamp",
        "fillOpacity",
        "floodOpacity",
        "stopOpacity",
        "strokeDasharray",
        "strokeDashoffset",
        "strokeMiterlimit",
        "strokeOpacity",
        "strokeWidth",
    }
)

_HYPHENATE = re.compile(r"[A-Z]|^ms")


# ============================================================
# PURITY
# ============================================================


def is_pure(expr: Expr | None, unit: CompilationUnit) -> bool:
    """True only when evaluating expr cannot have side effects.

    Unknown shapes are impure. Identifiers must be bound in the unit,
    since a global may be a getter.
    """
    if expr is None:
        return True
    match expr:
        case StringLiteral() | NumericLiteral() | BooleanLiteral() | NullLiteral():
            return True
        case FunctionExpression() | ArrowFunctionExpression():
            return True
        case Identifier(name=name):
            return unit.is_bound(name)
        case TemplateLiteral(expressions=exprs):
            return all(is_pure(e, unit) for e in exprs)
        case ArrayExpression(elements=elements):
            return all(not isinstance(e, SpreadElement) and is_pure(e, unit) for e in elements)
        case ObjectExpression(properties=props):
            for prop in props:
                if not isinstance(prop, ObjectProperty):
                    return False
                if prop.computed and not is_pure(prop.key, unit):
                    return False
                if not is_pure(prop.value, unit):
                    return False
            return True
        case UnaryExpression(operator=op, argument=arg):
            return op != "delete" and is_pure(arg, unit)
        case BinaryExpression(left=left, right=right) | LogicalExpression(left=left, right=right):
            return is_pure(left, unit) and is_pure(right, unit)
        case ConditionalExpression(test=test, consequent=cons, alternate=alt):
            return is_pure(test, unit) and is_pure(cons, unit) and is_pure(alt, unit)
        case _:
            return False


# ============================================================
# OBJECT SIMPLIFICATION
# ============================================================


def is_custom_property(name: str) -> bool:
    return name.startswith("--")


def style_name(key: str) -> str:
    """backgroundColor -> background-color; msFoo -> -ms-foo; --x untouched."""
    if is_custom_property(key):
        return key
    return _HYPHENATE.sub(lambda m: "-" + m.group(0), key).lower()


def style_value(key: str, value: str | int | float) -> str:
    if isinstance(value, str):
        return value
    text = _number_text(value)
    if key not in UNITLESS and not is_custom_property(key) and value != 0:
        return text + "px"
    return text


def _number_text(value: int | float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _static_key(prop: ObjectProperty) -> str | None:
    if prop.computed:
        return None
    if isinstance(prop.key, Identifier):
        return prop.key.name
    if isinstance(prop.key, StringLiteral):
        return prop.key.value
    return None


def _object_css(obj: ObjectExpression) -> str | None:
    """CSS text for a fully static style object, None if anything is dynamic."""
    parts: list[str] = []
    for prop in obj.properties:
        if not isinstance(prop, ObjectProperty):
            return None
        key = _static_key(prop)
        if key is None or key == "styles":
            return None
        value = prop.value
        if isinstance(value, ObjectExpression):
            nested = _object_css(value)
            if nested is None:
                return None
            parts.append(f"{key}{{{nested}}}")
        elif isinstance(value, (StringLiteral, NumericLiteral)):
            parts.append(f"{style_name(key)}:{style_value(key, value.value)};")
        else:
            return None
    return "".join(parts)


def simplify_object(obj: ObjectExpression) -> Expr:
    """Static style object -> equivalent CSS string literal; otherwise obj itself."""
    css = _object_css(obj)
    if css is None:
        return obj
    return StringLiteral(obj.loc, css)
