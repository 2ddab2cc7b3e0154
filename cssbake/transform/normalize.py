"""Shape normalization: tagged templates become plain calls.

css`a ${b} c` is rewritten to css("a", b, "c") with the CSS text of the
literal segments minified. Interpolations are located by joining the
segments with placeholders, minifying the whole text once, then splitting
on the placeholders again, so minification sees the same text the
runtime would.
"""

from __future__ import annotations

import re

from ..ast import CallExpression, Expr, StringLiteral, TaggedTemplateExpression, TemplateLiteral
from ..options import Options
from ..source_maps import source_map_comment

_PLACEHOLDER = re.compile(r"xxx(\d+):xxx")
_SYMBOLS = frozenset(";:{},")


def _placeholder(i: int) -> str:
    return f"xxx{i}:xxx"


def _skip_url(code: str, i: int) -> int:
    """Index just past the ) closing the url( at i."""
    end = code.find(")", i)
    return len(code) if end < 0 else end + 1


def minify_css(code: str) -> str:
    """Strip comments, collapse whitespace, drop whitespace around ; : { } ,.

    One space before a colon is kept, since it may separate selectors.

    Quoted strings, url(...) bodies and /*! preserved comments are copied verbatim.
    """
    out: list[str] = []
    pending_space = False
    i = 0
    n = len(code)

    def emit(text: str) -> None:
        nonlocal pending_space
        if pending_space and out and out[-1][-1] not in _SYMBOLS and (text[0] not in _SYMBOLS or text[0] == ":"):
            out.append(" ")
        pending_space = False
        out.append(text)

    while i < n:
        ch = code[i]
        if ch == '"' or ch == "'":
            j = i + 1
            while j < n and code[j] != ch:
                if code[j] == "\\":
                    j += 1
                j += 1
            emit(code[i : j + 1])
            i = j + 1
        elif code.startswith("url(", i):
            j = _skip_url(code, i)
            emit(code[i:j])
            i = j
        elif code.startswith("/*!", i):
            end = code.find("*/", i + 3)
            j = n if end < 0 else end + 2
            emit(code[i:j])
            i = j
        elif code.startswith("/*", i):
            end = code.find("*/", i + 2)
            i = n if end < 0 else end + 2
            pending_space = True
        elif code.startswith("//", i):
            end = code.find("\n", i)
            i = n if end < 0 else end
            pending_space = True
        elif ch.isspace():
            pending_space = True
            i += 1
        else:
            emit(ch)
            i += 1
    return "".join(out)


def expressions_from_template(quasi: TemplateLiteral) -> list[Expr]:
    """Literal segments and interpolations of a template, in source order."""
    code_parts: list[str] = []
    for i, element in enumerate(quasi.quasis):
        code_parts.append(element.cooked if element.cooked is not None else element.raw)
        if i < len(quasi.expressions):
            code_parts.append(_placeholder(i))
    pieces = _PLACEHOLDER.split(minify_css("".join(code_parts)))
    result: list[Expr] = []
    for i, piece in enumerate(pieces):
        if i % 2 == 1:
            result.append(quasi.expressions[int(piece)])
        elif piece:
            result.append(StringLiteral(None, piece))
    return result


def normalize(expr: Expr, options: Options) -> tuple[Expr, str]:
    """Rewrite a tagged template into a call; returns (expr, captured source map).

    The source map is taken from the template before rewriting drops its
    location. Any other shape is returned unchanged with "".
    """
    if not isinstance(expr, TaggedTemplateExpression):
        return expr, ""
    source_map = ""
    if options.source_map and expr.quasi.loc is not None:
        source_map = source_map_comment(expr.quasi.loc, options)
    call = CallExpression(expr.loc, expr.tag, expressions_from_template(expr.quasi))
    return call, source_map
