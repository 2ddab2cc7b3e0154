"""Tests for tagged-template normalization and CSS minification."""

import pytest

from cssbake.ast import CallExpression, Identifier, Loc, StringLiteral
from cssbake.options import Options
from cssbake.transform.normalize import expressions_from_template, minify_css, normalize

from jsnodes import call, ident, s, tagged, template


@pytest.mark.parametrize(
    "code,expected",
    [
        ("\n  color: red;\n  background: blue;\n", "color:red;background:blue;"),
        ("color: red; /* note */ margin: 0;", "color:red;margin:0;"),
        ("color: red; // note\nmargin: 0;", "color:red;margin:0;"),
        ('content: "a  b";', 'content:"a  b";'),
        ("background: url(http://x.com/a.png);", "background:url(http://x.com/a.png);"),
        ("div  span { color: red; }", "div span{color:red;}"),
        ("/*! keep */color: red;", "/*! keep */color:red;"),
        ("margin: 0 auto;", "margin:0 auto;"),
        ("& :hover { color: red; }", "& :hover{color:red;}"),
        ("a :focus, a:active { outline: 0; }", "a :focus,a:active{outline:0;}"),
        ("", ""),
    ],
)
def test_minify_css(code: str, expected: str):
    assert minify_css(code) == expected


def test_template_pieces_in_order():
    color = ident("color")
    pieces = expressions_from_template(template(["color: ", ";"], [color]))
    assert pieces == [s("color:"), color, s(";")]
    assert pieces[1] is color


def test_template_leading_interpolation_drops_empty_piece():
    sel = ident("sel")
    pieces = expressions_from_template(template(["", " { color: red; }"], [sel]))
    assert pieces == [sel, s("{color:red;}")]


def test_template_adjacent_interpolations_keep_space():
    a, b = ident("a"), ident("b")
    pieces = expressions_from_template(template(["margin: ", " ", ";"], [a, b]))
    assert pieces == [s("margin:"), a, s(" "), b, s(";")]


def test_template_without_interpolations():
    assert expressions_from_template(template(["\n  color: red;\n"])) == [s("color:red;")]


def test_normalize_tagged_template():
    expr = tagged("css", ["color: red;"])
    result, source_map = normalize(expr, Options(source_map=False))
    assert isinstance(result, CallExpression)
    assert result.callee == Identifier(None, "css")
    assert result.arguments == [StringLiteral(None, "color:red;")]
    assert source_map == ""


def test_normalize_is_idempotent():
    options = Options(source_map=False)
    once, _ = normalize(tagged("css", ["color: ", ";"], [ident("c")]), options)
    twice, source_map = normalize(once, options)
    assert twice is once
    assert source_map == ""


def test_normalize_leaves_calls_alone():
    expr = call("css", s("color:red;"))
    result, _ = normalize(expr, Options())
    assert result is expr


def test_normalize_captures_source_map():
    expr = tagged("css", ["color: red;"], loc=Loc(3, 14))
    _, source_map = normalize(expr, Options(filename="src/app.js"))
    assert source_map.startswith("/*# sourceMappingURL=data:application/json;charset=utf-8;base64,")
    assert source_map.endswith(" */")


def test_normalize_no_source_map_without_filename():
    expr = tagged("css", ["color: red;"], loc=Loc(3, 14))
    _, source_map = normalize(expr, Options(filename=""))
    assert source_map == ""


def test_normalize_no_source_map_when_disabled():
    expr = tagged("css", ["color: red;"], loc=Loc(3, 14))
    _, source_map = normalize(expr, Options(filename="app.js", source_map=False))
    assert source_map == ""
