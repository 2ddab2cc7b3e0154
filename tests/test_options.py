"""Tests for option parsing and label resolution."""

import base64
import json

import pytest

from cssbake.ast import ArrowFunctionExpression, BlockStatement, FunctionExpression, Loc, ObjectProperty, VariableDeclarator
from cssbake.errors import OptionsError
from cssbake.label import CallSite, format_label, identifier_name, sanitize_label_part
from cssbake.options import CallKind, Options
from cssbake.source_maps import source_map_comment

from jsnodes import call, ident, s


def test_defaults():
    options = Options()
    assert options.auto_label == "dev-only"
    assert options.label_format == "[local]"
    assert options.source_map is True
    assert options.style_functions("@emotion/css")["injectGlobal"] == CallKind(False, False)
    assert options.style_functions("react") == {}


def test_from_dict():
    options = Options.from_dict(
        {
            "autoLabel": "always",
            "labelFormat": "[dirname]-[local]",
            "sourceMap": False,
            "importMap": {"my-css": {"style": {"shouldLabel": False}}},
        }
    )
    assert options.auto_label == "always"
    assert options.label_format == "[dirname]-[local]"
    assert options.source_map is False
    assert options.style_functions("my-css") == {"style": CallKind(should_label=False, annotate_as_pure=True)}


def test_from_dict_source_reaches_source_map():
    options = Options.from_dict({"filename": "Button.js", "source": "const a = 1;"})
    assert options.source == "const a = 1;"
    comment = source_map_comment(Loc(1, 0), options)
    encoded = comment.split("base64,")[1].removesuffix(" */")
    doc = json.loads(base64.b64decode(encoded))
    assert doc["sourcesContent"] == ["const a = 1;"]
    assert doc["sources"] == ["Button.js"]


def test_invalid_auto_label():
    with pytest.raises(OptionsError):
        Options(auto_label="sometimes")


@pytest.mark.parametrize(
    "opts",
    [
        {"unknown": 1},
        {"sourceMap": "yes"},
        {"labelFormat": 3},
        {"importMap": []},
        {"importMap": {"pkg": {"css": True}}},
        {"importMap": {"pkg": {"css": {"shouldLabel": "false"}}}},
        {"importMap": {"pkg": {"css": {"pure": 0}}}},
        {"source": 3},
    ],
)
def test_from_dict_rejects(opts):
    with pytest.raises(OptionsError):
        Options.from_dict(opts)


# ============================================================
# Labels
# ============================================================


@pytest.mark.parametrize(
    "name,label_format,filename,expected",
    [
        ("Button", "[local]", "", "Button"),
        ("Button", "[filename]--[local]", "src/components/Card.tsx", "Card--Button"),
        ("Button", "[dirname]-[local]", "src/components/Card.tsx", "components-Button"),
        ("Button", "[filename]-[local]", "src/Card/index.js", "Card-Button"),
        ("Button", "[FILENAME]-[local]", "Card.js", "Card-Button"),
        ("Button", "", "", "Button"),
    ],
)
def test_format_label(name: str, label_format: str, filename: str, expected: str):
    assert format_label(name, label_format, filename) == expected


def test_sanitize_label_part():
    assert sanitize_label_part("a.b/c d") == "a-b-c d"
    assert sanitize_label_part("  spaced  ") == "spaced"


def _site(*ancestors):
    node = call("css", s("color:red"))
    return CallSite(node, list(ancestors))


def test_name_from_declarator():
    assert identifier_name(_site(VariableDeclarator(None, ident("Title"), None))) == "Title"


def test_name_from_nearest_property():
    outer = VariableDeclarator(None, ident("styles"), None)
    prop = ObjectProperty(None, s("header-title"), s(""))
    assert identifier_name(_site(outer, prop)) == "header-title"


def test_computed_property_has_no_name():
    prop = ObjectProperty(None, ident("key"), s(""), computed=True)
    assert identifier_name(_site(VariableDeclarator(None, ident("styles"), None), prop)) is None


def test_arrow_and_anonymous_function_are_transparent():
    decl = VariableDeclarator(None, ident("useStyles"), None)
    arrow = ArrowFunctionExpression(None, [], s(""))
    func = FunctionExpression(None, None, [], BlockStatement(None, []))
    assert identifier_name(_site(decl, arrow, func)) == "useStyles"


def test_named_function_expression():
    decl = VariableDeclarator(None, ident("outer"), None)
    func = FunctionExpression(None, ident("inner"), [], BlockStatement(None, []))
    assert identifier_name(_site(decl, func)) == "inner"


def test_no_name_at_top_level():
    assert identifier_name(_site()) is None
