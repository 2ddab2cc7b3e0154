"""End-to-end tests: programs through transform_program and the JS printer."""

from cssbake.ast import (
    ArrowFunctionExpression,
    BlockStatement,
    FunctionDeclaration,
    Loc,
    MemberExpression,
    ObjectProperty,
    OpaqueStmt,
    ReturnStatement,
)
from cssbake.emit import emit_js
from cssbake.estree import load
from cssbake.options import CallKind, Options
from cssbake.plugin import transform_program
from cssbake.serialize import serialize_styles

from jsnodes import call, const, expr_stmt, ident, import_named, import_namespace, obj, program, s, tagged

PROD_TEST = 'process.env.NODE_ENV === "production"'


def _emit(prog, options) -> str:
    return emit_js(transform_program(prog, options).program)


def test_static_css_folded():
    prog = program(
        import_named("@emotion/react", "css"),
        const("Button", tagged("css", ["color: red;"])),
    )
    name = serialize_styles(["color:red"]).name
    assert _emit(prog, Options(source_map=False)) == (
        'import { css } from "@emotion/react";\n'
        f'const Button = {{ name: "{name}", styles: "color:red" }};'
    )


def test_dynamic_css_annotated_and_labelled():
    prog = program(
        import_named("@emotion/react", "css"),
        const("color", s("red")),
        const("Foo", tagged("css", ["color: ", ";"], [ident("color")])),
    )
    assert _emit(prog, Options(source_map=False)) == (
        'import { css } from "@emotion/react";\n'
        'const color = "red";\n'
        f'const Foo = /*#__PURE__*/css("color:", color, ";", {PROD_TEST} ? "" : ";label:Foo");'
    )


def test_impure_dynamic_css_not_annotated():
    prog = program(
        import_named("@emotion/react", "css"),
        const("Foo", call("css", s("color:"), call("pick"))),
    )
    out = _emit(prog, Options(auto_label="never", source_map=False))
    assert out.endswith('const Foo = css("color:", pick());')


def test_unimported_css_untouched():
    prog = program(const("Button", tagged("css", ["color: red;"])))
    assert _emit(prog, Options(source_map=False)) == "const Button = css`color: red;`;"


def test_other_package_untouched():
    prog = program(
        import_named("styled-components", "css"),
        const("Button", tagged("css", ["color: red;"])),
    )
    assert "css`color: red;`" in _emit(prog, Options(source_map=False))


def test_aliased_import():
    prog = program(
        import_named("@emotion/react", ("css", "style")),
        const("Button", tagged("style", ["color: red;"])),
    )
    result = transform_program(prog, Options(source_map=False))
    assert len(result.records) == 1
    assert result.records[0].folded


def test_namespace_import():
    prog = program(
        import_namespace("@emotion/react", "emotion"),
        const("Button", call(MemberExpression(None, ident("emotion"), ident("css")), s("color:red;"))),
    )
    name = serialize_styles(["color:red"]).name
    assert _emit(prog, Options(source_map=False)).endswith(f'const Button = {{ name: "{name}", styles: "color:red" }};')


def test_inject_global_not_labelled_or_annotated():
    prog = program(
        import_named("@emotion/css", "injectGlobal"),
        const("m", s("0")),
        expr_stmt(tagged("injectGlobal", ["body { margin: ", "; }"], [ident("m")])),
    )
    out = _emit(prog, Options(auto_label="always", source_map=False))
    assert out.endswith('injectGlobal("body{margin:", m, ";}");')


def test_guard_prepended_once():
    prog = program(
        import_named("@emotion/react", "css"),
        const("A", tagged("css", ["color: red;"], loc=Loc(2, 14))),
        const("B", tagged("css", ["color: blue;"], loc=Loc(3, 14))),
    )
    result = transform_program(prog, Options(filename="styles.js"))
    body = result.program.body
    assert isinstance(body[0], FunctionDeclaration)
    assert body[0].id.name == result.guard_name == "_EMOTION_STRINGIFIED_CSS_ERROR__"
    assert sum(isinstance(stmt, FunctionDeclaration) for stmt in body) == 1
    out = emit_js(result.program)
    assert out.startswith("function _EMOTION_STRINGIFIED_CSS_ERROR__() { return ")
    assert out.count("toString: _EMOTION_STRINGIFIED_CSS_ERROR__ }") == 2


def test_guard_avoids_user_names():
    prog = program(
        import_named("@emotion/react", "css"),
        const("_EMOTION_STRINGIFIED_CSS_ERROR__", s("mine")),
        const("A", tagged("css", ["color: red;"], loc=Loc(3, 14))),
    )
    result = transform_program(prog, Options(filename="styles.js"))
    assert result.guard_name == "_EMOTION_STRINGIFIED_CSS_ERROR__2"


def test_no_guard_without_source_maps():
    prog = program(
        import_named("@emotion/react", "css"),
        const("A", tagged("css", ["color: red;"], loc=Loc(2, 14))),
    )
    result = transform_program(prog, Options(filename="styles.js", source_map=False))
    assert result.guard_name is None
    assert not isinstance(result.program.body[0], FunctionDeclaration)


def test_nested_invocations_inner_first():
    inner = tagged("css", ["color: blue;"])
    prog = program(
        import_named("@emotion/react", "css"),
        const("Outer", tagged("css", ["", " color: red;"], [inner])),
    )
    out = _emit(prog, Options(auto_label="never", source_map=False))
    name = serialize_styles(["color:blue"]).name
    assert out.endswith(f'const Outer = /*#__PURE__*/css({{ name: "{name}", styles: "color:blue" }}, " color:red;");')


def test_label_from_object_property():
    prog = program(
        import_named("@emotion/react", "css"),
        const("styles", obj(("title", tagged("css", ["color: red;"])))),
    )
    result = transform_program(prog, Options(auto_label="always", source_map=False))
    prop = result.program.body[1].declarations[0].init.properties[0]
    assert isinstance(prop, ObjectProperty)
    assert prop.value.properties[1].value == s("color:red;label:title;")


def test_label_through_arrow_function():
    arrow = ArrowFunctionExpression(None, [], tagged("css", ["color: ", ";"], [ident("c")]))
    prog = program(import_named("@emotion/react", "css"), const("Title", arrow))
    out = _emit(prog, Options(auto_label="always", source_map=False))
    assert out.endswith('const Title = () => css("color:", c, ";", ";label:Title");')


def test_label_from_function_declaration():
    body = BlockStatement(None, [ReturnStatement(None, call("css", ident("x")))])
    func = FunctionDeclaration(None, ident("useStyles"), [ident("x")], body)
    prog = program(import_named("@emotion/react", "css"), func)
    out = _emit(prog, Options(auto_label="always", source_map=False))
    assert 'return /*#__PURE__*/css(x, ";label:useStyles");' in out


def test_label_format_with_filename():
    prog = program(
        import_named("@emotion/react", "css"),
        const("Button", call("css", s("color:red;"))),
    )
    options = Options(auto_label="always", source_map=False, label_format="[filename]--[local]", filename="src/Button/index.js")
    result = transform_program(prog, options)
    init = result.program.body[1].declarations[0].init
    assert init.properties[1].value == s("color:red;label:Button--Button;")


def test_custom_import_map():
    options = Options(
        auto_label="never",
        source_map=False,
        import_map={"my-css": {"style": CallKind(should_label=False)}},
    )
    prog = program(import_named("my-css", "style"), const("A", call("style", s("color:red;"))))
    result = transform_program(prog, options)
    assert result.records[0].folded


def test_records_report_paths():
    prog = program(
        import_named("@emotion/react", "css"),
        const("A", call("css", s("color:red;"), loc=Loc(2, 10))),
        const("B", call("css", call("pick"), loc=Loc(3, 10))),
    )
    result = transform_program(prog, Options(source_map=False))
    assert [(r.loc, r.folded, r.pure) for r in result.records] == [
        (Loc(2, 10), True, True),
        (Loc(3, 10), False, False),
    ]


# ============================================================
# Style calls inside unmodelled nodes
# ============================================================


def _raw_ident(name: str) -> dict:
    return {"type": "Identifier", "name": name}


def _raw_css(text: str) -> dict:
    quasi = {"type": "TemplateElement", "value": {"raw": text, "cooked": text}, "tail": True}
    return {
        "type": "TaggedTemplateExpression",
        "tag": _raw_ident("css"),
        "quasi": {"type": "TemplateLiteral", "quasis": [quasi], "expressions": []},
    }


def _raw_program(*stmts: dict) -> dict:
    css_import = {
        "type": "ImportDeclaration",
        "specifiers": [{"type": "ImportSpecifier", "imported": _raw_ident("css"), "local": _raw_ident("css")}],
        "source": {"type": "StringLiteral", "value": "@emotion/react"},
    }
    return {"type": "Program", "body": [css_import, *stmts]}


def _assign(target: str, value: dict) -> dict:
    return {
        "type": "ExpressionStatement",
        "expression": {"type": "AssignmentExpression", "operator": "=", "left": _raw_ident(target), "right": value},
    }


def test_css_inside_if_statement():
    if_stmt = {"type": "IfStatement", "test": _raw_ident("x"), "consequent": _assign("y", _raw_css("color: red;")), "alternate": None}
    prog = load(_raw_program(if_stmt))
    assert isinstance(prog.body[1], OpaqueStmt)

    result = transform_program(prog, Options(source_map=False))
    assert len(result.records) == 1
    assert result.records[0].folded
    right = result.program.body[1].raw["consequent"]["expression"]["right"]
    assert right["type"] == "ObjectExpression"
    styles = {p["key"]["name"]: p["value"]["value"] for p in right["properties"]}
    assert styles == {"name": serialize_styles(["color:red"]).name, "styles": "color:red"}


def test_css_inside_jsx_attribute():
    attribute = {
        "type": "JSXAttribute",
        "name": {"type": "JSXIdentifier", "name": "css"},
        "value": {"type": "JSXExpressionContainer", "expression": _raw_css("color: red;")},
    }
    element = {
        "type": "JSXElement",
        "openingElement": {
            "type": "JSXOpeningElement",
            "name": {"type": "JSXIdentifier", "name": "div"},
            "attributes": [attribute],
            "selfClosing": True,
        },
        "closingElement": None,
        "children": [],
    }
    decl = {
        "type": "VariableDeclaration",
        "kind": "const",
        "declarations": [{"type": "VariableDeclarator", "id": _raw_ident("el"), "init": element}],
    }
    result = transform_program(load(_raw_program(decl)), Options(auto_label="always", source_map=False))
    assert len(result.records) == 1
    init = result.program.body[1].declarations[0].init
    expression = init.raw["openingElement"]["attributes"][0]["value"]["expression"]
    assert expression["type"] == "ObjectExpression"
    assert expression["properties"][1]["value"]["value"] == "color:red;label:el;"


def test_binding_inside_unmodelled_block_is_pure():
    block = {
        "type": "BlockStatement",
        "body": [
            {
                "type": "VariableDeclaration",
                "kind": "const",
                "declarations": [{"type": "VariableDeclarator", "id": _raw_ident("c"), "init": {"type": "StringLiteral", "value": "red"}}],
            },
            {
                "type": "ExpressionStatement",
                "expression": {"type": "CallExpression", "callee": _raw_ident("css"), "arguments": [_raw_ident("c")]},
            },
        ],
    }
    loop = {"type": "WhileStatement", "test": _raw_ident("x"), "body": block}
    result = transform_program(load(_raw_program(loop)), Options(auto_label="never", source_map=False))
    assert [(r.folded, r.pure) for r in result.records] == [(False, True)]
    call_raw = result.program.body[1].raw["body"]["body"][1]["expression"]
    assert call_raw["leadingComments"] == [{"type": "CommentBlock", "value": "#__PURE__"}]


def test_unmodelled_subtree_without_styles_kept_verbatim():
    literal = {"type": "Literal", "value": "a", "raw": "'a'", "range": [10, 13]}
    if_stmt = {"type": "IfStatement", "test": _raw_ident("x"), "consequent": _assign("y", literal), "alternate": None}
    consequent = if_stmt["consequent"]
    result = transform_program(load(_raw_program(if_stmt)), Options(source_map=False))
    assert result.records == []
    assert result.program.body[1].raw["consequent"] is consequent
    assert consequent["expression"]["right"] == literal
