"""ESTree JSON <-> cssbake nodes.

Input may be Babel's AST (File/Program, StringLiteral, ObjectProperty, ...)
or plain ESTree (Literal, Property). Output is always Babel flavoured.
Node types cssbake does not model load as Opaque/OpaqueStmt and dump back
verbatim.
"""

from __future__ import annotations

from .ast import (
    ArrayExpression,
    ArrowFunctionExpression,
    BinaryExpression,
    BlockStatement,
    BooleanLiteral,
    CallExpression,
    ConditionalExpression,
    ExportDefaultDeclaration,
    ExportNamedDeclaration,
    Expr,
    ExpressionStatement,
    FunctionDeclaration,
    FunctionExpression,
    Identifier,
    ImportDeclaration,
    ImportDefaultSpecifier,
    ImportNamespaceSpecifier,
    ImportSpecifier,
    Loc,
    LogicalExpression,
    MemberExpression,
    Node,
    NullLiteral,
    NumericLiteral,
    ObjectExpression,
    ObjectProperty,
    Opaque,
    OpaqueStmt,
    Program,
    ReturnStatement,
    SpreadElement,
    Stmt,
    StringLiteral,
    TaggedTemplateExpression,
    TemplateElement,
    TemplateLiteral,
    UnaryExpression,
    VariableDeclaration,
    VariableDeclarator,
)
from .errors import EstreeError

PURE_ANNOTATION = "#__PURE__"

STATEMENT_TYPES = frozenset(
    {
        "ExpressionStatement",
        "BlockStatement",
        "ReturnStatement",
        "VariableDeclaration",
        "FunctionDeclaration",
        "ImportDeclaration",
        "ExportNamedDeclaration",
        "ExportDefaultDeclaration",
    }
)


# ============================================================
# LOADING
# ============================================================


def _field(raw: dict, key: str, path: str) -> object:
    if key not in raw:
        raise EstreeError(f"missing '{key}'", path)
    return raw[key]


def _loc(raw: dict) -> Loc | None:
    loc = raw.get("loc")
    if not isinstance(loc, dict):
        return None
    start = loc.get("start")
    if not isinstance(start, dict) or "line" not in start or "column" not in start:
        return None
    return Loc(start["line"], start["column"])


def _node_dict(raw: object, path: str) -> dict:
    if not isinstance(raw, dict) or not isinstance(raw.get("type"), str):
        raise EstreeError("expected a node object", path)
    return raw


def _list(raw: dict, key: str, path: str) -> list:
    value = _field(raw, key, path)
    if not isinstance(value, list):
        raise EstreeError(f"'{key}' must be an array", path)
    return value


def _has_pure_annotation(raw: dict) -> bool:
    for comment in raw.get("leadingComments") or []:
        if isinstance(comment, dict) and comment.get("value", "").strip() == PURE_ANNOTATION:
            return True
    return False


def _literal(raw: dict, loc: Loc | None) -> Expr:
    """Plain ESTree Literal, discriminated by value type."""
    if "regex" in raw or "bigint" in raw:
        return Opaque(loc, raw)
    value = raw.get("value")
    if isinstance(value, bool):
        return BooleanLiteral(loc, value)
    if value is None:
        return NullLiteral(loc)
    if isinstance(value, str):
        return StringLiteral(loc, value)
    if isinstance(value, (int, float)):
        return NumericLiteral(loc, value)
    return Opaque(loc, raw)


def _is_plain_function(raw: dict) -> bool:
    return not raw.get("async") and not raw.get("generator")


def _template(raw: dict, path: str) -> TemplateLiteral:
    quasis: list[TemplateElement] = []
    for i, q in enumerate(_list(raw, "quasis", path)):
        qpath = f"{path}.quasis[{i}]"
        q = _node_dict(q, qpath)
        value = _field(q, "value", qpath)
        if not isinstance(value, dict) or "raw" not in value:
            raise EstreeError("template element needs value.raw", qpath)
        quasis.append(TemplateElement(_loc(q), value["raw"], value.get("cooked"), bool(q.get("tail"))))
    exprs = [load_expr(e, f"{path}.expressions[{i}]") for i, e in enumerate(_list(raw, "expressions", path))]
    if len(quasis) != len(exprs) + 1:
        raise EstreeError("template needs one more quasi than expressions", path)
    return TemplateLiteral(_loc(raw), quasis, exprs)


def _property(raw: dict, path: str) -> ObjectProperty | SpreadElement | Opaque:
    loc = _loc(raw)
    match raw["type"]:
        case "ObjectProperty":
            pass
        case "Property" if raw.get("kind", "init") == "init" and not raw.get("method"):
            pass
        case "SpreadElement" | "SpreadProperty":
            return SpreadElement(loc, load_expr(_field(raw, "argument", path), f"{path}.argument"))
        case _:
            return Opaque(loc, raw)
    return ObjectProperty(
        loc,
        load_expr(_field(raw, "key", path), f"{path}.key"),
        load_expr(_field(raw, "value", path), f"{path}.value"),
        bool(raw.get("computed")),
        bool(raw.get("shorthand")),
    )


def load_expr(raw: object, path: str = "expr") -> Expr:
    """Load one expression (or pattern) node."""
    raw = _node_dict(raw, path)
    loc = _loc(raw)
    match raw["type"]:
        case "Identifier":
            return Identifier(loc, _field(raw, "name", path))
        case "StringLiteral":
            return StringLiteral(loc, _field(raw, "value", path))
        case "NumericLiteral":
            return NumericLiteral(loc, _field(raw, "value", path))
        case "BooleanLiteral":
            return BooleanLiteral(loc, _field(raw, "value", path))
        case "NullLiteral":
            return NullLiteral(loc)
        case "Literal":
            return _literal(raw, loc)
        case "TemplateLiteral":
            return _template(raw, path)
        case "TaggedTemplateExpression":
            if raw.get("typeParameters") or raw.get("typeArguments"):
                return Opaque(loc, raw)
            tag = load_expr(_field(raw, "tag", path), f"{path}.tag")
            return TaggedTemplateExpression(loc, tag, _template(_node_dict(_field(raw, "quasi", path), f"{path}.quasi"), f"{path}.quasi"))
        case "CallExpression":
            if raw.get("optional"):
                return Opaque(loc, raw)
            args = [load_expr(a, f"{path}.arguments[{i}]") for i, a in enumerate(_list(raw, "arguments", path))]
            callee = load_expr(_field(raw, "callee", path), f"{path}.callee")
            return CallExpression(loc, callee, args, _has_pure_annotation(raw))
        case "MemberExpression":
            if raw.get("optional"):
                return Opaque(loc, raw)
            return MemberExpression(
                loc,
                load_expr(_field(raw, "object", path), f"{path}.object"),
                load_expr(_field(raw, "property", path), f"{path}.property"),
                bool(raw.get("computed")),
            )
        case "ObjectExpression":
            props = [_property(_node_dict(p, f"{path}.properties[{i}]"), f"{path}.properties[{i}]") for i, p in enumerate(_list(raw, "properties", path))]
            if any(isinstance(p, Opaque) for p in props):
                return Opaque(loc, raw)
            return ObjectExpression(loc, props)
        case "SpreadElement":
            return SpreadElement(loc, load_expr(_field(raw, "argument", path), f"{path}.argument"))
        case "ArrayExpression":
            elements: list[Expr | None] = []
            for i, e in enumerate(_list(raw, "elements", path)):
                elements.append(None if e is None else load_expr(e, f"{path}.elements[{i}]"))
            return ArrayExpression(loc, elements)
        case "BinaryExpression":
            return BinaryExpression(
                loc,
                _field(raw, "operator", path),
                load_expr(_field(raw, "left", path), f"{path}.left"),
                load_expr(_field(raw, "right", path), f"{path}.right"),
            )
        case "LogicalExpression":
            return LogicalExpression(
                loc,
                _field(raw, "operator", path),
                load_expr(_field(raw, "left", path), f"{path}.left"),
                load_expr(_field(raw, "right", path), f"{path}.right"),
            )
        case "ConditionalExpression":
            return ConditionalExpression(
                loc,
                load_expr(_field(raw, "test", path), f"{path}.test"),
                load_expr(_field(raw, "consequent", path), f"{path}.consequent"),
                load_expr(_field(raw, "alternate", path), f"{path}.alternate"),
            )
        case "UnaryExpression" if raw.get("prefix", True):
            return UnaryExpression(
                loc,
                _field(raw, "operator", path),
                load_expr(_field(raw, "argument", path), f"{path}.argument"),
            )
        case "ArrowFunctionExpression" if _is_plain_function(raw):
            params = [load_expr(p, f"{path}.params[{i}]") for i, p in enumerate(_list(raw, "params", path))]
            body_raw = _node_dict(_field(raw, "body", path), f"{path}.body")
            body: Node
            if body_raw["type"] == "BlockStatement":
                body = _block(body_raw, f"{path}.body")
            else:
                body = load_expr(body_raw, f"{path}.body")
            return ArrowFunctionExpression(loc, params, body)
        case "FunctionExpression" if _is_plain_function(raw):
            fid = raw.get("id")
            params = [load_expr(p, f"{path}.params[{i}]") for i, p in enumerate(_list(raw, "params", path))]
            return FunctionExpression(
                loc,
                None if fid is None else _identifier(fid, f"{path}.id"),
                params,
                _block(_node_dict(_field(raw, "body", path), f"{path}.body"), f"{path}.body"),
            )
        case _:
            return Opaque(loc, raw)


def _identifier(raw: object, path: str) -> Identifier:
    node = load_expr(raw, path)
    if not isinstance(node, Identifier):
        raise EstreeError("expected an Identifier", path)
    return node


def _block(raw: dict, path: str) -> BlockStatement:
    body = [load_stmt(s, f"{path}.body[{i}]") for i, s in enumerate(_list(raw, "body", path))]
    return BlockStatement(_loc(raw), body)


def _import_specifier(raw: object, path: str) -> ImportSpecifier | ImportDefaultSpecifier | ImportNamespaceSpecifier:
    raw = _node_dict(raw, path)
    loc = _loc(raw)
    local = _identifier(_field(raw, "local", path), f"{path}.local")
    match raw["type"]:
        case "ImportSpecifier":
            imported_raw = _node_dict(_field(raw, "imported", path), f"{path}.imported")
            if imported_raw["type"] in ("StringLiteral", "Literal"):
                imported = Identifier(_loc(imported_raw), str(imported_raw.get("value")))
            else:
                imported = _identifier(imported_raw, f"{path}.imported")
            return ImportSpecifier(loc, imported, local)
        case "ImportDefaultSpecifier":
            return ImportDefaultSpecifier(loc, local)
        case "ImportNamespaceSpecifier":
            return ImportNamespaceSpecifier(loc, local)
        case other:
            raise EstreeError(f"unknown import specifier '{other}'", path)


def load_stmt(raw: object, path: str = "stmt") -> Stmt:
    """Load one statement or declaration node."""
    raw = _node_dict(raw, path)
    loc = _loc(raw)
    match raw["type"]:
        case "ExpressionStatement":
            return ExpressionStatement(loc, load_expr(_field(raw, "expression", path), f"{path}.expression"))
        case "BlockStatement":
            return _block(raw, path)
        case "ReturnStatement":
            arg = raw.get("argument")
            return ReturnStatement(loc, None if arg is None else load_expr(arg, f"{path}.argument"))
        case "VariableDeclaration" if not raw.get("declare"):
            decls: list[VariableDeclarator] = []
            for i, d in enumerate(_list(raw, "declarations", path)):
                dpath = f"{path}.declarations[{i}]"
                d = _node_dict(d, dpath)
                init = d.get("init")
                decls.append(
                    VariableDeclarator(
                        _loc(d),
                        load_expr(_field(d, "id", dpath), f"{dpath}.id"),
                        None if init is None else load_expr(init, f"{dpath}.init"),
                    )
                )
            return VariableDeclaration(loc, _field(raw, "kind", path), decls)
        case "FunctionDeclaration" if _is_plain_function(raw):
            fid = raw.get("id")
            params = [load_expr(p, f"{path}.params[{i}]") for i, p in enumerate(_list(raw, "params", path))]
            return FunctionDeclaration(
                loc,
                None if fid is None else _identifier(fid, f"{path}.id"),
                params,
                _block(_node_dict(_field(raw, "body", path), f"{path}.body"), f"{path}.body"),
            )
        case "ImportDeclaration" if raw.get("importKind", "value") == "value":
            specs = [_import_specifier(s, f"{path}.specifiers[{i}]") for i, s in enumerate(_list(raw, "specifiers", path))]
            source = load_expr(_field(raw, "source", path), f"{path}.source")
            if not isinstance(source, StringLiteral):
                raise EstreeError("import source must be a string", f"{path}.source")
            return ImportDeclaration(loc, specs, source)
        case "ExportNamedDeclaration" if raw.get("source") is None and not raw.get("specifiers"):
            decl = raw.get("declaration")
            return ExportNamedDeclaration(loc, None if decl is None else load_stmt(decl, f"{path}.declaration"))
        case "ExportDefaultDeclaration":
            decl_raw = _node_dict(_field(raw, "declaration", path), f"{path}.declaration")
            decl: Node
            if decl_raw["type"] == "FunctionDeclaration":
                decl = load_stmt(decl_raw, f"{path}.declaration")
            else:
                decl = load_expr(decl_raw, f"{path}.declaration")
            return ExportDefaultDeclaration(loc, decl)
        case _:
            return OpaqueStmt(loc, raw)


def load_node(raw: object, path: str = "node") -> Node:
    """Load a statement or an expression, whichever the node type names."""
    raw = _node_dict(raw, path)
    if raw["type"] in STATEMENT_TYPES:
        return load_stmt(raw, path)
    return load_expr(raw, path)


def load(raw: object) -> Program:
    """Load a Program (or Babel File wrapping one)."""
    raw = _node_dict(raw, "$")
    path = "$"
    if raw["type"] == "File":
        raw = _node_dict(_field(raw, "program", path), "$.program")
        path = "$.program"
    if raw["type"] != "Program":
        raise EstreeError(f"expected Program, got '{raw['type']}'", path)
    body = [load_stmt(s, f"{path}.body[{i}]") for i, s in enumerate(_list(raw, "body", path))]
    return Program(_loc(raw), body, raw.get("sourceType", "module"))


# ============================================================
# DUMPING
# ============================================================


def _with_loc(node: Node, d: dict) -> dict:
    if node.loc is not None:
        d["loc"] = {"start": {"line": node.loc.line, "column": node.loc.col}}
    return d


def _dump_list(items: list) -> list:
    return [None if item is None else dump(item) for item in items]


def dump(node: Node) -> dict:
    """Serialize a node to a Babel-flavoured ESTree dict."""
    match node:
        case Opaque(raw=raw) | OpaqueStmt(raw=raw):
            return raw
        case Program(body=body, source_type=source_type):
            d = {"type": "Program", "sourceType": source_type, "body": _dump_list(body)}
        case Identifier(name=name):
            d = {"type": "Identifier", "name": name}
        case StringLiteral(value=value):
            d = {"type": "StringLiteral", "value": value}
        case NumericLiteral(value=value):
            d = {"type": "NumericLiteral", "value": value}
        case BooleanLiteral(value=value):
            d = {"type": "BooleanLiteral", "value": value}
        case NullLiteral():
            d = {"type": "NullLiteral"}
        case TemplateElement(raw=raw_text, cooked=cooked, tail=tail):
            d = {"type": "TemplateElement", "value": {"raw": raw_text, "cooked": cooked}, "tail": tail}
        case TemplateLiteral(quasis=quasis, expressions=exprs):
            d = {"type": "TemplateLiteral", "quasis": _dump_list(quasis), "expressions": _dump_list(exprs)}
        case TaggedTemplateExpression(tag=tag, quasi=quasi):
            d = {"type": "TaggedTemplateExpression", "tag": dump(tag), "quasi": dump(quasi)}
        case CallExpression(callee=callee, arguments=args, pure=pure):
            d = {"type": "CallExpression", "callee": dump(callee), "arguments": _dump_list(args)}
            if pure:
                d["leadingComments"] = [{"type": "CommentBlock", "value": PURE_ANNOTATION}]
        case MemberExpression(object=obj, property=prop, computed=computed):
            d = {"type": "MemberExpression", "object": dump(obj), "property": dump(prop), "computed": computed}
        case ObjectProperty(key=key, value=value, computed=computed, shorthand=shorthand):
            d = {"type": "ObjectProperty", "key": dump(key), "value": dump(value), "computed": computed, "shorthand": shorthand}
        case SpreadElement(argument=arg):
            d = {"type": "SpreadElement", "argument": dump(arg)}
        case ObjectExpression(properties=props):
            d = {"type": "ObjectExpression", "properties": _dump_list(props)}
        case ArrayExpression(elements=elements):
            d = {"type": "ArrayExpression", "elements": _dump_list(elements)}
        case BinaryExpression(operator=op, left=left, right=right):
            d = {"type": "BinaryExpression", "operator": op, "left": dump(left), "right": dump(right)}
        case LogicalExpression(operator=op, left=left, right=right):
            d = {"type": "LogicalExpression", "operator": op, "left": dump(left), "right": dump(right)}
        case ConditionalExpression(test=test, consequent=cons, alternate=alt):
            d = {"type": "ConditionalExpression", "test": dump(test), "consequent": dump(cons), "alternate": dump(alt)}
        case UnaryExpression(operator=op, argument=arg):
            d = {"type": "UnaryExpression", "operator": op, "prefix": True, "argument": dump(arg)}
        case ArrowFunctionExpression(params=params, body=body):
            d = {
                "type": "ArrowFunctionExpression",
                "params": _dump_list(params),
                "body": dump(body),
                "expression": not isinstance(body, BlockStatement),
            }
        case FunctionExpression(id=fid, params=params, body=body):
            d = {"type": "FunctionExpression", "id": None if fid is None else dump(fid), "params": _dump_list(params), "body": dump(body)}
        case ExpressionStatement(expression=expr):
            d = {"type": "ExpressionStatement", "expression": dump(expr)}
        case BlockStatement(body=body):
            d = {"type": "BlockStatement", "body": _dump_list(body)}
        case ReturnStatement(argument=arg):
            d = {"type": "ReturnStatement", "argument": None if arg is None else dump(arg)}
        case VariableDeclarator(id=vid, init=init):
            d = {"type": "VariableDeclarator", "id": dump(vid), "init": None if init is None else dump(init)}
        case VariableDeclaration(kind=kind, declarations=decls):
            d = {"type": "VariableDeclaration", "kind": kind, "declarations": _dump_list(decls)}
        case FunctionDeclaration(id=fid, params=params, body=body):
            d = {"type": "FunctionDeclaration", "id": None if fid is None else dump(fid), "params": _dump_list(params), "body": dump(body)}
        case ImportSpecifier(imported=imported, local=local):
            d = {"type": "ImportSpecifier", "imported": dump(imported), "local": dump(local)}
        case ImportDefaultSpecifier(local=local):
            d = {"type": "ImportDefaultSpecifier", "local": dump(local)}
        case ImportNamespaceSpecifier(local=local):
            d = {"type": "ImportNamespaceSpecifier", "local": dump(local)}
        case ImportDeclaration(specifiers=specs, source=source):
            d = {"type": "ImportDeclaration", "specifiers": _dump_list(specs), "source": dump(source)}
        case ExportNamedDeclaration(declaration=decl, specifiers=specs):
            d = {
                "type": "ExportNamedDeclaration",
                "declaration": None if decl is None else dump(decl),
                "specifiers": _dump_list(specs),
                "source": None,
            }
        case ExportDefaultDeclaration(declaration=decl):
            d = {"type": "ExportDefaultDeclaration", "declaration": dump(decl)}
        case _:
            raise TypeError(f"cannot dump {type(node).__name__}")
    return _with_loc(node, d)
