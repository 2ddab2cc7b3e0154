"""JavaScript printer: cssbake nodes -> source text."""

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
    TemplateLiteral,
    UnaryExpression,
    VariableDeclaration,
)
from .errors import EmitError

# Binding strength, higher binds tighter.
PREC_ASSIGN = 2
PREC_CONDITIONAL = 3
PREC_UNARY = 15
PREC_CALL = 17
PREC_PRIMARY = 18


def escape_string(value: str) -> str:
    """Escape a string for use in a double-quoted literal (without quotes)."""
    return (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\t", "\\t")
        .replace("\r", "\\r")
        .replace("\f", "\\f")
        .replace("\v", "\\v")
        .replace("\x00", "\\x00")
        .replace("\u2028", "\\u2028")
        .replace("\u2029", "\\u2029")
    )


def _prec(op: str) -> int:
    """Return precedence level for binary/logical operator (higher = binds tighter)."""
    match op:
        case "||" | "??":
            return 4
        case "&&":
            return 5
        case "|":
            return 6
        case "^":
            return 7
        case "&":
            return 8
        case "==" | "!=" | "===" | "!==":
            return 9
        case "<" | ">" | "<=" | ">=" | "in" | "instanceof":
            return 10
        case "<<" | ">>" | ">>>":
            return 11
        case "+" | "-":
            return 12
        case "*" | "/" | "%":
            return 13
        case "**":
            return 14
        case _:
            raise EmitError(f"unknown operator '{op}'")


def _number(value: int | float) -> str:
    if isinstance(value, float):
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        return repr(value)
    return str(value)


class JsEmitter:
    """Emit JavaScript source with two-space indentation."""

    def __init__(self) -> None:
        self.indent = 0

    def emit(self, node: Node) -> str:
        """Emit a Program, statement or expression."""
        self.indent = 0
        if isinstance(node, Program):
            return "\n".join(self._stmt(s) for s in node.body)
        if isinstance(node, Stmt):
            return self._stmt(node)
        if isinstance(node, Expr):
            return self._expr(node)
        raise EmitError(f"cannot print {type(node).__name__}")

    def _pad(self) -> str:
        return "  " * self.indent

    # --- Statements ---

    def _block(self, block: BlockStatement) -> str:
        if not block.body:
            return "{}"
        self.indent += 1
        inner = [self._pad() + self._stmt(s) for s in block.body]
        self.indent -= 1
        return "{\n" + "\n".join(inner) + "\n" + self._pad() + "}"

    def _compact_block(self, block: BlockStatement) -> str:
        if not block.body:
            return "{}"
        return "{ " + " ".join(self._stmt(s) for s in block.body) + " }"

    def _params(self, params: list[Expr]) -> str:
        return "(" + ", ".join(self._expr(p) for p in params) + ")"

    def _function_decl(self, func: FunctionDeclaration) -> str:
        name = f" {func.id.name}" if func.id is not None else ""
        body = self._compact_block(func.body) if func.compact else self._block(func.body)
        return f"function{name}{self._params(func.params)} {body}"

    def _stmt(self, stmt: Stmt) -> str:
        """Statement text; the first line carries no indentation."""
        match stmt:
            case ExpressionStatement(expression=expr):
                text = self._expr(expr)
                if text.startswith("{") or text.startswith("function") or text.startswith("class"):
                    text = f"({text})"
                return text + ";"
            case BlockStatement():
                return self._block(stmt)
            case ReturnStatement(argument=None):
                return "return;"
            case ReturnStatement(argument=arg):
                return f"return {self._expr(arg)};"
            case VariableDeclaration(kind=kind, declarations=decls):
                parts = []
                for d in decls:
                    if d.init is None:
                        parts.append(self._expr(d.id))
                    else:
                        parts.append(f"{self._expr(d.id)} = {self._wrap(d.init, PREC_ASSIGN)}")
                return f"{kind} {', '.join(parts)};"
            case FunctionDeclaration():
                return self._function_decl(stmt)
            case ImportDeclaration(specifiers=specs, source=source):
                return self._import(specs, source)
            case ExportNamedDeclaration(declaration=None):
                return "export {};"
            case ExportNamedDeclaration(declaration=decl):
                return "export " + self._stmt(decl)
            case ExportDefaultDeclaration(declaration=FunctionDeclaration() as func):
                return "export default " + self._function_decl(func)
            case ExportDefaultDeclaration(declaration=decl):
                return f"export default {self._wrap(decl, PREC_ASSIGN)};"
            case OpaqueStmt(raw=raw):
                raise EmitError(f"cannot print unsupported statement '{raw.get('type')}'")
            case _:
                raise EmitError(f"cannot print {type(stmt).__name__}")

    def _import(self, specs: list, source: StringLiteral) -> str:
        src = self._expr(source)
        if not specs:
            return f"import {src};"
        heads: list[str] = []
        named: list[str] = []
        for spec in specs:
            if isinstance(spec, ImportDefaultSpecifier):
                heads.append(spec.local.name)
            elif isinstance(spec, ImportNamespaceSpecifier):
                heads.append(f"* as {spec.local.name}")
            elif isinstance(spec, ImportSpecifier):
                if spec.imported.name == spec.local.name:
                    named.append(spec.local.name)
                else:
                    named.append(f"{spec.imported.name} as {spec.local.name}")
        if named:
            heads.append("{ " + ", ".join(named) + " }")
        return f"import {', '.join(heads)} from {src};"

    # --- Expressions ---

    def _wrap(self, expr: Expr | Node, min_prec: int) -> str:
        text, prec = self._expr_prec(expr)
        if prec < min_prec:
            return f"({text})"
        return text

    def _expr(self, expr: Expr | Node) -> str:
        return self._expr_prec(expr)[0]

    def _template(self, tmpl: TemplateLiteral) -> str:
        parts = ["`"]
        for i, quasi in enumerate(tmpl.quasis):
            parts.append(quasi.raw)
            if i < len(tmpl.expressions):
                parts.append("${" + self._expr(tmpl.expressions[i]) + "}")
        parts.append("`")
        return "".join(parts)

    def _property(self, prop: ObjectProperty | SpreadElement) -> str:
        if isinstance(prop, SpreadElement):
            return "..." + self._wrap(prop.argument, PREC_ASSIGN)
        value = self._wrap(prop.value, PREC_ASSIGN)
        if prop.computed:
            return f"[{self._wrap(prop.key, PREC_ASSIGN)}]: {value}"
        if prop.shorthand and isinstance(prop.key, Identifier) and isinstance(prop.value, Identifier) and prop.key.name == prop.value.name:
            return prop.key.name
        return f"{self._expr(prop.key)}: {value}"

    def _binary(self, op: str, left: Expr, right: Expr) -> tuple[str, int]:
        prec = _prec(op)
        if op == "**":
            left_text = self._wrap(left, prec + 1)
            right_text = self._wrap(right, prec)
        else:
            left_text = self._wrap(left, prec)
            right_text = self._wrap(right, prec + 1)
        if op == "??":
            # ?? cannot mix with || or && without parentheses
            if isinstance(left, LogicalExpression) and left.operator != "??":
                left_text = f"({self._expr(left)})"
            if isinstance(right, LogicalExpression) and right.operator != "??":
                right_text = f"({self._expr(right)})"
        return f"{left_text} {op} {right_text}", prec

    def _expr_prec(self, expr: Expr | Node) -> tuple[str, int]:
        match expr:
            case Identifier(name=name):
                return name, PREC_PRIMARY
            case StringLiteral(value=value):
                return f'"{escape_string(value)}"', PREC_PRIMARY
            case NumericLiteral(value=value):
                text = _number(value)
                return text, (PREC_UNARY if text.startswith("-") else PREC_PRIMARY)
            case BooleanLiteral(value=value):
                return ("true" if value else "false"), PREC_PRIMARY
            case NullLiteral():
                return "null", PREC_PRIMARY
            case TemplateLiteral():
                return self._template(expr), PREC_PRIMARY
            case TaggedTemplateExpression(tag=tag, quasi=quasi):
                return self._wrap(tag, PREC_CALL) + self._template(quasi), PREC_CALL
            case CallExpression(callee=callee, arguments=args, pure=pure):
                text = self._wrap(callee, PREC_CALL) + "(" + ", ".join(self._wrap(a, PREC_ASSIGN) for a in args) + ")"
                if pure:
                    text = "/*#__PURE__*/" + text
                return text, PREC_CALL
            case MemberExpression(object=obj, property=prop, computed=computed):
                obj_text = self._wrap(obj, PREC_CALL)
                if isinstance(obj, NumericLiteral):
                    obj_text = f"({obj_text})"
                if computed:
                    return f"{obj_text}[{self._expr(prop)}]", PREC_CALL
                return f"{obj_text}.{self._expr(prop)}", PREC_CALL
            case ObjectExpression(properties=props):
                if not props:
                    return "{}", PREC_PRIMARY
                return "{ " + ", ".join(self._property(p) for p in props) + " }", PREC_PRIMARY
            case SpreadElement(argument=arg):
                return "..." + self._wrap(arg, PREC_ASSIGN), PREC_ASSIGN
            case ArrayExpression(elements=elements):
                items = ["" if e is None else self._wrap(e, PREC_ASSIGN) for e in elements]
                trailing = "," if elements and elements[-1] is None else ""
                return "[" + ", ".join(items) + trailing + "]", PREC_PRIMARY
            case BinaryExpression(operator=op, left=left, right=right):
                return self._binary(op, left, right)
            case LogicalExpression(operator=op, left=left, right=right):
                return self._binary(op, left, right)
            case ConditionalExpression(test=test, consequent=cons, alternate=alt):
                text = (
                    self._wrap(test, PREC_CONDITIONAL + 1)
                    + " ? "
                    + self._wrap(cons, PREC_ASSIGN)
                    + " : "
                    + self._wrap(alt, PREC_ASSIGN)
                )
                return text, PREC_CONDITIONAL
            case UnaryExpression(operator=op, argument=arg):
                arg_text = self._wrap(arg, PREC_UNARY)
                if op.isalpha() or (op in "+-" and arg_text.startswith(op)):
                    return f"{op} {arg_text}", PREC_UNARY
                return f"{op}{arg_text}", PREC_UNARY
            case ArrowFunctionExpression(params=params, body=body):
                if isinstance(body, BlockStatement):
                    body_text = self._block(body)
                else:
                    body_text = self._wrap(body, PREC_ASSIGN)
                    if body_text.startswith("{"):
                        body_text = f"({body_text})"
                return f"{self._params(params)} => {body_text}", PREC_ASSIGN
            case FunctionExpression(id=fid, params=params, body=body):
                name = f" {fid.name}" if fid is not None else ""
                return f"function{name}{self._params(params)} {self._block(body)}", PREC_PRIMARY
            case Opaque(raw=raw):
                raise EmitError(f"cannot print unsupported expression '{raw.get('type')}'")
            case _:
                raise EmitError(f"cannot print {type(expr).__name__}")


def emit_js(node: Node) -> str:
    """Emit JavaScript source for a Program, statement or expression."""
    return JsEmitter().emit(node)
