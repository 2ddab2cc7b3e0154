"""cssbake AST: JavaScript syntax tree node definitions.

Covers the subset of ESTree (Babel flavour) the style transform needs to
recognize. Anything else is carried as an Opaque node holding the raw
ESTree dict, so a tree survives a load/transform/dump cycle untouched.
"""

from __future__ import annotations

from dataclasses import dataclass, field


# ============================================================
# POSITION
# ============================================================


@dataclass
class Loc:
    """Source position: line is 1-indexed, col is 0-indexed."""

    line: int
    col: int


# ============================================================
# BASE
# ============================================================


@dataclass
class Node:
    """Base for all nodes."""

    loc: Loc | None


@dataclass
class Expr(Node):
    """Base for all expressions."""


@dataclass
class Stmt(Node):
    """Base for all statements and declarations."""


# ============================================================
# EXPRESSIONS
# ============================================================


@dataclass
class Identifier(Expr):
    name: str


@dataclass
class StringLiteral(Expr):
    value: str


@dataclass
class NumericLiteral(Expr):
    value: int | float


@dataclass
class BooleanLiteral(Expr):
    value: bool


@dataclass
class NullLiteral(Expr):
    pass


@dataclass
class TemplateElement(Node):
    """One literal segment of a template. cooked is None for invalid escapes."""

    raw: str
    cooked: str | None
    tail: bool


@dataclass
class TemplateLiteral(Expr):
    """`q0${e0}q1${e1}q2`; len(quasis) == len(expressions) + 1."""

    quasis: list[TemplateElement]
    expressions: list[Expr]


@dataclass
class TaggedTemplateExpression(Expr):
    """tag`...`."""

    tag: Expr
    quasi: TemplateLiteral


@dataclass
class CallExpression(Expr):
    """callee(args). pure marks a leading /*#__PURE__*/ annotation."""

    callee: Expr
    arguments: list[Expr]
    pure: bool = False


@dataclass
class MemberExpression(Expr):
    """obj.prop, or obj[prop] when computed."""

    object: Expr
    property: Expr
    computed: bool = False


@dataclass
class ObjectProperty(Node):
    """key: value inside an object literal."""

    key: Expr
    value: Expr
    computed: bool = False
    shorthand: bool = False


@dataclass
class SpreadElement(Expr):
    """...argument, in call arguments, arrays and object literals."""

    argument: Expr


@dataclass
class ObjectExpression(Expr):
    properties: list[ObjectProperty | SpreadElement]


@dataclass
class ArrayExpression(Expr):
    """[a, b]. A None element is a hole."""

    elements: list[Expr | None]


@dataclass
class BinaryExpression(Expr):
    operator: str
    left: Expr
    right: Expr


@dataclass
class LogicalExpression(Expr):
    """&&, || and ??."""

    operator: str
    left: Expr
    right: Expr


@dataclass
class ConditionalExpression(Expr):
    """test ? consequent : alternate."""

    test: Expr
    consequent: Expr
    alternate: Expr


@dataclass
class UnaryExpression(Expr):
    """Prefix operators: - + ! ~ typeof void delete."""

    operator: str
    argument: Expr


@dataclass
class ArrowFunctionExpression(Expr):
    """(params) => body. body is an Expr or a BlockStatement."""

    params: list[Expr]
    body: Node


@dataclass
class FunctionExpression(Expr):
    id: Identifier | None
    params: list[Expr]
    body: BlockStatement


@dataclass
class Opaque(Expr):
    """Any syntax the transform does not model. raw is the ESTree dict."""

    raw: dict = field(default_factory=dict)


# ============================================================
# STATEMENTS
# ============================================================


@dataclass
class ExpressionStatement(Stmt):
    expression: Expr


@dataclass
class BlockStatement(Stmt):
    body: list[Stmt]


@dataclass
class ReturnStatement(Stmt):
    argument: Expr | None


@dataclass
class VariableDeclarator(Node):
    """id = init. id may be a pattern (Opaque)."""

    id: Expr
    init: Expr | None


@dataclass
class VariableDeclaration(Stmt):
    """const/let/var declarations."""

    kind: str
    declarations: list[VariableDeclarator]


@dataclass
class FunctionDeclaration(Stmt):
    """function id(params) { body }. compact prints on one line."""

    id: Identifier | None
    params: list[Expr]
    body: BlockStatement
    compact: bool = False


@dataclass
class ImportSpecifier(Node):
    """import { imported as local }."""

    imported: Identifier
    local: Identifier


@dataclass
class ImportDefaultSpecifier(Node):
    local: Identifier


@dataclass
class ImportNamespaceSpecifier(Node):
    local: Identifier


@dataclass
class ImportDeclaration(Stmt):
    specifiers: list[ImportSpecifier | ImportDefaultSpecifier | ImportNamespaceSpecifier]
    source: StringLiteral


@dataclass
class ExportNamedDeclaration(Stmt):
    """export <declaration>. Specifier lists are kept Opaque."""

    declaration: Stmt | None
    specifiers: list[Opaque] = field(default_factory=list)


@dataclass
class ExportDefaultDeclaration(Stmt):
    declaration: Node


@dataclass
class OpaqueStmt(Stmt):
    """Any statement the transform does not model."""

    raw: dict = field(default_factory=dict)


@dataclass
class Program(Node):
    """Top-level compilation unit."""

    body: list[Stmt]
    source_type: str = "module"
