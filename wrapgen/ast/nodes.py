"""ECMAScript module AST used by the harvester, synthesizer and printer.

Node names follow the ESTree/Babel vocabulary so that generated code reads
the same way the host toolchain describes it. Only the constructs the
transform needs are modelled; everything else is kept as a ``RawNode`` that
remembers its source text and its converted children.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field, fields
from typing import Iterator, List, Optional


@dataclass(frozen=True)
class SourceLocation:
    """Start position of a node: 1-based line, 0-based column."""

    line: int
    column: int


@dataclass
class Comment:
    """A source comment. ``value`` excludes the ``//`` or ``/* */`` delimiters."""

    value: str
    block: bool = False


@dataclass
class Node:
    loc: Optional[SourceLocation] = field(default=None, kw_only=True, compare=False, repr=False)
    leading_comments: List[Comment] = field(default_factory=list, kw_only=True, repr=False)


# Expressions


@dataclass
class Identifier(Node):
    name: str


@dataclass
class StringLiteral(Node):
    value: str
    raw: Optional[str] = field(default=None, compare=False, repr=False)


@dataclass
class NumericLiteral(Node):
    raw: str


@dataclass
class BooleanLiteral(Node):
    value: bool


@dataclass
class NullLiteral(Node):
    pass


@dataclass
class TemplateElement(Node):
    raw: str
    tail: bool = False

    @property
    def cooked(self) -> str:
        return unescape_js(self.raw)


@dataclass
class TemplateLiteral(Node):
    quasis: List[TemplateElement]
    expressions: List[Node] = field(default_factory=list)


@dataclass
class ObjectProperty(Node):
    key: Node
    value: Node
    computed: bool = False


@dataclass
class ObjectExpression(Node):
    properties: List[Node] = field(default_factory=list)


@dataclass
class MemberExpression(Node):
    object: Node
    property: Node
    computed: bool = False


@dataclass
class CallExpression(Node):
    callee: Node
    arguments: List[Node] = field(default_factory=list)


@dataclass
class AssignmentExpression(Node):
    left: Node
    right: Node
    operator: str = "="


# Classes


@dataclass
class Decorator(Node):
    expression: Node


@dataclass
class ClassProperty(Node):
    key: Node
    value: Optional[Node] = None
    static: bool = False
    computed: bool = False
    decorators: List[Decorator] = field(default_factory=list)


@dataclass
class ClassMethod(Node):
    key: Node
    kind: str = "method"
    static: bool = False
    computed: bool = False
    decorators: List[Decorator] = field(default_factory=list)
    body: Optional["BlockStatement"] = None


@dataclass
class ClassDeclaration(Node):
    id: Optional[Identifier]
    super_class: Optional[Node] = None
    decorators: List[Decorator] = field(default_factory=list)
    body: List[Node] = field(default_factory=list)


# Statements


@dataclass
class BlockStatement(Node):
    body: List[Node] = field(default_factory=list)


@dataclass
class ReturnStatement(Node):
    argument: Optional[Node] = None


@dataclass
class ExpressionStatement(Node):
    expression: Node


@dataclass
class VariableDeclarator(Node):
    id: Node
    init: Optional[Node] = None


@dataclass
class VariableDeclaration(Node):
    kind: str
    declarations: List[VariableDeclarator] = field(default_factory=list)


# Modules


@dataclass
class ImportDefaultSpecifier(Node):
    local: Identifier


@dataclass
class ImportNamespaceSpecifier(Node):
    local: Identifier


@dataclass
class ImportSpecifier(Node):
    local: Identifier
    imported: Identifier


@dataclass
class ImportDeclaration(Node):
    specifiers: List[Node]
    source: StringLiteral
    type_only: bool = False


@dataclass
class ExportSpecifier(Node):
    local: Identifier
    exported: Identifier


@dataclass
class ExportNamedDeclaration(Node):
    declaration: Optional[Node] = None
    specifiers: List[ExportSpecifier] = field(default_factory=list)
    source: Optional[StringLiteral] = None
    type_only: bool = False


@dataclass
class ExportDefaultDeclaration(Node):
    declaration: Node


@dataclass
class Program(Node):
    body: List[Node] = field(default_factory=list)


@dataclass
class RawNode(Node):
    """A construct the transform does not model, kept verbatim."""

    kind: str
    text: str
    children: List[Node] = field(default_factory=list)


_ESCAPES = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}


def unescape_js(raw: str) -> str:
    """Return the cooked value of a JavaScript string or template body."""
    if "\\" not in raw:
        return raw
    out: List[str] = []
    index = 0
    while index < len(raw):
        char = raw[index]
        if char != "\\" or index + 1 >= len(raw):
            out.append(char)
            index += 1
            continue
        nxt = raw[index + 1]
        if nxt in _ESCAPES:
            out.append(_ESCAPES[nxt])
            index += 2
        elif nxt == "x" and index + 3 < len(raw):
            out.append(chr(int(raw[index + 2 : index + 4], 16)))
            index += 4
        elif nxt == "u" and index + 2 < len(raw) and raw[index + 2] == "{":
            end = raw.index("}", index)
            out.append(chr(int(raw[index + 3 : end], 16)))
            index = end + 1
        elif nxt == "u":
            out.append(chr(int(raw[index + 2 : index + 6], 16)))
            index += 6
        elif nxt == "\n":
            # line continuation
            index += 2
        else:
            out.append(nxt)
            index += 2
    return "".join(out)


def iter_child_nodes(node: Node) -> Iterator[Node]:
    """Yield the direct child nodes of ``node`` in field order."""
    for item in fields(node):
        if item.name in ("loc", "leading_comments"):
            continue
        value = getattr(node, item.name)
        if isinstance(value, Node):
            yield value
        elif isinstance(value, list):
            for child in value:
                if isinstance(child, Node):
                    yield child


def clone(node: Node) -> Node:
    """Return a structural deep copy detached from the original tree."""
    return copy.deepcopy(node)


def is_string_like(node: Optional[Node]) -> bool:
    """Return True for string literals and untagged template literals."""
    return isinstance(node, (StringLiteral, TemplateLiteral))


def key_name(node: Node) -> Optional[str]:
    """Return the static name of a property key, if it has one."""
    if isinstance(node, Identifier):
        return node.name
    if isinstance(node, StringLiteral):
        return node.value
    return None


__all__ = [
    "AssignmentExpression",
    "BlockStatement",
    "BooleanLiteral",
    "CallExpression",
    "ClassDeclaration",
    "ClassMethod",
    "ClassProperty",
    "Comment",
    "Decorator",
    "ExportDefaultDeclaration",
    "ExportNamedDeclaration",
    "ExportSpecifier",
    "ExpressionStatement",
    "Identifier",
    "ImportDeclaration",
    "ImportDefaultSpecifier",
    "ImportNamespaceSpecifier",
    "ImportSpecifier",
    "MemberExpression",
    "Node",
    "NullLiteral",
    "NumericLiteral",
    "ObjectExpression",
    "ObjectProperty",
    "Program",
    "RawNode",
    "ReturnStatement",
    "SourceLocation",
    "StringLiteral",
    "TemplateElement",
    "TemplateLiteral",
    "VariableDeclaration",
    "VariableDeclarator",
    "clone",
    "is_string_like",
    "iter_child_nodes",
    "key_name",
    "unescape_js",
]
