"""Tests for wrapgen.ast.traverse."""

from __future__ import annotations

from typing import List, Optional, Tuple

from wrapgen.ast.nodes import (
    CallExpression,
    Identifier,
    Node,
    ObjectExpression,
    ObjectProperty,
    Program,
    RawNode,
    StringLiteral,
)
from wrapgen.ast.traverse import NodeTransformer, NodeVisitor


class _IdentifierCollector(NodeVisitor):
    def __init__(self) -> None:
        self.seen: List[Tuple[str, Optional[str]]] = []

    def visit_Identifier(self, node: Identifier, parent: Optional[Node]) -> None:
        self.seen.append((node.name, type(parent).__name__ if parent else None))


def test_visitor_reaches_every_node_once_through_raw_nodes() -> None:
    tree = Program(
        body=[
            RawNode(
                kind="if_statement",
                text="if (a) b(c);",
                children=[Identifier("a"), CallExpression(Identifier("b"), [Identifier("c")])],
            )
        ]
    )

    collector = _IdentifierCollector()
    collector.visit(tree)

    assert collector.seen == [("a", "RawNode"), ("b", "CallExpression"), ("c", "CallExpression")]


class _Upper(NodeTransformer):
    def transform_StringLiteral(self, node: StringLiteral) -> Node:
        return StringLiteral(node.value.upper())


def test_transformer_replaces_nested_nodes() -> None:
    tree = ObjectExpression([ObjectProperty(Identifier("a"), StringLiteral("x"))])

    result = _Upper().transform(tree)

    assert result is tree
    assert tree.properties[0].value == StringLiteral("X")
