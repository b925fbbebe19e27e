"""Visitor helpers for walking and rewriting the module AST."""

from __future__ import annotations

from typing import Optional

from .nodes import Node, iter_child_nodes


class NodeVisitor:
    """Walks a tree calling ``visit_<NodeType>(node, parent)`` for every node.

    Every node is visited exactly once, parents before children. Handlers
    only inspect; the walk always continues into the node's children.
    """

    def visit(self, node: Node, parent: Optional[Node] = None) -> None:
        handler = getattr(self, f"visit_{type(node).__name__}", None)
        if handler is not None:
            handler(node, parent)
        for child in iter_child_nodes(node):
            self.visit(child, node)


class NodeTransformer:
    """Rebuilds a tree bottom-up, replacing nodes returned by ``transform_<NodeType>``."""

    def transform(self, node: Node) -> Node:
        for name, value in list(vars(node).items()):
            if isinstance(value, Node):
                setattr(node, name, self.transform(value))
            elif isinstance(value, list) and any(isinstance(item, Node) for item in value):
                setattr(
                    node,
                    name,
                    [self.transform(item) if isinstance(item, Node) else item for item in value],
                )
        handler = getattr(self, f"transform_{type(node).__name__}", None)
        if handler is None:
            return node
        return handler(node)


__all__ = ["NodeTransformer", "NodeVisitor"]
