"""Lowering of template literals to ``String.prototype.concat`` chains.

Only trees built by the synthesizer are passed through here. The output
matches what the target runtime's template literal transform produces:
``${ddsPrefix}-foo`` becomes ``"".concat(ddsPrefix, "-foo")``.
"""

from __future__ import annotations

from typing import List

from ..ast.nodes import (
    BooleanLiteral,
    CallExpression,
    Identifier,
    MemberExpression,
    Node,
    NullLiteral,
    NumericLiteral,
    StringLiteral,
    TemplateLiteral,
)
from ..ast.traverse import NodeTransformer

_LITERALS = (StringLiteral, NumericLiteral, BooleanLiteral, NullLiteral, TemplateLiteral)


def _concat(parts: List[Node]) -> Node:
    # every literal, plus the first non-literal, joins the running call
    left = parts[0]
    available = True
    for right in parts[1:]:
        can_insert = isinstance(right, _LITERALS)
        if not can_insert and available:
            can_insert = True
            available = False
        if can_insert and isinstance(left, CallExpression):
            left.arguments.append(right)
        else:
            left = CallExpression(MemberExpression(left, Identifier("concat")), [right])
    return left


class TemplateLiteralLowering(NodeTransformer):
    """Replaces every ``TemplateLiteral`` with string literals and concat calls."""

    def transform_TemplateLiteral(self, node: TemplateLiteral) -> Node:
        parts: List[Node] = []
        for index, quasi in enumerate(node.quasis):
            cooked = quasi.cooked
            if cooked:
                parts.append(StringLiteral(cooked))
            if index < len(node.expressions):
                expression = node.expressions[index]
                if not (isinstance(expression, StringLiteral) and expression.value == ""):
                    parts.append(expression)
        if not parts or not isinstance(parts[0], StringLiteral):
            parts.insert(0, StringLiteral(""))
        root = _concat(parts) if len(parts) > 1 else parts[0]
        root.loc = node.loc
        root.leading_comments = list(node.leading_comments)
        return root


def lower_template_literals(node: Node) -> Node:
    """Lower all template literals below ``node`` in place and return the new root."""
    return TemplateLiteralLowering().transform(node)


__all__ = ["TemplateLiteralLowering", "lower_template_literals"]
