"""JavaScript code generation for synthesized module ASTs."""

from __future__ import annotations

import re
from typing import List

from .nodes import (
    AssignmentExpression,
    BlockStatement,
    BooleanLiteral,
    CallExpression,
    Comment,
    ExportDefaultDeclaration,
    ExportNamedDeclaration,
    ExpressionStatement,
    Identifier,
    ImportDeclaration,
    ImportDefaultSpecifier,
    ImportNamespaceSpecifier,
    ImportSpecifier,
    MemberExpression,
    Node,
    NullLiteral,
    NumericLiteral,
    ObjectExpression,
    ObjectProperty,
    Program,
    RawNode,
    ReturnStatement,
    StringLiteral,
    TemplateLiteral,
    VariableDeclaration,
)

_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def quote_string(value: str) -> str:
    """Return ``value`` as a double-quoted JavaScript string literal."""
    escaped = (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
        .replace("\b", "\\b")
        .replace("\f", "\\f")
        .replace("\v", "\\v")
        .replace("\x00", "\\x00")
        .replace("\u2028", "\\u2028")
        .replace("\u2029", "\\u2029")
    )
    return f'"{escaped}"'


class CodePrinter:
    """Serialises module ASTs to JavaScript source text."""

    def __init__(self, indent: str = "  ") -> None:
        self.indent = indent

    def print_program(self, program: Program) -> str:
        lines = [self.statement(statement, 0) for statement in program.body]
        if not lines:
            return ""
        return "\n".join(lines) + "\n"

    # statements

    def statement(self, node: Node, level: int) -> str:
        prefix = self.indent * level
        code = prefix + self._statement_body(node, level)
        comments = self.comments(node.leading_comments, level)
        return "\n".join(comments + [code])

    def comments(self, comments: List[Comment], level: int) -> List[str]:
        prefix = self.indent * level
        return [
            f"{prefix}/*{comment.value}*/" if comment.block else f"{prefix}//{comment.value}"
            for comment in comments
        ]

    def _statement_body(self, node: Node, level: int) -> str:
        if isinstance(node, ImportDeclaration):
            return self._import(node)
        if isinstance(node, ExportNamedDeclaration):
            return self._export_named(node, level)
        if isinstance(node, ExportDefaultDeclaration):
            return f"export default {self.expression(node.declaration, level)};"
        if isinstance(node, VariableDeclaration):
            declarations = []
            for declarator in node.declarations:
                target = self.expression(declarator.id, level)
                if declarator.init is None:
                    declarations.append(target)
                else:
                    declarations.append(f"{target} = {self.expression(declarator.init, level)}")
            return f"{node.kind} {', '.join(declarations)};"
        if isinstance(node, ExpressionStatement):
            return f"{self.expression(node.expression, level)};"
        if isinstance(node, ReturnStatement):
            if node.argument is None:
                return "return;"
            return f"return {self.expression(node.argument, level)};"
        if isinstance(node, BlockStatement):
            if not node.body:
                return "{}"
            inner = [self.statement(statement, level + 1) for statement in node.body]
            closing = self.indent * level + "}"
            return "{\n" + "\n".join(inner) + "\n" + closing
        if isinstance(node, RawNode):
            return node.text
        raise TypeError(f"Cannot print statement of type {type(node).__name__}")

    def _import(self, node: ImportDeclaration) -> str:
        source = self.expression(node.source, 0)
        parts: List[str] = []
        named: List[str] = []
        for specifier in node.specifiers:
            if isinstance(specifier, ImportDefaultSpecifier):
                parts.insert(0, specifier.local.name)
            elif isinstance(specifier, ImportNamespaceSpecifier):
                parts.append(f"* as {specifier.local.name}")
            elif isinstance(specifier, ImportSpecifier):
                if specifier.imported.name == specifier.local.name:
                    named.append(specifier.local.name)
                else:
                    named.append(f"{specifier.imported.name} as {specifier.local.name}")
        if named:
            parts.append("{ " + ", ".join(named) + " }")
        if not parts:
            return f"import {source};"
        return f"import {', '.join(parts)} from {source};"

    def _export_named(self, node: ExportNamedDeclaration, level: int) -> str:
        if node.declaration is not None:
            return "export " + self._statement_body(node.declaration, level)
        specifiers = []
        for specifier in node.specifiers:
            if specifier.local.name == specifier.exported.name:
                specifiers.append(specifier.local.name)
            else:
                specifiers.append(f"{specifier.local.name} as {specifier.exported.name}")
        clause = "{ " + ", ".join(specifiers) + " }" if specifiers else "{}"
        if node.source is not None:
            return f"export {clause} from {self.expression(node.source, level)};"
        return f"export {clause};"

    # expressions

    def expression(self, node: Node, level: int = 0) -> str:
        if isinstance(node, Identifier):
            return node.name
        if isinstance(node, StringLiteral):
            return node.raw if node.raw is not None else quote_string(node.value)
        if isinstance(node, NumericLiteral):
            return node.raw
        if isinstance(node, BooleanLiteral):
            return "true" if node.value else "false"
        if isinstance(node, NullLiteral):
            return "null"
        if isinstance(node, TemplateLiteral):
            return self._template(node, level)
        if isinstance(node, ObjectExpression):
            return self._object(node, level)
        if isinstance(node, MemberExpression):
            target = self.expression(node.object, level)
            if node.computed:
                return f"{target}[{self.expression(node.property, level)}]"
            return f"{target}.{self.expression(node.property, level)}"
        if isinstance(node, CallExpression):
            arguments = ", ".join(self.expression(argument, level) for argument in node.arguments)
            return f"{self.expression(node.callee, level)}({arguments})"
        if isinstance(node, AssignmentExpression):
            left = self.expression(node.left, level)
            return f"{left} {node.operator} {self.expression(node.right, level)}"
        if isinstance(node, RawNode):
            return node.text
        raise TypeError(f"Cannot print expression of type {type(node).__name__}")

    def _template(self, node: TemplateLiteral, level: int) -> str:
        parts = ["`"]
        for index, quasi in enumerate(node.quasis):
            parts.append(quasi.raw)
            if index < len(node.expressions):
                parts.append("${" + self.expression(node.expressions[index], level) + "}")
        parts.append("`")
        return "".join(parts)

    def _object(self, node: ObjectExpression, level: int) -> str:
        if not node.properties:
            return "{}"
        inner_prefix = self.indent * (level + 1)
        entries: List[str] = []
        for prop in node.properties:
            comments = self.comments(prop.leading_comments, level + 1)
            entries.append("\n".join(comments + [inner_prefix + self._property(prop, level + 1)]))
        return "{\n" + ",\n".join(entries) + "\n" + self.indent * level + "}"

    def _property(self, node: Node, level: int) -> str:
        if not isinstance(node, ObjectProperty):
            return self.expression(node, level)
        if node.computed:
            key = f"[{self.expression(node.key, level)}]"
        elif isinstance(node.key, Identifier) or (
            isinstance(node.key, StringLiteral) and _IDENTIFIER.match(node.key.value)
        ):
            key = node.key.name if isinstance(node.key, Identifier) else node.key.value
        else:
            key = self.expression(node.key, level)
        return f"{key}: {self.expression(node.value, level)}"


def print_program(program: Program) -> str:
    """Render ``program`` with the default printer settings."""
    return CodePrinter().print_program(program)


__all__ = ["CodePrinter", "print_program", "quote_string"]
