"""Tree-sitter powered parser producing the module AST."""

from __future__ import annotations

from typing import Callable, Dict, List, Optional

import tree_sitter_typescript
from tree_sitter import Language, Parser
from tree_sitter import Node as TSNode

from ..errors import TransformError
from .nodes import (
    AssignmentExpression,
    BlockStatement,
    BooleanLiteral,
    CallExpression,
    ClassDeclaration,
    ClassMethod,
    ClassProperty,
    Comment,
    Decorator,
    ExportDefaultDeclaration,
    ExportNamedDeclaration,
    ExportSpecifier,
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
    SourceLocation,
    StringLiteral,
    TemplateElement,
    TemplateLiteral,
    VariableDeclaration,
    VariableDeclarator,
    unescape_js,
)

_TS_LANGUAGE = Language(tree_sitter_typescript.language_typescript())

_NAME_TYPES = {
    "identifier",
    "property_identifier",
    "private_property_identifier",
    "shorthand_property_identifier",
    "type_identifier",
    "undefined",
}


class ModuleParser:
    """Parses TypeScript or JavaScript module source into ``Program`` nodes."""

    def __init__(self) -> None:
        self._parser = Parser(_TS_LANGUAGE)

    def parse(self, source: str) -> Program:
        source_bytes = source.encode("utf-8")
        tree = self._parser.parse(source_bytes)
        return _Converter(source_bytes).program(tree.root_node)


def parse_module(source: str) -> Program:
    """Parse ``source`` with a fresh parser."""
    return ModuleParser().parse(source)


class _Converter:
    def __init__(self, source: bytes) -> None:
        self._source = source
        self._handlers: Dict[str, Callable[[TSNode], Node]] = {
            "import_statement": self._import_statement,
            "export_statement": self._export_statement,
            "class_declaration": self._class,
            "abstract_class_declaration": self._class,
            "class": self._class,
            "method_definition": self._method,
            "public_field_definition": self._field,
            "field_definition": self._field,
            "decorator": self._decorator,
            "statement_block": self._block,
            "return_statement": self._return,
            "expression_statement": self._expression_statement,
            "lexical_declaration": self._variable_declaration,
            "variable_declaration": self._variable_declaration,
            "variable_declarator": self._variable_declarator,
            "call_expression": self._call,
            "member_expression": self._member,
            "subscript_expression": self._subscript,
            "assignment_expression": self._assignment,
            "object": self._object,
            "string": self._string,
            "template_string": self._template,
            "number": self._number,
            "true": self._boolean,
            "false": self._boolean,
            "null": self._null,
        }

    # helpers

    def text(self, node: TSNode) -> str:
        return self._source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")

    def loc(self, node: TSNode) -> SourceLocation:
        row, column = node.start_point
        line_start = node.start_byte - column
        prefix = self._source[line_start : node.start_byte].decode("utf-8", errors="replace")
        return SourceLocation(line=row + 1, column=len(prefix))

    def comment(self, node: TSNode) -> Comment:
        text = self.text(node)
        if text.startswith("/*"):
            return Comment(text[2:-2], block=True)
        return Comment(text[2:] if text.startswith("//") else text)

    @staticmethod
    def _operands(node: TSNode) -> List[TSNode]:
        return [child for child in node.named_children if child.type != "comment"]

    def _first_operand(self, node: TSNode) -> Optional[TSNode]:
        operands = self._operands(node)
        return operands[0] if operands else None

    @staticmethod
    def _has_token(node: TSNode, token: str) -> bool:
        return any(not child.is_named and child.type == token for child in node.children)

    @staticmethod
    def _is_optional_chain(node: TSNode) -> bool:
        return any(child.type in ("?.", "optional_chain") for child in node.children)

    # entry points

    def program(self, root: TSNode) -> Program:
        self._check_syntax(root)
        return Program(body=self.statements(root.children), loc=self.loc(root))

    def _check_syntax(self, root: TSNode) -> None:
        if not root.has_error:
            return
        stack = [root]
        while stack:
            node = stack.pop()
            if node.is_missing:
                raise TransformError(f"Missing `{node.type}`.", self.loc(node))
            if node.type == "ERROR":
                snippet = self.text(node).strip().splitlines()
                near = snippet[0][:40] if snippet else ""
                raise TransformError(f"Unexpected syntax near `{near}`.", self.loc(node))
            stack.extend(
                child for child in reversed(node.children) if child.has_error or child.is_missing
            )

    def statements(self, children: List[TSNode]) -> List[Node]:
        body: List[Node] = []
        pending: List[Comment] = []
        for child in children:
            if not child.is_named:
                continue
            if child.type == "comment":
                pending.append(self.comment(child))
                continue
            statement = self.convert(child)
            statement.leading_comments = pending + statement.leading_comments
            if isinstance(statement, (ExportNamedDeclaration, ExportDefaultDeclaration)):
                declaration = statement.declaration
                if isinstance(declaration, ClassDeclaration) and not declaration.leading_comments:
                    declaration.leading_comments = list(statement.leading_comments)
            pending = []
            body.append(statement)
        return body

    def convert(self, node: TSNode) -> Node:
        if node.type in _NAME_TYPES:
            return Identifier(self.text(node), loc=self.loc(node))
        handler = self._handlers.get(node.type)
        if handler is None:
            return self.raw(node)
        return handler(node)

    def raw(self, node: TSNode) -> RawNode:
        return RawNode(
            kind=node.type,
            text=self.text(node),
            children=[self.convert(child) for child in self._operands(node)],
            loc=self.loc(node),
        )

    # modules

    def _import_statement(self, node: TSNode) -> Node:
        source = node.child_by_field_name("source")
        if source is None:
            return self.raw(node)
        specifiers: List[Node] = []
        for clause in node.named_children:
            if clause.type != "import_clause":
                continue
            for child in clause.named_children:
                if child.type == "identifier":
                    specifiers.append(
                        ImportDefaultSpecifier(Identifier(self.text(child)), loc=self.loc(child))
                    )
                elif child.type == "namespace_import":
                    local = self._first_operand(child)
                    if local is not None:
                        specifiers.append(
                            ImportNamespaceSpecifier(Identifier(self.text(local)), loc=self.loc(child))
                        )
                elif child.type == "named_imports":
                    specifiers.extend(self._import_specifiers(child))
        return ImportDeclaration(
            specifiers=specifiers,
            source=self._string(source),
            type_only=self._has_token(node, "type") or self._has_token(node, "typeof"),
            loc=self.loc(node),
        )

    def _import_specifiers(self, named_imports: TSNode) -> List[Node]:
        specifiers: List[Node] = []
        for child in named_imports.named_children:
            if child.type != "import_specifier" or self._has_token(child, "type"):
                continue
            name = child.child_by_field_name("name")
            alias = child.child_by_field_name("alias")
            if name is None:
                continue
            imported = self._module_export_name(name)
            local = Identifier(self.text(alias)) if alias is not None else Identifier(imported.name)
            specifiers.append(ImportSpecifier(local=local, imported=imported, loc=self.loc(child)))
        return specifiers

    def _module_export_name(self, node: TSNode) -> Identifier:
        if node.type == "string":
            return Identifier(self._string(node).value, loc=self.loc(node))
        return Identifier(self.text(node), loc=self.loc(node))

    def _export_statement(self, node: TSNode) -> Node:
        decorators = [self._decorator(child) for child in node.children if child.type == "decorator"]
        declaration = node.child_by_field_name("declaration")
        value = node.child_by_field_name("value")
        is_default = self._has_token(node, "default")
        if declaration is not None:
            converted = self.convert(declaration)
            if decorators and isinstance(converted, ClassDeclaration):
                converted.decorators[:0] = decorators
            if is_default:
                return ExportDefaultDeclaration(converted, loc=self.loc(node))
            return ExportNamedDeclaration(declaration=converted, loc=self.loc(node))
        if is_default and value is not None:
            return ExportDefaultDeclaration(self.convert(value), loc=self.loc(node))
        clause = next((child for child in node.named_children if child.type == "export_clause"), None)
        if clause is None:
            return self.raw(node)
        specifiers: List[ExportSpecifier] = []
        for child in clause.named_children:
            if child.type != "export_specifier" or self._has_token(child, "type"):
                continue
            name = child.child_by_field_name("name")
            alias = child.child_by_field_name("alias")
            if name is None:
                continue
            local = self._module_export_name(name)
            exported = self._module_export_name(alias) if alias is not None else Identifier(local.name)
            specifiers.append(ExportSpecifier(local=local, exported=exported, loc=self.loc(child)))
        source = node.child_by_field_name("source")
        return ExportNamedDeclaration(
            specifiers=specifiers,
            source=self._string(source) if source is not None else None,
            type_only=self._has_token(node, "type"),
            loc=self.loc(node),
        )

    # classes

    def _class(self, node: TSNode) -> Node:
        name = node.child_by_field_name("name")
        decorators = [self._decorator(child) for child in node.children if child.type == "decorator"]
        super_class: Optional[Node] = None
        for child in node.named_children:
            if child.type == "class_heritage":
                super_class = self._superclass(child)
        body = node.child_by_field_name("body")
        return ClassDeclaration(
            id=Identifier(self.text(name), loc=self.loc(name)) if name is not None else None,
            super_class=super_class,
            decorators=decorators,
            body=self._class_body(body) if body is not None else [],
            loc=self.loc(node),
        )

    def _superclass(self, heritage: TSNode) -> Optional[Node]:
        for child in self._operands(heritage):
            if child.type == "extends_clause":
                value = child.child_by_field_name("value") or self._first_operand(child)
                return self.convert(value) if value is not None else None
            if child.type != "implements_clause":
                return self.convert(child)
        return None

    def _class_body(self, body: TSNode) -> List[Node]:
        members: List[Node] = []
        decorators: List[Decorator] = []
        comments: List[Comment] = []
        for child in body.named_children:
            if child.type == "comment":
                comments.append(self.comment(child))
                continue
            if child.type == "decorator":
                decorators.append(self._decorator(child))
                continue
            member = self.convert(child)
            if decorators:
                if isinstance(member, (ClassMethod, ClassProperty)):
                    member.decorators[:0] = decorators
                elif isinstance(member, RawNode):
                    member.children[:0] = decorators
                else:
                    members.extend(decorators)
            member.leading_comments = comments + member.leading_comments
            members.append(member)
            decorators = []
            comments = []
        # dangling decorators stay attached to the class body
        members.extend(decorators)
        return members

    def _member_name(self, node: TSNode) -> Optional[TSNode]:
        return node.child_by_field_name("name") or node.child_by_field_name("property")

    def _property_key(self, node: TSNode) -> Node:
        if node.type == "computed_property_name":
            inner = self._first_operand(node)
            return self.convert(inner) if inner is not None else self.raw(node)
        return self.convert(node)

    def _method(self, node: TSNode) -> Node:
        name = self._member_name(node)
        if name is None:
            return self.raw(node)
        static = False
        kind = "method"
        for child in node.children:
            if child.start_byte >= name.start_byte:
                break
            if child.is_named:
                continue
            if child.type == "static":
                static = True
            elif child.type == "static get":
                static = True
                kind = "get"
            elif child.type in ("get", "set"):
                kind = child.type
        if name.type == "property_identifier" and self.text(name) == "constructor":
            kind = "constructor"
        body = node.child_by_field_name("body")
        return ClassMethod(
            key=self._property_key(name),
            kind=kind,
            static=static,
            computed=name.type == "computed_property_name",
            decorators=[self._decorator(child) for child in node.children if child.type == "decorator"],
            body=self._block(body) if body is not None else None,
            loc=self.loc(node),
        )

    def _field(self, node: TSNode) -> Node:
        name = self._member_name(node)
        if name is None:
            return self.raw(node)
        value = node.child_by_field_name("value")
        return ClassProperty(
            key=self._property_key(name),
            value=self.convert(value) if value is not None else None,
            static=self._has_token(node, "static"),
            computed=name.type == "computed_property_name",
            decorators=[self._decorator(child) for child in node.children if child.type == "decorator"],
            loc=self.loc(node),
        )

    def _decorator(self, node: TSNode) -> Decorator:
        expression = self._first_operand(node)
        converted = self.convert(expression) if expression is not None else self.raw(node)
        return Decorator(converted, loc=self.loc(node))

    # statements

    def _block(self, node: TSNode) -> BlockStatement:
        return BlockStatement(body=self.statements(node.children), loc=self.loc(node))

    def _return(self, node: TSNode) -> Node:
        argument = self._first_operand(node)
        return ReturnStatement(
            argument=self.convert(argument) if argument is not None else None,
            loc=self.loc(node),
        )

    def _expression_statement(self, node: TSNode) -> Node:
        expression = self._first_operand(node)
        if expression is None:
            return self.raw(node)
        return ExpressionStatement(self.convert(expression), loc=self.loc(node))

    def _variable_declaration(self, node: TSNode) -> Node:
        kind = "var" if node.type == "variable_declaration" else self.text(node.children[0])
        declarations = [
            self._variable_declarator(child)
            for child in node.named_children
            if child.type == "variable_declarator"
        ]
        return VariableDeclaration(kind=kind, declarations=declarations, loc=self.loc(node))

    def _variable_declarator(self, node: TSNode) -> VariableDeclarator:
        name = node.child_by_field_name("name")
        value = node.child_by_field_name("value")
        return VariableDeclarator(
            id=self.convert(name) if name is not None else self.raw(node),
            init=self.convert(value) if value is not None else None,
            loc=self.loc(node),
        )

    # expressions

    def _call(self, node: TSNode) -> Node:
        callee = node.child_by_field_name("function")
        arguments = node.child_by_field_name("arguments")
        if callee is None or arguments is None or arguments.type != "arguments":
            # tagged templates and anything else unusual
            return self.raw(node)
        return CallExpression(
            callee=self.convert(callee),
            arguments=[self.convert(child) for child in self._operands(arguments)],
            loc=self.loc(node),
        )

    def _member(self, node: TSNode) -> Node:
        obj = node.child_by_field_name("object")
        prop = node.child_by_field_name("property")
        if obj is None or prop is None or self._is_optional_chain(node):
            return self.raw(node)
        return MemberExpression(self.convert(obj), self.convert(prop), loc=self.loc(node))

    def _subscript(self, node: TSNode) -> Node:
        obj = node.child_by_field_name("object")
        index = node.child_by_field_name("index")
        if obj is None or index is None or self._is_optional_chain(node):
            return self.raw(node)
        return MemberExpression(self.convert(obj), self.convert(index), computed=True, loc=self.loc(node))

    def _assignment(self, node: TSNode) -> Node:
        left = node.child_by_field_name("left")
        right = node.child_by_field_name("right")
        if left is None or right is None:
            return self.raw(node)
        return AssignmentExpression(self.convert(left), self.convert(right), loc=self.loc(node))

    def _object(self, node: TSNode) -> Node:
        properties: List[Node] = []
        comments: List[Comment] = []
        for child in node.named_children:
            if child.type == "comment":
                comments.append(self.comment(child))
                continue
            if child.type == "pair":
                key = child.child_by_field_name("key")
                value = child.child_by_field_name("value")
                if key is None or value is None:
                    converted: Node = self.raw(child)
                else:
                    converted = ObjectProperty(
                        key=self._property_key(key),
                        value=self.convert(value),
                        computed=key.type == "computed_property_name",
                        loc=self.loc(child),
                    )
            elif child.type == "shorthand_property_identifier":
                name = self.text(child)
                converted = ObjectProperty(Identifier(name), Identifier(name), loc=self.loc(child))
            else:
                converted = self.raw(child)
            converted.leading_comments = comments
            comments = []
            properties.append(converted)
        return ObjectExpression(properties=properties, loc=self.loc(node))

    def _string(self, node: TSNode) -> StringLiteral:
        raw = self.text(node)
        return StringLiteral(unescape_js(raw[1:-1]), raw=raw, loc=self.loc(node))

    def _template(self, node: TSNode) -> TemplateLiteral:
        quasis: List[TemplateElement] = []
        expressions: List[Node] = []
        position = node.start_byte + 1
        for child in node.named_children:
            if child.type != "template_substitution":
                continue
            quasis.append(TemplateElement(self._source[position : child.start_byte].decode("utf-8")))
            inner = self._first_operand(child)
            expressions.append(self.convert(inner) if inner is not None else self.raw(child))
            position = child.end_byte
        quasis.append(
            TemplateElement(self._source[position : node.end_byte - 1].decode("utf-8"), tail=True)
        )
        return TemplateLiteral(quasis=quasis, expressions=expressions, loc=self.loc(node))

    def _number(self, node: TSNode) -> Node:
        return NumericLiteral(self.text(node), loc=self.loc(node))

    def _boolean(self, node: TSNode) -> Node:
        return BooleanLiteral(node.type == "true", loc=self.loc(node))

    def _null(self, node: TSNode) -> Node:
        return NullLiteral(loc=self.loc(node))


__all__ = ["ModuleParser", "parse_module"]
