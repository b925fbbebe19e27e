"""Metadata harvesting over a component module AST.

A single walk collects everything the synthesizer needs into a
``TransformContext``: the class name, the ``@customElement()`` tag name,
``@property()`` declarations, ``static eventFoo`` members, the parent
component module, and re-exported bindings.
"""

from __future__ import annotations

from typing import Optional

from ..ast.nodes import (
    BooleanLiteral,
    CallExpression,
    ClassDeclaration,
    ClassMethod,
    ClassProperty,
    Decorator,
    ExportNamedDeclaration,
    Identifier,
    Node,
    ObjectExpression,
    ObjectProperty,
    Program,
    ReturnStatement,
    StringLiteral,
    clone,
    is_string_like,
    key_name,
)
from ..ast.scope import ImportTable
from ..ast.traverse import NodeVisitor
from ..config import TransformConfig
from ..errors import TransformError
from ..logging import get_logger
from .context import EventMetadata, PropertyMetadata, TransformContext
from .paths import resolve_in_tree, rewrite_source
from .tables import is_event_member

PROPERTY_DECORATOR = "property"


def superclass_target(node: Optional[Node]) -> Optional[Identifier]:
    """Find the class a superclass expression refers to.

    ``Base`` resolves to itself; a mixin application such as
    ``Mixin(Other(Base))`` resolves through the first argument of each call.
    Anything else does not resolve.
    """
    if isinstance(node, Identifier):
        return node
    if isinstance(node, CallExpression) and node.arguments:
        return superclass_target(node.arguments[0])
    return None


def _is_property_target(node: Optional[Node]) -> bool:
    if isinstance(node, ClassProperty):
        return True
    return isinstance(node, ClassMethod) and node.kind in ("get", "set")


class MetadataHarvester(NodeVisitor):
    """Visitor filling a ``TransformContext`` from one module."""

    def __init__(
        self, context: TransformContext, imports: ImportTable, config: TransformConfig
    ) -> None:
        self.context = context
        self.imports = imports
        self.config = config
        self.logger = get_logger("harvester")

    def visit_ClassDeclaration(self, node: ClassDeclaration, parent: Optional[Node]) -> None:
        target = superclass_target(node.super_class)
        if target is not None:
            binding = self.imports.lookup(target.name)
            if binding is not None and binding.is_default:
                source = rewrite_source(binding.source, self.config.parent_source_rewrites)
                resolved = resolve_in_tree(source, self.context.filename, self.config.components_root)
                if resolved is None:
                    self.logger.debug("Parent class source %s is outside the component tree", source)
                self.context.set_parent_descriptor_source(resolved)
        if node.leading_comments:
            self.context.class_comments = list(node.leading_comments)
        if node.id is not None:
            self.context.class_name = node.id.name

    def visit_ClassMethod(self, node: ClassMethod, parent: Optional[Node]) -> None:
        name = key_name(node.key)
        if node.computed or not node.static or node.kind != "get" or not name:
            return
        if not is_event_member(name):
            return
        body = node.body.body if node.body is not None else []
        statement = body[0] if body else None
        if (
            len(body) != 1
            or not isinstance(statement, ReturnStatement)
            or not is_string_like(statement.argument)
        ):
            raise TransformError(
                "`static get eventFoo` must have and be only with a return statement"
                " with a string literal or a template literal.",
                (statement or node).loc,
            )
        self.context.custom_events[name] = EventMetadata(
            event_name=clone(statement.argument),
            comments=list(node.leading_comments),
            loc=node.loc,
        )

    def visit_ClassProperty(self, node: ClassProperty, parent: Optional[Node]) -> None:
        name = key_name(node.key)
        if node.computed or not node.static or not name or not is_event_member(name):
            return
        if not is_string_like(node.value):
            raise TransformError(
                "`static eventFoo` must refer to a string literal or a template literal.",
                (node.value or node).loc,
            )
        self.context.custom_events[name] = EventMetadata(
            event_name=clone(node.value),
            comments=list(node.leading_comments),
            loc=node.loc,
        )

    def visit_Decorator(self, node: Decorator, parent: Optional[Node]) -> None:
        expression = node.expression
        if (
            isinstance(expression, CallExpression)
            and isinstance(expression.callee, Identifier)
            and expression.callee.name == self.config.custom_element_decorator
        ):
            name = expression.arguments[0] if expression.arguments else None
            if not is_string_like(name):
                raise TransformError(
                    "`@customElement()` must be called with the custom element name.",
                    (name or expression).loc,
                )
            self.context.custom_element_name = clone(name)

        metadata = self._property_metadata(node, parent)
        if metadata is None:
            return
        if not _is_property_target(parent):
            raise TransformError(
                "`@property()` must target class properties.", (parent or node).loc
            )
        name = key_name(parent.key)
        if name is None:
            self.logger.debug("Skipping @property() on a computed member at %s", node.loc)
            return
        self.context.declared_props[name] = metadata

    def visit_ExportNamedDeclaration(
        self, node: ExportNamedDeclaration, parent: Optional[Node]
    ) -> None:
        if not node.specifiers or node.type_only:
            return
        if node.source is not None:
            for specifier in node.specifiers:
                self.context.add_named_export(
                    node.source.value, specifier.exported.name, specifier.local.name
                )
            return
        for specifier in node.specifiers:
            binding = self.imports.lookup(specifier.local.name)
            if binding is None or binding.is_namespace:
                continue
            self.context.add_named_export(binding.source, specifier.exported.name, binding.imported)

    def _property_metadata(
        self, node: Decorator, parent: Optional[Node]
    ) -> Optional[PropertyMetadata]:
        expression = node.expression
        if not isinstance(expression, CallExpression) or not isinstance(expression.callee, Identifier):
            return None
        if not self.imports.is_named_import(
            expression.callee.name, self.config.property_decorator_sources, PROPERTY_DECORATOR
        ):
            return None

        metadata = PropertyMetadata(loc=node.loc)
        options = expression.arguments[0] if expression.arguments else None
        if isinstance(options, ObjectExpression):
            for option in options.properties:
                if not isinstance(option, ObjectProperty) or option.computed:
                    continue
                key = key_name(option.key)
                value = option.value
                if key == "type":
                    if not isinstance(value, Identifier):
                        raise TransformError(
                            "`type` in `@property` must point to an identifier.", value.loc
                        )
                    metadata.type = value.name
                elif key == "attribute":
                    if not isinstance(value, (BooleanLiteral, StringLiteral)):
                        raise TransformError(
                            "`attribute` in `@property` must point to a boolean literal"
                            " or a string literal.",
                            value.loc,
                        )
                    metadata.attribute = value.value
        if parent is not None:
            metadata.comments = list(parent.leading_comments)
        return metadata


def harvest(program: Program, filename: str, config: TransformConfig) -> TransformContext:
    """Run the metadata harvester over ``program``."""
    context = TransformContext(filename=filename)
    harvester = MetadataHarvester(context, ImportTable.from_program(program), config)
    harvester.visit(program)
    harvester.logger.debug(
        "Harvested %s: %d properties, %d events, element=%s",
        filename,
        len(context.declared_props),
        len(context.custom_events),
        context.custom_element_name is not None,
    )
    return context


__all__ = ["MetadataHarvester", "harvest", "superclass_target"]
