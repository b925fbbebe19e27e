"""Builds the wrapper module from harvested component metadata.

The module opens with one re-export statement per re-exported source, in
the order the sources were first seen in the component module, followed by
the parent metadata imports and then the wrapper itself. Modules for
abstract classes import only the serializers and ``PropTypes`` their
exports refer to, never the wrapper factory.
"""

from __future__ import annotations

import re
from typing import Dict, List, Optional, Sequence, Tuple

from ..ast.nodes import (
    AssignmentExpression,
    BooleanLiteral,
    CallExpression,
    ExportDefaultDeclaration,
    ExportNamedDeclaration,
    ExportSpecifier,
    ExpressionStatement,
    Identifier,
    ImportDeclaration,
    ImportDefaultSpecifier,
    ImportSpecifier,
    MemberExpression,
    Node,
    ObjectExpression,
    ObjectProperty,
    Program,
    StringLiteral,
    VariableDeclaration,
    VariableDeclarator,
    clone,
)
from ..config import TransformConfig
from ..errors import TransformError
from .context import EventMetadata, PropertyMetadata, TransformContext
from .paths import custom_element_source, replace_extension_relative
from .tables import (
    DEFAULT_PROPERTY_TYPE,
    EVENT_PROP_TYPE,
    PROP_TYPES,
    SERIALIZERS,
    event_prop_name,
)
from .template_literals import lower_template_literals

WRAPPER_FACTORY = "createReactCustomElementType"
PROP_TYPES_NAMESPACE = "PropTypes"
COMPONENT = "Component"
CUSTOM_ELEMENT_EXPORT = "CustomElement"
PARENT_DESCRIPTOR = "parentDescriptor"
PARENT_PROP_TYPES = "parentPropTypes"

_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def _key(name: str) -> Node:
    return Identifier(name) if _IDENTIFIER.match(name) else StringLiteral(name)


def _member(obj: str, prop: str) -> MemberExpression:
    return MemberExpression(Identifier(obj), Identifier(prop))


def _import_default(local: str, source: str) -> ImportDeclaration:
    return ImportDeclaration([ImportDefaultSpecifier(Identifier(local))], StringLiteral(source))


def _import_named(imported: str, local: str, source: str) -> ImportDeclaration:
    return ImportDeclaration(
        [ImportSpecifier(local=Identifier(local), imported=Identifier(imported))],
        StringLiteral(source),
    )


def _declare(kind: str, name: str, init: Node) -> VariableDeclaration:
    return VariableDeclaration(kind, [VariableDeclarator(Identifier(name), init)])


def _export_var(name: str, init: Node) -> ExportNamedDeclaration:
    return ExportNamedDeclaration(declaration=_declare("var", name, init))


def _merge_with_parent(parent: str, entries: ObjectExpression) -> CallExpression:
    return CallExpression(
        _member("Object", "assign"), [ObjectExpression([]), Identifier(parent), entries]
    )


class ModuleSynthesizer:
    """Produces the replacement module body for one harvested component."""

    def __init__(self, config: TransformConfig) -> None:
        self.config = config

    def build_props_descriptor(
        self, declared_props: Dict[str, PropertyMetadata]
    ) -> Tuple[List[ObjectProperty], List[str]]:
        """Return descriptor entries and the serializers they reference, in first-use order."""
        entries: List[ObjectProperty] = []
        serializers: List[str] = []
        for name, metadata in declared_props.items():
            descriptor: List[Node] = []
            if metadata.attribute is False:
                descriptor.append(ObjectProperty(Identifier("attribute"), BooleanLiteral(False)))
            else:
                if metadata.type and metadata.type != DEFAULT_PROPERTY_TYPE:
                    serializer = SERIALIZERS.get(metadata.type)
                    if serializer is None:
                        raise TransformError(
                            f"No serializer found for type: {metadata.type}", metadata.loc
                        )
                    if serializer not in serializers:
                        serializers.append(serializer)
                    descriptor.append(ObjectProperty(Identifier("serialize"), Identifier(serializer)))
                if isinstance(metadata.attribute, str):
                    descriptor.append(
                        ObjectProperty(Identifier("attribute"), StringLiteral(metadata.attribute))
                    )
            entries.append(ObjectProperty(_key(name), ObjectExpression(descriptor)))
        return entries, serializers

    def build_events_descriptor(self, custom_events: Dict[str, EventMetadata]) -> List[ObjectProperty]:
        return [
            ObjectProperty(
                _key(event_prop_name(name)),
                ObjectExpression([ObjectProperty(Identifier("event"), clone(metadata.event_name))]),
            )
            for name, metadata in custom_events.items()
        ]

    def build_prop_types(self, declared_props: Dict[str, PropertyMetadata]) -> List[ObjectProperty]:
        entries: List[ObjectProperty] = []
        for name, metadata in declared_props.items():
            prop_type = PROP_TYPES.get(metadata.type or DEFAULT_PROPERTY_TYPE)
            if prop_type is None:
                raise TransformError(
                    f"No React prop type found for type: {metadata.type}", metadata.loc
                )
            entry = ObjectProperty(_key(name), _member(PROP_TYPES_NAMESPACE, prop_type))
            entry.leading_comments = list(metadata.comments)
            entries.append(entry)
        return entries

    def build_events_prop_types(self, custom_events: Dict[str, EventMetadata]) -> List[ObjectProperty]:
        entries: List[ObjectProperty] = []
        for name, metadata in custom_events.items():
            entry = ObjectProperty(
                _key(event_prop_name(name)), _member(PROP_TYPES_NAMESPACE, EVENT_PROP_TYPE)
            )
            entry.leading_comments = list(metadata.comments)
            entries.append(entry)
        return entries

    def build_wrapper_import(self, serializers: Sequence[str]) -> ImportDeclaration:
        specifiers: List[Node] = [ImportDefaultSpecifier(Identifier(WRAPPER_FACTORY))]
        specifiers.extend(self.build_serializers_import(serializers).specifiers)
        return ImportDeclaration(specifiers, StringLiteral(self.config.wrapper_module))

    def build_serializers_import(self, serializers: Sequence[str]) -> ImportDeclaration:
        """Named imports of ``serializers`` alone, for modules without a wrapper component."""
        return ImportDeclaration(
            [ImportSpecifier(local=Identifier(name), imported=Identifier(name)) for name in serializers],
            StringLiteral(self.config.wrapper_module),
        )

    def synthesize(self, context: TransformContext, filename: Optional[str] = None) -> Program:
        """Assemble the new module body; ``filename`` defaults to the context's file."""
        filename = filename or context.filename
        extension = self.config.output_extension

        prop_entries, serializers = self.build_props_descriptor(context.declared_props)
        descriptor: Node = ObjectExpression(
            prop_entries + self.build_events_descriptor(context.custom_events)
        )
        prop_types: Node = ObjectExpression(
            self.build_prop_types(context.declared_props)
            + self.build_events_prop_types(context.custom_events)
        )
        if context.parent_descriptor_source:
            descriptor = _merge_with_parent(PARENT_DESCRIPTOR, descriptor)
            prop_types = _merge_with_parent(PARENT_PROP_TYPES, prop_types)

        body: List[Node] = []
        if context.custom_element_name is None:
            if context.class_name is not None:
                # abstract classes only re-export metadata for their subclasses
                if serializers:
                    body.append(self.build_serializers_import(serializers))
                if context.declared_props or context.custom_events:
                    body.append(_import_default(PROP_TYPES_NAMESPACE, self.config.prop_types_module))
                body.extend([_export_var("descriptor", descriptor), _export_var("propTypes", prop_types)])
        else:
            if self.config.upgradable:
                source = custom_element_source(
                    filename,
                    self.config.components_root,
                    self.config.custom_element_prefix,
                    extension,
                )
                body.append(
                    ExportNamedDeclaration(
                        specifiers=[
                            ExportSpecifier(Identifier("default"), Identifier(CUSTOM_ELEMENT_EXPORT))
                        ],
                        source=StringLiteral(source),
                    )
                )
            body.append(self.build_wrapper_import(serializers))
            body.append(_import_default(PROP_TYPES_NAMESPACE, self.config.prop_types_module))
            body.extend(_import_default(item.local, item.source) for item in self.config.settings)
            body.extend(
                _declare("var", item.binding, _member(item.local, item.field))
                for item in self.config.settings
            )
            body.append(_export_var("descriptor", descriptor))
            body.append(_export_var("propTypes", prop_types))
            body.append(
                _declare(
                    "const",
                    COMPONENT,
                    CallExpression(
                        Identifier(WRAPPER_FACTORY),
                        [clone(context.custom_element_name), Identifier("descriptor")],
                    ),
                )
            )
            body.append(
                ExpressionStatement(
                    AssignmentExpression(_member(COMPONENT, "propTypes"), Identifier("propTypes"))
                )
            )
            body.append(ExportDefaultDeclaration(Identifier(COMPONENT)))

        preamble: List[Node] = []
        for source, names in context.named_exports_sources.items():
            preamble.append(
                ExportNamedDeclaration(
                    specifiers=[
                        ExportSpecifier(local=Identifier(local), exported=Identifier(exported))
                        for exported, local in names.items()
                    ],
                    source=StringLiteral(replace_extension_relative(source, extension)),
                )
            )
        if context.parent_descriptor_source:
            parent_source = replace_extension_relative(context.parent_descriptor_source, extension)
            preamble.append(_import_named("descriptor", PARENT_DESCRIPTOR, parent_source))
            preamble.append(_import_named("propTypes", PARENT_PROP_TYPES, parent_source))

        program = Program(body=preamble + body)
        if self.config.template_literals == "concat":
            lower_template_literals(program)
        return program


__all__ = [
    "COMPONENT",
    "CUSTOM_ELEMENT_EXPORT",
    "ModuleSynthesizer",
    "PARENT_DESCRIPTOR",
    "PARENT_PROP_TYPES",
    "PROP_TYPES_NAMESPACE",
    "WRAPPER_FACTORY",
]
