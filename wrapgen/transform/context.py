"""Metadata collected from one component module."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from ..ast.nodes import Comment, Node, SourceLocation
from ..ast.printer import CodePrinter

AttributePolicy = Union[bool, str, None]


@dataclass
class PropertyMetadata:
    """Metadata harvested from a ``@property()`` decorator.

    ``attribute`` is ``False`` when the property has no attribute, a string
    for an explicit attribute name, or ``None`` for the default mapping.
    """

    type: Optional[str] = None
    attribute: AttributePolicy = None
    comments: List[Comment] = field(default_factory=list)
    loc: Optional[SourceLocation] = None


@dataclass
class EventMetadata:
    """Metadata harvested from a ``static eventFoo`` member."""

    event_name: Node
    comments: List[Comment] = field(default_factory=list)
    loc: Optional[SourceLocation] = None


@dataclass
class TransformContext:
    """Facts gathered by a single harvesting pass over one module."""

    filename: str
    class_name: Optional[str] = None
    class_comments: List[Comment] = field(default_factory=list)
    custom_element_name: Optional[Node] = None
    declared_props: Dict[str, PropertyMetadata] = field(default_factory=dict)
    custom_events: Dict[str, EventMetadata] = field(default_factory=dict)
    parent_descriptor_source: Optional[str] = None
    named_exports_sources: Dict[str, Dict[str, str]] = field(default_factory=dict)

    def set_parent_descriptor_source(self, source: Optional[str]) -> None:
        if source:
            self.parent_descriptor_source = source

    def add_named_export(self, source: str, exported: str, local: str) -> None:
        self.named_exports_sources.setdefault(source, {})[exported] = local

    def summary(self) -> Dict[str, Any]:
        """Return a JSON-serialisable view of the harvested metadata."""
        printer = CodePrinter()
        return {
            "file": self.filename,
            "className": self.class_name,
            "customElementName": (
                printer.expression(self.custom_element_name)
                if self.custom_element_name is not None
                else None
            ),
            "declaredProps": {
                name: {"type": meta.type, "attribute": meta.attribute}
                for name, meta in self.declared_props.items()
            },
            "customEvents": {
                name: printer.expression(meta.event_name) for name, meta in self.custom_events.items()
            },
            "parentDescriptorSource": self.parent_descriptor_source,
            "namedExportsSources": {
                source: dict(names) for source, names in self.named_exports_sources.items()
            },
        }


__all__ = ["AttributePolicy", "EventMetadata", "PropertyMetadata", "TransformContext"]
