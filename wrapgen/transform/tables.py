"""Fixed mappings from ``@property`` types to serializers and prop types."""

from __future__ import annotations

import re

DEFAULT_PROPERTY_TYPE = "String"

PROPERTY_TYPES = ("String", "Boolean", "Number", "Object")

SERIALIZERS = {
    "Boolean": "booleanSerializer",
    "Number": "numberSerializer",
    "Object": "objectSerializer",
}

PROP_TYPES = {
    "String": "string",
    "Boolean": "bool",
    "Number": "number",
    "Object": "object",
}

EVENT_PROP_TYPE = "func"

EVENT_MEMBER = re.compile(r"^event")


def is_event_member(name: str) -> bool:
    return bool(EVENT_MEMBER.match(name))


def event_prop_name(name: str) -> str:
    """``eventToggle`` -> ``onToggle``."""
    return EVENT_MEMBER.sub("on", name, count=1)


__all__ = [
    "DEFAULT_PROPERTY_TYPE",
    "EVENT_MEMBER",
    "EVENT_PROP_TYPE",
    "PROPERTY_TYPES",
    "PROP_TYPES",
    "SERIALIZERS",
    "event_prop_name",
    "is_event_member",
]
