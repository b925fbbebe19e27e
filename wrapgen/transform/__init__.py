"""Custom element metadata harvesting and wrapper module synthesis."""

from .context import EventMetadata, PropertyMetadata, TransformContext
from .core import inspect_source, transform_program, transform_source
from .harvester import MetadataHarvester, harvest
from .synthesizer import ModuleSynthesizer

__all__ = [
    "EventMetadata",
    "MetadataHarvester",
    "ModuleSynthesizer",
    "PropertyMetadata",
    "TransformContext",
    "harvest",
    "inspect_source",
    "transform_program",
    "transform_source",
]
