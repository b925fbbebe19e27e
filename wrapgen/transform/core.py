"""Per-file entry points: harvest, synthesize, print."""

from __future__ import annotations

from typing import Optional

from ..ast.nodes import Program
from ..ast.parser import ModuleParser
from ..ast.printer import CodePrinter
from ..config import TransformConfig
from ..errors import TransformError
from .context import TransformContext
from .harvester import harvest
from .synthesizer import ModuleSynthesizer


def transform_program(program: Program, filename: str, config: TransformConfig) -> Program:
    """Replace the body of ``program`` with the synthesized wrapper module."""
    context = harvest(program, filename, config)
    synthesized = ModuleSynthesizer(config).synthesize(context, filename)
    program.body = synthesized.body
    return program


def transform_source(
    source: str,
    filename: str,
    config: TransformConfig,
    parser: Optional[ModuleParser] = None,
) -> str:
    """Transform module source text into wrapper module source text."""
    try:
        program = (parser or ModuleParser()).parse(source)
        transform_program(program, filename, config)
    except TransformError as exc:
        exc.attach(filename, source)
        raise
    return CodePrinter().print_program(program)


def inspect_source(
    source: str,
    filename: str,
    config: TransformConfig,
    parser: Optional[ModuleParser] = None,
) -> TransformContext:
    """Harvest metadata from module source without synthesizing anything."""
    try:
        return harvest((parser or ModuleParser()).parse(source), filename, config)
    except TransformError as exc:
        exc.attach(filename, source)
        raise


__all__ = ["inspect_source", "transform_program", "transform_source"]
