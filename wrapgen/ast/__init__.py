"""Module AST model, parser, traversal and printer."""

from .parser import ModuleParser, parse_module
from .printer import CodePrinter, print_program
from .scope import ImportBinding, ImportTable
from .traverse import NodeTransformer, NodeVisitor

__all__ = [
    "CodePrinter",
    "ImportBinding",
    "ImportTable",
    "ModuleParser",
    "NodeTransformer",
    "NodeVisitor",
    "parse_module",
    "print_program",
]
