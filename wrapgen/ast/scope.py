"""Module-level import bindings used to resolve decorators and superclasses."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Optional

from .nodes import (
    ImportDeclaration,
    ImportDefaultSpecifier,
    ImportNamespaceSpecifier,
    ImportSpecifier,
    Program,
)

DEFAULT_IMPORT = "default"
NAMESPACE_IMPORT = "*"


@dataclass(frozen=True)
class ImportBinding:
    """A local name bound by an ``import`` statement."""

    local: str
    source: str
    imported: str

    @property
    def is_default(self) -> bool:
        return self.imported == DEFAULT_IMPORT

    @property
    def is_namespace(self) -> bool:
        return self.imported == NAMESPACE_IMPORT


class ImportTable:
    """Symbol table of the import bindings declared at module level."""

    def __init__(self, bindings: Iterable[ImportBinding] = ()) -> None:
        self._bindings: Dict[str, ImportBinding] = {}
        for binding in bindings:
            self._bindings[binding.local] = binding

    @classmethod
    def from_program(cls, program: Program) -> "ImportTable":
        return cls(_collect(program))

    def lookup(self, name: str) -> Optional[ImportBinding]:
        return self._bindings.get(name)

    def is_named_import(self, name: str, sources: Iterable[str], imported: str) -> bool:
        """Return True when ``name`` is bound to ``imported`` from one of ``sources``."""
        binding = self._bindings.get(name)
        return binding is not None and binding.imported == imported and binding.source in set(sources)

    def __iter__(self) -> Iterator[ImportBinding]:
        return iter(self._bindings.values())

    def __len__(self) -> int:
        return len(self._bindings)


def _collect(program: Program) -> Iterator[ImportBinding]:
    for statement in program.body:
        if not isinstance(statement, ImportDeclaration) or statement.type_only:
            continue
        source = statement.source.value
        for specifier in statement.specifiers:
            if isinstance(specifier, ImportDefaultSpecifier):
                yield ImportBinding(specifier.local.name, source, DEFAULT_IMPORT)
            elif isinstance(specifier, ImportNamespaceSpecifier):
                yield ImportBinding(specifier.local.name, source, NAMESPACE_IMPORT)
            elif isinstance(specifier, ImportSpecifier):
                imported = specifier.imported.name
                yield ImportBinding(specifier.local.name, source, imported)


__all__ = ["DEFAULT_IMPORT", "NAMESPACE_IMPORT", "ImportBinding", "ImportTable"]
