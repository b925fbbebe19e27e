"""Tests for wrapgen.ast.scope."""

from __future__ import annotations

from wrapgen.ast.parser import parse_module
from wrapgen.ast.scope import ImportBinding, ImportTable


def test_import_table_collects_module_bindings() -> None:
    program = parse_module(
        "import Base from '../base/base';\n"
        "import { property as prop } from 'lit-element';\n"
        "import * as settings from './settings';\n"
        "import type { Shape } from './shape';\n"
    )

    table = ImportTable.from_program(program)

    assert len(table) == 3
    assert table.lookup("Base") == ImportBinding("Base", "../base/base", "default")
    assert table.lookup("Base").is_default
    assert table.lookup("settings").is_namespace
    assert table.lookup("prop").imported == "property"
    assert table.lookup("Shape") is None


def test_is_named_import_checks_source_and_name() -> None:
    table = ImportTable([ImportBinding("prop", "lit-element", "property")])

    assert table.is_named_import("prop", ["lit-element"], "property")
    assert not table.is_named_import("prop", ["lit"], "property")
    assert not table.is_named_import("prop", ["lit-element"], "state")
    assert not table.is_named_import("property", ["lit-element"], "property")
