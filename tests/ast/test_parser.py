"""Tests for wrapgen.ast.parser."""

from __future__ import annotations

import pytest

from wrapgen.ast.nodes import (
    ClassDeclaration,
    ClassMethod,
    ClassProperty,
    CallExpression,
    ExportDefaultDeclaration,
    ExportNamedDeclaration,
    Identifier,
    ImportDeclaration,
    ImportDefaultSpecifier,
    ImportNamespaceSpecifier,
    ImportSpecifier,
    ObjectExpression,
    ReturnStatement,
    StringLiteral,
    TemplateLiteral,
)
from wrapgen.ast.parser import parse_module
from wrapgen.errors import TransformError


def _class(program) -> ClassDeclaration:
    for statement in program.body:
        if isinstance(statement, ClassDeclaration):
            return statement
        declaration = getattr(statement, "declaration", None)
        if isinstance(declaration, ClassDeclaration):
            return declaration
    raise AssertionError("no class in module")


def test_parse_imports_records_specifier_kinds() -> None:
    program = parse_module(
        "import Base, { property as prop, customElement } from 'lit-element';\n"
        "import * as utils from './utils';\n"
    )

    first, second = program.body
    assert isinstance(first, ImportDeclaration)
    assert first.source.value == "lit-element"
    default, renamed, plain = first.specifiers
    assert isinstance(default, ImportDefaultSpecifier)
    assert default.local.name == "Base"
    assert isinstance(renamed, ImportSpecifier)
    assert (renamed.imported.name, renamed.local.name) == ("property", "prop")
    assert (plain.imported.name, plain.local.name) == ("customElement", "customElement")
    assert isinstance(second.specifiers[0], ImportNamespaceSpecifier)
    assert second.specifiers[0].local.name == "utils"


def test_parse_type_only_import_is_flagged() -> None:
    program = parse_module("import type { Foo } from './foo';\n")

    assert isinstance(program.body[0], ImportDeclaration)
    assert program.body[0].type_only is True


def test_parse_class_members_and_decorators() -> None:
    program = parse_module(
        """
import { customElement, LitElement, property } from 'lit-element';

/**
 * A thing.
 */
@customElement('bx-thing')
class BXThing extends LitElement {
  /**
   * Open state.
   */
  @property({ type: Boolean, attribute: 'is-open' })
  open = false;

  static get eventToggle() {
    return 'bx-thing-toggled';
  }

  static eventClose = `${'bx'}-close`;
}

export default BXThing;
"""
    )

    cls = _class(program)
    assert cls.id == Identifier("BXThing")
    assert cls.super_class == Identifier("LitElement")
    assert cls.leading_comments[0].block is True
    assert "A thing." in cls.leading_comments[0].value
    decorator = cls.decorators[0]
    assert isinstance(decorator.expression, CallExpression)
    assert decorator.expression.callee == Identifier("customElement")
    assert decorator.expression.arguments == [StringLiteral("bx-thing")]

    field, getter, static_field = cls.body
    assert isinstance(field, ClassProperty)
    assert field.key == Identifier("open")
    assert field.static is False
    assert "Open state." in field.leading_comments[0].value
    options = field.decorators[0].expression.arguments[0]
    assert isinstance(options, ObjectExpression)
    assert [prop.key.name for prop in options.properties] == ["type", "attribute"]

    assert isinstance(getter, ClassMethod)
    assert (getter.static, getter.kind) == (True, "get")
    assert isinstance(getter.body.body[0], ReturnStatement)
    assert getter.body.body[0].argument == StringLiteral("bx-thing-toggled")

    assert isinstance(static_field, ClassProperty)
    assert static_field.static is True
    assert isinstance(static_field.value, TemplateLiteral)
    assert [quasi.raw for quasi in static_field.value.quasis] == ["", "-close"]

    assert isinstance(program.body[-1], ExportDefaultDeclaration)


def test_parse_string_literal_keeps_raw_quotes() -> None:
    program = parse_module("const name = 'it\\'s';\n")

    literal = program.body[0].declarations[0].init
    assert literal.value == "it's"
    assert literal.raw == "'it\\'s'"


def test_parse_mixin_superclass_is_a_call() -> None:
    program = parse_module(
        "import BXFloatingMenu from '../floating-menu/floating-menu';\n"
        "class Foo extends HostListenerMixin(FocusMixin(BXFloatingMenu)) {}\n"
    )

    cls = _class(program)
    assert isinstance(cls.super_class, CallExpression)
    assert cls.super_class.callee == Identifier("HostListenerMixin")
    assert cls.super_class.arguments[0].arguments == [Identifier("BXFloatingMenu")]


def test_parse_export_clause_with_source() -> None:
    program = parse_module("export { default as Foo, bar } from './foo';\n")

    statement = program.body[0]
    assert isinstance(statement, ExportNamedDeclaration)
    assert statement.source.value == "./foo"
    assert [(item.local.name, item.exported.name) for item in statement.specifiers] == [
        ("default", "Foo"),
        ("bar", "bar"),
    ]


def test_parse_records_locations() -> None:
    program = parse_module("\n\nclass Foo {}\n")

    cls = _class(program)
    assert (cls.loc.line, cls.loc.column) == (3, 0)


def test_parse_reports_syntax_errors() -> None:
    with pytest.raises(TransformError) as excinfo:
        parse_module("class Foo {\n  open = ;\n}\n")

    assert excinfo.value.loc is not None
