"""Tests for wrapgen.ast.printer."""

from __future__ import annotations

import pytest

from wrapgen.ast.nodes import (
    AssignmentExpression,
    BooleanLiteral,
    CallExpression,
    ClassDeclaration,
    Comment,
    ExportDefaultDeclaration,
    ExportNamedDeclaration,
    ExportSpecifier,
    ExpressionStatement,
    Identifier,
    ImportDeclaration,
    ImportDefaultSpecifier,
    ImportSpecifier,
    MemberExpression,
    ObjectExpression,
    ObjectProperty,
    Program,
    StringLiteral,
    TemplateElement,
    TemplateLiteral,
    VariableDeclaration,
    VariableDeclarator,
)
from wrapgen.ast.printer import CodePrinter, print_program, quote_string


def test_quote_string_escapes_javascript_specials() -> None:
    assert quote_string('say "hi"\n') == '"say \\"hi\\"\\n"'
    assert quote_string("back\\slash") == '"back\\\\slash"'
    assert quote_string("\u2028") == '"\\u2028"'


def test_print_imports_and_exports() -> None:
    program = Program(
        body=[
            ImportDeclaration(
                [
                    ImportDefaultSpecifier(Identifier("createReactCustomElementType")),
                    ImportSpecifier(local=Identifier("booleanSerializer"), imported=Identifier("booleanSerializer")),
                ],
                StringLiteral("wrappers.js"),
            ),
            ImportDeclaration(
                [ImportSpecifier(local=Identifier("parentDescriptor"), imported=Identifier("descriptor"))],
                StringLiteral("./base.js"),
            ),
            ExportNamedDeclaration(
                specifiers=[ExportSpecifier(Identifier("default"), Identifier("CustomElement"))],
                source=StringLiteral("../../components/foo/foo.js"),
            ),
            ExportDefaultDeclaration(Identifier("Component")),
        ]
    )

    assert print_program(program) == (
        'import createReactCustomElementType, { booleanSerializer } from "wrappers.js";\n'
        'import { descriptor as parentDescriptor } from "./base.js";\n'
        'export { default as CustomElement } from "../../components/foo/foo.js";\n'
        "export default Component;\n"
    )


def test_print_nested_objects_with_comments() -> None:
    entry = ObjectProperty(
        Identifier("open"),
        ObjectExpression([ObjectProperty(Identifier("attribute"), BooleanLiteral(False))]),
    )
    entry.leading_comments = [Comment("* Open state. ", block=True)]
    program = Program(
        body=[
            ExportNamedDeclaration(
                declaration=VariableDeclaration(
                    "var",
                    [
                        VariableDeclarator(
                            Identifier("descriptor"),
                            ObjectExpression([entry, ObjectProperty(StringLiteral("aria-label"), ObjectExpression())]),
                        )
                    ],
                )
            )
        ]
    )

    assert print_program(program) == (
        "export var descriptor = {\n"
        "  /** Open state. */\n"
        "  open: {\n"
        "    attribute: false\n"
        "  },\n"
        '  "aria-label": {}\n'
        "};\n"
    )


def test_print_calls_members_and_assignments() -> None:
    printer = CodePrinter()
    merge = CallExpression(
        MemberExpression(Identifier("Object"), Identifier("assign")),
        [ObjectExpression(), Identifier("parentPropTypes"), ObjectExpression()],
    )
    assignment = ExpressionStatement(
        AssignmentExpression(
            MemberExpression(Identifier("Component"), Identifier("propTypes")), Identifier("propTypes")
        )
    )

    assert printer.expression(merge) == "Object.assign({}, parentPropTypes, {})"
    assert printer.statement(assignment, 0) == "Component.propTypes = propTypes;"


def test_print_preserves_raw_string_and_template_literals() -> None:
    printer = CodePrinter()
    template = TemplateLiteral(
        [TemplateElement(""), TemplateElement("-toggled", tail=True)], [Identifier("prefix")]
    )

    assert printer.expression(StringLiteral("bx", raw="'bx'")) == "'bx'"
    assert printer.expression(template) == "`${prefix}-toggled`"


def test_print_line_comments_before_statements() -> None:
    statement = VariableDeclaration("const", [VariableDeclarator(Identifier("a"), StringLiteral("b"))])
    statement.leading_comments = [Comment(" note")]

    assert print_program(Program(body=[statement])) == '// note\nconst a = "b";\n'


def test_print_empty_program_is_empty() -> None:
    assert print_program(Program()) == ""


def test_print_rejects_unsupported_nodes() -> None:
    with pytest.raises(TypeError):
        print_program(Program(body=[ClassDeclaration(Identifier("Foo"))]))
