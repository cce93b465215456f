"""
Test suite for the AST model helpers and the debug dump.

Author: xwest
"""

import os
import sys
import unittest

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from metascript.lexer.errors import DiagnosticReporter
from metascript.parser.parser import parse_string
from metascript.parser.ast_nodes import ASTVisitor, ExpressionKind
from metascript.parser.ast_printer import render, render_program


def parse(source: str):
    return parse_string(source, "test.ms", DiagnosticReporter(echo=False))


class KindCollector(ASTVisitor):
    """Collects the kind of every visited expression."""

    def __init__(self):
        self.kinds = []

    def visit(self, expression):
        self.kinds.append(expression.kind)
        return super().visit(expression)


class TestVisitor(unittest.TestCase):
    """Test cases for visitor dispatch and children."""

    def test_generic_visit_walks_children(self):
        program = parse("let a = 1;\nif a < 2 { let b = a; }")
        collector = KindCollector()

        for expression in program:
            collector.visit(expression)

        self.assertEqual(collector.kinds, [
            ExpressionKind.LET_STATEMENT, ExpressionKind.LITERAL,
            ExpressionKind.IF_STATEMENT, ExpressionKind.BINARY_OP,
            ExpressionKind.VARIABLE, ExpressionKind.LITERAL,
            ExpressionKind.LITERAL,
            ExpressionKind.LET_STATEMENT, ExpressionKind.VARIABLE, ExpressionKind.LITERAL,
        ])

    def test_visit_method_dispatch(self):
        class LetNames(ASTVisitor):
            def visit_let_statement(self, expression):
                return expression.node.name

        program = parse("let answer = 42;")
        self.assertEqual(LetNames().visit(program[0]), "answer")


class TestASTPrinter(unittest.TestCase):
    """Test cases for the textual rendering."""

    def test_literal_and_let(self):
        program = parse("let x: f32 = 1.5;")
        self.assertEqual(render(program[0]), "Let (x: f32 = Literal ('1.5', Float))")

    def test_binary_op(self):
        program = parse("let r = 1 + 2 * 3;")
        self.assertEqual(
            render(program[0].node.value),
            "BinaryOp (BinaryOp (Literal ('1', Number), Add, Literal ('2', Number)), Mul, Literal ('3', Number))"
        )

    def test_procedure_block(self):
        program = parse("proc f(a: i32): i32 {\n    return a;\n}")
        self.assertEqual(render(program[0]), (
            "ProcDef f(a: i32): i32 [\n"
            "    Return (Variable (a: i32 = Literal ('0', Number)))\n"
            "]"
        ))

    def test_empty_block(self):
        program = parse("proc f() { }")
        self.assertEqual(render(program[0]), "ProcDef f(): None []")

    def test_struct_forms(self):
        program = parse("struct P { x: i32 }\nlet p = P { x: 1 };\np.x = 2;")

        self.assertEqual(render(program[0]), "StructDef P { x: i32 }")
        self.assertEqual(render(program[1]),
                         "Let (p: P = StructInstance P { x: i32 = Literal ('1', Number) })")
        self.assertEqual(render(program[2]), "FieldAssign (p.x = Literal ('2', Number))")

    def test_render_program_is_newline_terminated(self):
        program = parse("let a = 1;\nlet b = 2;")
        text = render_program(program)

        self.assertTrue(text.endswith("\n"))
        self.assertEqual(len(text.splitlines()), 2)


if __name__ == '__main__':
    unittest.main()
