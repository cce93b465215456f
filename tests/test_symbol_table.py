"""
Test suite for the MetaScript symbol tables.

Author: xwest
"""

import os
import sys
import unittest

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from metascript.lexer.tokens import Token, TokenType, LiteralType, Position
from metascript.analyzer.symbol_table import SymbolTables, SymbolKind
from metascript.parser.ast_nodes import (
    Expression, ExpressionKind, LiteralNode, VarMetadataNode, VariableNode,
    ProcDefNode, StructDefNode, ImplNode
)


def make_variable(name: str, value: str = "0", type_name: str = "i32") -> VariableNode:
    token = Token(TokenType.LITERAL, value, Position("t", 0, 0), LiteralType.NUMBER)
    literal = Expression(ExpressionKind.LITERAL, LiteralNode(token, LiteralType.NUMBER))
    return VariableNode(VarMetadataNode(name, type_name), literal)


class TestSymbolTable(unittest.TestCase):
    """Test cases for a single table."""

    def setUp(self):
        self.tables = SymbolTables()

    def test_declare_and_lookup(self):
        variable = make_variable("x")

        self.assertFalse(self.tables.variables.declare(variable))
        self.assertIs(self.tables.variables.lookup("x"), variable)
        self.assertIsNone(self.tables.variables.lookup("y"))
        self.assertTrue(self.tables.variables.contains("x"))

    def test_first_match_wins(self):
        first = make_variable("x", "1")
        second = make_variable("x", "2")

        self.tables.variables.declare(first)
        self.assertTrue(self.tables.variables.declare(second))

        self.assertIs(self.tables.variables.lookup("x"), first)
        self.assertEqual(len(self.tables.variables), 2)

    def test_remove_is_by_identity(self):
        first = make_variable("x", "1")
        twin = make_variable("x", "1")

        self.tables.variables.declare(first)
        self.tables.variables.declare(twin)

        self.assertTrue(self.tables.variables.remove(twin))
        self.assertIs(self.tables.variables.lookup("x"), first)
        self.assertFalse(self.tables.variables.remove(twin))

    def test_scoped_entries_are_removed(self):
        outer = make_variable("outer")
        self.tables.variables.declare(outer)

        with self.tables.variables.scoped([make_variable("a"), make_variable("b")]):
            self.assertEqual(self.tables.variables.names(), ["outer", "a", "b"])

        self.assertEqual(self.tables.variables.names(), ["outer"])

    def test_scoped_entries_are_removed_on_error(self):
        with self.assertRaises(RuntimeError):
            with self.tables.variables.scoped([make_variable("a")]):
                raise RuntimeError("boom")

        self.assertIsNone(self.tables.variables.lookup("a"))


class TestSymbolTables(unittest.TestCase):
    """Test cases for resolution across tables."""

    def setUp(self):
        self.tables = SymbolTables()
        self.proc_def = ProcDefNode("shape", None, [], [])
        self.struct_def = StructDefNode("Point", [VarMetadataNode("x", "i32")])

        self.tables.procedures.declare(self.proc_def)
        self.tables.structs.declare(self.struct_def)

    def test_resolution_order(self):
        self.assertEqual(self.tables.resolve("shape"), (SymbolKind.PROCEDURE, self.proc_def))
        self.assertEqual(self.tables.resolve("Point"), (SymbolKind.STRUCT, self.struct_def))
        self.assertIsNone(self.tables.resolve("missing"))

    def test_variables_resolve_before_procedures(self):
        variable = make_variable("shape")
        self.tables.variables.declare(variable)

        kind, entry = self.tables.resolve("shape")
        self.assertEqual(kind, SymbolKind.VARIABLE)
        self.assertIs(entry, variable)

    def test_impls_are_keyed_by_struct_name(self):
        impl_node = ImplNode(self.struct_def, [])
        self.tables.impls.declare(impl_node)

        self.assertIs(self.tables.impls.lookup("Point"), impl_node)
        # impls are not identifiers on their own
        self.assertEqual(self.tables.resolve("Point")[0], SymbolKind.STRUCT)

    def test_visible_names(self):
        self.tables.variables.declare(make_variable("v"))
        self.assertEqual(self.tables.visible_names(), ["v", "shape", "Point"])


if __name__ == '__main__':
    unittest.main()
