"""
MetaScript Parser Package

Implements the single-pass recursive descent parser for MetaScript.
Names are resolved while parsing, so the AST comes out fully resolved.

Key Features:
- One sub-parser per statement form, dispatched on the leading token
- Inline resolution against variable, procedure and struct tables
- Flat left-to-right folding of binary operators
- Statement-level error recovery with positioned diagnostics
- Textual AST dump for debugging

Author: xwest
"""

from .ast_nodes import *
from .parser import Parser, parse_string, parse_file, DEFAULT_DUMP_PATH
from .ast_printer import ASTPrinter, render, render_program, write_ast_dump
from .errors import ParseError

__all__ = [
    # Core parser
    "Parser", "parse_string", "parse_file", "DEFAULT_DUMP_PATH",

    # AST nodes
    "ASTNode", "ASTVisitor", "Expression", "ExpressionKind", "Program",
    "LiteralNode", "VarMetadataNode", "VariableNode",
    "LetNode", "AssignNode", "ReturnNode", "IfNode", "WhileNode", "RangeNode", "ForNode",
    "ProcDefNode", "FunCallNode", "StructDefNode", "StructInstanceNode",
    "ImplNode", "ImplFunCallNode", "FieldAssignNode", "FieldAccessNode",
    "BinaryOp", "BinaryOpNode",

    # Debug dump
    "ASTPrinter", "render", "render_program", "write_ast_dump",

    # Error handling
    "ParseError",
]
