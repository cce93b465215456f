"""
MetaScript Front End Package

Turns MetaScript source text into a fully name- and type-resolved AST in a
single pass.

Architecture:
    metascript/
    ├── lexer/           # Pull-based tokenizer and diagnostics
    ├── parser/          # Recursive descent parser, AST model, AST dump
    └── analyzer/        # Symbol tables and semantic errors

Author: xwest
License: MIT
"""

__version__ = "0.1.0"
__author__ = "xwest"
__license__ = "MIT"

from .lexer import Lexer, DiagnosticReporter
from .parser import Parser, parse_string, parse_file
from .analyzer import SymbolTables

__all__ = [
    # Core classes
    "Lexer",
    "Parser",
    "DiagnosticReporter",
    "SymbolTables",

    # Convenience
    "parse_string",
    "parse_file",

    # Version info
    "__version__",
    "__author__",
    "__license__",
]
