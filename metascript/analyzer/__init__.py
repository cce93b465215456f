"""
MetaScript Analyzer Package

Name resolution support used by the single-pass parser:
- Flat, insertion-ordered symbol tables (variables, procedures, structs, impls)
- Semantic diagnostics for resolution and type errors

Author: xwest
"""

from .symbol_table import SymbolTable, SymbolTables, SymbolKind
from .errors import SemanticError

__all__ = [
    # Symbol management
    "SymbolTable", "SymbolTables", "SymbolKind",

    # Error handling
    "SemanticError",
]
