"""
MetaScript Lexer Package

Implements the pull-based tokenizer for the MetaScript language.

Key Features:
- Lazy, single-pass token stream (one token per pull)
- Folding of wide operators (==, <=, >=, !=, ++, --) and :: / ..
- Zero-based row/column tracking for diagnostics
- Shared diagnostic reporting used by every later stage

Author: xwest
"""

from .tokens import Token, TokenType, LiteralType, Position
from .lexer import Lexer, tokenize_string, tokenize_file
from .errors import Diagnostic, DiagnosticReporter, LexerError

__all__ = [
    "Lexer",
    "Token",
    "TokenType",
    "LiteralType",
    "Position",
    "tokenize_string",
    "tokenize_file",
    "Diagnostic",
    "DiagnosticReporter",
    "LexerError",
]
