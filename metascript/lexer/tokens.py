"""
Token definitions for the MetaScript lexer.

This module defines every token kind the language knows about:
- Keywords (let, proc, struct, impl, if, while, for, in, return)
- Operators, including the wide forms folded by the lexer (==, <=, >=, !=, ++, --)
- Literals, sub-tagged by LiteralType
- Identifiers and punctuation

Author: xwest
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Optional


class TokenType(Enum):
    """
    Enumeration of all token types in MetaScript.

    Organized by category for clarity and maintainability.
    """

    # ========================================================================
    # Punctuation
    # ========================================================================
    LEFT_PAREN = auto()             # (
    RIGHT_PAREN = auto()            # )
    LEFT_BRACE = auto()             # {
    RIGHT_BRACE = auto()            # }
    COLON = auto()                  # :
    DOUBLE_COLON = auto()           # :: (impl method call)
    SEMICOLON = auto()              # ;
    COMMA = auto()                  # ,
    DOT = auto()                    # . (field access)
    RANGE = auto()                  # .. (for loop range)

    # ========================================================================
    # Operators
    # ========================================================================
    PLUS = auto()                   # +
    MINUS = auto()                  # -
    MULTIPLY = auto()               # *
    DIVIDE = auto()                 # /
    ASSIGN = auto()                 # =
    EQUAL = auto()                  # ==
    NOT_EQUAL = auto()              # !=
    LESS_THAN = auto()              # <
    LESS_EQUAL = auto()             # <=
    GREATER_THAN = auto()           # >
    GREATER_EQUAL = auto()          # >=
    NOT = auto()                    # !
    INCREMENT = auto()              # ++
    DECREMENT = auto()              # --

    # ========================================================================
    # Keywords
    # ========================================================================
    LET = auto()
    PROC = auto()
    STRUCT = auto()
    IMPL = auto()
    IF = auto()
    WHILE = auto()
    FOR = auto()
    IN = auto()
    RETURN = auto()

    # ========================================================================
    # Identifiers and literals
    # ========================================================================
    IDENTIFIER = auto()
    LITERAL = auto()

    # Unrecognized character, reported by the parser
    INVALID = auto()


class LiteralType(Enum):
    """Sub-tag carried by LITERAL tokens."""
    NONE = "none"
    CHAR = "char"
    BOOL = "bool"
    NUMBER = "number"
    FLOAT = "float"
    STRING = "string"


@dataclass(frozen=True)
class Position:
    """
    A location in the source code.

    Row and column are zero-based internally and printed 1-based, so the
    first character of a file is shown as ``name:1:1``.
    """
    filename: str
    row: int
    column: int

    def __str__(self) -> str:
        return f"{self.filename}:{self.row + 1}:{self.column + 1}"

    def __repr__(self) -> str:
        return f"Position({self.filename!r}, {self.row}, {self.column})"


@dataclass(frozen=True)
class Token:
    """
    A lexical token: kind, raw text and source position.

    Literal tokens additionally carry their LiteralType.
    """
    type: TokenType
    lexeme: str
    position: Position
    literal_type: LiteralType = LiteralType.NONE

    def __str__(self) -> str:
        if self.type == TokenType.LITERAL:
            return f"<{self.position} {self.type.name}({self.literal_type.name})> {self.lexeme}"
        return f"<{self.position} {self.type.name}> {self.lexeme}"

    @property
    def is_literal(self) -> bool:
        return self.type == TokenType.LITERAL

    @property
    def is_keyword(self) -> bool:
        return self.lexeme in KEYWORDS and self.type == KEYWORDS[self.lexeme]

    @property
    def is_operator(self) -> bool:
        return self.type in OPERATOR_TYPES

    @property
    def is_identifier(self) -> bool:
        return self.type == TokenType.IDENTIFIER


# Lookup tables used by the lexer

KEYWORDS = {
    "let": TokenType.LET,
    "proc": TokenType.PROC,
    "struct": TokenType.STRUCT,
    "impl": TokenType.IMPL,
    "if": TokenType.IF,
    "while": TokenType.WHILE,
    "for": TokenType.FOR,
    "in": TokenType.IN,
    "return": TokenType.RETURN,
}

# Words that lex as bool literals rather than identifiers
BOOL_LITERALS = {"true", "false"}

PUNCTUATION = {
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
    ":": TokenType.COLON,
    ";": TokenType.SEMICOLON,
    ",": TokenType.COMMA,
    ".": TokenType.DOT,
}

# Two-character punctuation folded from a repeated single character
WIDE_PUNCTUATION = {
    "::": TokenType.DOUBLE_COLON,
    "..": TokenType.RANGE,
}

OPERATORS = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.MULTIPLY,
    "/": TokenType.DIVIDE,
    "=": TokenType.ASSIGN,
    "<": TokenType.LESS_THAN,
    ">": TokenType.GREATER_THAN,
    "!": TokenType.NOT,
}

# Operators widened by one character of lookahead
WIDE_OPERATORS = {
    "==": TokenType.EQUAL,
    "<=": TokenType.LESS_EQUAL,
    ">=": TokenType.GREATER_EQUAL,
    "!=": TokenType.NOT_EQUAL,
    "++": TokenType.INCREMENT,
    "--": TokenType.DECREMENT,
}

OPERATOR_TYPES = frozenset(OPERATORS.values()) | frozenset(WIDE_OPERATORS.values())

# Source-level type names of the builtin literal types
TYPE_NAMES = {
    "char": LiteralType.CHAR,
    "bool": LiteralType.BOOL,
    "i32": LiteralType.NUMBER,
    "f32": LiteralType.FLOAT,
    "String": LiteralType.STRING,
}

_LITERAL_TYPE_NAMES = {literal_type: name for name, literal_type in TYPE_NAMES.items()}


def literal_type_from_name(type_name: Optional[str]) -> LiteralType:
    """Map a source type name (``i32``, ``bool``...) to its LiteralType."""
    if type_name is None:
        return LiteralType.NONE
    return TYPE_NAMES.get(type_name, LiteralType.NONE)


def type_name_for_literal(literal_type: LiteralType) -> str:
    """Map a LiteralType back to its source type name; NONE maps to ``none``."""
    return _LITERAL_TYPE_NAMES.get(literal_type, "none")
