"""
Error handling for the MetaScript parser.

Syntax errors abort the statement being parsed; the statement dispatcher
reports them and resynchronizes so the rest of the input still parses.

Author: xwest
"""

from typing import Optional, List, Union

from ..lexer.tokens import Token, TokenType, Position
from ..lexer.errors import Diagnostic


class ParseError(Exception):
    """
    Exception raised when the parser meets a syntax error.

    Contains detailed diagnostic information for error reporting.
    """

    def __init__(
        self,
        message: str,
        position: Position,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.diagnostic = Diagnostic(
            message=message,
            position=position,
            severity="error",
            code=code,
            help_text=help_text,
            suggestions=suggestions
        )

    def __str__(self) -> str:
        return str(self.diagnostic)


class SyntaxErrorRecovery:
    """Recovery boundaries and hints for syntax errors."""

    # Keywords that start a new statement; recovery stops in front of them
    STATEMENT_BOUNDARIES = frozenset({
        TokenType.LET,
        TokenType.PROC,
        TokenType.STRUCT,
        TokenType.IMPL,
        TokenType.IF,
        TokenType.WHILE,
        TokenType.FOR,
        TokenType.RETURN,
    })

    @staticmethod
    def suggest_missing_token(expected: TokenType) -> List[str]:
        """Suggest what token might be missing."""
        token_suggestions = {
            TokenType.SEMICOLON: ["Add a semicolon ';' to end the statement"],
            TokenType.RIGHT_PAREN: ["Add a closing parenthesis ')'"],
            TokenType.RIGHT_BRACE: ["Add a closing brace '}'"],
            TokenType.LEFT_BRACE: ["Add an opening brace '{' to start a block"],
            TokenType.LEFT_PAREN: ["Add an opening parenthesis '(' before the arguments"],
            TokenType.COLON: ["Add a colon ':' before the type name"],
            TokenType.ASSIGN: ["Add an assignment operator '='"],
            TokenType.RANGE: ["Write the range as 'start..end'"],
        }

        return token_suggestions.get(expected, [])


# Printable spelling of token kinds used in messages
_TOKEN_SPELLING = {
    TokenType.LEFT_PAREN: "'('",
    TokenType.RIGHT_PAREN: "')'",
    TokenType.LEFT_BRACE: "'{'",
    TokenType.RIGHT_BRACE: "'}'",
    TokenType.COLON: "':'",
    TokenType.DOUBLE_COLON: "'::'",
    TokenType.SEMICOLON: "';'",
    TokenType.COMMA: "','",
    TokenType.DOT: "'.'",
    TokenType.RANGE: "'..'",
    TokenType.ASSIGN: "'='",
    TokenType.IN: "'in'",
    TokenType.IDENTIFIER: "identifier",
    TokenType.LITERAL: "literal",
}


def describe_token_type(token_type: TokenType) -> str:
    return _TOKEN_SPELLING.get(token_type, token_type.name.lower())


def create_unexpected_token_error(expected: Union[TokenType, str], found: Token) -> ParseError:
    """Create an error for an unexpected token."""
    if isinstance(expected, TokenType):
        expected_str = describe_token_type(expected)
        suggestions = SyntaxErrorRecovery.suggest_missing_token(expected)
    else:
        expected_str = expected
        suggestions = []

    return ParseError(
        message=f"expected {expected_str} found '{found.lexeme}'",
        position=found.position,
        code="P002",
        help_text=suggestions[0] if suggestions else None,
        suggestions=suggestions
    )


def create_unexpected_eof_error(expected: Union[TokenType, str], position: Position) -> ParseError:
    """Create an error for input that ends in the middle of a construct."""
    expected_str = describe_token_type(expected) if isinstance(expected, TokenType) else expected

    return ParseError(
        message=f"unexpected end of input, expected {expected_str}",
        position=position,
        code="P010"
    )


def create_stray_token_error(found: Token) -> ParseError:
    """Create an error for a token that cannot start a statement."""
    return ParseError(
        message=f"unexpected token '{found.lexeme}'",
        position=found.position,
        code="P001"
    )


def create_invalid_expression_error(found: Token, context: str) -> ParseError:
    return ParseError(
        message=f"expected {context} found '{found.lexeme}'",
        position=found.position,
        code="P003"
    )
