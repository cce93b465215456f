"""
MetaScript Lexer - turns source text into a lazy stream of tokens.

The lexer is pull-based: the parser asks for one token at a time and the
lexer only scans as far as that token. There is no EOF token, running out of
tokens simply means the stream is exhausted.

xwest
"""

import os
import string
from typing import Iterator, List, Optional

from .tokens import (
    Token, TokenType, LiteralType, Position, KEYWORDS, BOOL_LITERALS,
    PUNCTUATION, WIDE_PUNCTUATION, OPERATORS, WIDE_OPERATORS
)


def _is_digit(char: str) -> bool:
    # str.isdigit() also accepts superscripts and other scripts' digits
    return "0" <= char <= "9"


class Lexer:
    """
    MetaScript lexical analyzer.

    Classifies characters in order: string literal, char literal,
    punctuation, operator, identifier/keyword, number. Anything else becomes
    an INVALID token so the parser can report it with a position.
    """

    def __init__(self, source: str, filename: str = "<unknown>"):
        """
        Initialize the lexer with source code.

        Args:
            source: Source code string (UTF-8)
            filename: Name threaded into every token position
        """
        self.source = source
        self.filename = filename
        self.cursor = 0
        self.row = 0
        self.line_start = 0

    def __iter__(self) -> Iterator[Token]:
        return self

    def __next__(self) -> Token:
        token = self.next_token()
        if token is None:
            raise StopIteration
        return token

    def reset(self):
        """Rewind to the start of the source."""
        self.cursor = 0
        self.row = 0
        self.line_start = 0

    def tokenize(self) -> List[Token]:
        """Tokenize the whole source from the start."""
        self.reset()
        return list(self)

    # ------------------------------------------------------------------
    # Cursor
    # ------------------------------------------------------------------

    def valid(self) -> bool:
        return self.cursor < len(self.source)

    def peek(self) -> Optional[str]:
        """Character under the cursor, or None at end of input."""
        return self.peek_by(0)

    def peek_by(self, offset: int) -> Optional[str]:
        """Character ``offset`` places after the cursor, or None past the end."""
        index = self.cursor + offset
        if index < len(self.source):
            return self.source[index]
        return None

    def advance(self):
        """Move past one character; a newline starts a new row."""
        if not self.valid():
            return
        char = self.source[self.cursor]
        self.cursor += 1
        if char == "\n":
            self.row += 1
            self.line_start = self.cursor

    def position(self) -> Position:
        return Position(self.filename, self.row, self.cursor - self.line_start)

    # ------------------------------------------------------------------
    # Token classification
    # ------------------------------------------------------------------

    def next_token(self) -> Optional[Token]:
        """Scan and return the next token, or None once the input is exhausted."""
        self._skip_trivia()

        if not self.valid():
            return None

        first = self.peek()
        position = self.position()

        if first == '"':
            return self._tokenize_string(position)
        if first == "'":
            return self._tokenize_char(position)
        if first in PUNCTUATION:
            return self._tokenize_punctuation(position)
        if first in OPERATORS:
            return self._tokenize_operator(position)
        if first.isalpha() or first == "_":
            return self._tokenize_identifier_or_keyword(position)
        if _is_digit(first):
            return self._tokenize_number(position)

        self.advance()
        return Token(TokenType.INVALID, first, position)

    def _skip_trivia(self):
        """Skip whitespace and // line comments."""
        while self.valid():
            char = self.peek()
            if char.isspace():
                self.advance()
            elif char == "/" and self.peek_by(1) == "/":
                self._drop_line()
            else:
                break

    def _drop_line(self):
        while self.valid() and self.peek() != "\n":
            self.advance()

    def _tokenize_string(self, position: Position) -> Token:
        """
        Tokenize a string literal. The token text is the content between the
        quotes; an unterminated string runs to the end of the buffer.
        """
        self.advance()  # opening quote
        start = self.cursor

        while self.valid():
            char = self.peek()
            if char == '"':
                break
            if not (char.isalnum() or char.isspace() or char in string.punctuation):
                break
            self.advance()

        value = self.source[start:self.cursor]

        if self.peek() == '"':
            self.advance()

        return Token(TokenType.LITERAL, value, position, LiteralType.STRING)

    def _tokenize_char(self, position: Position) -> Token:
        """Tokenize 'c'. Without a closing quote the rest of the line is dropped."""
        self.advance()  # opening quote

        value = self.peek()
        if value is None or value == "\n":
            return Token(TokenType.LITERAL, "", position, LiteralType.CHAR)
        if value == "'":
            # empty literal ''
            self.advance()
            return Token(TokenType.LITERAL, "", position, LiteralType.CHAR)

        self.advance()

        if self.peek() == "'":
            self.advance()
        else:
            self._drop_line()

        return Token(TokenType.LITERAL, value, position, LiteralType.CHAR)

    def _tokenize_punctuation(self, position: Position) -> Token:
        char = self.peek()
        wide = char + (self.peek_by(1) or "")

        if wide in WIDE_PUNCTUATION:
            self.advance()
            self.advance()
            return Token(WIDE_PUNCTUATION[wide], wide, position)

        self.advance()
        return Token(PUNCTUATION[char], char, position)

    def _tokenize_operator(self, position: Position) -> Token:
        char = self.peek()
        wide = char + (self.peek_by(1) or "")

        if wide in WIDE_OPERATORS:
            self.advance()
            self.advance()
            return Token(WIDE_OPERATORS[wide], wide, position)

        self.advance()
        return Token(OPERATORS[char], char, position)

    def _tokenize_identifier_or_keyword(self, position: Position) -> Token:
        start = self.cursor

        while self.valid() and (self.peek().isalnum() or self.peek() == "_"):
            self.advance()

        lexeme = self.source[start:self.cursor]

        if lexeme in KEYWORDS:
            return Token(KEYWORDS[lexeme], lexeme, position)
        if lexeme in BOOL_LITERALS:
            return Token(TokenType.LITERAL, lexeme, position, LiteralType.BOOL)

        return Token(TokenType.IDENTIFIER, lexeme, position)

    def _tokenize_number(self, position: Position) -> Token:
        """
        Tokenize a digit run. One embedded '.' makes it a Float; digits after
        the dot are not required. A '..' range operator is never absorbed.
        """
        start = self.cursor
        has_dot = False

        while self.valid():
            char = self.peek()
            if _is_digit(char):
                self.advance()
            elif char == "." and not has_dot and self.peek_by(1) != ".":
                has_dot = True
                self.advance()
            else:
                break

        lexeme = self.source[start:self.cursor]
        literal_type = LiteralType.FLOAT if has_dot else LiteralType.NUMBER

        return Token(TokenType.LITERAL, lexeme, position, literal_type)


def tokenize_string(source: str, filename: str = "<string>") -> List[Token]:
    """
    Convenience function to tokenize a source string.

    Args:
        source: Source code string
        filename: Filename for positions

    Returns:
        List of tokens (no end-of-stream sentinel)
    """
    return Lexer(source, filename).tokenize()


def tokenize_file(filepath: str) -> List[Token]:
    """
    Convenience function to tokenize a source file.

    Raises:
        IOError: If file cannot be read
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        source = f.read()

    return tokenize_string(source, os.path.basename(filepath))
