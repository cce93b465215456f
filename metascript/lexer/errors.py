"""
Diagnostics shared by every MetaScript front-end stage.

Provides the Diagnostic record, the reporter that every sub-parser sends its
diagnostics through, and the lexical error helpers.

Author: xwest
"""

import sys
from typing import Optional, List, TextIO
from dataclasses import dataclass

from .tokens import Position


@dataclass
class Diagnostic:
    """A positioned message (error or warning) about the source."""
    message: str
    position: Position
    severity: str  # "error", "warning"
    code: Optional[str] = None
    help_text: Optional[str] = None
    suggestions: Optional[List[str]] = None

    @property
    def is_error(self) -> bool:
        return self.severity == "error"

    def __str__(self) -> str:
        result = f"<{self.position}> {self.severity.capitalize()}: {self.message}"

        if self.help_text:
            result += f"\n  help: {self.help_text}"

        return result


class DiagnosticReporter:
    """
    Collects diagnostics for one parse and echoes them to a stream.

    Diagnostics are advisory: reporting one never stops the parse.
    """

    def __init__(self, stream: Optional[TextIO] = None, echo: bool = True):
        """
        Args:
            stream: Where diagnostics are printed (defaults to stdout at report time)
            echo: Set to False to only collect diagnostics
        """
        self.stream = stream
        self.echo = echo
        self.diagnostics: List[Diagnostic] = []

    def report(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)
        if self.echo:
            print(diagnostic, file=self.stream or sys.stdout)

    @property
    def errors(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.is_error]

    @property
    def warnings(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if not d.is_error]

    def has_errors(self) -> bool:
        return any(d.is_error for d in self.diagnostics)


class LexerError(Exception):
    """
    Raised when a token that cannot be classified reaches the parser.

    The lexer itself never raises; it emits INVALID tokens instead.
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


class ErrorRecovery:
    """Helpers for building suggestions in diagnostics."""

    @staticmethod
    def suggest_similar_names(name: str, candidates: List[str], max_distance: int = 2) -> List[str]:
        """Return up to three candidates within max_distance edits of name, closest first."""
        scored = []
        for candidate in dict.fromkeys(candidates):
            distance = ErrorRecovery._edit_distance(name, candidate)
            if distance <= max_distance:
                scored.append((distance, candidate))

        scored.sort(key=lambda item: item[0])
        return [candidate for _, candidate in scored[:3]]

    @staticmethod
    def _edit_distance(s1: str, s2: str) -> int:
        """Calculate Levenshtein distance between two strings."""
        if len(s1) < len(s2):
            return ErrorRecovery._edit_distance(s2, s1)

        if len(s2) == 0:
            return len(s1)

        previous_row = list(range(len(s2) + 1))
        for i, c1 in enumerate(s1):
            current_row = [i + 1]
            for j, c2 in enumerate(s2):
                insertions = previous_row[j + 1] + 1
                deletions = current_row[j] + 1
                substitutions = previous_row[j] + (c1 != c2)
                current_row.append(min(insertions, deletions, substitutions))
            previous_row = current_row

        return previous_row[-1]


def create_invalid_character_error(char: str, position: Position) -> LexerError:
    """Create an error for a character that starts no token."""
    if char.isprintable():
        help_text = f"The character '{char}' is not valid in MetaScript source code."
    else:
        help_text = f"Non-printable character (Unicode: U+{ord(char):04X}) is not allowed."

    return LexerError(
        message=f"unexpected character '{char}'",
        position=position,
        code="L001",
        help_text=help_text
    )
