"""
Semantic error handling for MetaScript.

Covers the errors found while resolving names during the parse: unresolved
identifiers, type-hint mismatches, non-boolean conditions, call arity,
struct fields and impl methods.

Author: xwest
"""

from typing import Optional, List

from ..lexer.tokens import Position
from ..lexer.errors import Diagnostic


class SemanticError(Exception):
    """
    Raised when a name or type cannot be resolved. Aborts the current
    statement only.
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


def create_unresolved_identifier_error(name: str, position: Position,
                                       suggestions: Optional[List[str]] = None) -> SemanticError:
    help_text = None
    if suggestions:
        help_text = "did you mean " + ", ".join(f"'{s}'" for s in suggestions) + "?"

    return SemanticError(
        message=f"unresolved identifier '{name}'",
        position=position,
        code="S010",
        help_text=help_text,
        suggestions=suggestions
    )


def create_type_mismatch_diagnostic(expected: str, found: str, position: Position) -> Diagnostic:
    """Type-hint mismatches are reported but do not abort the statement."""
    return Diagnostic(
        message=f"expected {expected} found '{found}'",
        position=position,
        severity="error",
        code="S001"
    )


def create_redeclaration_warning(kind: str, name: str, position: Position) -> Diagnostic:
    return Diagnostic(
        message=f"{kind} '{name}' is already declared; the earlier declaration stays in effect",
        position=position,
        severity="warning",
        code="S011"
    )


def create_non_boolean_condition_error(found: str, position: Position) -> SemanticError:
    return SemanticError(
        message=f"condition must be bool, found '{found}'",
        position=position,
        code="S002"
    )


def create_undeclared_struct_error(name: str, position: Position) -> SemanticError:
    return SemanticError(
        message=f"impl for undeclared struct '{name}'",
        position=position,
        code="S012"
    )


def create_argument_count_error(proc_name: str, expected: int, found: int,
                                position: Position) -> SemanticError:
    return SemanticError(
        message=f"'{proc_name}' takes {expected} argument(s) but {found} were given",
        position=position,
        code="S020"
    )


def create_missing_impl_error(struct_name: str, position: Position) -> SemanticError:
    return SemanticError(
        message=f"struct '{struct_name}' has no impl block",
        position=position,
        code="S021"
    )


def create_unknown_method_error(struct_name: str, method: str, position: Position) -> SemanticError:
    return SemanticError(
        message=f"no procedure '{method}' in impl {struct_name}",
        position=position,
        code="S022"
    )


def create_not_a_struct_error(name: str, type_name: str, position: Position) -> SemanticError:
    return SemanticError(
        message=f"'{name}' of type '{type_name}' is not a struct instance",
        position=position,
        code="S030"
    )


def create_unknown_field_error(struct_name: str, field: str, position: Position,
                               suggestions: Optional[List[str]] = None) -> SemanticError:
    help_text = None
    if suggestions:
        help_text = "did you mean " + ", ".join(f"'{s}'" for s in suggestions) + "?"

    return SemanticError(
        message=f"struct '{struct_name}' has no field '{field}'",
        position=position,
        code="S031",
        help_text=help_text,
        suggestions=suggestions
    )


def create_field_order_error(expected: str, found: str, position: Position) -> SemanticError:
    return SemanticError(
        message=f"expected field '{expected}' found '{found}'",
        position=position,
        code="S032",
        help_text="struct literals bind fields in declaration order"
    )


def create_missing_fields_error(struct_name: str, missing: List[str], position: Position) -> SemanticError:
    return SemanticError(
        message=f"missing field(s) {', '.join(missing)} in '{struct_name}' literal",
        position=position,
        code="S033"
    )
