"""
Abstract Syntax Tree node definitions for MetaScript.

The tree is a tagged union: every syntactic form is an ``Expression`` whose
``kind`` says which node structure it owns. Nodes are produced already
resolved, so each one carries the type names of its operands and direct
references to the declarations it uses.

Author: xwest
"""

from typing import Any, Dict, List, Optional
from dataclasses import dataclass, field
from enum import Enum

from ..lexer.tokens import (
    Position, Token, TokenType, LiteralType, literal_type_from_name, type_name_for_literal
)


class ExpressionKind(Enum):
    """Tag of the Expression union. The value names the visitor method."""

    IF_STATEMENT = "if_statement"
    WHILE_STATEMENT = "while_statement"
    FOR_LOOP = "for_loop"
    RANGE = "range"
    LET_STATEMENT = "let_statement"
    ASSIGN_STATEMENT = "assign_statement"
    RETURN_STATEMENT = "return_statement"
    VARIABLE = "variable"
    PROC_DEF = "proc_def"
    FUN_CALL = "fun_call"
    STRUCT_DEF = "struct_def"
    STRUCT_INSTANCE = "struct_instance"
    IMPL = "impl"
    IMPL_FUN_CALL = "impl_fun_call"
    FIELD_ASSIGN = "field_assign"
    FIELD_ACCESS = "field_access"
    BINARY_OP = "binary_op"
    LITERAL = "literal"


class BinaryOp(Enum):
    """Operators folded into BinaryOpNode."""

    NONE = ""
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    EQ = "=="
    NE = "!="
    LT = "<"
    LTE = "<="
    GT = ">"
    GTE = ">="
    NEG = "!"
    INC = "++"
    DEC = "--"

    @property
    def is_boolean(self) -> bool:
        """True when the operator always produces a bool."""
        return self in _BOOLEAN_OPS

    @property
    def is_step(self) -> bool:
        """Increment/decrement: the right operand is an implicit literal 1."""
        return self in (BinaryOp.INC, BinaryOp.DEC)

    @classmethod
    def from_token_type(cls, token_type: TokenType) -> 'BinaryOp':
        return _TOKEN_TO_OP.get(token_type, cls.NONE)


_BOOLEAN_OPS = frozenset({
    BinaryOp.EQ, BinaryOp.NE, BinaryOp.LT, BinaryOp.LTE,
    BinaryOp.GT, BinaryOp.GTE, BinaryOp.NEG,
})

_TOKEN_TO_OP = {
    TokenType.PLUS: BinaryOp.ADD,
    TokenType.MINUS: BinaryOp.SUB,
    TokenType.MULTIPLY: BinaryOp.MUL,
    TokenType.DIVIDE: BinaryOp.DIV,
    TokenType.EQUAL: BinaryOp.EQ,
    TokenType.NOT_EQUAL: BinaryOp.NE,
    TokenType.LESS_THAN: BinaryOp.LT,
    TokenType.LESS_EQUAL: BinaryOp.LTE,
    TokenType.GREATER_THAN: BinaryOp.GT,
    TokenType.GREATER_EQUAL: BinaryOp.GTE,
    TokenType.NOT: BinaryOp.NEG,
    TokenType.INCREMENT: BinaryOp.INC,
    TokenType.DECREMENT: BinaryOp.DEC,
}

# Token kinds the parser folds after a primary expression; `!` is prefix-only
FOLDABLE_OPERATORS = frozenset(_TOKEN_TO_OP) - {TokenType.NOT}


class ASTVisitor:
    """
    Visitor over Expressions.

    ``visit`` dispatches to ``visit_<kind>`` (for example ``visit_let_statement``);
    kinds without a method fall back to ``generic_visit``, which visits the
    children and returns None.
    """

    def visit(self, expression: 'Expression') -> Any:
        return expression.accept(self)

    def generic_visit(self, expression: 'Expression') -> Any:
        for child in expression.children():
            self.visit(child)
        return None


class ASTNode:
    """Base class for the node structures owned by Expressions."""

    def children(self) -> List['Expression']:
        return []

    @property
    def value_type(self) -> str:
        """Resolved type name of the value this node produces."""
        return "none"


class Expression:
    """
    The tagged union of every syntactic form.

    Attributes:
        kind: Which variant this is
        node: The variant's node structure
        position: Where the construct starts in the source
    """

    def __init__(self, kind: ExpressionKind, node: ASTNode, position: Optional[Position] = None):
        self.kind = kind
        self.node = node
        self.position = position

    def accept(self, visitor: ASTVisitor) -> Any:
        method = getattr(visitor, f"visit_{self.kind.value}", visitor.generic_visit)
        return method(self)

    def children(self) -> List['Expression']:
        return self.node.children()

    @property
    def value_type(self) -> str:
        return self.node.value_type

    def __repr__(self) -> str:
        return f"Expression({self.kind.name}, {self.node!r})"


# ============================================================================
# Literals and variables
# ============================================================================

@dataclass
class LiteralNode(ASTNode):
    token: Token
    literal_type: LiteralType

    @property
    def value(self) -> str:
        return self.token.lexeme

    @property
    def value_type(self) -> str:
        return type_name_for_literal(self.literal_type)


@dataclass
class VarMetadataNode(ASTNode):
    """Declaration-site metadata: a name and its type name."""
    name: str
    type_name: str

    @property
    def literal_type(self) -> LiteralType:
        return literal_type_from_name(self.type_name)


@dataclass
class VariableNode(ASTNode):
    """A live binding: metadata plus the current value expression."""
    metadata: VarMetadataNode
    value: Expression

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def type_name(self) -> str:
        return self.metadata.type_name

    @property
    def value_type(self) -> str:
        return self.metadata.type_name

    def snapshot(self) -> 'VariableNode':
        """The binding as it is now; later rebinding of ``value`` does not reach the copy."""
        return VariableNode(self.metadata, self.value)

    def children(self) -> List[Expression]:
        return [self.value]


# ============================================================================
# Statements
# ============================================================================

@dataclass
class LetNode(ASTNode):
    name: str
    type_name: str
    value: Expression

    def children(self) -> List[Expression]:
        return [self.value]


@dataclass
class AssignNode(ASTNode):
    target: VariableNode
    new_value: Expression

    def children(self) -> List[Expression]:
        return [self.new_value]


@dataclass
class ReturnNode(ASTNode):
    value: Optional[Expression] = None

    def children(self) -> List[Expression]:
        return [self.value] if self.value is not None else []


@dataclass
class IfNode(ASTNode):
    condition: Expression
    statements: List[Expression]

    def children(self) -> List[Expression]:
        return [self.condition] + self.statements


@dataclass
class WhileNode(ASTNode):
    condition: Expression
    statements: List[Expression]

    def children(self) -> List[Expression]:
        return [self.condition] + self.statements


@dataclass
class RangeNode(ASTNode):
    start: Expression
    end: Expression

    @property
    def value_type(self) -> str:
        return "range"

    def children(self) -> List[Expression]:
        return [self.start, self.end]


@dataclass
class ForNode(ASTNode):
    """The counter only exists while the loop body is being parsed."""
    counter: VariableNode
    range: Expression
    statements: List[Expression]

    def children(self) -> List[Expression]:
        return [self.range] + self.statements


# ============================================================================
# Procedures
# ============================================================================

@dataclass
class ProcDefNode(ASTNode):
    name: str
    return_type: Optional[str]
    args: List[VarMetadataNode]
    statements: List[Expression]

    def children(self) -> List[Expression]:
        return list(self.statements)


@dataclass
class FunCallNode(ASTNode):
    """A call; args are paired positionally with proc_def.args."""
    proc_def: ProcDefNode
    args: List[VariableNode]

    @property
    def value_type(self) -> str:
        return self.proc_def.return_type or "none"

    def children(self) -> List[Expression]:
        return [arg.value for arg in self.args]


# ============================================================================
# Structs and impl blocks
# ============================================================================

@dataclass
class StructDefNode(ASTNode):
    type_name: str
    fields: List[VarMetadataNode]
    _field_index: Dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        self._field_index = {}
        for index, metadata in enumerate(self.fields):
            # first declaration of a duplicated field name wins
            self._field_index.setdefault(metadata.name, index)

    def field_index(self, name: str) -> Optional[int]:
        return self._field_index.get(name)

    def field_names(self) -> List[str]:
        return [metadata.name for metadata in self.fields]


@dataclass
class StructInstanceNode(ASTNode):
    """Field bindings in the same order as struct_def.fields."""
    struct_def: StructDefNode
    fields: List[VariableNode]

    @property
    def value_type(self) -> str:
        return self.struct_def.type_name

    def field(self, name: str) -> Optional[VariableNode]:
        index = self.struct_def.field_index(name)
        if index is None or index >= len(self.fields):
            return None
        return self.fields[index]

    def with_field(self, name: str, value: Expression) -> Optional['StructInstanceNode']:
        """
        Copy of this instance with one field rebound.

        Instances are never changed in place, so every node that already
        holds this instance keeps the field values it was built with.

        Returns:
            The new instance, or None if the struct has no such field
        """
        index = self.struct_def.field_index(name)
        if index is None or index >= len(self.fields):
            return None

        fields = list(self.fields)
        fields[index] = VariableNode(fields[index].metadata, value)
        return StructInstanceNode(self.struct_def, fields)

    def children(self) -> List[Expression]:
        return [binding.value for binding in self.fields]


@dataclass
class ImplNode(ASTNode):
    struct_def: StructDefNode
    procedures: List[Expression]

    @property
    def struct_name(self) -> str:
        return self.struct_def.type_name

    def find_procedure(self, name: str) -> Optional[ProcDefNode]:
        for procedure in self.procedures:
            if procedure.node.name == name:
                return procedure.node
        return None

    def children(self) -> List[Expression]:
        return list(self.procedures)


@dataclass
class ImplFunCallNode(ASTNode):
    impl_node: ImplNode
    fun_call: FunCallNode

    @property
    def value_type(self) -> str:
        return self.fun_call.value_type

    def children(self) -> List[Expression]:
        return self.fun_call.children()


@dataclass
class FieldAssignNode(ASTNode):
    struct_instance: VariableNode
    field: VariableNode
    new_value: Expression

    @property
    def value_type(self) -> str:
        return self.field.type_name

    def children(self) -> List[Expression]:
        return [self.new_value]


@dataclass
class FieldAccessNode(ASTNode):
    struct_instance: VariableNode
    field: VariableNode

    @property
    def value_type(self) -> str:
        return self.field.type_name


# ============================================================================
# Operators
# ============================================================================

@dataclass
class BinaryOpNode(ASTNode):
    """
    lhs <op> rhs. Chains are folded flat, left to right, so the lhs of a
    chain is itself a BinaryOpNode: ``1 + 2 * 3`` is ``(1 + 2) * 3``.
    """
    lhs: Expression
    op: BinaryOp
    rhs: Expression

    @property
    def value_type(self) -> str:
        if self.op.is_boolean:
            return "bool"
        return self.lhs.value_type

    def children(self) -> List[Expression]:
        return [self.lhs, self.rhs]


Program = List[Expression]
