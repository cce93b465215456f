"""
MetaScript Parser - single-pass recursive descent with inline resolution.

The parser pulls tokens from the lexer one at a time, dispatches on the
leading token of each statement and resolves every identifier against the
symbol tables as soon as it is read. The AST it returns is already resolved:
calls point at their procedure definitions, struct literals at their struct
definitions, and every node knows the type name of the value it produces.

Binary operators are folded flat and left to right with no precedence
table, so ``1 + 2 * 3`` parses as ``(1 + 2) * 3``.

Author: xwest
"""

import os
from typing import List, Optional, Set

from ..lexer.lexer import Lexer
from ..lexer.tokens import Token, TokenType, LiteralType, Position, literal_type_from_name
from ..lexer.errors import DiagnosticReporter, LexerError, ErrorRecovery, create_invalid_character_error
from ..analyzer.symbol_table import SymbolKind, SymbolTables
from ..analyzer.errors import (
    SemanticError, create_unresolved_identifier_error, create_type_mismatch_diagnostic,
    create_redeclaration_warning, create_non_boolean_condition_error,
    create_undeclared_struct_error, create_argument_count_error, create_missing_impl_error,
    create_unknown_method_error, create_not_a_struct_error, create_unknown_field_error,
    create_field_order_error, create_missing_fields_error
)
from .ast_nodes import *
from .ast_printer import write_ast_dump
from .errors import (
    ParseError, SyntaxErrorRecovery, create_unexpected_token_error, create_unexpected_eof_error,
    create_stray_token_error, create_invalid_expression_error
)


# Conventional file name for the AST debug dump
DEFAULT_DUMP_PATH = "ast.dat"

# Values procedure parameters start with before any call binds them
DEFAULT_VALUES = {
    LiteralType.CHAR: "",
    LiteralType.BOOL: "false",
    LiteralType.NUMBER: "0",
    LiteralType.FLOAT: "0.0",
    LiteralType.STRING: "",
}


class Parser:
    """
    MetaScript parser and resolver.

    Owns the symbol tables for one parse. Malformed statements are reported
    through the DiagnosticReporter and skipped; parse_program() always
    returns the statements that did parse.
    """

    def __init__(self, lexer: Lexer, reporter: Optional[DiagnosticReporter] = None,
                 dump_path: Optional[str] = None):
        """
        Initialize the parser.

        Args:
            lexer: Token source
            reporter: Receives every diagnostic (a printing reporter by default)
            dump_path: If set, the textual AST dump is written there after parsing
        """
        self.lexer = lexer
        self.reporter = reporter if reporter is not None else DiagnosticReporter()
        self.dump_path = dump_path
        self.tables = SymbolTables()
        self.program: Program = []

        self._lookahead: Optional[Token] = None
        self._has_lookahead = False
        self._previous: Optional[Token] = None
        self._eof_reported = False
        self._brace_depth = 0
        # blocks whose closing brace a failed statement already consumed
        self._closed_blocks = 0

    @classmethod
    def from_file(cls, path: str, reporter: Optional[DiagnosticReporter] = None,
                  dump_path: Optional[str] = None) -> 'Parser':
        """
        Create a parser over a source file.

        Raises:
            IOError: If file cannot be read
        """
        with open(path, 'r', encoding='utf-8') as f:
            source = f.read()

        return cls(Lexer(source, os.path.basename(path)), reporter, dump_path)

    @property
    def diagnostics(self):
        return self.reporter.diagnostics

    def parse_program(self) -> Program:
        """
        Parse the whole token stream.

        Returns:
            The top-level expressions in source order
        """
        while self._peek() is not None:
            expression = self._parse_statement()
            if expression is not None:
                self.program.append(expression)

        if self.dump_path:
            write_ast_dump(self.program, self.dump_path)

        return list(self.program)

    # ========================================================================
    # Statements
    # ========================================================================

    def _parse_statement(self) -> Optional[Expression]:
        """
        Parse one statement, or return None if it was malformed or empty.

        This is the only place syntax and resolution errors are caught: the
        diagnostic is reported and the token stream is resynchronized at the
        next statement boundary. If the failed statement ran past the '}' of
        the block it was in, that block is ended instead.
        """
        if self._match(TokenType.SEMICOLON):
            return None

        depth = self._brace_depth

        try:
            return self._dispatch(self._advance())
        except (LexerError, ParseError, SemanticError) as error:
            self._report_error(error)
            if self._brace_depth < depth:
                self._closed_blocks = depth - self._brace_depth
            else:
                self._synchronize(self._brace_depth - depth)
            return None

    def _dispatch(self, token: Token) -> Expression:
        handlers = {
            TokenType.LET: self._parse_let_statement,
            TokenType.PROC: self._parse_procedure_def,
            TokenType.STRUCT: self._parse_struct_def,
            TokenType.IMPL: self._parse_impl_block,
            TokenType.IF: self._parse_if_statement,
            TokenType.WHILE: self._parse_while_statement,
            TokenType.FOR: self._parse_for_loop,
            TokenType.RETURN: self._parse_return_statement,
        }

        handler = handlers.get(token.type)
        if handler is not None:
            return handler(token)

        if token.type in (TokenType.LITERAL, TokenType.IDENTIFIER, TokenType.NOT,
                          TokenType.MINUS, TokenType.INVALID):
            return self._parse_expression(token)

        raise create_stray_token_error(token)

    def _parse_block(self, procedure_body: bool = False) -> List[Expression]:
        """
        Parse ``{ statement* }``.

        In a procedure body a bare ``return`` ends the body: everything up to
        the matching ``}`` is skipped.
        """
        self._consume(TokenType.LEFT_BRACE)
        statements = []

        while True:
            token = self._peek()
            if token is None:
                raise create_unexpected_eof_error(TokenType.RIGHT_BRACE, self._end_position())
            if token.type == TokenType.RIGHT_BRACE:
                self._advance()
                return statements

            statement = self._parse_statement()
            if statement is not None:
                statements.append(statement)

            if self._closed_blocks:
                self._closed_blocks -= 1
                return statements
            if statement is None:
                continue

            if (procedure_body and statement.kind == ExpressionKind.RETURN_STATEMENT
                    and statement.node.value is None):
                self._skip_to_block_end()
                return statements

    def _parse_let_statement(self, keyword: Token) -> Expression:
        """let name [: type] = value"""
        name = self._consume(TokenType.IDENTIFIER)

        type_hint = None
        if self._match(TokenType.COLON):
            type_hint = self._consume(TokenType.IDENTIFIER).lexeme

        self._consume(TokenType.ASSIGN)

        first = self._advance()
        value = self._parse_expression(first)
        inferred = value.value_type

        if type_hint is not None and type_hint != inferred:
            self.reporter.report(create_type_mismatch_diagnostic(type_hint, inferred, first.position))

        type_name = type_hint if type_hint is not None else inferred

        variable = VariableNode(VarMetadataNode(name.lexeme, type_name), self._binding_value(value))
        self.tables.variables.declare(variable)

        return Expression(ExpressionKind.LET_STATEMENT,
                          LetNode(name.lexeme, type_name, value), keyword.position)

    def _parse_return_statement(self, keyword: Token) -> Expression:
        token = self._peek()
        if token is None or token.type in (TokenType.SEMICOLON, TokenType.RIGHT_BRACE):
            return Expression(ExpressionKind.RETURN_STATEMENT, ReturnNode(), keyword.position)

        value = self._parse_expression(self._advance())
        return Expression(ExpressionKind.RETURN_STATEMENT, ReturnNode(value), keyword.position)

    def _parse_if_statement(self, keyword: Token) -> Expression:
        condition = self._parse_condition()
        statements = self._parse_block()

        return Expression(ExpressionKind.IF_STATEMENT, IfNode(condition, statements), keyword.position)

    def _parse_while_statement(self, keyword: Token) -> Expression:
        condition = self._parse_condition()
        statements = self._parse_block()

        return Expression(ExpressionKind.WHILE_STATEMENT, WhileNode(condition, statements), keyword.position)

    def _parse_for_loop(self, keyword: Token) -> Expression:
        """for counter in start..end { ... }"""
        counter_name = self._consume(TokenType.IDENTIFIER)
        self._consume(TokenType.IN)

        start = self._parse_expression(self._advance())
        self._consume(TokenType.RANGE)
        end = self._parse_expression(self._advance())

        range_expr = Expression(ExpressionKind.RANGE, RangeNode(start, end), start.position)
        counter = VariableNode(VarMetadataNode(counter_name.lexeme, "i32"), start)

        with self.tables.variables.scoped([counter]):
            statements = self._parse_block()

        return Expression(ExpressionKind.FOR_LOOP, ForNode(counter, range_expr, statements), keyword.position)

    def _parse_condition(self) -> Expression:
        """
        Parse an if/while condition and check that it is boolean. Binary
        operations are trusted without looking at their operands.
        """
        first = self._advance()
        condition = self._parse_expression(first)

        if condition.kind != ExpressionKind.BINARY_OP and condition.value_type != "bool":
            raise create_non_boolean_condition_error(condition.value_type, first.position)

        return condition

    # ========================================================================
    # Declarations
    # ========================================================================

    def _parse_procedure_def(self, keyword: Token, register: bool = True) -> Expression:
        """
        proc name(arg: type, ...) [: returnType] { ... }

        Arguments are visible as variables only while the body is parsed.
        The procedure itself is registered after its body, so it cannot call
        itself.
        """
        name = self._consume(TokenType.IDENTIFIER)
        self._consume(TokenType.LEFT_PAREN)
        params = self._parse_parameters()

        return_type = None
        if self._match(TokenType.COLON):
            return_type = self._consume(TokenType.IDENTIFIER).lexeme

        arguments = [
            VariableNode(VarMetadataNode(param.name, param.type_name),
                         self._default_value(param.type_name, name.position))
            for param in params
        ]

        with self.tables.variables.scoped(arguments):
            statements = self._parse_block(procedure_body=True)

        proc_def = ProcDefNode(name.lexeme, return_type, params, statements)

        if register and self.tables.procedures.declare(proc_def):
            self.reporter.report(create_redeclaration_warning("procedure", name.lexeme, name.position))

        return Expression(ExpressionKind.PROC_DEF, proc_def, keyword.position)

    def _parse_parameters(self) -> List[VarMetadataNode]:
        """Parse ``name: type, ...`` up to and including the closing ')'."""
        params = []

        if not self._check(TokenType.RIGHT_PAREN):
            while True:
                params.append(self._parse_typed_name())
                if not self._match(TokenType.COMMA):
                    break

        self._consume(TokenType.RIGHT_PAREN)
        return params

    def _parse_typed_name(self) -> VarMetadataNode:
        name = self._consume(TokenType.IDENTIFIER)
        self._consume(TokenType.COLON)
        type_name = self._consume(TokenType.IDENTIFIER)

        return VarMetadataNode(name.lexeme, type_name.lexeme)

    def _parse_struct_def(self, keyword: Token) -> Expression:
        """struct Name { field: type, ... }"""
        name = self._consume(TokenType.IDENTIFIER)
        self._consume(TokenType.LEFT_BRACE)

        fields = []
        while not self._check(TokenType.RIGHT_BRACE):
            fields.append(self._parse_typed_name())
            if not self._match(TokenType.COMMA):
                break

        self._consume(TokenType.RIGHT_BRACE)

        struct_def = StructDefNode(name.lexeme, fields)

        if self.tables.structs.declare(struct_def):
            self.reporter.report(create_redeclaration_warning("struct", name.lexeme, name.position))

        return Expression(ExpressionKind.STRUCT_DEF, struct_def, keyword.position)

    def _parse_impl_block(self, keyword: Token) -> Expression:
        """
        impl Name { proc ... }

        The block is registered before its procedures are parsed, so a
        procedure can call the ones declared above it through ``Name::proc``.
        """
        name = self._consume(TokenType.IDENTIFIER)

        struct_def = self.tables.structs.lookup(name.lexeme)
        if struct_def is None:
            raise create_undeclared_struct_error(name.lexeme, name.position)

        self._consume(TokenType.LEFT_BRACE)

        impl_node = ImplNode(struct_def, [])
        if self.tables.impls.declare(impl_node):
            self.reporter.report(create_redeclaration_warning("impl", name.lexeme, name.position))

        while not self._match(TokenType.RIGHT_BRACE):
            proc_keyword = self._consume(TokenType.PROC)
            impl_node.procedures.append(self._parse_procedure_def(proc_keyword, register=False))

        return Expression(ExpressionKind.IMPL, impl_node, keyword.position)

    # ========================================================================
    # Expressions
    # ========================================================================

    def _parse_expression(self, token: Token) -> Expression:
        """Parse an expression whose first token has already been consumed."""
        if token.type == TokenType.LITERAL:
            return self._fold_binary_ops(self._literal(token))

        if token.type == TokenType.IDENTIFIER:
            return self._parse_identifier(token)

        if token.type == TokenType.NOT:
            operand = self._parse_expression(self._advance())
            none_literal = self._literal(Token(TokenType.LITERAL, "", token.position, LiteralType.NONE))
            return Expression(ExpressionKind.BINARY_OP,
                              BinaryOpNode(operand, BinaryOp.NEG, none_literal), token.position)

        if token.type == TokenType.MINUS:
            return self._fold_binary_ops(self._negative_literal(token))

        if token.type == TokenType.INVALID:
            raise create_invalid_character_error(token.lexeme, token.position)

        raise create_invalid_expression_error(token, "expression")

    def _parse_identifier(self, token: Token) -> Expression:
        """
        Resolve an identifier: variables first, then procedures, then structs.
        """
        resolved = self.tables.resolve(token.lexeme)

        if resolved is None:
            suggestions = ErrorRecovery.suggest_similar_names(token.lexeme, self.tables.visible_names())
            raise create_unresolved_identifier_error(token.lexeme, token.position, suggestions)

        kind, entry = resolved

        if kind == SymbolKind.VARIABLE:
            return self._parse_variable_use(token, entry)
        if kind == SymbolKind.PROCEDURE:
            fun_call = self._parse_call(entry, token)
            return self._fold_binary_ops(Expression(ExpressionKind.FUN_CALL, fun_call, token.position))
        return self._parse_struct_use(token, entry)

    def _parse_variable_use(self, token: Token, variable: VariableNode) -> Expression:
        if self._match(TokenType.ASSIGN):
            new_value = self._parse_expression(self._advance())
            return Expression(ExpressionKind.ASSIGN_STATEMENT,
                              AssignNode(variable.snapshot(), new_value), token.position)

        if self._match(TokenType.DOT):
            return self._parse_field(token, variable)

        reference = Expression(ExpressionKind.VARIABLE, variable.snapshot(), token.position)
        return self._fold_binary_ops(reference)

    def _parse_field(self, token: Token, variable: VariableNode) -> Expression:
        """
        ``var.field`` or ``var.field = value``.

        An assignment rebinds the variable in the table to a copy of its
        instance with the field replaced, so later accesses see the new value
        while nodes built earlier keep the old one.
        """
        field_name = self._consume(TokenType.IDENTIFIER)

        instance = self._struct_instance_of(variable)
        if instance is None:
            raise create_not_a_struct_error(variable.name, variable.type_name, token.position)

        binding = instance.field(field_name.lexeme)
        if binding is None:
            suggestions = ErrorRecovery.suggest_similar_names(field_name.lexeme,
                                                              instance.struct_def.field_names())
            raise create_unknown_field_error(instance.struct_def.type_name, field_name.lexeme,
                                             field_name.position, suggestions)

        if self._match(TokenType.ASSIGN):
            new_value = self._parse_expression(self._advance())
            updated = instance.with_field(field_name.lexeme, new_value)
            variable.value = Expression(ExpressionKind.STRUCT_INSTANCE, updated, variable.value.position)

            node = FieldAssignNode(variable.snapshot(), updated.field(field_name.lexeme), new_value)
            return Expression(ExpressionKind.FIELD_ASSIGN, node, token.position)

        node = FieldAccessNode(variable.snapshot(), binding)
        return self._fold_binary_ops(Expression(ExpressionKind.FIELD_ACCESS, node, token.position))

    def _parse_struct_use(self, token: Token, struct_def: StructDefNode) -> Expression:
        """``Type::proc(...)`` or a ``Type { field: value, ... }`` literal."""
        if self._match(TokenType.DOUBLE_COLON):
            method = self._consume(TokenType.IDENTIFIER)

            impl_node = self.tables.impls.lookup(struct_def.type_name)
            if impl_node is None:
                raise create_missing_impl_error(struct_def.type_name, token.position)

            proc_def = impl_node.find_procedure(method.lexeme)
            if proc_def is None:
                raise create_unknown_method_error(struct_def.type_name, method.lexeme, method.position)

            fun_call = self._parse_call(proc_def, method)
            call = Expression(ExpressionKind.IMPL_FUN_CALL, ImplFunCallNode(impl_node, fun_call), token.position)
            return self._fold_binary_ops(call)

        return self._parse_struct_instance(token, struct_def)

    def _parse_struct_instance(self, token: Token, struct_def: StructDefNode) -> Expression:
        """Fields are bound positionally; each written name must match its declared slot."""
        self._consume(TokenType.LEFT_BRACE)

        fields = []
        while not self._check(TokenType.RIGHT_BRACE):
            name = self._consume(TokenType.IDENTIFIER)

            if len(fields) >= len(struct_def.fields):
                raise create_unknown_field_error(struct_def.type_name, name.lexeme, name.position)

            declared = struct_def.fields[len(fields)]
            if name.lexeme != declared.name:
                raise create_field_order_error(declared.name, name.lexeme, name.position)

            self._consume(TokenType.COLON)
            value = self._parse_expression(self._advance())
            fields.append(VariableNode(VarMetadataNode(declared.name, declared.type_name), value))

            if not self._match(TokenType.COMMA):
                break

        self._consume(TokenType.RIGHT_BRACE)

        if len(fields) < len(struct_def.fields):
            missing = struct_def.field_names()[len(fields):]
            raise create_missing_fields_error(struct_def.type_name, missing, token.position)

        return Expression(ExpressionKind.STRUCT_INSTANCE, StructInstanceNode(struct_def, fields), token.position)

    def _parse_call(self, proc_def: ProcDefNode, name: Token) -> FunCallNode:
        """Parse ``( arg, ... )`` and bind the arguments to the declared parameters."""
        self._consume(TokenType.LEFT_PAREN)

        values = []
        if not self._check(TokenType.RIGHT_PAREN):
            while True:
                values.append(self._parse_expression(self._advance()))
                if not self._match(TokenType.COMMA):
                    break

        self._consume(TokenType.RIGHT_PAREN)

        if len(values) != len(proc_def.args):
            raise create_argument_count_error(proc_def.name, len(proc_def.args), len(values), name.position)

        args = [
            VariableNode(VarMetadataNode(param.name, param.type_name), value)
            for param, value in zip(proc_def.args, values)
        ]
        return FunCallNode(proc_def, args)

    def _fold_binary_ops(self, lhs: Expression) -> Expression:
        """
        Fold trailing operators left to right. The right operand is the next
        literal or variable; ``++``/``--`` take an implicit literal 1.
        """
        while True:
            token = self._peek()
            if token is None or token.type not in FOLDABLE_OPERATORS:
                return lhs

            self._advance()
            op = BinaryOp.from_token_type(token.type)

            if op.is_step:
                rhs = self._literal(Token(TokenType.LITERAL, "1", token.position, LiteralType.NUMBER))
            else:
                rhs = self._parse_operand()

            lhs = Expression(ExpressionKind.BINARY_OP, BinaryOpNode(lhs, op, rhs), lhs.position)

    def _parse_operand(self) -> Expression:
        token = self._advance()

        if token.type == TokenType.LITERAL:
            return self._literal(token)

        if token.type == TokenType.MINUS:
            return self._negative_literal(token)

        if token.type == TokenType.IDENTIFIER:
            variable = self.tables.variables.lookup(token.lexeme)
            if variable is None:
                suggestions = ErrorRecovery.suggest_similar_names(token.lexeme, self.tables.variables.names())
                raise create_unresolved_identifier_error(token.lexeme, token.position, suggestions)
            return Expression(ExpressionKind.VARIABLE, variable.snapshot(), token.position)

        if token.type == TokenType.INVALID:
            raise create_invalid_character_error(token.lexeme, token.position)

        raise create_invalid_expression_error(token, "literal or variable")

    def _negative_literal(self, minus: Token) -> Expression:
        token = self._advance()

        if token.type != TokenType.LITERAL or token.literal_type not in (LiteralType.NUMBER, LiteralType.FLOAT):
            raise create_invalid_expression_error(token, "numeric literal after '-'")

        negative = Token(TokenType.LITERAL, "-" + token.lexeme, minus.position, token.literal_type)
        return self._literal(negative)

    # ========================================================================
    # Helpers
    # ========================================================================

    def _literal(self, token: Token) -> Expression:
        return Expression(ExpressionKind.LITERAL, LiteralNode(token, token.literal_type), token.position)

    def _default_value(self, type_name: str, position: Position,
                       seen: Optional[Set[str]] = None) -> Expression:
        """
        Default value for a parameter of the given type. Struct types get an
        instance whose fields hold their own defaults.
        """
        literal_type = literal_type_from_name(type_name)
        if literal_type in DEFAULT_VALUES:
            token = Token(TokenType.LITERAL, DEFAULT_VALUES[literal_type], position, literal_type)
            return self._literal(token)

        seen = seen or set()
        struct_def = self.tables.structs.lookup(type_name)

        if struct_def is None or type_name in seen:
            return self._literal(Token(TokenType.LITERAL, "", position, LiteralType.NONE))

        seen = seen | {type_name}
        fields = [
            VariableNode(VarMetadataNode(field.name, field.type_name),
                         self._default_value(field.type_name, position, seen))
            for field in struct_def.fields
        ]
        return Expression(ExpressionKind.STRUCT_INSTANCE, StructInstanceNode(struct_def, fields), position)

    def _struct_instance_of(self, variable: VariableNode) -> Optional[StructInstanceNode]:
        """Follow variable-to-variable bindings down to a struct instance."""
        value = variable.value
        while value.kind == ExpressionKind.VARIABLE:
            value = value.node.value

        if value.kind == ExpressionKind.STRUCT_INSTANCE:
            return value.node
        return None

    def _binding_value(self, value: Expression) -> Expression:
        """
        Value a new variable is bound to. A reference to another variable is
        replaced by that variable's current value, so bindings never chain.
        """
        if value.kind == ExpressionKind.VARIABLE:
            return value.node.value
        return value

    def _report_error(self, error):
        # an unterminated construct unwinds through every enclosing block
        if error.diagnostic.code == "P010":
            if self._eof_reported:
                return
            self._eof_reported = True
        self.reporter.report(error.diagnostic)

    def _synchronize(self, depth: int = 0):
        """
        Skip to the next statement boundary: just past a ';' at the current
        nesting depth, or just before a statement keyword or the '}' that
        closes the enclosing block. Braces opened while skipping, and the
        ``depth`` braces the failed statement had already opened, are
        skipped as a whole.
        """
        while True:
            token = self._peek()
            if token is None:
                return

            if depth == 0 and token.type in SyntaxErrorRecovery.STATEMENT_BOUNDARIES:
                return

            if token.type == TokenType.RIGHT_BRACE:
                if depth == 0:
                    return
                self._advance()
                depth -= 1
                if depth == 0:
                    return
                continue

            self._advance()

            if token.type == TokenType.LEFT_BRACE:
                depth += 1
            elif token.type == TokenType.SEMICOLON and depth == 0:
                return

    def _skip_to_block_end(self):
        """Consume everything up to and including the '}' closing the current block."""
        depth = 0

        while True:
            token = self._advance()
            if token.type == TokenType.LEFT_BRACE:
                depth += 1
            elif token.type == TokenType.RIGHT_BRACE:
                if depth == 0:
                    return
                depth -= 1

    # ========================================================================
    # Token access
    # ========================================================================

    def _peek(self) -> Optional[Token]:
        """Next token without consuming it, or None when the stream is exhausted."""
        if not self._has_lookahead:
            self._lookahead = self.lexer.next_token()
            self._has_lookahead = True
        return self._lookahead

    def _advance(self) -> Token:
        """Consume and return the next token."""
        token = self._peek()
        if token is None:
            raise create_unexpected_eof_error("more input", self._end_position())

        self._has_lookahead = False
        self._lookahead = None
        self._previous = token

        if token.type == TokenType.LEFT_BRACE:
            self._brace_depth += 1
        elif token.type == TokenType.RIGHT_BRACE:
            self._brace_depth = max(0, self._brace_depth - 1)

        return token

    def _check(self, token_type: TokenType) -> bool:
        token = self._peek()
        return token is not None and token.type == token_type

    def _match(self, token_type: TokenType) -> bool:
        """Consume the next token if it has the given type."""
        if self._check(token_type):
            self._advance()
            return True
        return False

    def _consume(self, token_type: TokenType) -> Token:
        """Consume a token of the expected type or raise without consuming."""
        token = self._peek()
        if token is None:
            raise create_unexpected_eof_error(token_type, self._end_position())
        if token.type != token_type:
            raise create_unexpected_token_error(token_type, token)
        return self._advance()

    def _end_position(self) -> Position:
        if self._previous is not None:
            return self._previous.position
        return self.lexer.position()


def parse_string(source: str, filename: str = "<string>",
                 reporter: Optional[DiagnosticReporter] = None,
                 dump_path: Optional[str] = None) -> Program:
    """
    Convenience function to parse a source string.

    Args:
        source: Source code string
        filename: Filename for diagnostics

    Returns:
        The top-level expressions
    """
    parser = Parser(Lexer(source, filename), reporter, dump_path)
    return parser.parse_program()


def parse_file(filepath: str, reporter: Optional[DiagnosticReporter] = None,
               dump_path: Optional[str] = None) -> Program:
    """
    Convenience function to parse a source file.

    Raises:
        IOError: If file cannot be read
    """
    return Parser.from_file(filepath, reporter, dump_path).parse_program()
