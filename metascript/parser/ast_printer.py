"""
Human-readable rendering of MetaScript ASTs.

Used for the debug dump written after a parse. The output is meant for
reading, it is not a format that can be parsed back.

Author: xwest
"""

from typing import List

from .ast_nodes import ASTVisitor, Expression, VariableNode, VarMetadataNode


INDENT = "    "


class ASTPrinter(ASTVisitor):
    """Renders one Expression per call to ``print``."""

    def __init__(self):
        self.depth = 0

    def print(self, expression: Expression) -> str:
        self.depth = 0
        return self.visit(expression)

    def generic_visit(self, expression: Expression) -> str:
        return f"{expression.kind.name.title()}"

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _block(self, statements: List[Expression]) -> str:
        if not statements:
            return "[]"

        self.depth += 1
        lines = [INDENT * self.depth + self.visit(statement) for statement in statements]
        self.depth -= 1

        return "[\n" + "\n".join(lines) + "\n" + INDENT * self.depth + "]"

    def _binding(self, variable: VariableNode) -> str:
        return f"{variable.name}: {variable.type_name} = {self.visit(variable.value)}"

    @staticmethod
    def _metadata(metadata: VarMetadataNode) -> str:
        return f"{metadata.name}: {metadata.type_name}"

    # ------------------------------------------------------------------
    # Visitors
    # ------------------------------------------------------------------

    def visit_literal(self, expression: Expression) -> str:
        node = expression.node
        return f"Literal ('{node.value}', {node.literal_type.name.title()})"

    def visit_variable(self, expression: Expression) -> str:
        node = expression.node
        return f"Variable ({self._binding(node)})"

    def visit_let_statement(self, expression: Expression) -> str:
        node = expression.node
        return f"Let ({node.name}: {node.type_name} = {self.visit(node.value)})"

    def visit_assign_statement(self, expression: Expression) -> str:
        node = expression.node
        return f"Assign ({node.target.name} = {self.visit(node.new_value)})"

    def visit_return_statement(self, expression: Expression) -> str:
        node = expression.node
        if node.value is None:
            return "Return"
        return f"Return ({self.visit(node.value)})"

    def visit_binary_op(self, expression: Expression) -> str:
        node = expression.node
        return f"BinaryOp ({self.visit(node.lhs)}, {node.op.name.title()}, {self.visit(node.rhs)})"

    def visit_if_statement(self, expression: Expression) -> str:
        node = expression.node
        return f"If ({self.visit(node.condition)}) {self._block(node.statements)}"

    def visit_while_statement(self, expression: Expression) -> str:
        node = expression.node
        return f"While ({self.visit(node.condition)}) {self._block(node.statements)}"

    def visit_range(self, expression: Expression) -> str:
        node = expression.node
        return f"Range ({self.visit(node.start)}..{self.visit(node.end)})"

    def visit_for_loop(self, expression: Expression) -> str:
        node = expression.node
        return f"For ({node.counter.name} in {self.visit(node.range)}) {self._block(node.statements)}"

    def visit_proc_def(self, expression: Expression) -> str:
        node = expression.node
        args = ", ".join(self._metadata(arg) for arg in node.args)
        return_type = node.return_type or "None"
        return f"ProcDef {node.name}({args}): {return_type} {self._block(node.statements)}"

    def visit_fun_call(self, expression: Expression) -> str:
        node = expression.node
        args = ", ".join(self._binding(arg) for arg in node.args)
        return f"FunCall {node.proc_def.name}({args})"

    def visit_struct_def(self, expression: Expression) -> str:
        node = expression.node
        fields = ", ".join(self._metadata(field) for field in node.fields)
        return f"StructDef {node.type_name} {{ {fields} }}"

    def visit_struct_instance(self, expression: Expression) -> str:
        node = expression.node
        fields = ", ".join(self._binding(field) for field in node.fields)
        return f"StructInstance {node.struct_def.type_name} {{ {fields} }}"

    def visit_impl(self, expression: Expression) -> str:
        node = expression.node
        return f"Impl {node.struct_name} {self._block(node.procedures)}"

    def visit_impl_fun_call(self, expression: Expression) -> str:
        node = expression.node
        args = ", ".join(self._binding(arg) for arg in node.fun_call.args)
        return f"ImplFunCall {node.impl_node.struct_name}::{node.fun_call.proc_def.name}({args})"

    def visit_field_assign(self, expression: Expression) -> str:
        node = expression.node
        return f"FieldAssign ({node.struct_instance.name}.{node.field.name} = {self.visit(node.new_value)})"

    def visit_field_access(self, expression: Expression) -> str:
        node = expression.node
        return f"FieldAccess ({node.struct_instance.name}.{node.field.name} = {self.visit(node.field.value)})"


def render(expression: Expression) -> str:
    """Render a single expression."""
    return ASTPrinter().print(expression)


def render_program(program: List[Expression]) -> str:
    """Newline-joined rendering of every top-level expression."""
    printer = ASTPrinter()
    return "".join(printer.print(expression) + "\n" for expression in program)


def write_ast_dump(program: List[Expression], path: str):
    """
    Write the debug dump of a program.

    Raises:
        IOError: If the file cannot be written
    """
    with open(path, 'w', encoding='utf-8') as f:
        f.write(render_program(program))
