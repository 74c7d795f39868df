"""Static type checking for Mini-PL.

The checker walks the AST once, builds the program's `SymbolTable` and
verifies the operand types of every operator and statement.

Types are tracked with a stack of type tags. Each operand (a literal or
a variable reference) pushes its type; each operator pops the number of
operands it takes, checks them and pushes its result type. Statements
pop whatever their expression left behind, so the stack is empty again
after every statement.

Mini-PL has a single global scope and a loop body may run any number of
times, so declarations are rejected anywhere inside a `for` body,
including nested loops.
"""

from __future__ import annotations

from typing import List, Optional

from .ast import (
    Node, Program, IntegerLiteral, StringLiteral, VariableReference,
    VariableDeclaration, ArithmeticOp, LogicalOp, UnaryNot, Range,
    Assignment, ExpressionStatement, ReadStatement, Loop,
)
from .debug import DebugLog
from .errors import SemanticError
from .symbol_table import Symbol, SymbolTable
from .types import parse_int32


class TypeChecker:
    def __init__(self, log: Optional[DebugLog] = None):
        self.symbol_table = SymbolTable()
        self.operand_types: List[str] = []
        self.loop_depth = 0
        self.log = log if log is not None else DebugLog()

    def check(self, program: Program) -> SymbolTable:
        """Type-check `program` and return the symbol table it declares."""
        self.log.debug('type checking program')
        for statement in program.statements:
            self.visit(statement)
            assert not self.operand_types, f'type stack not empty after statement: {self.operand_types}'
        return self.symbol_table

    def push(self, type_name: str) -> None:
        self.operand_types.append(type_name)

    def pop(self) -> str:
        assert self.operand_types, 'type stack underflow'
        return self.operand_types.pop()

    def visit(self, node: Node) -> None:
        if isinstance(node, VariableDeclaration):
            self.visit_declaration(node)
        elif isinstance(node, VariableReference):
            self.push(self.resolve(node.name, node.row).type_spec.kind)
        elif isinstance(node, IntegerLiteral):
            try:
                parse_int32(node.value)
            except (ValueError, OverflowError):
                raise SemanticError(f"Integer overflow on row {node.row}, in literal {node.value}.", node.row)
            self.push('int')
        elif isinstance(node, StringLiteral):
            self.push('string')
        elif isinstance(node, ArithmeticOp):
            self.visit(node.left)
            self.visit(node.right)
            right, left = self.pop(), self.pop()
            if left != 'int' or right != 'int':
                raise SemanticError(
                    f"Non-integer arguments to arithmetic operator \"{node.op}\" on row {node.row}.", node.row)
            self.push('int')
        elif isinstance(node, LogicalOp):
            self.visit_logical(node)
        elif isinstance(node, UnaryNot):
            self.visit(node.operand)
            if self.pop() != 'bool':
                raise SemanticError(f"Invalid argument type for unary not operator \"!\" on row {node.row}.", node.row)
            self.push('bool')
        elif isinstance(node, Range):
            self.visit(node.begin)
            self.visit(node.end)
            end, begin = self.pop(), self.pop()
            if begin != 'int' or end != 'int':
                raise SemanticError(f"Invalid argument types for range operator \"..\" on row {node.row}.", node.row)
        elif isinstance(node, Assignment):
            self.visit_assignment(node)
        elif isinstance(node, Loop):
            self.visit_loop(node)
        elif isinstance(node, ExpressionStatement):
            self.visit(node.expression)
            expr_type = self.pop()
            if node.keyword == 'assert' and expr_type != 'bool':
                raise SemanticError(
                    f"Invalid argument type \"{expr_type}\" for assert statement on row {node.row}.", node.row)
            if node.keyword == 'print' and expr_type == 'bool':
                raise SemanticError(
                    f"Invalid argument type \"{expr_type}\" for print statement on row {node.row}.", node.row)
        elif isinstance(node, ReadStatement):
            self.visit(node.variable)
            var_type = self.pop()
            if var_type == 'bool':
                raise SemanticError(
                    f"Invalid argument type \"{var_type}\" for read statement on row {node.row}.", node.row)
        else:
            raise NotImplementedError(f"visit: unexpected node type {type(node)}")

    def resolve(self, name: str, row: int) -> Symbol:
        symbol = self.symbol_table.resolve(name)
        if symbol is None:
            raise SemanticError(f"Reference to undefined identifier {name} on row {row}.", row)
        return symbol

    def visit_declaration(self, node: VariableDeclaration) -> None:
        if self.loop_depth > 0:
            raise SemanticError(
                f"Variable {node.name} cannot be declared inside a for loop body (row {node.row}).", node.row)
        if node.name in self.symbol_table:
            raise SemanticError(f"Variable {node.name} is already defined (row {node.row}).", node.row)
        self.symbol_table.define(Symbol(node.name, node.type_spec))
        self.log.debug(f"declare {node.name} : {node.type_spec}", 2)

    def visit_logical(self, node: LogicalOp) -> None:
        self.visit(node.left)
        self.visit(node.right)
        right, left = self.pop(), self.pop()
        if node.op == '&':
            if left != 'bool' or right != 'bool':
                raise SemanticError(
                    f"Non-boolean arguments to logical and operator \"&\" on row {node.row}.", node.row)
        elif left != right:
            raise SemanticError(
                f"Logical operator \"{node.op}\" cannot be applied to types \"{left}\" and \"{right}\" "
                f"on row {node.row}.", node.row)
        self.push('bool')

    def visit_assignment(self, node: Assignment) -> None:
        # the expression is checked first so `var x : int := x;` is an undefined reference
        self.visit(node.expression)
        self.visit(node.target)
        if isinstance(node.target, VariableReference):
            variable_type = self.pop()
        else:
            variable_type = self.symbol_table.resolve(node.name).type_spec.kind
        expression_type = self.pop()
        if variable_type != expression_type:
            raise SemanticError(
                f"Attempting to assign expression of type \"{expression_type}\" to variable \"{node.name}\" "
                f"of type \"{variable_type}\" on row {node.row}.", node.row)

    def visit_loop(self, node: Loop) -> None:
        self.visit(node.variable)
        if self.pop() != 'int':
            raise SemanticError(
                f"Loop variable {node.variable.name} on row {node.row} is not an int.", node.row)
        self.visit(node.range)
        self.loop_depth += 1
        try:
            for statement in node.body:
                self.visit(statement)
        finally:
            self.loop_depth -= 1


def check_program(program: Program, log: Optional[DebugLog] = None) -> SymbolTable:
    """Type-check a Program and return its symbol table."""
    return TypeChecker(log).check(program)
