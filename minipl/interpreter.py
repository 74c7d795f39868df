"""Tree-walking interpreter for Mini-PL.

The interpreter executes a Program that has already passed the type
checker, using the symbol table the checker built as its variable store.
Expressions are evaluated recursively and return their Python value
directly. Because types were verified statically, the only errors raised
here are genuine run-time failures: division by zero, malformed `read`
input and failed assertions.

Console access goes through an injected `BasicIO`, so programs can be
run against in-memory streams.
"""

from __future__ import annotations

from typing import Any, Optional

from .ast import (
    Node, Program, Statement, IntegerLiteral, StringLiteral,
    VariableReference, VariableDeclaration, ArithmeticOp, LogicalOp,
    UnaryNot, Assignment, ExpressionStatement, ReadStatement, Loop,
)
from .basic_io import BasicIO
from .debug import DebugLog
from .errors import AssertionFailure, MiniPLRuntimeError, ReadError
from .parser import parse_program
from .symbol_table import Symbol, SymbolTable
from .type_checker import TypeChecker
from .types import (
    TypeSpec, check_value, divide_int32, parse_int32, to_string, wrap_int32,
)


class Interpreter:
    """Executes a type-checked Mini-PL AST."""
    def __init__(self, symbol_table: SymbolTable, io: Optional[BasicIO] = None,
                 debug_level: int = 0, debug_file: Optional[str] = 'debug.txt',
                 log: Optional[DebugLog] = None):
        self.symbol_table = symbol_table
        self.io = io if io is not None else BasicIO()
        self.log = log if log is not None else DebugLog(debug_level, debug_file)

    # Public API
    def run(self, program: Program) -> SymbolTable:
        self.log.debug('running program')
        try:
            for statement in program.statements:
                self.execute(statement)
        finally:
            self.log.close()
        return self.symbol_table

    def symbol(self, name: str) -> Symbol:
        symbol = self.symbol_table.resolve(name)
        assert symbol is not None, f'undefined variable {name} reached the interpreter'
        return symbol

    def execute(self, node: Statement) -> None:
        if self.log.enabled(3):
            self.log.debug(f"row {node.row}: {type(node).__name__}", 3)
        if isinstance(node, VariableDeclaration):
            value = self.symbol_table.initialize(self.symbol(node.name))
            self.log.debug(f"declare {node.name} : {node.type_spec} = {value!r}", 2)
            return
        if isinstance(node, Assignment):
            value = self.evaluate(node.expression)
            symbol = self.symbol(node.name)
            self.symbol_table.set(symbol, value)
            self.log.debug(f"assign {node.name} = {value!r}", 2)
            return
        if isinstance(node, Loop):
            self.execute_loop(node)
            return
        if isinstance(node, ExpressionStatement):
            value = self.evaluate(node.expression)
            if node.keyword == 'assert':
                check_value(value, TypeSpec.boolean())
                if not value:
                    self.fail_assertion(node)
                return
            self.io.write(to_string(value))
            return
        if isinstance(node, ReadStatement):
            self.execute_read(node)
            return
        raise NotImplementedError(f"execute: unexpected node type {type(node)}")

    def execute_loop(self, node: Loop) -> None:
        begin = self.evaluate(node.range.begin)
        end = self.evaluate(node.range.end)
        symbol = self.symbol(node.variable.name)
        for counter in range(begin, end + 1):
            self.symbol_table.set(symbol, counter)
            self.log.debug(f"loop {symbol.name} = {counter}", 3)
            for statement in node.body:
                self.execute(statement)

    def execute_read(self, node: ReadStatement) -> None:
        symbol = self.symbol(node.variable.name)
        word = self.io.read_word()
        if symbol.type_spec.kind == 'int':
            try:
                value = parse_int32(word)
            except ValueError:
                raise ReadError(
                    f"Invalid input \"{word}\" for integer variable {symbol.name} on row {node.row}.", node.row)
            except OverflowError:
                raise ReadError(
                    f"Integer overflow in input \"{word}\" for variable {symbol.name} on row {node.row}.", node.row)
        else:
            value = word
        self.symbol_table.set(symbol, value)
        self.log.debug(f"read {symbol.name} = {value!r}", 2)

    def fail_assertion(self, node: ExpressionStatement) -> None:
        if isinstance(node.expression, VariableReference):
            raise AssertionFailure(
                f"Assertion failed on row {node.row}: variable {node.expression.name} is false.", node.row)
        raise AssertionFailure(f"Assertion failed on row {node.row}.", node.row)

    def evaluate(self, node: Node) -> Any:
        value = self.evaluate_node(node)
        if self.log.enabled(4):
            self.log.debug(f"evaluate {type(node).__name__} on row {node.row} -> {value!r}", 4)
        return value

    def evaluate_node(self, node: Node) -> Any:
        if isinstance(node, IntegerLiteral):
            return parse_int32(node.value)
        if isinstance(node, StringLiteral):
            return node.value
        if isinstance(node, VariableReference):
            return self.symbol_table.get(self.symbol(node.name))
        if isinstance(node, ArithmeticOp):
            left = self.evaluate(node.left)
            right = self.evaluate(node.right)
            return self.apply_arithmetic(node, left, right)
        if isinstance(node, LogicalOp):
            left = self.evaluate(node.left)
            right = self.evaluate(node.right)
            if node.op == '=':
                return left == right
            if node.op == '<':
                return left < right
            if node.op == '&':
                check_value(left, TypeSpec.boolean())
                check_value(right, TypeSpec.boolean())
                return left and right
            raise NotImplementedError(f"unknown logical operator {node.op}")
        if isinstance(node, UnaryNot):
            operand = self.evaluate(node.operand)
            check_value(operand, TypeSpec.boolean())
            return not operand
        raise NotImplementedError(f"evaluate: unexpected node type {type(node)}")

    def apply_arithmetic(self, node: ArithmeticOp, a: int, b: int) -> int:
        check_value(a, TypeSpec.integer())
        check_value(b, TypeSpec.integer())
        if node.op == '+':
            return wrap_int32(a + b)
        if node.op == '-':
            return wrap_int32(a - b)
        if node.op == '*':
            return wrap_int32(a * b)
        if node.op == '/':
            if b == 0:
                raise MiniPLRuntimeError(f"Division by zero on row {node.row}.", node.row)
            return divide_int32(a, b)
        raise NotImplementedError(f"unknown arithmetic operator {node.op}")


def run_program(source: str, io: Optional[BasicIO] = None, debug_level: int = 0,
                debug_file: Optional[str] = 'debug.txt') -> SymbolTable:
    """Scan, parse, type-check and run a Mini-PL program from source text.

    Returns the symbol table holding the final variable values. Any
    `MiniPLError` raised along the way propagates to the caller.
    """
    log = DebugLog(debug_level, debug_file)
    try:
        log.debug('parsing program')
        program = parse_program(source)
        symbol_table = TypeChecker(log).check(program)
        return Interpreter(symbol_table, io, log=log).run(program)
    finally:
        log.close()
