"""Abstract Syntax Tree (AST) definitions for Mini-PL.

The parser builds a tree of these nodes once per run; the type checker
and the interpreter only read it. Every node records the source row it
started on so later passes can report errors against it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Union

from .types import TypeSpec


@dataclass(frozen=True)
class Node:
    """Base class for all AST nodes."""
    pass


@dataclass(frozen=True)
class Expression(Node):
    pass


@dataclass(frozen=True)
class Statement(Node):
    pass


@dataclass(frozen=True)
class Program(Node):
    statements: List[Statement] = field(default_factory=list)


@dataclass(frozen=True)
class IntegerLiteral(Expression):
    value: str  # raw decimal text, range-checked by the type checker
    row: int = 0


@dataclass(frozen=True)
class StringLiteral(Expression):
    value: str  # escapes already decoded
    row: int = 0


@dataclass(frozen=True)
class VariableReference(Expression):
    name: str
    row: int = 0


@dataclass(frozen=True)
class VariableDeclaration(Statement):
    name: str
    type_spec: TypeSpec
    row: int = 0


@dataclass(frozen=True)
class ArithmeticOp(Expression):
    op: str  # '+', '-', '*' or '/'
    left: Expression
    right: Expression
    row: int = 0


@dataclass(frozen=True)
class LogicalOp(Expression):
    op: str  # '=', '&' or '<'
    left: Expression
    right: Expression
    row: int = 0


@dataclass(frozen=True)
class UnaryNot(Expression):
    operand: Expression
    row: int = 0


@dataclass(frozen=True)
class Range(Node):
    begin: Expression
    end: Expression
    row: int = 0


@dataclass(frozen=True)
class Assignment(Statement):
    target: Union[VariableReference, VariableDeclaration]
    expression: Expression
    row: int = 0

    @property
    def name(self) -> str:
        return self.target.name


@dataclass(frozen=True)
class ExpressionStatement(Statement):
    keyword: str  # 'print' or 'assert'
    expression: Expression
    row: int = 0


@dataclass(frozen=True)
class ReadStatement(Statement):
    variable: VariableReference
    row: int = 0


@dataclass(frozen=True)
class Loop(Statement):
    variable: VariableReference
    range: Range
    body: List[Statement] = field(default_factory=list)
    row: int = 0
