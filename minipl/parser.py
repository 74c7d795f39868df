"""Recursive-descent parser for Mini-PL.

The parser pulls tokens from a `Scanner` one at a time and keeps a single
token of lookahead. It implements this grammar:

    program    := statement ';' ( statement ';' )* EOF
    statement  := "var" IDENT ':' type [ ':=' expr ]
                | IDENT ':=' expr
                | "for" IDENT "in" expr ".." expr "do" body "end" "for"
                | "read" IDENT
                | "print" expr
                | "assert" '(' expr ')'
    body       := statement ';' ( statement ';' )*
    type       := "int" | "string" | "bool"
    expr       := '!' operand | operand [ binop operand ]
    operand    := INT | STRING | IDENT | '(' expr ')'

Expressions are deliberately flat: an operand takes at most one trailing
operator and operand, so `1 + 2 + 3` needs parentheses. There is no error
recovery; the first grammar violation raises a `ParseError`.
"""

from __future__ import annotations

from typing import List, Optional

from lark import Token

from .ast import (
    Program, Statement, Expression, IntegerLiteral, StringLiteral,
    VariableReference, VariableDeclaration, ArithmeticOp, LogicalOp,
    UnaryNot, Range, Assignment, ExpressionStatement, ReadStatement, Loop,
)
from .errors import ParseError
from .scanner import (
    Scanner, INTEGER_LITERAL, STRING_LITERAL, IDENTIFIER, KEYWORD,
    TYPE_NAME, BINARY_OPERATOR, UNARY_NOT, RANGE, ASSIGN, COLON, LPAR,
    RPAR, SEMICOLON, EOF,
)
from .types import TypeSpec


LOGICAL_OPERATORS = {'=', '&', '<'}

KIND_DESCRIPTIONS = {
    INTEGER_LITERAL: 'integer literal',
    STRING_LITERAL: 'string literal',
    IDENTIFIER: 'identifier',
    KEYWORD: 'keyword',
    TYPE_NAME: 'type name',
    BINARY_OPERATOR: 'operator',
    UNARY_NOT: '"!"',
    RANGE: '".."',
    ASSIGN: '":="',
    COLON: '":"',
    LPAR: '"("',
    RPAR: '")"',
    SEMICOLON: '";"',
    EOF: 'end of input',
}


def describe(token: Token) -> str:
    kind = KIND_DESCRIPTIONS.get(token.type, token.type)
    if token.type in (EOF, UNARY_NOT, RANGE, ASSIGN, COLON, LPAR, RPAR, SEMICOLON):
        return kind
    return f'{kind} "{token.value}"'


class Parser:
    def __init__(self, scanner: Scanner):
        self.scanner = scanner
        self.token: Token = scanner.next_token()

    def check(self, kind: str, value: Optional[str] = None) -> bool:
        if self.token.type != kind:
            return False
        return value is None or self.token.value == value

    def match(self, kind: str, value: Optional[str] = None) -> Token:
        """Consume the current token if it has the expected kind (and value)."""
        token = self.token
        if not self.check(kind, value):
            expected = KIND_DESCRIPTIONS.get(kind, kind)
            if value is not None:
                expected = f'{expected} "{value}"'
            raise ParseError(
                f"Expected {expected} but found {describe(token)} on row {token.line}, col {token.column}.",
                token.line, token.column)
        self.token = self.scanner.next_token()
        return token

    def parse(self) -> Program:
        statements = self.parse_statement_list()
        self.match(EOF)
        return Program(statements)

    def at_statement_list_end(self) -> bool:
        return self.check(EOF) or self.check(KEYWORD, 'end')

    def parse_statement_list(self) -> List[Statement]:
        statements: List[Statement] = []
        while True:
            statements.append(self.parse_statement())
            self.match(SEMICOLON)
            if self.at_statement_list_end():
                return statements

    def parse_statement(self) -> Statement:
        token = self.token
        if self.check(KEYWORD, 'var'):
            return self.parse_declaration()
        if self.check(IDENTIFIER):
            target = self.parse_variable()
            self.match(ASSIGN)
            expression = self.parse_expression()
            return Assignment(target, expression, token.line)
        if self.check(KEYWORD, 'for'):
            return self.parse_loop()
        if self.check(KEYWORD, 'read'):
            self.match(KEYWORD, 'read')
            return ReadStatement(self.parse_variable(), token.line)
        if self.check(KEYWORD, 'print'):
            self.match(KEYWORD, 'print')
            return ExpressionStatement('print', self.parse_expression(), token.line)
        if self.check(KEYWORD, 'assert'):
            self.match(KEYWORD, 'assert')
            self.match(LPAR)
            expression = self.parse_expression()
            self.match(RPAR)
            return ExpressionStatement('assert', expression, token.line)
        raise ParseError(
            f"Expected a statement but found {describe(token)} on row {token.line}, col {token.column}.",
            token.line, token.column)

    def parse_declaration(self) -> Statement:
        var_token = self.match(KEYWORD, 'var')
        name_token = self.match(IDENTIFIER)
        self.match(COLON)
        type_token = self.match(TYPE_NAME)
        declaration = VariableDeclaration(name_token.value, TypeSpec(type_token.value), var_token.line)
        return self.parse_optional_assignment(declaration)

    def parse_optional_assignment(self, declaration: VariableDeclaration) -> Statement:
        if not self.check(ASSIGN):
            return declaration
        self.match(ASSIGN)
        expression = self.parse_expression()
        return Assignment(declaration, expression, declaration.row)

    def parse_loop(self) -> Loop:
        for_token = self.match(KEYWORD, 'for')
        variable = self.parse_variable()
        self.match(KEYWORD, 'in')
        begin = self.parse_expression()
        range_token = self.match(RANGE)
        end = self.parse_expression()
        self.match(KEYWORD, 'do')
        body = self.parse_statement_list()
        self.match(KEYWORD, 'end')
        self.match(KEYWORD, 'for')
        return Loop(variable, Range(begin, end, range_token.line), body, for_token.line)

    def parse_variable(self) -> VariableReference:
        token = self.match(IDENTIFIER)
        return VariableReference(token.value, token.line)

    def parse_expression(self) -> Expression:
        token = self.token
        if self.check(UNARY_NOT):
            self.match(UNARY_NOT)
            return UnaryNot(self.parse_operand(), token.line)
        left = self.parse_operand()
        if not self.check(BINARY_OPERATOR):
            return left
        op_token = self.match(BINARY_OPERATOR)
        right = self.parse_operand()
        if op_token.value in LOGICAL_OPERATORS:
            return LogicalOp(op_token.value, left, right, op_token.line)
        return ArithmeticOp(op_token.value, left, right, op_token.line)

    def parse_operand(self) -> Expression:
        token = self.token
        if self.check(INTEGER_LITERAL):
            self.match(INTEGER_LITERAL)
            return IntegerLiteral(token.value, token.line)
        if self.check(STRING_LITERAL):
            self.match(STRING_LITERAL)
            return StringLiteral(token.value, token.line)
        if self.check(IDENTIFIER):
            return self.parse_variable()
        if self.check(LPAR):
            self.match(LPAR)
            expression = self.parse_expression()
            self.match(RPAR)
            return expression
        raise ParseError(
            f"Expected an operand but found {describe(token)} on row {token.line}, col {token.column}.",
            token.line, token.column)


def parse_program(source: str) -> Program:
    """Parse Mini-PL source text into a Program AST."""
    return Parser(Scanner(source)).parse()
