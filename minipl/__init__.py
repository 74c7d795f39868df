# Mini-PL language package
# This package provides a scanner, parser, type checker and interpreter for Mini-PL.
from .errors import (
    MiniPLError, LexicalError, ParseError, SemanticError,
    MiniPLRuntimeError, ReadError, AssertionFailure,
)
from .basic_io import BasicIO
from .scanner import Scanner, tokenize
from .parser import Parser, parse_program
from .symbol_table import Symbol, SymbolTable
from .type_checker import TypeChecker, check_program
from .interpreter import Interpreter, run_program

__all__ = [
    'MiniPLError',
    'LexicalError',
    'ParseError',
    'SemanticError',
    'MiniPLRuntimeError',
    'ReadError',
    'AssertionFailure',
    'BasicIO',
    'Scanner',
    'tokenize',
    'Parser',
    'parse_program',
    'Symbol',
    'SymbolTable',
    'TypeChecker',
    'check_program',
    'Interpreter',
    'run_program',
]
