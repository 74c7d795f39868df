from dataclasses import dataclass
from typing import Optional


@dataclass
class ErrorVal:
    """Describes a Mini-PL failure.

    `name` is the category label shown to the user (e.g. "Syntax error"),
    `message` is the human-readable description. `row` and `column` locate
    the failure in the source when they are known.
    """
    name: str
    message: str
    row: Optional[int] = None
    column: Optional[int] = None

    def __repr__(self) -> str:
        return f"Error(name={self.name!r}, message={self.message!r})"


class MiniPLError(Exception):
    """Exception type used to propagate Mini-PL errors to the caller."""
    category = 'Error'

    def __init__(self, message: str, row: Optional[int] = None, column: Optional[int] = None):
        self.err = ErrorVal(self.category, message, row, column)
        super().__init__(f"{self.category}: {message}")

    @property
    def message(self) -> str:
        return self.err.message


class LexicalError(MiniPLError):
    """Raised by the scanner for malformed tokens."""
    category = 'Lexical error'


class ParseError(MiniPLError):
    """Raised by the parser on the first grammar violation."""
    category = 'Syntax error'


class SemanticError(MiniPLError):
    """Raised by the type checker."""
    category = 'Semantic error'


class MiniPLRuntimeError(MiniPLError):
    category = 'Runtime error'


class ReadError(MiniPLRuntimeError):
    """Raised when `read` gets input that is not a valid 32-bit integer."""


class AssertionFailure(MiniPLError):
    category = 'Assertion failed'
