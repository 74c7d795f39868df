"""Scanner for the Mini-PL language.

The scanner turns source text into a lazy stream of tokens, one per call
to `next_token`. Tokens are `lark.Token` instances: `token.type` is one
of the kind names below, `token.value` the token text (decoded for string
literals) and `token.line`/`token.column` the 1-based position of the
token's first character.

Whitespace, `// ...` line comments and `/* ... */` block comments are
skipped between tokens. Once the input is exhausted the scanner keeps
returning an EOF token.
"""

from __future__ import annotations

from typing import Iterator, List

from lark import Token

from .errors import LexicalError
from .types import TYPE_NAMES


# Token kinds
INTEGER_LITERAL = 'INTEGER_LITERAL'
STRING_LITERAL = 'STRING_LITERAL'
IDENTIFIER = 'IDENTIFIER'
KEYWORD = 'KEYWORD'
TYPE_NAME = 'TYPE_NAME'
BINARY_OPERATOR = 'BINARY_OPERATOR'
UNARY_NOT = 'UNARY_NOT'
RANGE = 'RANGE'
ASSIGN = 'ASSIGN'
COLON = 'COLON'
LPAR = 'LPAR'
RPAR = 'RPAR'
SEMICOLON = 'SEMICOLON'
EOF = 'EOF'

KEYWORDS = {'var', 'for', 'end', 'in', 'do', 'read', 'print', 'assert'}
BINARY_OPERATORS = {'+', '-', '*', '/', '<', '=', '&'}
SYMBOLS = {';': SEMICOLON, '(': LPAR, ')': RPAR}
ESCAPES = {
    '\\': '\\',
    '"': '"',
    'n': '\n',
    'r': '\r',
    't': '\t',
    'v': '\v',
}


def is_digit(c: str) -> bool:
    return '0' <= c <= '9'


class Scanner:
    """Ad-hoc procedural scanner over a complete source string."""

    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.row = 1
        self.col = 0

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.next_token()
            yield token
            if token.type == EOF:
                return

    # Character level helpers
    def input_left(self) -> bool:
        return self.pos < len(self.source)

    def peek(self, offset: int = 0) -> str:
        index = self.pos + offset
        if index < len(self.source):
            return self.source[index]
        return ''

    def advance(self) -> str:
        c = self.source[self.pos]
        self.pos += 1
        if c == '\n':
            self.row += 1
            self.col = 0
        else:
            self.col += 1
        return c

    def make_token(self, kind: str, value: str, row: int, column: int) -> Token:
        return Token(kind, value, line=row, column=column)

    def next_token(self) -> Token:
        self.skip_whitespace_and_comments()
        row, column = self.row, self.col + 1
        if not self.input_left():
            return self.make_token(EOF, '', row, column)
        c = self.peek()
        if c == '.':
            return self.scan_range(row, column)
        if c == ':':
            self.advance()
            if self.peek() == '=':
                self.advance()
                return self.make_token(ASSIGN, ':=', row, column)
            return self.make_token(COLON, ':', row, column)
        if c == '!':
            self.advance()
            return self.make_token(UNARY_NOT, '!', row, column)
        if c in BINARY_OPERATORS:
            self.advance()
            return self.make_token(BINARY_OPERATOR, c, row, column)
        if c in SYMBOLS:
            self.advance()
            return self.make_token(SYMBOLS[c], c, row, column)
        if is_digit(c):
            return self.scan_integer(row, column)
        if c.isalpha():
            return self.scan_identifier(row, column)
        if c == '"':
            return self.scan_string(row, column)
        self.advance()
        raise LexicalError(f"Invalid token \"{c}\" on row {row}, col {column}.", row, column)

    def skip_whitespace_and_comments(self) -> None:
        while self.input_left():
            if self.peek().isspace():
                self.advance()
            elif self.peek() == '/' and self.peek(1) == '/':
                self.skip_line_comment()
            elif self.peek() == '/' and self.peek(1) == '*':
                self.skip_block_comment()
            else:
                return

    def skip_line_comment(self) -> None:
        while self.input_left() and self.peek() != '\n':
            self.advance()

    def skip_block_comment(self) -> None:
        row, column = self.row, self.col + 1
        self.advance()
        self.advance()
        while self.input_left():
            if self.peek() == '*' and self.peek(1) == '/':
                self.advance()
                self.advance()
                return
            self.advance()
        raise LexicalError(
            f"Reached end of input while scanning for the end of the comment started on row {row}, col {column}.",
            row, column)

    # Token scanners
    def scan_range(self, row: int, column: int) -> Token:
        self.advance()
        if self.peek() == '.':
            self.advance()
            return self.make_token(RANGE, '..', row, column)
        raise LexicalError(f"Invalid token \".\" on row {row}, col {column}.", row, column)

    def scan_integer(self, row: int, column: int) -> Token:
        start = self.pos
        while self.input_left() and is_digit(self.peek()):
            self.advance()
        return self.make_token(INTEGER_LITERAL, self.source[start:self.pos], row, column)

    def scan_identifier(self, row: int, column: int) -> Token:
        start = self.pos
        while self.input_left() and (self.peek().isalnum() or self.peek() == '_'):
            self.advance()
        text = self.source[start:self.pos]
        if text in TYPE_NAMES:
            return self.make_token(TYPE_NAME, text, row, column)
        if text in KEYWORDS:
            return self.make_token(KEYWORD, text, row, column)
        return self.make_token(IDENTIFIER, text, row, column)

    def scan_string(self, row: int, column: int) -> Token:
        self.advance()  # opening quote
        chars: List[str] = []
        while self.input_left():
            ch = self.advance()
            if ch == '"':
                return self.make_token(STRING_LITERAL, ''.join(chars), row, column)
            if ch == '\\':
                if not self.input_left():
                    break
                esc_row, esc_column = self.row, self.col
                esc = self.advance()
                if esc not in ESCAPES:
                    raise LexicalError(
                        f"Invalid escape sequence \"\\{esc}\" in string literal on row {esc_row}, col {esc_column}.",
                        esc_row, esc_column)
                chars.append(ESCAPES[esc])
                continue
            chars.append(ch)
        raise LexicalError(
            f"Reached end of input while scanning for the string literal started on row {row}, col {column}.",
            row, column)


def tokenize(source: str) -> List[Token]:
    """Scan the whole source eagerly, including the trailing EOF token."""
    return list(Scanner(source))
