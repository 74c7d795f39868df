"""Type definitions and helpers for Mini-PL.

Mini-PL has exactly three static types: `int`, `bool` and `string`. At
run time their values are ordinary Python `int`, `bool` and `str`
objects. The type checker guarantees that operators only ever see values
of the right type, so `check_value` failures are internal errors rather
than user-facing ones.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


INT32_MIN = -2 ** 31
INT32_MAX = 2 ** 31 - 1


@dataclass(frozen=True)
class TypeSpec:
    """Represents a Mini-PL type tag.

    `kind` is the type name exactly as written in source: 'int', 'bool'
    or 'string'.
    """
    kind: str

    def __repr__(self) -> str:
        return self.kind

    # Convenience constructors
    @staticmethod
    def integer() -> 'TypeSpec':
        return TypeSpec('int')

    @staticmethod
    def boolean() -> 'TypeSpec':
        return TypeSpec('bool')

    @staticmethod
    def string() -> 'TypeSpec':
        return TypeSpec('string')


TYPE_NAMES = ('int', 'string', 'bool')


def default_value(spec: TypeSpec) -> Any:
    """Return the value a freshly declared variable of `spec` starts with."""
    if spec.kind == 'int':
        return 0
    if spec.kind == 'bool':
        return False
    if spec.kind == 'string':
        return ''
    raise TypeError(f"unknown type spec: {spec}")


def parse_int32(text: str) -> int:
    """Parse decimal text as a signed 32-bit integer.

    Raises ValueError for malformed text and OverflowError when the value
    does not fit in 32 bits.
    """
    stripped = text.strip()
    body = stripped[1:] if stripped[:1] in ('+', '-') else stripped
    if not body or not all('0' <= c <= '9' for c in body):
        raise ValueError(f"invalid integer literal {text!r}")
    value = int(stripped)
    if value < INT32_MIN or value > INT32_MAX:
        raise OverflowError(f"integer {text} does not fit in 32 bits")
    return value


def wrap_int32(value: int) -> int:
    """Wrap an arbitrary Python integer to signed 32-bit two's complement."""
    value &= 0xFFFFFFFF
    if value > INT32_MAX:
        value -= 2 ** 32
    return value


def divide_int32(a: int, b: int) -> int:
    """Integer division truncating toward zero. `b` must be non-zero."""
    quotient = abs(a) // abs(b)
    if (a < 0) != (b < 0):
        quotient = -quotient
    return wrap_int32(quotient)


def type_name(value: Any) -> str:
    """Return the Mini-PL type name of a runtime value."""
    # bool is a subclass of int; check it first
    if isinstance(value, bool):
        return 'bool'
    if isinstance(value, int):
        return 'int'
    if isinstance(value, str):
        return 'string'
    return type(value).__name__


def check_value(value: Any, spec: TypeSpec) -> bool:
    """Check whether a runtime value matches a type specification.

    Returns True on success and raises TypeError (not a Mini-PL error)
    otherwise.
    """
    actual = type_name(value)
    if actual != spec.kind:
        raise TypeError(f"expected {spec.kind}, got {actual}")
    return True


def to_string(value: Any) -> str:
    """Convert a Mini-PL value to the text `print` writes."""
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        return value
    raise TypeError(f"cannot print value of type {type(value).__name__}")
