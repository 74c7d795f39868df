from dataclasses import dataclass
from typing import Any, Dict, Iterator, Optional

from minipl.types import TypeSpec, check_value, default_value


@dataclass(frozen=True)
class Symbol:
    """A declared variable: its name and static type."""
    name: str
    type_spec: TypeSpec


class SymbolTable:
    """The single global scope of a Mini-PL program.

    The type checker fills in the symbols; the interpreter then uses the
    same table as its variable store, keeping the current value of every
    symbol in `values`.
    """
    def __init__(self):
        self.symbols: Dict[str, Symbol] = {}
        self.values: Dict[Symbol, Any] = {}

    def __contains__(self, name: str) -> bool:
        return name in self.symbols

    def __iter__(self) -> Iterator[Symbol]:
        return iter(self.symbols.values())

    def __len__(self) -> int:
        return len(self.symbols)

    def define(self, symbol: Symbol) -> None:
        if symbol.name in self.symbols:
            raise KeyError(f'symbol {symbol.name} already defined')
        self.symbols[symbol.name] = symbol

    def resolve(self, name: str) -> Optional[Symbol]:
        return self.symbols.get(name)

    def initialize(self, symbol: Symbol) -> Any:
        value = default_value(symbol.type_spec)
        self.values[symbol] = value
        return value

    def get(self, symbol: Symbol) -> Any:
        # variables read before their declaration executed hold the default
        if symbol not in self.values:
            return self.initialize(symbol)
        return self.values[symbol]

    def set(self, symbol: Symbol, value: Any) -> None:
        check_value(value, symbol.type_spec)
        self.values[symbol] = value

    def value_of(self, name: str) -> Any:
        """Return the current value of the variable called `name`."""
        symbol = self.resolve(name)
        if symbol is None:
            raise KeyError(f'undefined variable {name}')
        return self.get(symbol)
