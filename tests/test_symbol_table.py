import pytest

from minipl.symbol_table import Symbol, SymbolTable
from minipl.types import TypeSpec


def test_define_and_resolve():
    table = SymbolTable()
    table.define(Symbol('foo', TypeSpec.string()))
    assert table.resolve('foo').type_spec == TypeSpec.string()
    assert 'foo' in table
    assert len(table) == 1


def test_resolve_unknown():
    table = SymbolTable()
    assert table.resolve('foo') is None
    assert 'foo' not in table


def test_define_twice():
    table = SymbolTable()
    table.define(Symbol('foo', TypeSpec.integer()))
    with pytest.raises(KeyError):
        table.define(Symbol('foo', TypeSpec.boolean()))


def test_default_values():
    table = SymbolTable()
    for name, spec in (('i', TypeSpec.integer()), ('b', TypeSpec.boolean()), ('s', TypeSpec.string())):
        table.define(Symbol(name, spec))
        table.initialize(table.resolve(name))
    assert table.value_of('i') == 0
    assert table.value_of('b') is False
    assert table.value_of('s') == ''


def test_set_checks_type():
    table = SymbolTable()
    symbol = Symbol('n', TypeSpec.integer())
    table.define(symbol)
    table.set(symbol, 7)
    assert table.get(symbol) == 7
    with pytest.raises(TypeError):
        table.set(symbol, 'seven')
    with pytest.raises(TypeError):
        table.set(symbol, True)


def test_value_of_unknown():
    with pytest.raises(KeyError):
        SymbolTable().value_of('missing')
