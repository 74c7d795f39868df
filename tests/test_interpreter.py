import io

import pytest

from minipl.ast import (
    Program, IntegerLiteral, StringLiteral, VariableReference,
    VariableDeclaration, ArithmeticOp, LogicalOp, Range, Assignment,
    ExpressionStatement, Loop,
)
from minipl.basic_io import BasicIO
from minipl.errors import AssertionFailure, MiniPLRuntimeError, ReadError
from minipl.interpreter import Interpreter, run_program
from minipl.symbol_table import Symbol, SymbolTable
from minipl.types import TypeSpec


def run(source, stdin=''):
    out = io.StringIO()
    table = run_program(source, BasicIO(io.StringIO(stdin), out))
    return table, out.getvalue()


@pytest.mark.parametrize('op, expected', [('*', 10), ('+', 7), ('-', 3), ('/', 2)])
def test_variable_arithmetic(op, expected):
    table, _ = run(f'var x : int := 5; var y : int := 2; var z : int := x {op} y;')
    assert table.value_of('z') == expected


def test_literal_arithmetic():
    table, _ = run('var result : int := 5 * 2; result := result - (3 + 4);')
    assert table.value_of('result') == 3


def test_division_truncates_toward_zero():
    table, _ = run('var a : int := 0 - 7; var b : int := a / 2; var c : int := 7 / (0 - 2);')
    assert table.value_of('b') == -3
    assert table.value_of('c') == -3


def test_arithmetic_wraps_to_32_bits():
    table, _ = run('var big : int := 2147483647 + 1; var neg : int := (0 - 2147483647) - 2;')
    assert table.value_of('big') == -2147483648
    assert table.value_of('neg') == 2147483647


def test_division_by_zero():
    with pytest.raises(MiniPLRuntimeError) as info:
        run('var result : int;\nresult := 5 / 0;')
    assert info.value.err.row == 2
    assert 'Division by zero' in info.value.message


def test_successful_assert():
    run('assert (5 = 5);')


def test_failed_assert():
    with pytest.raises(AssertionFailure) as info:
        run('print "before";\nassert (4 = 5);')
    assert info.value.err.row == 2


def test_failed_assert_names_variable():
    with pytest.raises(AssertionFailure) as info:
        run('var ok : bool := 1 = 2; assert (ok);')
    assert 'ok' in info.value.message


@pytest.mark.parametrize('source, expected', [
    ('var r : bool := "foo" = "foo";', True),
    ('var r : bool := "bar" = "foo";', False),
    ('var r : bool := 5 = 5;', True),
    ('var r : bool := 4 = 5;', False),
    ('var r : bool := (4 = 5) = (4 = 5);', True),
    ('var r : bool := (4 = 5) = (5 = 5);', False),
    ('var r : bool := (4 = 5) & (5 = 5);', False),
    ('var r : bool := (4 = 4) & (5 = 5);', True),
    ('var r : bool := 1 < 2;', True),
    ('var r : bool := "b" < "a";', False),
    ('var r : bool := !(1 = 1);', False),
])
def test_logical_operators(source, expected):
    table, _ = run(source)
    assert table.value_of('r') is expected


def test_loop_accumulation():
    source = ('var result : int := 0;\n'
              'var loopvariable : int;\n'
              'for loopvariable in 2..5 do\n'
              '    result := result + loopvariable;\n'
              'end for;')
    table, _ = run(source)
    assert table.value_of('result') == 14
    assert table.value_of('loopvariable') == 5


def test_empty_range_skips_body():
    table, out = run('var i : int; for i in 3..1 do print "never"; end for;')
    assert out == ''
    assert table.value_of('i') == 0


def test_range_bounds_are_evaluated_once():
    source = ('var n : int := 3; var i : int; var count : int := 0;\n'
              'for i in 1..n do n := n + 1; count := count + 1; end for;')
    table, _ = run(source)
    assert table.value_of('count') == 3


def test_nested_loops():
    source = ('var i : int; var j : int;\n'
              'for i in 1..3 do for j in 1..i do print j; end for; print "\\n"; end for;')
    _, out = run(source)
    assert out == '1\n12\n123\n'


def test_print_writes_without_newline():
    _, out = run('print "a"; print 1; print "\\tb\\n";')
    assert out == 'a1\tb\n'


def test_declarations_get_defaults():
    table, out = run('var i : int; var s : string; var b : bool; print i; print s;')
    assert out == '0'
    assert table.value_of('b') is False


def test_assign_variable_to_variable():
    table, _ = run('var x : int := 1; var y : int := x; x := 2;')
    assert table.value_of('y') == 1
    assert table.value_of('x') == 2


def test_read_words():
    source = 'var n : int; var s : string; var m : int; read n; read s; read m;'
    table, _ = run(source, '12 hello\n\n  -3\n')
    assert table.value_of('n') == 12
    assert table.value_of('s') == 'hello'
    assert table.value_of('m') == -3


def test_read_malformed_integer():
    with pytest.raises(ReadError) as info:
        run('var n : int; read n;', 'abc\n')
    assert 'abc' in info.value.message


def test_read_integer_overflow():
    with pytest.raises(ReadError):
        run('var n : int; read n;', '99999999999\n')


def test_read_past_end_of_input():
    with pytest.raises(MiniPLRuntimeError):
        run('var s : string; read s;', '')


def test_output_before_error_is_kept():
    out = io.StringIO()
    with pytest.raises(MiniPLRuntimeError):
        run_program('print "partial"; print 1 / 0;', BasicIO(io.StringIO(), out))
    assert out.getvalue() == 'partial'


def test_print_uses_stdout_by_default(capsys):
    run_program('print "Hello World!!";')
    assert capsys.readouterr().out == 'Hello World!!'


def test_read_uses_stdin_by_default(monkeypatch):
    monkeypatch.setattr('sys.stdin', io.StringIO('42\n'))
    table = run_program('var n : int; read n;', BasicIO(output_stream=io.StringIO()))
    assert table.value_of('n') == 42


def test_debug_trace(tmp_path):
    debug_file = tmp_path / 'debug.txt'
    run_program('var x : int := 3; var i : int; for i in 1..2 do x := x + i; end for;',
                BasicIO(io.StringIO(), io.StringIO()), debug_level=3, debug_file=str(debug_file))
    trace = debug_file.read_text(encoding='utf-8')
    assert 'type checking program' in trace
    assert 'declare x : int' in trace
    assert 'assign x = 6' in trace
    assert 'loop i = 2' in trace


# Hand-built trees run against a prepared symbol table


def make_table(*symbols):
    table = SymbolTable()
    for name, spec in symbols:
        table.define(Symbol(name, spec))
    return table


def test_hand_built_arithmetic():
    table = make_table(('op1', TypeSpec.integer()), ('op2', TypeSpec.integer()), ('result', TypeSpec.integer()))
    program = Program([
        Assignment(VariableDeclaration('op1', TypeSpec.integer()), IntegerLiteral('5')),
        Assignment(VariableDeclaration('op2', TypeSpec.integer()), IntegerLiteral('2')),
        Assignment(VariableDeclaration('result', TypeSpec.integer()),
                   ArithmeticOp('*', VariableReference('op1'), VariableReference('op2'))),
    ])
    Interpreter(table).run(program)
    assert table.value_of('result') == 10


def test_hand_built_loop():
    table = make_table(('loopvariable', TypeSpec.integer()), ('result', TypeSpec.integer()))
    result = VariableReference('result')
    body = [Assignment(result, ArithmeticOp('+', result, VariableReference('loopvariable')))]
    program = Program([
        VariableDeclaration('result', TypeSpec.integer()),
        VariableDeclaration('loopvariable', TypeSpec.integer()),
        Loop(VariableReference('loopvariable'), Range(IntegerLiteral('2'), IntegerLiteral('5')), body),
    ])
    Interpreter(table).run(program)
    assert table.value_of('result') == 14


def test_hand_built_string_equality():
    table = make_table(('result', TypeSpec.boolean()))
    program = Program([
        Assignment(VariableDeclaration('result', TypeSpec.boolean()),
                   LogicalOp('=', StringLiteral('foo'), StringLiteral('foo'))),
        ExpressionStatement('assert', VariableReference('result')),
    ])
    Interpreter(table).run(program)
    assert table.value_of('result') is True
