from pathlib import Path

from minipl.interpreter import run_program

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_4_sum_and_asserts(capsys):
    source = (EXAMPLES / 'program_4.mpl').read_text(encoding='utf-8')
    table = run_program(source)
    out_lines = capsys.readouterr().out.split('\n')
    assert out_lines == ['hello', '14']
    assert table.value_of('ordered') is True
