import io
from pathlib import Path

from minipl.interpreter import run_program

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_2_hello_loop(monkeypatch, capsys):
    monkeypatch.setattr('sys.stdin', io.StringIO('3\n'))
    source = (EXAMPLES / 'program_2.mpl').read_text(encoding='utf-8')
    run_program(source)
    out_lines = capsys.readouterr().out.split('\n')
    assert out_lines[0] == 'How many times?0 : Hello, World!'
    assert out_lines[1] == '1 : Hello, World!'
    assert out_lines[2] == '2 : Hello, World!'
    assert out_lines[3] == ''
