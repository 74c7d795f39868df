from pathlib import Path

import pytest

from minipl.errors import MiniPLRuntimeError
from minipl.interpreter import run_program

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_5_division_by_zero(capsys):
    source = (EXAMPLES / 'program_5.mpl').read_text(encoding='utf-8')
    with pytest.raises(MiniPLRuntimeError) as info:
        run_program(source)
    assert info.value.err.row == 3
    # Program 5 fails before its print statement
    assert capsys.readouterr().out == ''
