import sys
from typing import List, Optional, TextIO

from minipl.errors import MiniPLRuntimeError


class BasicIO:
    """Console capabilities handed to the interpreter.

    `read_word` serves the `read` statement: it reads one line at a time
    from the input stream and hands out its whitespace-delimited words one
    per call, buffering the rest of the line for later calls. `write`
    serves `print` and never adds a newline of its own.

    Streams default to the process's current stdin/stdout, looked up on
    each call so that redirection after construction is honoured.
    """
    def __init__(self, input_stream: Optional[TextIO] = None, output_stream: Optional[TextIO] = None):
        self._input = input_stream
        self._output = output_stream
        self.buffer: List[str] = []

    @property
    def input_stream(self) -> TextIO:
        return self._input if self._input is not None else sys.stdin

    @property
    def output_stream(self) -> TextIO:
        return self._output if self._output is not None else sys.stdout

    def read_word(self) -> str:
        while not self.buffer:
            line = self.input_stream.readline()
            if line == '':
                raise MiniPLRuntimeError('Reached end of input while reading a value.')
            self.buffer = line.split()
        return self.buffer.pop(0)

    def write(self, text: str) -> None:
        self.output_stream.write(text)
        self.output_stream.flush()
