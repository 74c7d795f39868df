from typing import Optional, TextIO


class DebugLog:
    """Verbosity-levelled trace output shared by the interpreter passes.

    Nothing is written at level 0. Otherwise messages whose level is at or
    below `debug_level` go to `debug_file` (truncated on open) or, when no
    file is given, to stdout.
    """
    def __init__(self, debug_level: int = 0, debug_file: Optional[str] = 'debug.txt'):
        self.debug_level = debug_level
        self.debug_fp: Optional[TextIO] = None
        if debug_level > 0 and debug_file is not None:
            self.debug_fp = open(debug_file, 'w', encoding='utf-8')

    def enabled(self, level: int = 1) -> bool:
        return 0 < level <= self.debug_level

    def debug(self, msg: str, level: int = 1):
        if not self.enabled(level):
            return
        if self.debug_fp:
            self.debug_fp.write(msg + '\n')
            self.debug_fp.flush()
        else:
            print(msg)

    def close(self):
        self.debug_level = 0
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None
