"""CLI entry point for the Mini-PL interpreter.

Usage:
    python -m minipl [-v|-vv|-vvv|-vvvv] <program_file>
    python -m minipl [-v...] --emit-ast <program_file>
    python -m minipl [-v...] --ast <ast_json_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --emit-ast    Parse the given Mini-PL file and emit an AST JSON file
  --ast         Type-check and execute a previously emitted AST JSON file

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero. Errors are printed to stderr prefixed by
their category (lexical, syntax, semantic, runtime or assertion) and the
process exits with status 1.
"""

import argparse
import json
import sys
from pathlib import Path

from .ast import Program
from .ast_json import ast_to_obj, ast_from_obj
from .debug import DebugLog
from .errors import MiniPLError
from .interpreter import Interpreter
from .parser import parse_program
from .type_checker import TypeChecker


def read_source(path: Path) -> str:
    if not path.exists():
        print(f"Error: file {path} not found", file=sys.stderr)
        sys.exit(1)
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def report(error: MiniPLError) -> None:
    print(f"{error.err.name}:\n{error.err.message}", file=sys.stderr)
    sys.exit(1)


def execute(program: Program, log: DebugLog) -> None:
    symbol_table = TypeChecker(log).check(program)
    Interpreter(symbol_table, log=log).run(program)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Mini-PL language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='MINIPL_FILE', help='emit AST JSON for the given Mini-PL file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('program', nargs='?', help='Mini-PL program file to execute')
    args = parser.parse_args(argv)

    # Emit AST mode
    if args.emit_ast:
        program_file = Path(args.emit_ast)
        source = read_source(program_file)
        try:
            ast_program = parse_program(source)
        except MiniPLError as e:
            report(e)
        obj = ast_to_obj(ast_program)
        out_path = program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(obj, out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return

    log = DebugLog(args.v)
    try:
        # Execute from AST JSON
        if args.ast:
            ast_path = Path(args.ast)
            if not ast_path.exists():
                print(f"Error: file {ast_path} not found", file=sys.stderr)
                sys.exit(1)
            with open(ast_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            execute(ast_from_obj(data), log)
            return

        # Default: execute source file
        if not args.program:
            parser.error('missing program file; or use --emit-ast/--ast')
        source = read_source(Path(args.program))
        log.debug(f"parsing {args.program}")
        execute(parse_program(source), log)
    except MiniPLError as e:
        report(e)
    finally:
        log.close()


if __name__ == '__main__':
    main()
