"""CLI entry point for the Brisk interpreter.

Usage:
    python -m brisk [-v|-vv|-vvv] [PROGRAM]
    python -m brisk [-v...] --tokens PROGRAM
    python -m brisk [-v...] --emit-ast PROGRAM

Options:
  -v             Increase debug verbosity (can be repeated)
  --debug-file   Where debug output goes when -v is given (default debug.txt)
  --tokens       Print the token stream of PROGRAM and exit
  --emit-ast     Print the canonical syntax tree of PROGRAM and exit

Without a program file an interactive session is started. With one, the
whole file is parsed first; if it parses cleanly it is run once and the
value of its last statement is printed.
"""

import argparse
import logging
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from .errors import EvalError, ParseFailed
from .interpreter import Interpreter
from .lexer import tokenize
from .parser import parse_program
from .repl import run_repl
from .types import to_string


@contextmanager
def debug_logging(verbosity: int, debug_file: str) -> Iterator[None]:
    """Route the package's log records to ``debug_file`` while active."""
    if verbosity <= 0:
        yield
        return
    handler = logging.FileHandler(debug_file, mode='w', encoding='utf-8')
    handler.setFormatter(logging.Formatter('%(name)s: %(message)s'))
    package_logger = logging.getLogger('brisk')
    previous_level = package_logger.level
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG)
    try:
        yield
    finally:
        package_logger.removeHandler(handler)
        package_logger.setLevel(previous_level)
        handler.close()


def read_source(path: str):
    program_file = Path(path)
    if not program_file.exists():
        print(f"Error: file {program_file} not found", file=sys.stderr)
        return None
    with open(program_file, 'r', encoding='utf-8') as f:
        return f.read()


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog='brisk', description="Brisk language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('--debug-file', default='debug.txt', help='file receiving debug output when -v is given')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--tokens', action='store_true', help='print the token stream of the program and exit')
    group.add_argument('--emit-ast', action='store_true', help='print the parsed syntax tree of the program and exit')
    parser.add_argument('program', nargs='?', help='Brisk program file (.brisk) to execute')
    args = parser.parse_args(argv)
    if not args.program and (args.tokens or args.emit_ast):
        parser.error('--tokens and --emit-ast need a program file')

    with debug_logging(args.v, args.debug_file):
        return run(args)


def run(args: argparse.Namespace) -> int:
    if not args.program:
        run_repl(Interpreter(debug_level=args.v))
        return 0

    source = read_source(args.program)
    if source is None:
        return 1

    if args.tokens:
        for token in tokenize(source):
            print(f"{token.kind.name} {token.literal} @{token.position}")
        return 0

    try:
        ast_program = parse_program(source)
    except ParseFailed as failed:
        for err in failed.errors:
            print(f"Parse error: {err}", file=sys.stderr)
        return 1

    if args.emit_ast:
        print(ast_program)
        return 0

    interpreter = Interpreter(debug_level=args.v)
    try:
        result = interpreter.run(ast_program)
    except EvalError as e:
        print(f"Runtime error: {e}", file=sys.stderr)
        return 1
    print(to_string(result))
    return 0


if __name__ == '__main__':
    sys.exit(main())
