"""Interactive read-eval-print loop.

Every line is parsed and evaluated on its own against one global
environment that lives for the whole session, so bindings accumulate from
line to line. Errors abort only the current line.
"""

import sys
from typing import Optional, TextIO

from .errors import EvalError, ParseFailed
from .interpreter import Interpreter
from .parser import parse_program
from .types import to_string

PROMPT = '>> '


def run_repl(interpreter: Optional[Interpreter] = None,
             stdin: Optional[TextIO] = None,
             stdout: Optional[TextIO] = None) -> None:
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout
    if interpreter is None:
        interpreter = Interpreter(output=stdout)

    while True:
        stdout.write(PROMPT)
        stdout.flush()
        line = stdin.readline()
        if not line:
            stdout.write('\n')
            return
        if not line.strip():
            continue
        try:
            program = parse_program(line)
        except ParseFailed as failed:
            for err in failed.errors:
                stdout.write(f"Parse error: {err}\n")
            continue
        try:
            result = interpreter.run(program)
        except EvalError as err:
            stdout.write(f"Runtime error: {err}\n")
            continue
        stdout.write(to_string(result) + '\n')
