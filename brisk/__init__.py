# Brisk language package
# This package provides a tokenizer, parser and tree-walking interpreter for the Brisk language.
from .errors import BriskError, EvalError, ParseError, ParseFailed
from .interpreter import run_program, Interpreter
from .parser import parse_program

__all__ = [
    'run_program',
    'parse_program',
    'Interpreter',
    'BriskError',
    'EvalError',
    'ParseError',
    'ParseFailed',
]
