"""Builtin functions seeded into every global environment."""

from typing import Any, List, Optional, TextIO

from brisk.builtin_function import BuiltinFunction
from brisk.errors import BuiltinWrongArgumentType
from brisk.std.io import populate_io_builtins
from brisk.types import ArrayVal, IntVal, StrVal, type_name


def std_len(args: List[Any]) -> Any:
    (value,) = args
    if isinstance(value, StrVal):
        return IntVal(len(value.value))
    if isinstance(value, ArrayVal):
        return IntVal(len(value.elements))
    raise BuiltinWrongArgumentType('len', 'String or Array', type_name(value))


def register_builtins(env, output: Optional[TextIO] = None) -> None:
    """Declare the builtins in ``env``.

    ``output`` overrides where print/println write; by default they use
    the process stdout.
    """
    builtins = populate_io_builtins(output)
    builtins['len'] = BuiltinFunction('len', 1, std_len)
    for name, fn in builtins.items():
        env.declare(name, fn)
