from .basic_io import BasicIO
from brisk.builtin_function import BuiltinFunction
from brisk.types import VOID, to_string
from typing import Any, Dict, List, Optional, TextIO


def populate_io_builtins(output: Optional[TextIO] = None) -> Dict[str, BuiltinFunction]:
    basic_io = BasicIO(output)

    def join_args(args: List[Any]) -> str:
        return ' '.join(to_string(arg) for arg in args)

    def std_print(args: List[Any]) -> Any:
        basic_io.write(join_args(args))
        return VOID

    def std_println(args: List[Any]) -> Any:
        basic_io.write_line(join_args(args))
        return VOID

    return {
        'print': BuiltinFunction('print', None, std_print),
        'println': BuiltinFunction('println', None, std_println),
    }
