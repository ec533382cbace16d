from dataclasses import dataclass
from typing import Any, Callable, List, Optional

from brisk.errors import BuiltinWrongNumberOfArguments


@dataclass(frozen=True, eq=False)
class BuiltinFunction:
    """A native function exposed to Brisk code.

    ``fn`` receives the evaluated argument list and returns a value. When
    ``arity`` is set the argument count is checked before ``fn`` runs;
    variadic builtins leave it as ``None``.
    """
    name: str
    arity: Optional[int]
    fn: Callable[[List[Any]], Any]

    def __call__(self, args: List[Any]) -> Any:
        if self.arity is not None and len(args) != self.arity:
            raise BuiltinWrongNumberOfArguments(self.name, self.arity, len(args))
        return self.fn(args)

    def __repr__(self) -> str:
        return f"<builtin {self.name}>"
