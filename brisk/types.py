"""Runtime values for Brisk.

This module defines the closed set of values the interpreter works with,
helpers for integer arithmetic with 64-bit wrap-around, and the display
text used when values are printed.

Values are immutable. Changing what a name refers to always goes through
an ``Environment``; no value is ever modified in place.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Tuple

from brisk.builtin_function import BuiltinFunction

if TYPE_CHECKING:
    from brisk.ast import Block
    from brisk.environment import Environment


INT64_MAX = 2 ** 63 - 1


def wrap_int(value: int) -> int:
    """Wrap an arbitrary Python int into the signed 64-bit range."""
    value &= 0xFFFFFFFFFFFFFFFF
    if value > INT64_MAX:
        value -= 2 ** 64
    return value


def int_divide(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    quotient = abs(a) // abs(b)
    if (a < 0) != (b < 0):
        quotient = -quotient
    return wrap_int(quotient)


class Value:
    """Marker base class for runtime values."""
    __slots__ = ()


@dataclass(frozen=True)
class IntVal(Value):
    value: int

    def __repr__(self) -> str:
        return f"Int({self.value})"


@dataclass(frozen=True)
class FloatVal(Value):
    value: float

    def __repr__(self) -> str:
        return f"Float({self.value!r})"


@dataclass(frozen=True)
class BoolVal(Value):
    value: bool

    def __repr__(self) -> str:
        return f"Bool({self.value})"


@dataclass(frozen=True)
class StrVal(Value):
    value: str

    def __repr__(self) -> str:
        return f"Str({self.value!r})"


@dataclass(frozen=True)
class ArrayVal(Value):
    """An ordered sequence of values; order of insertion is significant."""
    elements: Tuple[Value, ...]

    def __repr__(self) -> str:
        return f"Array({list(self.elements)!r})"


@dataclass(frozen=True, eq=False)
class FunctionVal(Value):
    """A user-defined function together with the scope it was defined in.

    The captured environment is shared, not copied: every closure created
    in the same scope sees and updates the same bindings.
    """
    parameters: Tuple[str, ...]
    body: 'Block'
    env: 'Environment' = field(repr=False)

    def __repr__(self) -> str:
        return f"<function fn({', '.join(self.parameters)})>"


@dataclass(frozen=True)
class ReturnedVal(Value):
    """Internal wrapper marking the payload of a ``return`` statement."""
    value: Value


class VoidVal(Value):
    """The absence of a useful result."""
    __slots__ = ()

    def __repr__(self) -> str:
        return 'Void'


VOID = VoidVal()
TRUE = BoolVal(True)
FALSE = BoolVal(False)


def native_bool(value: bool) -> BoolVal:
    return TRUE if value else FALSE


def is_numeric(value: Value) -> bool:
    return isinstance(value, (IntVal, FloatVal))


def type_name(value: Value) -> str:
    """Return the Brisk type name of a runtime value."""
    if isinstance(value, IntVal):
        return 'Integer'
    if isinstance(value, FloatVal):
        return 'Float'
    if isinstance(value, BoolVal):
        return 'Boolean'
    if isinstance(value, StrVal):
        return 'String'
    if isinstance(value, ArrayVal):
        return 'Array'
    if isinstance(value, (FunctionVal, BuiltinFunction)):
        return 'Function'
    if isinstance(value, ReturnedVal):
        return type_name(value.value)
    if isinstance(value, VoidVal):
        return 'Void'
    return type(value).__name__


def to_string(value: Value) -> str:
    """Convert a Brisk value to its display text for printing."""
    if isinstance(value, VoidVal):
        return 'void'
    if isinstance(value, BoolVal):
        return 'true' if value.value else 'false'
    if isinstance(value, IntVal):
        return str(value.value)
    if isinstance(value, FloatVal):
        return repr(value.value)
    if isinstance(value, StrVal):
        return value.value
    if isinstance(value, ArrayVal):
        return '[' + ', '.join(to_string(item) for item in value.elements) + ']'
    if isinstance(value, FunctionVal):
        return f"fn({', '.join(value.parameters)})"
    if isinstance(value, BuiltinFunction):
        return repr(value)
    if isinstance(value, ReturnedVal):
        return to_string(value.value)
    return str(value)
