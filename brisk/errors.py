"""Error types reported to Brisk users.

Two independent families live here and are never mixed: ``ParseError``
for malformed source text and ``EvalError`` for failures while running a
well-formed program.
"""

from typing import List, Optional

from brisk.tokens import Position, Token, TokenKind


class BriskError(Exception):
    """Common base for every user-facing Brisk error."""

    def __init__(self, message: str, position: Optional[Position] = None):
        super().__init__(message)
        self.message = message
        self.position = position

    @property
    def name(self) -> str:
        return type(self).__name__

    def __str__(self) -> str:
        text = f"{self.name}: {self.message}"
        if self.position is not None:
            text += f" at {self.position}"
        return text


###############################################################################
# Parse errors
###############################################################################


class ParseError(BriskError):
    pass


class InvalidToken(ParseError):
    def __init__(self, token: Token):
        super().__init__(f"unexpected token '{token.literal}'", token.position)
        self.token = token


class UnexpectedToken(ParseError):
    def __init__(self, expected: TokenKind, actual: Token):
        super().__init__(f"expected '{expected}', got '{actual.literal}'", actual.position)
        self.expected = expected
        self.actual = actual


class UnexpectedEndOfInput(ParseError):
    def __init__(self, expected: Optional[TokenKind] = None):
        if expected is None:
            message = 'unexpected end of input'
        else:
            message = f"unexpected end of input, expected '{expected}'"
        super().__init__(message)
        self.expected = expected


class ParseFailed(BriskError):
    """Raised once parsing finishes with one or more collected errors."""

    def __init__(self, errors: List[ParseError]):
        super().__init__(f"{len(errors)} parse error(s)")
        self.errors = errors

    def __str__(self) -> str:
        return '\n'.join(str(err) for err in self.errors)


###############################################################################
# Evaluation errors
###############################################################################


class EvalError(BriskError):
    pass


class TriedToStoreVoid(EvalError):
    def __init__(self, identifier: str, position: Optional[Position] = None):
        super().__init__(f"cannot store void value in '{identifier}'", position)
        self.identifier = identifier


class NotDefined(EvalError):
    def __init__(self, identifier: str, position: Optional[Position] = None):
        super().__init__(f"'{identifier}' is not defined", position)
        self.identifier = identifier


class InvalidPrefixOperation(EvalError):
    def __init__(self, operator: str, operand: str, position: Optional[Position] = None):
        super().__init__(f"cannot apply '{operator}' to {operand}", position)
        self.operator = operator
        self.operand = operand


class InvalidInfixOperation(EvalError):
    def __init__(self, left: str, operator: str, right: str, position: Optional[Position] = None):
        super().__init__(f"cannot apply '{operator}' to {left} and {right}", position)
        self.left = left
        self.operator = operator
        self.right = right


class DivisionByZero(EvalError):
    def __init__(self, left: str, right: str, position: Optional[Position] = None):
        super().__init__(f"division by zero: {left}/{right}", position)
        self.left = left
        self.right = right


class VoidValueAsArgument(EvalError):
    def __init__(self, position: Optional[Position] = None):
        super().__init__('void value passed as a function argument', position)


class NotAFunction(EvalError):
    def __init__(self, callee: str, position: Optional[Position] = None):
        super().__init__(f"{callee} is not a function", position)
        self.callee = callee


class WrongNumberOfArguments(EvalError):
    def __init__(self, expected: int, got: int, position: Optional[Position] = None):
        super().__init__(f"expected {expected} argument(s), got {got}", position)
        self.expected = expected
        self.got = got


class NonBooleanCondition(EvalError):
    def __init__(self, condition: str, position: Optional[Position] = None):
        super().__init__(f"condition must be true or false, got {condition}", position)
        self.condition = condition


class IndexOutOfBounds(EvalError):
    def __init__(self, index: int, length: int, position: Optional[Position] = None):
        super().__init__(f"index {index} out of bounds for length {length}", position)
        self.index = index
        self.length = length


class InvalidIndexExpression(EvalError):
    def __init__(self, collection: str, index: str, position: Optional[Position] = None):
        super().__init__(f"cannot index {collection} with {index}", position)
        self.collection = collection
        self.index = index


class BuiltinWrongNumberOfArguments(EvalError):
    def __init__(self, builtin: str, expected: int, got: int, position: Optional[Position] = None):
        super().__init__(f"{builtin} expects {expected} argument(s), got {got}", position)
        self.builtin = builtin
        self.expected = expected
        self.got = got


class BuiltinWrongArgumentType(EvalError):
    def __init__(self, builtin: str, expected: str, got: str, position: Optional[Position] = None):
        super().__init__(f"{builtin} expects {expected}, got {got}", position)
        self.builtin = builtin
        self.expected = expected
        self.got = got
