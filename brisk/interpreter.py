"""Tree-walking interpreter for the Brisk language.

The interpreter evaluates a parsed ``Program`` against an ``Environment``.
There is one evaluation rule per syntax-tree node: ``execute`` handles
statements and ``evaluate`` handles expressions. Both return a runtime
value or raise an ``EvalError``.

A ``return`` statement produces a ``ReturnedVal`` wrapper. Blocks stop at
the first wrapper they see and hand it upwards unchanged; the function
call boundary is the only place where the wrapper is removed again.
"""

from __future__ import annotations

import logging
import sys
from typing import List, Optional, TextIO

from .ast import (
    Program, Statement, Expression, Block, ExpressionStatement, Let, Assign,
    Return, FunctionDeclaration, Condition, Identifier, IntegerLiteral,
    FloatLiteral, BooleanLiteral, StringLiteral, ArrayLiteral, Prefix, Infix,
    FunctionLiteral, Call, Index,
)
from .builtin_function import BuiltinFunction
from .environment import Environment
from .errors import (
    EvalError, TriedToStoreVoid, NotDefined, InvalidPrefixOperation,
    InvalidInfixOperation, DivisionByZero, VoidValueAsArgument, NotAFunction,
    WrongNumberOfArguments, NonBooleanCondition, IndexOutOfBounds,
    InvalidIndexExpression,
)
from .parser import parse_program
from .tokens import Position
from .types import (
    Value, IntVal, FloatVal, BoolVal, StrVal, ArrayVal, FunctionVal,
    ReturnedVal, VoidVal, VOID, native_bool, is_numeric, wrap_int,
    int_divide, to_string,
)

logger = logging.getLogger(__name__)

# One Brisk call spans several Python frames
RECURSION_LIMIT = 10000
if sys.getrecursionlimit() < RECURSION_LIMIT:
    sys.setrecursionlimit(RECURSION_LIMIT)

EQUALITY_OPERATORS = ('==', '!=')


def describe(value: Value) -> str:
    """Render a value for an error message."""
    if isinstance(value, StrVal):
        return f'"{value.value}"'
    return to_string(value)


class Interpreter:
    """Core interpreter that executes Brisk AST."""

    def __init__(self, debug_level: int = 0, output: Optional[TextIO] = None):
        self.debug_level = debug_level
        self.global_env = Environment.new_global(output)

    def debug(self, level: int, msg: str, *args) -> None:
        if self.debug_level >= level:
            logger.debug(msg, *args)

    # Public API
    def run(self, program: Program, env: Optional[Environment] = None) -> Value:
        """Execute ``program`` and return the value of its last statement.

        Bindings made before a failing statement stay in ``env``.
        """
        if env is None:
            env = self.global_env
        self.debug(1, "run: %d statement(s)", len(program.statements))
        result: Value = VOID
        for stmt in program.statements:
            result = self.execute(stmt, env)
            if isinstance(result, ReturnedVal):
                result = result.value
                break
        self.debug(1, "run: result %s", to_string(result))
        return result

    def execute_block(self, block: Block, env: Environment) -> Value:
        """Run the statements of ``block`` directly in ``env``."""
        result: Value = VOID
        for stmt in block.statements:
            result = self.execute(stmt, env)
            if isinstance(result, ReturnedVal):
                return result
        return result

    ###########################################################################
    # Statements
    ###########################################################################

    def execute(self, node: Statement, env: Environment) -> Value:
        if isinstance(node, ExpressionStatement):
            return self.evaluate(node.expression, env)
        if isinstance(node, Let):
            value = self.evaluate(node.value, env)
            if isinstance(value, VoidVal):
                raise TriedToStoreVoid(node.name.name, node.name.token.position)
            env.declare(node.name.name, value)
            self.debug(2, "declare %s = %s", node.name.name, to_string(value))
            return VOID
        if isinstance(node, Assign):
            value = self.evaluate(node.value, env)
            if isinstance(value, VoidVal):
                raise TriedToStoreVoid(node.name.name, node.name.token.position)
            if not env.assign(node.name.name, value):
                raise NotDefined(node.name.name, node.name.token.position)
            self.debug(2, "assign %s = %s", node.name.name, to_string(value))
            return VOID
        if isinstance(node, Return):
            return ReturnedVal(self.evaluate(node.value, env))
        if isinstance(node, Block):
            return self.execute_block(node, env.child())
        if isinstance(node, Condition):
            return self.execute_condition(node, env)
        if isinstance(node, FunctionDeclaration):
            func = self.make_function(node.parameters, node.body, env)
            env.declare(node.name.name, func)
            self.debug(2, "define function %s", node.name.name)
            return VOID
        raise NotImplementedError(f"execute: unexpected node type {type(node)}")

    def execute_condition(self, node: Condition, env: Environment) -> Value:
        cond = self.evaluate(node.condition, env)
        if not isinstance(cond, BoolVal):
            raise NonBooleanCondition(describe(cond), node.token.position)
        self.debug(3, "if condition %s", to_string(cond))
        branch = node.if_true if cond.value else node.if_false
        if branch is None:
            return VOID
        result = self.execute_block(branch, env.child())
        if isinstance(result, ReturnedVal):
            return result
        return VOID

    ###########################################################################
    # Expressions
    ###########################################################################

    def evaluate(self, node: Expression, env: Environment) -> Value:
        if isinstance(node, IntegerLiteral):
            return IntVal(node.value)
        if isinstance(node, FloatLiteral):
            return FloatVal(node.value)
        if isinstance(node, BooleanLiteral):
            return native_bool(node.value)
        if isinstance(node, StringLiteral):
            return StrVal(node.value)
        if isinstance(node, Identifier):
            value = env.get(node.name)
            if value is None:
                raise NotDefined(node.name, node.token.position)
            return value
        if isinstance(node, ArrayLiteral):
            return ArrayVal(tuple(self.evaluate(el, env) for el in node.elements))
        if isinstance(node, Prefix):
            operand = self.evaluate(node.operand, env)
            return self.apply_prefix_op(node.operator, operand, node.token.position)
        if isinstance(node, Infix):
            left = self.evaluate(node.left, env)
            right = self.evaluate(node.right, env)
            return self.apply_infix_op(node.operator, left, right, node.token.position)
        if isinstance(node, FunctionLiteral):
            return self.make_function(node.parameters, node.body, env)
        if isinstance(node, Call):
            return self.evaluate_call(node, env)
        if isinstance(node, Index):
            collection = self.evaluate(node.collection, env)
            index = self.evaluate(node.index, env)
            return self.apply_index(collection, index, node.token.position)
        raise NotImplementedError(f"evaluate: unexpected node type {type(node)}")

    def make_function(self, parameters, body: Block, env: Environment) -> FunctionVal:
        return FunctionVal(tuple(p.name for p in parameters), body, env)

    def evaluate_call(self, node: Call, env: Environment) -> Value:
        position = node.token.position
        callee = self.evaluate(node.function, env)
        if not isinstance(callee, (FunctionVal, BuiltinFunction)):
            raise NotAFunction(describe(callee), position)

        args: List[Value] = []
        for arg_node in node.arguments:
            arg = self.evaluate(arg_node, env)
            if isinstance(arg, VoidVal):
                raise VoidValueAsArgument(arg_node.token.position)
            args.append(arg)
        self.debug(3, "call %s with %d argument(s)", node.function, len(args))

        if isinstance(callee, BuiltinFunction):
            try:
                return callee(args)
            except EvalError as err:
                if err.position is None:
                    err.position = position
                raise
        return self.call_function(callee, args, position)

    def call_function(self, func: FunctionVal, args: List[Value],
                      position: Optional[Position] = None) -> Value:
        if len(func.parameters) != len(args):
            raise WrongNumberOfArguments(len(func.parameters), len(args), position)
        call_env = func.env.child()
        for name, arg in zip(func.parameters, args):
            call_env.declare(name, arg)
        result = self.execute_block(func.body, call_env)
        if isinstance(result, ReturnedVal):
            return result.value
        return result

    def apply_prefix_op(self, op: str, operand: Value, position: Position) -> Value:
        if op == '!' and isinstance(operand, BoolVal):
            return native_bool(not operand.value)
        if op == '-' and isinstance(operand, IntVal):
            return IntVal(wrap_int(-operand.value))
        if op == '-' and isinstance(operand, FloatVal):
            return FloatVal(-operand.value)
        raise InvalidPrefixOperation(op, describe(operand), position)

    def apply_infix_op(self, op: str, a: Value, b: Value, position: Position) -> Value:
        if isinstance(a, IntVal) and isinstance(b, IntVal):
            return self.apply_integer_op(op, a, b, position)
        if is_numeric(a) and is_numeric(b):
            # Mixed Integer/Float pairs are promoted to Float.
            return self.apply_float_op(op, FloatVal(float(a.value)), FloatVal(float(b.value)), position)
        if isinstance(a, StrVal) and isinstance(b, StrVal):
            if op == '+':
                return StrVal(a.value + b.value)
            if op in EQUALITY_OPERATORS:
                return native_bool((a.value == b.value) == (op == '=='))
        if isinstance(a, BoolVal) and isinstance(b, BoolVal):
            if op in EQUALITY_OPERATORS:
                return native_bool((a.value == b.value) == (op == '=='))
        raise InvalidInfixOperation(describe(a), op, describe(b), position)

    def apply_integer_op(self, op: str, a: IntVal, b: IntVal, position: Position) -> Value:
        x, y = a.value, b.value
        if op == '+':
            return IntVal(wrap_int(x + y))
        if op == '-':
            return IntVal(wrap_int(x - y))
        if op == '*':
            return IntVal(wrap_int(x * y))
        if op == '/':
            if y == 0:
                raise DivisionByZero(describe(a), describe(b), position)
            return IntVal(int_divide(x, y))
        return self.compare(op, x, y, a, b, position)

    def apply_float_op(self, op: str, a: FloatVal, b: FloatVal, position: Position) -> Value:
        x, y = a.value, b.value
        if op == '+':
            return FloatVal(x + y)
        if op == '-':
            return FloatVal(x - y)
        if op == '*':
            return FloatVal(x * y)
        if op == '/':
            if y == 0.0:
                raise DivisionByZero(describe(a), describe(b), position)
            return FloatVal(x / y)
        return self.compare(op, x, y, a, b, position)

    def compare(self, op: str, x, y, a: Value, b: Value, position: Position) -> Value:
        if op == '<':
            return native_bool(x < y)
        if op == '>':
            return native_bool(x > y)
        if op == '<=':
            return native_bool(x <= y)
        if op == '>=':
            return native_bool(x >= y)
        if op == '==':
            return native_bool(x == y)
        if op == '!=':
            return native_bool(x != y)
        raise InvalidInfixOperation(describe(a), op, describe(b), position)

    def apply_index(self, collection: Value, index: Value, position: Position) -> Value:
        if isinstance(collection, (ArrayVal, StrVal)) and isinstance(index, IntVal):
            items = collection.elements if isinstance(collection, ArrayVal) else collection.value
            i = index.value
            if i < 0 or i >= len(items):
                raise IndexOutOfBounds(i, len(items), position)
            if isinstance(collection, StrVal):
                return StrVal(items[i])
            return items[i]
        raise InvalidIndexExpression(describe(collection), describe(index), position)


def run_program(source: str, debug_level: int = 0, output: Optional[TextIO] = None) -> Value:
    """Parse and run ``source`` in a fresh global environment."""
    ast = parse_program(source)
    interpreter = Interpreter(debug_level=debug_level, output=output)
    return interpreter.run(ast)
