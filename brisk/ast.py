"""Abstract Syntax Tree (AST) definitions for the Brisk language.

The AST classes defined in this module represent the syntactic structure
of parsed Brisk programs. Every node keeps the token it was built from so
that diagnostics can point at a source position, and every node can be
rendered back to a canonical text form with ``str()``. Nodes are frozen:
once the parser has built a tree nothing mutates it.
"""

from __future__ import annotations

import textwrap
from dataclasses import dataclass
from typing import Optional, Tuple

from .tokens import Token, TokenKind


@dataclass(frozen=True)
class Node:
    """Base class for all AST nodes."""
    token: Token

    def token_literal(self) -> str:
        return self.token.literal


@dataclass(frozen=True)
class Statement(Node):
    pass


@dataclass(frozen=True)
class Expression(Node):
    pass


@dataclass(frozen=True)
class Program:
    statements: Tuple[Statement, ...]

    def token_literal(self) -> str:
        if self.statements:
            return self.statements[0].token_literal()
        return ''

    def __str__(self) -> str:
        return '\n'.join(str(stmt) for stmt in self.statements)


###############################################################################
# Expressions
###############################################################################


@dataclass(frozen=True)
class Identifier(Expression):

    def __post_init__(self):
        assert self.token.kind is TokenKind.IDENTIFIER, self.token

    @property
    def name(self) -> str:
        return self.token.literal

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class IntegerLiteral(Expression):
    value: int

    def __post_init__(self):
        assert self.token.kind is TokenKind.INTEGER, self.token

    def __str__(self) -> str:
        return self.token.literal


@dataclass(frozen=True)
class FloatLiteral(Expression):
    value: float

    def __post_init__(self):
        assert self.token.kind is TokenKind.FLOAT, self.token

    def __str__(self) -> str:
        return self.token.literal


@dataclass(frozen=True)
class BooleanLiteral(Expression):

    def __post_init__(self):
        assert self.token.kind in (TokenKind.TRUE, TokenKind.FALSE), self.token

    @property
    def value(self) -> bool:
        return self.token.kind is TokenKind.TRUE

    def __str__(self) -> str:
        return self.token.literal


@dataclass(frozen=True)
class StringLiteral(Expression):

    def __post_init__(self):
        assert self.token.kind is TokenKind.STRING, self.token

    @property
    def value(self) -> str:
        return self.token.literal

    def __str__(self) -> str:
        return f'"{self.value}"'


@dataclass(frozen=True)
class ArrayLiteral(Expression):
    elements: Tuple[Expression, ...]

    def __str__(self) -> str:
        return '[' + ', '.join(str(el) for el in self.elements) + ']'


@dataclass(frozen=True)
class Prefix(Expression):
    operand: Expression

    @property
    def operator(self) -> str:
        return self.token.literal

    def __str__(self) -> str:
        return f"({self.operator}{self.operand})"


@dataclass(frozen=True)
class Infix(Expression):
    left: Expression
    right: Expression

    @property
    def operator(self) -> str:
        return self.token.literal

    def __str__(self) -> str:
        return f"({self.left}{self.operator}{self.right})"


@dataclass(frozen=True)
class FunctionLiteral(Expression):
    parameters: Tuple[Identifier, ...]
    body: 'Block'

    def __str__(self) -> str:
        params = ', '.join(str(p) for p in self.parameters)
        return f"fn({params}) {self.body}"


@dataclass(frozen=True)
class Call(Expression):
    function: Expression
    arguments: Tuple[Expression, ...]

    def __str__(self) -> str:
        args = ', '.join(str(a) for a in self.arguments)
        return f"{self.function}({args})"


@dataclass(frozen=True)
class Index(Expression):
    collection: Expression
    index: Expression

    def __str__(self) -> str:
        return f"{self.collection}[{self.index}]"


###############################################################################
# Statements
###############################################################################


@dataclass(frozen=True)
class Block(Statement):
    statements: Tuple[Statement, ...]

    def __str__(self) -> str:
        if not self.statements:
            return '{\n}'
        body = '\n'.join(textwrap.indent(str(stmt), '  ') for stmt in self.statements)
        return '{\n' + body + '\n}'


@dataclass(frozen=True)
class ExpressionStatement(Statement):
    expression: Expression

    def __str__(self) -> str:
        return str(self.expression)


@dataclass(frozen=True)
class Let(Statement):
    name: Identifier
    value: Expression

    def __str__(self) -> str:
        return f"let {self.name} = {self.value}"


@dataclass(frozen=True)
class Assign(Statement):
    """Rebinding of an existing name: ``name = value`` without ``let``."""
    name: Identifier
    value: Expression

    def __str__(self) -> str:
        return f"{self.name} = {self.value}"


@dataclass(frozen=True)
class Return(Statement):
    value: Expression

    def __str__(self) -> str:
        return f"return {self.value}"


@dataclass(frozen=True)
class FunctionDeclaration(Statement):
    name: Identifier
    parameters: Tuple[Identifier, ...]
    body: Block

    def __str__(self) -> str:
        params = ', '.join(str(p) for p in self.parameters)
        return f"fn {self.name}({params}) {self.body}"


@dataclass(frozen=True)
class Condition(Statement):
    condition: Expression
    if_true: Block
    if_false: Optional[Block] = None

    def __str__(self) -> str:
        out = f"if ({self.condition}) {self.if_true}"
        if self.if_false is not None:
            out += f" else {self.if_false}"
        return out
