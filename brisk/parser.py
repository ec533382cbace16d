"""Parser for the Brisk language.

This module implements a recursive-descent parser with precedence
climbing for expressions. The parser keeps the current token plus one
token of lookahead, pulled lazily from a ``Lexer``.

Statement parsers start on the first token of a statement and finish on
its last token; the top-level loop then steps to the next token. When a
statement fails to parse the error is recorded, the parser skips ahead to
the next statement boundary and carries on, so that every error in a
source is reported together.

The `parse_program` function is the public entry point and returns a
`Program` AST node representing the entire source text.
"""

from __future__ import annotations

import logging
from enum import IntEnum
from typing import Callable, Dict, List, Optional, Tuple

from .ast import (
    Program, Statement, Expression, Block, ExpressionStatement, Let, Assign,
    Return, FunctionDeclaration, Condition, Identifier, IntegerLiteral,
    FloatLiteral, BooleanLiteral, StringLiteral, ArrayLiteral, Prefix, Infix,
    FunctionLiteral, Call, Index,
)
from .errors import (
    ParseError, InvalidToken, UnexpectedToken, UnexpectedEndOfInput,
    ParseFailed,
)
from .lexer import Lexer
from .tokens import Token, TokenKind
from .types import INT64_MAX

logger = logging.getLogger(__name__)


class Precedence(IntEnum):
    LOWEST = 1
    EQUALS = 2       # == !=
    COMPARISON = 3   # < > <= >=
    SUM = 4          # + -
    PRODUCT = 5      # * /
    PREFIX = 6       # -x !x
    CALL = 7         # f(x)
    INDEX = 8        # xs[0]


PRECEDENCES = {
    TokenKind.EQUALS: Precedence.EQUALS,
    TokenKind.NOT_EQUALS: Precedence.EQUALS,
    TokenKind.LESS_THAN: Precedence.COMPARISON,
    TokenKind.GREATER_THAN: Precedence.COMPARISON,
    TokenKind.LESS_EQUALS: Precedence.COMPARISON,
    TokenKind.GREATER_EQUALS: Precedence.COMPARISON,
    TokenKind.PLUS: Precedence.SUM,
    TokenKind.MINUS: Precedence.SUM,
    TokenKind.ASTERISK: Precedence.PRODUCT,
    TokenKind.SLASH: Precedence.PRODUCT,
    TokenKind.LEFT_PAREN: Precedence.CALL,
    TokenKind.LEFT_BRACKET: Precedence.INDEX,
}

# Tokens the parser may stop at while resynchronising after an error.
STATEMENT_KEYWORDS = (TokenKind.LET, TokenKind.RETURN, TokenKind.FUNCTION, TokenKind.IF)


def precedence_of(token: Optional[Token]) -> Precedence:
    if token is None:
        return Precedence.LOWEST
    return PRECEDENCES.get(token.kind, Precedence.LOWEST)


class Parser:
    def __init__(self, lexer: Lexer):
        self.lexer = lexer
        self.current: Optional[Token] = None
        self.peek: Optional[Token] = None
        self.errors: List[ParseError] = []
        # Blocks entered but not yet closed by the statement being parsed
        self.block_depth = 0

        self.prefix_parse_fns: Dict[TokenKind, Callable[[], Expression]] = {
            TokenKind.IDENTIFIER: self.parse_identifier,
            TokenKind.INTEGER: self.parse_integer,
            TokenKind.FLOAT: self.parse_float,
            TokenKind.TRUE: self.parse_boolean,
            TokenKind.FALSE: self.parse_boolean,
            TokenKind.STRING: self.parse_string,
            TokenKind.LEFT_BRACKET: self.parse_array,
            TokenKind.LEFT_PAREN: self.parse_grouped,
            TokenKind.BANG: self.parse_prefix,
            TokenKind.MINUS: self.parse_prefix,
            TokenKind.FUNCTION: self.parse_function_literal,
        }
        self.infix_parse_fns: Dict[TokenKind, Callable[[Expression], Expression]] = {
            kind: self.parse_infix for kind in PRECEDENCES
        }
        self.infix_parse_fns[TokenKind.LEFT_PAREN] = self.parse_call
        self.infix_parse_fns[TokenKind.LEFT_BRACKET] = self.parse_index

        self.next_token()
        self.next_token()

    # Token movement

    def next_token(self) -> None:
        self.current = self.peek
        self.peek = next(self.lexer, None)

    def current_is(self, kind: TokenKind) -> bool:
        return self.current is not None and self.current.kind is kind

    def peek_is(self, kind: TokenKind) -> bool:
        return self.peek is not None and self.peek.kind is kind

    def expect_current(self, kind: TokenKind) -> Token:
        if self.current is None:
            raise UnexpectedEndOfInput(kind)
        if self.current.kind is not kind:
            raise UnexpectedToken(kind, self.current)
        return self.current

    def expect_peek(self, kind: TokenKind) -> Token:
        """Advance onto the lookahead token if it has the expected kind."""
        if self.peek is None:
            raise UnexpectedEndOfInput(kind)
        if self.peek.kind is not kind:
            raise UnexpectedToken(kind, self.peek)
        self.next_token()
        return self.current

    def skip_optional_semicolon(self) -> None:
        if self.peek_is(TokenKind.SEMICOLON):
            self.next_token()

    def skip_blocks(self, depth: int) -> None:
        """Skip tokens until ``depth`` open blocks have been closed."""
        while self.current is not None and depth > 0:
            if self.current.kind is TokenKind.LEFT_CURLY:
                depth += 1
            elif self.current.kind is TokenKind.RIGHT_CURLY:
                depth -= 1
            self.next_token()

    def synchronize(self) -> None:
        """Skip past a failed statement to the next statement boundary.

        A statement that failed inside one or more blocks is skipped up to
        and including the ``}`` closing the outermost of them.
        """
        depth = self.block_depth
        self.block_depth = 0
        if depth > 0:
            self.skip_blocks(depth)
            # A failed ``if`` branch takes its ``else`` branch with it
            if self.current_is(TokenKind.ELSE) and self.peek_is(TokenKind.LEFT_CURLY):
                self.next_token()
                self.next_token()
                self.skip_blocks(1)
            return
        if self.current is None:
            return
        if self.current.kind is TokenKind.SEMICOLON:
            self.next_token()
            return
        self.next_token()
        while self.current is not None:
            if self.current.kind is TokenKind.SEMICOLON:
                self.next_token()
                return
            if self.current.kind in STATEMENT_KEYWORDS:
                return
            self.next_token()

    # Program and statements

    def parse(self) -> Program:
        """Parse the whole token stream.

        Raises ``ParseFailed`` carrying every collected error if any
        statement could not be parsed.
        """
        statements: List[Statement] = []
        while self.current is not None:
            if self.current_is(TokenKind.SEMICOLON):
                self.next_token()
                continue
            try:
                statements.append(self.parse_statement())
            except ParseError as err:
                logger.debug("parse error: %s", err)
                self.errors.append(err)
                self.synchronize()
                continue
            self.next_token()
        if self.errors:
            raise ParseFailed(self.errors)
        return Program(tuple(statements))

    def parse_statement(self) -> Statement:
        token = self.current
        if token is None:
            raise UnexpectedEndOfInput()
        kind = token.kind
        if kind is TokenKind.LET:
            return self.parse_let()
        if kind is TokenKind.RETURN:
            return self.parse_return()
        if kind is TokenKind.FUNCTION and self.peek_is(TokenKind.IDENTIFIER):
            return self.parse_function_declaration()
        if kind is TokenKind.IF:
            return self.parse_condition()
        if kind is TokenKind.LEFT_CURLY:
            return self.parse_block()
        if kind is TokenKind.IDENTIFIER and self.peek_is(TokenKind.ASSIGN):
            return self.parse_assign()
        if kind is TokenKind.ILLEGAL:
            raise InvalidToken(token)
        return self.parse_expression_statement()

    def parse_let(self) -> Let:
        let_token = self.expect_current(TokenKind.LET)
        self.expect_peek(TokenKind.IDENTIFIER)
        name = self.parse_identifier()
        self.expect_peek(TokenKind.ASSIGN)
        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)
        self.skip_optional_semicolon()
        return Let(let_token, name, value)

    def parse_assign(self) -> Assign:
        name = self.parse_identifier()
        self.expect_peek(TokenKind.ASSIGN)
        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)
        self.skip_optional_semicolon()
        return Assign(name.token, name, value)

    def parse_return(self) -> Return:
        return_token = self.expect_current(TokenKind.RETURN)
        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)
        self.skip_optional_semicolon()
        return Return(return_token, value)

    def parse_function_declaration(self) -> FunctionDeclaration:
        fn_token = self.expect_current(TokenKind.FUNCTION)
        self.expect_peek(TokenKind.IDENTIFIER)
        name = self.parse_identifier()
        self.expect_peek(TokenKind.LEFT_PAREN)
        params = self.parse_parameters()
        self.expect_peek(TokenKind.LEFT_CURLY)
        body = self.parse_block()
        return FunctionDeclaration(fn_token, name, params, body)

    def parse_condition(self) -> Condition:
        if_token = self.expect_current(TokenKind.IF)
        self.expect_peek(TokenKind.LEFT_PAREN)
        self.next_token()
        condition = self.parse_expression(Precedence.LOWEST)
        self.expect_peek(TokenKind.RIGHT_PAREN)
        self.expect_peek(TokenKind.LEFT_CURLY)
        if_true = self.parse_block()
        if_false = None
        if self.peek_is(TokenKind.ELSE):
            self.next_token()
            self.expect_peek(TokenKind.LEFT_CURLY)
            if_false = self.parse_block()
        return Condition(if_token, condition, if_true, if_false)

    def parse_block(self) -> Block:
        block_token = self.expect_current(TokenKind.LEFT_CURLY)
        self.block_depth += 1
        self.next_token()
        statements: List[Statement] = []
        while not self.current_is(TokenKind.RIGHT_CURLY):
            if self.current is None:
                raise UnexpectedEndOfInput(TokenKind.RIGHT_CURLY)
            if self.current_is(TokenKind.SEMICOLON):
                self.next_token()
                continue
            statements.append(self.parse_statement())
            self.next_token()
        self.block_depth -= 1
        return Block(block_token, tuple(statements))

    def parse_expression_statement(self) -> ExpressionStatement:
        token = self.current
        expression = self.parse_expression(Precedence.LOWEST)
        self.skip_optional_semicolon()
        return ExpressionStatement(token, expression)

    # Expressions

    def parse_expression(self, precedence: Precedence) -> Expression:
        if self.current is None:
            raise UnexpectedEndOfInput()
        prefix = self.prefix_parse_fns.get(self.current.kind)
        if prefix is None:
            raise InvalidToken(self.current)
        left = prefix()

        while (self.peek is not None
               and not self.peek_is(TokenKind.SEMICOLON)
               and precedence < precedence_of(self.peek)):
            infix = self.infix_parse_fns.get(self.peek.kind)
            if infix is None:
                return left
            self.next_token()
            left = infix(left)
        return left

    def parse_identifier(self) -> Identifier:
        return Identifier(self.expect_current(TokenKind.IDENTIFIER))

    def parse_integer(self) -> IntegerLiteral:
        token = self.expect_current(TokenKind.INTEGER)
        value = int(token.literal)
        if value > INT64_MAX:
            raise InvalidToken(token)
        return IntegerLiteral(token, value)

    def parse_float(self) -> FloatLiteral:
        token = self.expect_current(TokenKind.FLOAT)
        return FloatLiteral(token, float(token.literal))

    def parse_boolean(self) -> BooleanLiteral:
        return BooleanLiteral(self.current)

    def parse_string(self) -> StringLiteral:
        return StringLiteral(self.expect_current(TokenKind.STRING))

    def parse_array(self) -> ArrayLiteral:
        token = self.expect_current(TokenKind.LEFT_BRACKET)
        elements = self.parse_expression_list(TokenKind.RIGHT_BRACKET)
        return ArrayLiteral(token, elements)

    def parse_grouped(self) -> Expression:
        self.expect_current(TokenKind.LEFT_PAREN)
        self.next_token()
        expression = self.parse_expression(Precedence.LOWEST)
        self.expect_peek(TokenKind.RIGHT_PAREN)
        return expression

    def parse_prefix(self) -> Prefix:
        op_token = self.current
        self.next_token()
        operand = self.parse_expression(Precedence.PREFIX)
        return Prefix(op_token, operand)

    def parse_function_literal(self) -> FunctionLiteral:
        fn_token = self.expect_current(TokenKind.FUNCTION)
        self.expect_peek(TokenKind.LEFT_PAREN)
        params = self.parse_parameters()
        self.expect_peek(TokenKind.LEFT_CURLY)
        body = self.parse_block()
        return FunctionLiteral(fn_token, params, body)

    def parse_parameters(self) -> Tuple[Identifier, ...]:
        """Parse ``(a, b, c)``; starts on '(' and finishes on ')'."""
        self.expect_current(TokenKind.LEFT_PAREN)
        params: List[Identifier] = []
        if self.peek_is(TokenKind.RIGHT_PAREN):
            self.next_token()
            return ()
        self.expect_peek(TokenKind.IDENTIFIER)
        params.append(self.parse_identifier())
        while self.peek_is(TokenKind.COMMA):
            self.next_token()
            self.expect_peek(TokenKind.IDENTIFIER)
            params.append(self.parse_identifier())
        self.expect_peek(TokenKind.RIGHT_PAREN)
        return tuple(params)

    def parse_expression_list(self, end: TokenKind) -> Tuple[Expression, ...]:
        items: List[Expression] = []
        if self.peek_is(end):
            self.next_token()
            return ()
        self.next_token()
        items.append(self.parse_expression(Precedence.LOWEST))
        while self.peek_is(TokenKind.COMMA):
            self.next_token()
            self.next_token()
            items.append(self.parse_expression(Precedence.LOWEST))
        self.expect_peek(end)
        return tuple(items)

    def parse_infix(self, left: Expression) -> Infix:
        op_token = self.current
        precedence = precedence_of(op_token)
        self.next_token()
        right = self.parse_expression(precedence)
        return Infix(op_token, left, right)

    def parse_call(self, function: Expression) -> Call:
        token = self.expect_current(TokenKind.LEFT_PAREN)
        arguments = self.parse_expression_list(TokenKind.RIGHT_PAREN)
        return Call(token, function, arguments)

    def parse_index(self, collection: Expression) -> Index:
        token = self.expect_current(TokenKind.LEFT_BRACKET)
        self.next_token()
        index = self.parse_expression(Precedence.LOWEST)
        self.expect_peek(TokenKind.RIGHT_BRACKET)
        return Index(token, collection, index)


def parse_program(source: str) -> Program:
    """Parse Brisk source code into an AST Program.

    Raises ``ParseFailed`` with the full list of errors if the source is
    malformed anywhere.
    """
    return Parser(Lexer(source)).parse()
