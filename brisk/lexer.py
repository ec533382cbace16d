"""Tokenizer for the Brisk language.

Scanning is delegated to a Lark lexer configured with the terminals of
the language. The ``Lexer`` class wraps Lark's token generator and turns
every Lark token into a Brisk ``Token``, so it stays a forward-only
iterator: each call to ``next()`` scans just enough input to produce one
token, and the iterator is exhausted once the input has been consumed.

Whitespace and ``//`` line comments are skipped. String literals run from
``"`` to the closing quote; a string that is still open at the end of the
line (or input) is truncated there rather than reported as an error. Any
character no other terminal accepts becomes an ``ILLEGAL`` token, which
the parser reports.
"""

from __future__ import annotations

from typing import Iterator, List

from lark import Lark
from lark import Token as LarkToken

from .tokens import Position, Token, TokenKind, lookup_identifier


BRISK_TOKENS = r"""
    start: _token*

    _token: EQUALS | NOT_EQUALS | LESS_EQUALS | GREATER_EQUALS
          | PLUS | MINUS | ASTERISK | SLASH | BANG | ASSIGN
          | LESS_THAN | GREATER_THAN
          | SEMICOLON | COLON | COMMA | DOT
          | LEFT_PAREN | RIGHT_PAREN | LEFT_CURLY | RIGHT_CURLY
          | LEFT_BRACKET | RIGHT_BRACKET
          | FLOAT | INTEGER | STRING | IDENTIFIER | ILLEGAL

    EQUALS: "=="
    NOT_EQUALS: "!="
    LESS_EQUALS: "<="
    GREATER_EQUALS: ">="

    PLUS: "+"
    MINUS: "-"
    ASTERISK: "*"
    SLASH: "/"
    BANG: "!"
    ASSIGN: "="
    LESS_THAN: "<"
    GREATER_THAN: ">"

    SEMICOLON: ";"
    COLON: ":"
    COMMA: ","
    DOT: "."
    LEFT_PAREN: "("
    RIGHT_PAREN: ")"
    LEFT_CURLY: "{"
    RIGHT_CURLY: "}"
    LEFT_BRACKET: "["
    RIGHT_BRACKET: "]"

    // A number takes at most one '.', so FLOAT must be tried before INTEGER
    FLOAT.2: /\d+\.\d*/
    INTEGER: /\d+/
    STRING: /"[^"\n]*"?/
    IDENTIFIER: /[^\W\d]+/
    ILLEGAL.-1: /./

    LINE_COMMENT: /\/\/[^\n]*/
    WHITESPACE: /\s+/
    %ignore LINE_COMMENT
    %ignore WHITESPACE
"""


BRISK_LEXER = Lark(
    BRISK_TOKENS,
    parser='lalr',
    lexer='basic',
)


def string_contents(text: str) -> str:
    """Strip the quotes from a STRING match; the closing one may be missing."""
    body = text[1:]
    if body.endswith('"'):
        body = body[:-1]
    return body


def convert_token(lark_token: LarkToken) -> Token:
    position = Position(lark_token.line, lark_token.column)
    text = lark_token.value
    if lark_token.type == 'IDENTIFIER':
        return Token(lookup_identifier(text), text, position)
    if lark_token.type == 'STRING':
        return Token(TokenKind.STRING, string_contents(text), position)
    return Token(TokenKind[lark_token.type], text, position)


class Lexer:
    """Lazy token stream over a source string."""

    def __init__(self, source: str):
        self.source = source
        self.tokens = BRISK_LEXER.lex(source)

    def __iter__(self) -> Iterator[Token]:
        return self

    def __next__(self) -> Token:
        return convert_token(next(self.tokens))


def tokenize(source: str) -> List[Token]:
    """Return every token of ``source`` as a list."""
    return list(Lexer(source))
