"""Token definitions for the Brisk language.

Every stage after the lexer works in terms of the types defined here: the
closed set of token kinds, the source position of a token and the token
itself. Tokens are immutable once produced.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TokenKind(Enum):
    # Operators
    PLUS = '+'
    MINUS = '-'
    ASTERISK = '*'
    SLASH = '/'
    BANG = '!'
    ASSIGN = '='
    LESS_THAN = '<'
    GREATER_THAN = '>'
    EQUALS = '=='
    NOT_EQUALS = '!='
    LESS_EQUALS = '<='
    GREATER_EQUALS = '>='

    # Punctuation
    SEMICOLON = ';'
    COLON = ':'
    COMMA = ','
    DOT = '.'
    LEFT_PAREN = '('
    RIGHT_PAREN = ')'
    LEFT_CURLY = '{'
    RIGHT_CURLY = '}'
    LEFT_BRACKET = '['
    RIGHT_BRACKET = ']'

    # Literals
    IDENTIFIER = 'identifier'
    INTEGER = 'integer'
    FLOAT = 'float'
    STRING = 'string'

    # Keywords
    LET = 'let'
    FUNCTION = 'fn'
    RETURN = 'return'
    IF = 'if'
    ELSE = 'else'
    TRUE = 'true'
    FALSE = 'false'

    ILLEGAL = 'illegal'

    def __str__(self) -> str:
        return self.value


KEYWORDS = {
    'let': TokenKind.LET,
    'fn': TokenKind.FUNCTION,
    'return': TokenKind.RETURN,
    'if': TokenKind.IF,
    'else': TokenKind.ELSE,
    'true': TokenKind.TRUE,
    'false': TokenKind.FALSE,
}


@dataclass(frozen=True)
class Position:
    """A 1-based line/column location in the source text."""
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    literal: str
    position: Position

    def __str__(self) -> str:
        if self.kind is TokenKind.STRING:
            return f'"{self.literal}" at {self.position}'
        return f"'{self.literal}' at {self.position}"


def lookup_identifier(word: str) -> TokenKind:
    """Classify an alphabetic run as a keyword or an identifier."""
    return KEYWORDS.get(word, TokenKind.IDENTIFIER)
