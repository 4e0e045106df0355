"""
Tokenizer for numeval arithmetic expressions.

Converts an expression string into a flat sequence of typed tokens.
Signs are never folded into numbers; a leading '-' is left for the
grammar to classify as unary or binary.
"""

from __future__ import annotations

import re
from enum import StrEnum, auto

from numeval.core.errors import ErrorContext, ExpressionTokenError


class TokenKind(StrEnum):
    """Token types for arithmetic expressions."""

    # Literals and names
    NUMBER = auto()
    IDENT = auto()

    # Operators
    PLUS = auto()
    MINUS = auto()
    STAR = auto()
    SLASH = auto()
    PERCENT = auto()
    CARET = auto()

    # Punctuation
    LPAREN = auto()
    RPAREN = auto()
    COMMA = auto()

    # End of input
    EOF = auto()


class Token:
    """A single token from the expression tokenizer."""

    __slots__ = ("kind", "value", "pos")

    def __init__(self, kind: TokenKind, value: str, pos: int) -> None:
        self.kind = kind
        self.value = value
        self.pos = pos

    @property
    def end(self) -> int:
        return self.pos + len(self.value)

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.value!r}, pos={self.pos})"


# Number pattern: digits with an optional fractional part ("3", "3.25", "3.")
_NUMBER_RE = re.compile(r"[0-9]+(\.[0-9]*)?")
# Identifier: letter or underscore followed by alphanumerics/underscores
_IDENT_RE = re.compile(r"[a-zA-Z_][a-zA-Z0-9_]*")

_SINGLE_MAP: dict[str, TokenKind] = {
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.STAR,
    "/": TokenKind.SLASH,
    "%": TokenKind.PERCENT,
    "^": TokenKind.CARET,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    ",": TokenKind.COMMA,
}


def tokenize(source: str) -> list[Token]:
    """Tokenize an expression string into a list of tokens ending in EOF.

    Raises:
        ExpressionTokenError: On a character outside the expression alphabet.
    """
    tokens: list[Token] = []
    i = 0
    n = len(source)

    while i < n:
        c = source[i]

        if c.isspace():
            i += 1
            continue

        # Both patterns are ASCII-only; str.isdigit() would accept superscripts
        m = _NUMBER_RE.match(source, i)
        if m:
            tokens.append(Token(TokenKind.NUMBER, m.group(0), i))
            i = m.end()
            continue

        m = _IDENT_RE.match(source, i)
        if m:
            tokens.append(Token(TokenKind.IDENT, m.group(0), i))
            i = m.end()
            continue

        kind = _SINGLE_MAP.get(c)
        if kind is not None:
            tokens.append(Token(kind, c, i))
            i += 1
            continue

        raise ExpressionTokenError(
            f"Unexpected character: {c!r}",
            ErrorContext(source=source, offset=i),
        )

    tokens.append(Token(TokenKind.EOF, "", n))
    return tokens
