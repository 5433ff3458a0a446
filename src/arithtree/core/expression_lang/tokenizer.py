"""
Tokenizer for arithmetic expressions.

Converts an expression string into a sequence of typed tokens. Tokens are
produced lazily and handed to the parser one at a time through
:class:`TokenStream` (``peek`` / ``advance``).
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from enum import StrEnum, auto

from arithtree.core.config import ArithConfig
from arithtree.core.errors import LexError, locate

logger = logging.getLogger(__name__)


class TokenKind(StrEnum):
    """Token types for the expression language.

    ``ADD_OP``, ``MULT_OP`` and ``EXP_OP`` are precedence levels, not single
    operators; the concrete operator is the token's lexeme.
    """

    # Precedence levels
    ADD_OP = auto()
    MULT_OP = auto()
    EXP_OP = auto()

    # Literals
    NUMBER = auto()

    # Punctuation
    LPAREN = auto()
    RPAREN = auto()

    # Line and input terminators
    EOL = auto()
    EOF = auto()


class Token:
    """A single token from the expression tokenizer."""

    __slots__ = ("kind", "lexeme", "pos")

    def __init__(self, kind: TokenKind, lexeme: str, pos: int) -> None:
        self.kind = kind
        self.lexeme = lexeme
        self.pos = pos

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.lexeme!r}, pos={self.pos})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        return (self.kind, self.lexeme, self.pos) == (other.kind, other.lexeme, other.pos)

    def __hash__(self) -> int:
        return hash((self.kind, self.lexeme, self.pos))


# Characters skipped between tokens; quotes are blanks too.
_BLANKS = frozenset(" \t\r\"'")

_NUMBER_RE = re.compile(r"[0-9]+")

_SINGLE_CHAR: dict[str, TokenKind] = {
    "+": TokenKind.ADD_OP,
    "-": TokenKind.ADD_OP,
    "*": TokenKind.MULT_OP,
    "/": TokenKind.MULT_OP,
    "%": TokenKind.MULT_OP,
    "^": TokenKind.EXP_OP,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    "\n": TokenKind.EOL,
}


class ExpressionTokenError(LexError):
    """Error during expression tokenization."""

    def __init__(self, message: str, pos: int, source: str | None = None) -> None:
        super().__init__(message, locate(source, pos) if source is not None else None)
        self.pos = pos


def _scan(source: str, config: ArithConfig) -> Iterator[Token]:
    """Yield tokens left to right, ending with a single EOF token."""
    i = 0
    n = len(source)

    while i < n:
        c = source[i]

        if c in _BLANKS:
            i += 1
            continue

        # Maximal munch over ASCII digits
        m = _NUMBER_RE.match(source, i)
        if m is not None:
            yield Token(TokenKind.NUMBER, m.group(0), i)
            i = m.end()
            continue

        kind = _SINGLE_CHAR.get(c)
        if kind is not None:
            yield Token(kind, c, i)
            i += 1
            continue

        if config.unknown_characters == "error":
            raise ExpressionTokenError(f"Unexpected character: {c!r}", i, source)
        logger.debug(f"Skipping unrecognised character {c!r} at {i}")
        i += 1

    yield Token(TokenKind.EOF, "", n)


class TokenStream:
    """Pull-based token cursor.

    ``peek`` returns the current token without consuming it; calling it
    again before ``advance`` returns the identical object. Once the input is
    exhausted every ``peek`` returns the EOF token.
    """

    def __init__(self, source: str, config: ArithConfig | None = None) -> None:
        self.source = source
        self.config = config or ArithConfig()
        self._tokens = _scan(source, self.config)
        self._current: Token | None = None

    def peek(self) -> Token:
        if self._current is None:
            # EOF is the last token the scanner yields; keep returning it
            self._current = next(self._tokens, None) or Token(
                TokenKind.EOF, "", len(self.source)
            )
        return self._current

    def advance(self) -> Token:
        """Consume and return the current token."""
        tok = self.peek()
        if tok.kind != TokenKind.EOF:
            self._current = None
        return tok

    def __iter__(self) -> Iterator[Token]:
        while True:
            tok = self.advance()
            yield tok
            if tok.kind == TokenKind.EOF:
                return


def tokenize(source: str, config: ArithConfig | None = None) -> list[Token]:
    """Tokenize an expression string into a list of tokens ending with EOF."""
    return list(TokenStream(source, config))
