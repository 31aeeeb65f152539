"""
  Configuration Lexer

- Single compiled regex with named groups, matched at the current offset
- `next_token` is the incremental contract: one token plus the offset of the
  unconsumed rest of the buffer. Errors come back as ERROR tokens.
- `lex` / `tokenize` drive `next_token` over a whole buffer and raise
  LuaConfLexicalError on the first ERROR token.

Tokens keep the raw source text they were read from; literal values are
only decoded on request (`as_number`, `as_string`, ...).
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterator

from luaconf.errors import LuaConfContractViolation, LuaConfLexicalError

logger = logging.getLogger(__name__)


class TokenType(Enum):
    NIL = "nil"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    IDENTIFIER = "identifier"
    OPEN_BRACE = "{"
    CLOSE_BRACE = "}"
    COMMA = ","
    EQUALS = "="
    END_OF_INPUT = "end of input"
    ERROR = "error"


RESERVED_WORDS: dict[str, TokenType] = {
    "nil": TokenType.NIL,
    "true": TokenType.BOOLEAN,
    "false": TokenType.BOOLEAN,
}

TOKEN_RE = re.compile(
    r"(?P<whitespace>\s+)"
    r"|(?P<comment>--[^\n]*)"  # single-line comment, newline not consumed
    r"|(?P<number>[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)"
    r"|(?P<name>[A-Za-z_][A-Za-z0-9_]*)"
    r'|(?P<string>"(?:\\.|[^"\\])*"'  # double-quoted
    r"|'(?:\\.|[^'\\])*')"  # single-quoted
    r"|(?P<open_brace>\{)"
    r"|(?P<close_brace>\})"
    r"|(?P<comma>,)"
    r"|(?P<equals>=)",
    re.DOTALL,
)

_PUNCTUATION: dict[str, TokenType] = {
    "open_brace": TokenType.OPEN_BRACE,
    "close_brace": TokenType.CLOSE_BRACE,
    "comma": TokenType.COMMA,
    "equals": TokenType.EQUALS,
}

ESCAPES: dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "v": "\v",
}

_UNRECOGNIZED_RE = re.compile(r"[^\s{},=\"']+")


def unescape(body: str) -> str:
    """Decode the backslash escapes of a string literal's body.

    Named escapes (\\n, \\t, ...) map to their control characters; a backslash
    before anything else stands for that character.
    """
    if "\\" not in body:
        return body
    out: list[str] = []
    i = 0
    n = len(body)
    while i < n:
        ch = body[i]
        if ch == "\\" and i + 1 < n:
            nxt = body[i + 1]
            out.append(ESCAPES.get(nxt, nxt))
            i += 2
            continue
        out.append(ch)
        i += 1
    return "".join(out)


def line_and_column(source: str, offset: int) -> tuple[int, int]:
    """1-based line and column of `offset` in `source`."""
    line = source.count("\n", 0, offset) + 1
    column = offset - (source.rfind("\n", 0, offset) + 1) + 1
    return line, column


@dataclass(frozen=True)
class Token:
    """A lexed token: its classification, the raw text and where it starts."""

    type: TokenType
    raw: str
    offset: int = 0

    @property
    def is_identifier(self) -> bool:
        return self.type is TokenType.IDENTIFIER

    def _require(self, expected: TokenType) -> None:
        if self.type is not expected:
            raise LuaConfContractViolation(
                f"Token {self.raw!r} is a {self.type.name}, not a {expected.name}")

    def as_number(self) -> float:
        self._require(TokenType.NUMBER)
        return float(self.raw)

    def as_string(self) -> str:
        self._require(TokenType.STRING)
        return unescape(self.raw[1:-1])

    def as_boolean(self) -> bool:
        self._require(TokenType.BOOLEAN)
        return self.raw == "true"

    def as_identifier(self) -> str:
        self._require(TokenType.IDENTIFIER)
        return self.raw

    def describe(self, source: str | None = None) -> str:
        """Human-readable location for error messages."""
        if self.type is TokenType.END_OF_INPUT:
            return "end of input"
        if source is None:
            return f"{self.raw!r} at offset {self.offset}"
        line, column = line_and_column(source, self.offset)
        return f"{self.raw!r} at line {line}, column {column}"


def next_token(source: str, pos: int = 0) -> tuple[Token, int]:
    """Lex one token starting at `pos`.

    Returns the token and the offset where the unconsumed input begins.
    Whitespace and comments are skipped and never returned. At the end of
    the buffer an END_OF_INPUT token is returned; lexical problems come back
    as an ERROR token holding the offending text.
    """
    n = len(source)
    while pos < n:
        m = TOKEN_RE.match(source, pos)
        if m is None:
            return _error_token(source, pos)

        kind = m.lastgroup
        raw = m.group()
        start = pos
        pos = m.end()

        if kind in ("whitespace", "comment"):
            continue
        if kind == "number":
            return Token(TokenType.NUMBER, raw, start), pos
        if kind == "name":
            return Token(RESERVED_WORDS.get(raw, TokenType.IDENTIFIER), raw, start), pos
        if kind == "string":
            return Token(TokenType.STRING, raw, start), pos
        return Token(_PUNCTUATION[kind], raw, start), pos

    return Token(TokenType.END_OF_INPUT, "", n), n


def _error_token(source: str, pos: int) -> tuple[Token, int]:
    ch = source[pos]
    if ch in "\"'":
        # An opening quote the string pattern could not close
        return Token(TokenType.ERROR, source[pos:], pos), len(source)
    m = _UNRECOGNIZED_RE.match(source, pos)
    raw = m.group() if m else ch
    return Token(TokenType.ERROR, raw, pos), pos + len(raw)


def lex(source: str) -> Iterator[Token]:
    """Token generator; stops before END_OF_INPUT, raises on ERROR tokens."""
    pos = 0
    while True:
        token, pos = next_token(source, pos)
        if token.type is TokenType.END_OF_INPUT:
            return
        if token.type is TokenType.ERROR:
            line, column = line_and_column(source, token.offset)
            if token.raw[:1] in ("\"", "'"):
                what = "Unterminated string"
            else:
                what = "Unrecognized input"
            raise LuaConfLexicalError(
                f"{what} near {token.raw[:40]!r} at line {line}, column {column}",
                fragment=token.raw, offset=token.offset, line=line, column=column,
            )
        yield token


def tokenize(source: str) -> list[Token]:
    """Lex all of `source` eagerly."""
    tokens = list(lex(source))
    logger.debug("lexed %d tokens from %d characters", len(tokens), len(source))
    return tokens
