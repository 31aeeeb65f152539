"""
  Configuration Parser

Recursive descent over an eagerly lexed token list:

    config := { identifier '=' value }
    value  := 'nil' | string | number | boolean | table
    table  := '{' '}'                              -> empty list
            | '{' identifier '=' value ... '}'     -> map
            | '{' value ... '}'                    -> list

Separating commas are optional before the closing brace. A table is a map
iff the token right after '{' is an identifier; everything else, including
'{}', is a list.
"""

from __future__ import annotations

import logging
from typing import Optional

from luaconf.config import DEFAULT_MAX_DEPTH
from luaconf.errors import LuaConfSyntaxError
from luaconf.reader.lexer import Token, TokenType, line_and_column, tokenize
from luaconf.types.value import ConfigValue, ConfigValueType

logger = logging.getLogger(__name__)


class TokenStream:
    def __init__(self, tokens: list[Token], source: str | None = None,
                 max_depth: int = DEFAULT_MAX_DEPTH):
        self.tokens = tokens
        self.source = source
        self.pos = 0
        self.max_depth = max_depth

    @property
    def remaining(self) -> int:
        return len(self.tokens) - self.pos

    def peek(self, ahead: int = 0) -> Optional[Token]:
        idx = self.pos + ahead
        if idx < len(self.tokens):
            return self.tokens[idx]
        return None

    def advance(self) -> Token:
        token = self.peek()
        if token is None:
            raise self.error("Unexpected end of input")
        self.pos += 1
        return token

    def expect(self, tok_type: TokenType, what: str) -> Token:
        token = self.peek()
        if token is None:
            raise self.error(f"Expected {what}, got end of input")
        if token.type is not tok_type:
            raise self.error(f"Expected {what}, got", token)
        self.pos += 1
        return token

    def error(self, message: str, token: Token | None = None) -> LuaConfSyntaxError:
        """Build (not raise) a syntax error pointing at `token`.

        Without a token the error points at the end of the input.
        """
        if token is None:
            return self._end_of_input_error(message)
        line = column = None
        if self.source is not None:
            line, column = line_and_column(self.source, token.offset)
        return LuaConfSyntaxError(
            f"{message} {token.describe(self.source)}",
            fragment=token.raw, offset=token.offset, line=line, column=column,
        )

    def _end_of_input_error(self, message: str) -> LuaConfSyntaxError:
        if self.source is not None:
            offset = len(self.source)
        elif self.tokens:
            last = self.tokens[-1]
            offset = last.offset + len(last.raw)
        else:
            offset = 0
        if self.source is None:
            return LuaConfSyntaxError(
                f"{message} at offset {offset}", fragment="", offset=offset)
        line, column = line_and_column(self.source, offset)
        return LuaConfSyntaxError(
            f"{message} at line {line}, column {column}",
            fragment="", offset=offset, line=line, column=column,
        )

    # ------------------------
    # Values
    # ------------------------
    def parse_value(self, depth: int = 0) -> ConfigValue:
        token = self.peek()
        if token is None:
            raise self.error("Expected a value, got end of input")

        if token.type is TokenType.NIL:
            self.advance()
            return ConfigValue()
        if token.type is TokenType.STRING:
            self.advance()
            return ConfigValue(token.as_string())
        if token.type is TokenType.NUMBER:
            self.advance()
            return ConfigValue(token.as_number())
        if token.type is TokenType.BOOLEAN:
            self.advance()
            return ConfigValue(token.as_boolean())
        if token.type is TokenType.OPEN_BRACE:
            if depth >= self.max_depth:
                raise self.error(f"Tables nested deeper than {self.max_depth} levels near", token)
            if self.remaining < 2:
                raise self.error("Table not closed near", token)
            if self.peek(1).is_identifier:
                return self.parse_map(depth + 1)
            return self.parse_list(depth + 1)

        raise self.error("Expected a value, got", token)

    def _end_of_entry(self, opening: Token, what: str) -> None:
        """After a table entry: consume a comma, or stop at the closing brace."""
        token = self.peek()
        if token is None:
            raise self.error(f"{what} not closed near", opening)
        if token.type is TokenType.COMMA:
            self.advance()
        elif token.type is not TokenType.CLOSE_BRACE:
            raise self.error(f"Expected ',' or '}}' in {what.lower()}, got", token)

    def _at_close(self, opening: Token, what: str) -> bool:
        token = self.peek()
        if token is None:
            raise self.error(f"{what} not closed near", opening)
        if token.type is TokenType.CLOSE_BRACE:
            self.advance()
            return True
        return False

    def parse_map(self, depth: int = 1) -> ConfigValue:
        opening = self.expect(TokenType.OPEN_BRACE, "'{'")
        entries: dict[str, ConfigValue] = {}
        while not self._at_close(opening, "Map"):
            key, value = self.parse_pair(depth)
            entries[key] = value
            self._end_of_entry(opening, "Map")
        return ConfigValue._from_parts(ConfigValueType.MAP, entries)

    def parse_list(self, depth: int = 1) -> ConfigValue:
        opening = self.expect(TokenType.OPEN_BRACE, "'{'")
        items: list[ConfigValue] = []
        while not self._at_close(opening, "List"):
            items.append(self.parse_value(depth))
            self._end_of_entry(opening, "List")
        return ConfigValue._from_parts(ConfigValueType.LIST, items)

    def parse_pair(self, depth: int = 0) -> tuple[str, ConfigValue]:
        """identifier '=' value"""
        token = self.peek()
        if token is None:
            raise self.error("Expected a key, got end of input")
        if not token.is_identifier:
            raise self.error("Not a valid key:", token)
        self.advance()
        self.expect(TokenType.EQUALS, f"'=' after {token.raw!r}")
        return token.as_identifier(), self.parse_value(depth)

    def parse_all(self) -> ConfigValue:
        """Top level: a sequence of pairs, collected into a map."""
        entries: dict[str, ConfigValue] = {}
        while self.peek() is not None:
            key, value = self.parse_pair()
            if key in entries:
                logger.debug("duplicate top-level key %r, last occurrence wins", key)
            entries[key] = value
        return ConfigValue._from_parts(ConfigValueType.MAP, entries)


def parse_value(source: str, max_depth: int = DEFAULT_MAX_DEPTH) -> ConfigValue:
    """Parse a single value (no `key =` prefix), e.g. "{ 1, 2 }"."""
    stream = TokenStream(tokenize(source), source, max_depth)
    value = stream.parse_value()
    extra = stream.peek()
    if extra is not None:
        raise stream.error("Unexpected data after value:", extra)
    return value


def parse_config(source: str, max_depth: int = DEFAULT_MAX_DEPTH) -> ConfigValue:
    """Parse configuration text into a map of its top-level `key = value` pairs.

    Raises LuaConfSyntaxError (or its subclass LuaConfLexicalError) if the
    text is not well-formed; nothing is returned in that case.

    Example:

        favoriteColor = "Blue"
        luckyNumbers = { 13, 55, 171, }   -- trailing comma is fine
        unluckyNumbers = { -4.56e-4, +4, .1235 }
        translationTable = {
           one = { 'um', 'eins', 'un' },
           two = { 'dois', 'zwei', 'deux' },
        }
        colorBlindMode = true
    """
    stream = TokenStream(tokenize(source), source, max_depth)
    result = stream.parse_all()
    logger.debug("parsed %d top-level entries", len(result))
    return result
