from __future__ import annotations


class LuaConfError(Exception):
    """ Base class for all luaconf errors"""
    pass


class LuaConfSyntaxError(LuaConfError):
    """ Raised when configuration text is not well-formed.

    Carries the offending raw fragment and where it starts in the source, so
    callers can point at the problem without re-lexing.
    """

    def __init__(self, message: str, fragment: str | None = None,
                 offset: int | None = None, line: int | None = None,
                 column: int | None = None):
        super().__init__(message)
        self.fragment = fragment
        self.offset = offset
        self.line = line
        self.column = column


class LuaConfLexicalError(LuaConfSyntaxError):
    """ Raised on an unterminated string or an unrecognized character"""


class LuaConfContractViolation(LuaConfError):
    """ Raised when a ConfigValue is used in a way its active variant does not allow"""
