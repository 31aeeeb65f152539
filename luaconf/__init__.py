# Core type aliases and the public entry points of luaconf.
# Configuration text is a subset of the Lua data-literal syntax; it is read
# into a tree of ConfigValue objects and written back out by stringify().
#
# Naming guidance:
# - ConfigValue: the tagged union every parsed or constructed value lives in.
# - PyConfigData: plain Python data that ConfigValue(...) accepts and
#   ConfigValue.to_python() returns.

from typing import Any, Dict, List, Union

# Plain Python data convertible to and from a ConfigValue
PyConfigData = Union[None, bool, float, int, str, Dict[str, Any], List[Any]]

from luaconf.errors import (  # noqa: E402
    LuaConfError,
    LuaConfSyntaxError,
    LuaConfLexicalError,
    LuaConfContractViolation,
)
from luaconf.types.value import ConfigValue, ConfigValueType  # noqa: E402
from luaconf.reader.parser import parse_config, parse_value  # noqa: E402
from luaconf.printer.stringify import stringify  # noqa: E402

__all__ = [
    "PyConfigData",
    "ConfigValue",
    "ConfigValueType",
    "parse_config",
    "parse_value",
    "stringify",
    "LuaConfError",
    "LuaConfSyntaxError",
    "LuaConfLexicalError",
    "LuaConfContractViolation",
]
