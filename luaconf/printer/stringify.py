from __future__ import annotations

import logging
import math
import re

from luaconf.config import DEFAULT_INDENT
from luaconf.errors import LuaConfContractViolation
from luaconf.reader.lexer import RESERVED_WORDS
from luaconf.types.value import ConfigValue, ConfigValueType

logger = logging.getLogger(__name__)

IDENTIFIER_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*\Z")

# Integral floats below this render without a fractional part ("645", not "645.0")
_INTEGRAL_LIMIT = 1e16

_STRING_ESCAPES = {
    "\\": "\\\\",
    "\n": "\\n",
    "'": "\\'",
    '"': '\\"',
}
_STRING_ESCAPE_RE = re.compile(r"[\\\n'\"]")


# ----------------- Scalars -----------------
def format_number(number: float) -> str:
    if not math.isfinite(number):
        raise LuaConfContractViolation(f"Number {number!r} has no textual representation")
    # -0.0 falls through to repr, which keeps the sign
    if number.is_integer() and abs(number) < _INTEGRAL_LIMIT and math.copysign(1.0, number) > 0:
        return str(int(number))
    return repr(number)


def escape_string(text: str) -> str:
    """Double-quoted literal; backslash, newline and both quotes are escaped."""
    return '"' + _STRING_ESCAPE_RE.sub(lambda m: _STRING_ESCAPES[m.group()], text) + '"'


def _check_key(key: str) -> str:
    if not IDENTIFIER_RE.match(key) or key in RESERVED_WORDS:
        raise LuaConfContractViolation(f"Map key {key!r} is not a valid identifier")
    return key


# ----------------- Tree walk -----------------
def _render(value: ConfigValue, level: int, pretty: bool, unit: str) -> str:
    vtype = value.type
    if vtype is ConfigValueType.NIL:
        return "nil"
    if vtype is ConfigValueType.NUMBER:
        return format_number(value.as_number())
    if vtype is ConfigValueType.BOOLEAN:
        return "true" if value.as_boolean() else "false"
    if vtype is ConfigValueType.STRING:
        return escape_string(value.as_string())

    nl = "\n" if pretty else ""
    pad = unit * level if pretty else ""
    pad_close = unit * (level - 1) if pretty else ""

    if vtype is ConfigValueType.MAP:
        eq = " = " if pretty else "="
        parts = [
            f"{pad}{_check_key(k)}{eq}{_render(v, level + 1, pretty, unit)},{nl}"
            for k, v in value.items()
        ]
    else:
        parts = [f"{pad}{_render(v, level + 1, pretty, unit)},{nl}" for v in value]
    return "{" + nl + "".join(parts) + pad_close + "}"


def stringify(value: ConfigValue, pretty: bool = True, indent: str = DEFAULT_INDENT) -> str:
    """Render a map as configuration text, one `key = value` line per entry.

    The inverse of parse_config: `parse_config(stringify(v))` equals `v`.
    `pretty` adds line breaks and one `indent` per nesting level; without it
    tables are written on one line. Entries come out in the map's iteration
    order.
    """
    if not isinstance(value, ConfigValue) or not value.is_map:
        raise LuaConfContractViolation("stringify() needs a ConfigValue holding a map")
    if indent.strip():
        raise LuaConfContractViolation(f"Indentation must be whitespace, got {indent!r}")
    lines = [f"{_check_key(k)} = {_render(v, 1, pretty, indent)}\n" for k, v in value.items()]
    text = "".join(lines)
    logger.debug("rendered %d entries into %d characters", len(lines), len(text))
    return text
