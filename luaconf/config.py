from __future__ import annotations

# Defaults for the keyword arguments of parse_config() and stringify().
# Callers override them per call; nothing here is read from the environment.

# Deepest table nesting the parser accepts before giving up
DEFAULT_MAX_DEPTH = 200

# Indentation added per nesting level in pretty output
DEFAULT_INDENT = "   "
