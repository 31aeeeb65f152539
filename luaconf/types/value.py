"""Configuration values.

A ConfigValue represents the subset of scripting-language data that the
configuration format can express: nil, numbers (always floating point),
strings, Booleans, and two restricted kinds of table. Tables whose keys are
all strings are "maps"; tables used as sequences are "lists". Unlike in the
scripting language itself, list indices are zero-based.

`{}` has no string key, so it is classified as an empty list. Use
`is_empty_table` when the map/list distinction does not matter.

Exactly one variant is live at a time. Reading the payload of a variant that
is not active is a caller bug and raises LuaConfContractViolation rather than
coercing anything.

Copy semantics: construction from another ConfigValue, `assign`, `copy` and
item assignment all deep-copy. `adopt` is the one path that keeps a caller's
container as-is.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Any, Iterator, Mapping

from luaconf.errors import LuaConfContractViolation


class ConfigValueType(Enum):
    NIL = "nil"
    NUMBER = "number"
    STRING = "string"
    BOOLEAN = "boolean"
    MAP = "map"
    LIST = "list"


_NIL = ConfigValueType.NIL
_NUMBER = ConfigValueType.NUMBER
_STRING = ConfigValueType.STRING
_BOOLEAN = ConfigValueType.BOOLEAN
_MAP = ConfigValueType.MAP
_LIST = ConfigValueType.LIST


def _check_key(key: Any) -> str:
    if not isinstance(key, str):
        raise LuaConfContractViolation(
            f"Map keys must be strings, got {type(key).__name__}")
    return key


def _convert(data: Any) -> tuple[ConfigValueType, Any]:
    """Classify `data` and build a payload that shares nothing with it."""
    if data is None:
        return _NIL, None
    if isinstance(data, ConfigValue):
        return data._type, _copy_payload(data._type, data._payload)
    # bool before int: True is an int in Python, but a Boolean here
    if isinstance(data, bool):
        return _BOOLEAN, data
    if isinstance(data, (int, float)):
        try:
            return _NUMBER, float(data)
        except OverflowError:
            raise LuaConfContractViolation(
                f"Integer {data} is too large for a number") from None
    if isinstance(data, str):
        return _STRING, data
    if isinstance(data, Mapping):
        return _MAP, {_check_key(k): ConfigValue(v) for k, v in data.items()}
    if isinstance(data, (list, tuple)):
        return _LIST, [ConfigValue(v) for v in data]
    raise LuaConfContractViolation(
        f"Cannot store a {type(data).__name__} in a ConfigValue")


def _copy_payload(type_: ConfigValueType, payload: Any) -> Any:
    if type_ is _MAP:
        return {k: v.copy() for k, v in payload.items()}
    if type_ is _LIST:
        return [v.copy() for v in payload]
    return payload


class ConfigValue:
    """A value from a configuration string.

    >>> v = ConfigValue({"size": 3, "tags": ["a", "b"]})
    >>> v["tags"][1] == "b"
    True
    """

    __slots__ = ("_type", "_payload")

    def __init__(self, data: Any = None):
        self._type: ConfigValueType
        self._payload: Any
        self._type, self._payload = _convert(data)

    @classmethod
    def _from_parts(cls, type_: ConfigValueType, payload: Any) -> ConfigValue:
        # Trusted constructor for freshly built trees: no conversion, no
        # cycle check. The caller guarantees `payload` shares nothing.
        value = cls.__new__(cls)
        value._type = type_
        value._payload = payload
        return value

    # --- variant replacement ---
    def assign(self, data: Any) -> ConfigValue:
        """Replace the active variant with a deep copy of `data`."""
        if data is self:
            return self
        # Convert first: `data` may contain this very value.
        self._type, self._payload = _convert(data)
        return self

    def adopt(self, container: list | dict) -> ConfigValue:
        """Make `container` the payload without copying it.

        The caller hands over ownership: later changes through either
        reference are visible through both.
        """
        if isinstance(container, dict):
            for k, v in container.items():
                _check_key(k)
                self._check_adoptable(v)
            self._type, self._payload = _MAP, container
        elif isinstance(container, list):
            for v in container:
                self._check_adoptable(v)
            self._type, self._payload = _LIST, container
        else:
            raise LuaConfContractViolation(
                f"Can only adopt a list or a dict, got {type(container).__name__}")
        return self

    def _check_adoptable(self, item: Any) -> None:
        if not isinstance(item, ConfigValue):
            raise LuaConfContractViolation(
                f"Adopted containers must hold ConfigValues, got {type(item).__name__}")
        if item._contains_identity(self):
            raise LuaConfContractViolation("Cannot adopt a container that holds this value")

    def _contains_identity(self, target: ConfigValue) -> bool:
        if self is target:
            return True
        if self._type is _MAP:
            return any(v._contains_identity(target) for v in self._payload.values())
        if self._type is _LIST:
            return any(v._contains_identity(target) for v in self._payload)
        return False

    def make_list(self) -> None:
        """Make this an empty list."""
        self._type, self._payload = _LIST, []

    def make_map(self) -> None:
        """Make this an empty map."""
        self._type, self._payload = _MAP, {}

    def copy(self) -> ConfigValue:
        return ConfigValue(self)

    def __copy__(self) -> ConfigValue:
        return self.copy()

    def __deepcopy__(self, memo: dict) -> ConfigValue:
        return self.copy()

    # --- inspection ---
    @property
    def type(self) -> ConfigValueType:
        return self._type

    @property
    def is_nil(self) -> bool:
        return self._type is _NIL

    @property
    def is_number(self) -> bool:
        return self._type is _NUMBER

    @property
    def is_string(self) -> bool:
        return self._type is _STRING

    @property
    def is_boolean(self) -> bool:
        return self._type is _BOOLEAN

    @property
    def is_map(self) -> bool:
        return self._type is _MAP

    @property
    def is_list(self) -> bool:
        return self._type is _LIST

    @property
    def is_table(self) -> bool:
        return self._type is _MAP or self._type is _LIST

    @property
    def is_empty_table(self) -> bool:
        """True for an empty map or an empty list."""
        return self.is_table and not self._payload

    def _require(self, expected: ConfigValueType, action: str) -> None:
        if self._type is not expected:
            raise LuaConfContractViolation(
                f"Cannot {action}: ConfigValue holds a {self._type.value}, not a {expected.value}")

    def _require_table(self, action: str) -> None:
        if not self.is_table:
            raise LuaConfContractViolation(
                f"Cannot {action}: ConfigValue holds a {self._type.value}, not a map or list")

    def as_number(self) -> float:
        self._require(_NUMBER, "read a number")
        return self._payload

    def as_string(self) -> str:
        self._require(_STRING, "read a string")
        return self._payload

    def as_boolean(self) -> bool:
        self._require(_BOOLEAN, "read a Boolean")
        return self._payload

    def as_map(self) -> Mapping[str, ConfigValue]:
        self._require(_MAP, "read a map")
        return MappingProxyType(self._payload)

    def as_list(self) -> tuple[ConfigValue, ...]:
        self._require(_LIST, "read a list")
        return tuple(self._payload)

    def to_python(self) -> Any:
        """Plain Python data: None, float, str, bool, dict or list."""
        if self._type is _MAP:
            return {k: v.to_python() for k, v in self._payload.items()}
        if self._type is _LIST:
            return [v.to_python() for v in self._payload]
        return self._payload

    # --- indexing ---
    def _check_index(self, index: Any) -> None:
        if isinstance(index, bool) or not isinstance(index, (int, str)):
            raise LuaConfContractViolation(
                f"ConfigValue indices are ints or strings, got {type(index).__name__}")
        if isinstance(index, str):
            self._require(_MAP, "index with a string key")
        else:
            self._require(_LIST, "index with an integer")
            if index < 0:
                raise LuaConfContractViolation(f"Negative index {index} for ConfigValue")

    def get(self, index: int | str) -> ConfigValue:
        """Read-only access: the element must already exist."""
        self._check_index(index)
        if isinstance(index, str):
            try:
                return self._payload[index]
            except KeyError:
                raise LuaConfContractViolation(f"Key {index!r} not found in ConfigValue") from None
        if index >= len(self._payload):
            raise LuaConfContractViolation(
                f"Out-of-bounds index {index} for a list of length {len(self._payload)}")
        return self._payload[index]

    def get_or_insert(self, index: int | str) -> ConfigValue:
        """Mutating access.

        A missing map key gets a fresh nil entry. An index past the end of a
        list grows the list, filling the new slots with nil.
        """
        self._check_index(index)
        if isinstance(index, str):
            entry = self._payload.get(index)
            if entry is None:
                entry = self._payload[index] = ConfigValue()
            return entry
        missing = index + 1 - len(self._payload)
        if missing > 0:
            self._payload.extend(ConfigValue() for _ in range(missing))
        return self._payload[index]

    def __getitem__(self, index: int | str) -> ConfigValue:
        return self.get(index)

    def __setitem__(self, index: int | str, data: Any) -> None:
        self.get_or_insert(index).assign(data)

    def __delitem__(self, index: int | str) -> None:
        self.get(index)
        del self._payload[index]

    def __len__(self) -> int:
        self._require_table("take the length")
        return len(self._payload)

    def __iter__(self) -> Iterator[Any]:
        self._require_table("iterate")
        return iter(self._payload)

    def __contains__(self, item: Any) -> bool:
        self._require_table("test membership")
        if self._type is _MAP:
            return isinstance(item, str) and item in self._payload
        return any(v == item for v in self._payload)

    def keys(self):
        self._require(_MAP, "list keys")
        return self._payload.keys()

    def values(self):
        self._require(_MAP, "list values")
        return self._payload.values()

    def items(self):
        self._require(_MAP, "list items")
        return self._payload.items()

    # --- comparison ---
    def __eq__(self, other: Any) -> bool:
        # Comparing with the "wrong" type is not an error, just unequal.
        if isinstance(other, ConfigValue):
            return self._type is other._type and self._payload == other._payload
        if other is None:
            return self._type is _NIL
        if isinstance(other, bool):
            return self._type is _BOOLEAN and self._payload == other
        if isinstance(other, (int, float)):
            return self._type is _NUMBER and self._payload == other
        if isinstance(other, str):
            return self._type is _STRING and self._payload == other
        return False

    __hash__ = None  # type: ignore[assignment]

    def __bool__(self) -> bool:
        # Same truthiness as the scripting language: only nil and false are false
        if self._type is _NIL:
            return False
        if self._type is _BOOLEAN:
            return self._payload
        return True

    def __repr__(self) -> str:
        if self._type is _NIL:
            return "ConfigValue(nil)"
        return f"ConfigValue({self._payload!r})"
