# json_values.py
# Value tree produced by the parser, plus serialization back to text.
#
# The variant set is closed: JSONObject, JSONArray, JSONString, JSONInteger,
# JSONReal and the JSONConstant singletons. Serialization dispatches on the
# concrete type in one place (`dumps`).

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Iterator, TextIO, Tuple, Union
import re

from json_hash import Entry, HashTable

# ---------------------------------------------------------------------------
# CONSTANTS
# ---------------------------------------------------------------------------
INT_MIN = -2 ** 31
INT_MAX = 2 ** 31 - 1

_INTEGRAL_TEXT = re.compile(r"-?\d+")


class _Serializable:
    def __str__(self) -> str:
        return dumps(self)


# ---------------------------------------------------------------------------
# LEAF VALUES
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class JSONString(_Serializable):
    """Text payload. Escape sequences are kept exactly as they were read."""
    value: str


@dataclass(frozen=True)
class JSONInteger(_Serializable):
    value: int

    def __post_init__(self):
        if not INT_MIN <= self.value <= INT_MAX:
            raise ValueError(f"{self.value} does not fit a 32-bit signed integer")


@dataclass(frozen=True)
class JSONReal(_Serializable):
    value: Decimal


class JSONConstant(Enum):
    TRUE = "true"
    FALSE = "false"
    NULL = "null"

    def __str__(self) -> str:
        return self.value


# ---------------------------------------------------------------------------
# CONTAINERS
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class JSONArray(_Serializable):
    items: Tuple["Value", ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "items", tuple(self.items))

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator["Value"]:
        return iter(self.items)

    def __getitem__(self, index: int) -> "Value":
        return self.items[index]


def _as_key(key: Union[str, JSONString]) -> JSONString:
    return JSONString(key) if isinstance(key, str) else key


@dataclass(frozen=True, eq=False)
class JSONObject(_Serializable):
    """
    JSON object backed by a `HashTable` keyed on `JSONString`.

    Plain `str` keys are accepted everywhere and wrapped on the way in. Two
    objects are equal when they hold the same keys with equal values; slot
    order plays no part.
    """
    table: HashTable = field(default_factory=HashTable)

    def set(self, key: Union[str, JSONString], value: "Value") -> None:
        self.table.set(_as_key(key), value)

    def get(self, key: Union[str, JSONString]) -> "Value":
        return self.table.get(_as_key(key))

    def __getitem__(self, key: Union[str, JSONString]) -> "Value":
        return self.get(key)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, (str, JSONString)):
            return False
        return _as_key(key) in self.table

    def __len__(self) -> int:
        return len(self.table)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self.table)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JSONObject):
            return NotImplemented
        if len(self) != len(other):
            return False
        for key, value in self:
            if key not in other.table or other.table.get(key) != value:
                return False
        return True

    __hash__ = None


Value = Union[JSONObject, JSONArray, JSONString, JSONInteger, JSONReal, JSONConstant]

# ---------------------------------------------------------------------------
# SERIALIZATION
# ---------------------------------------------------------------------------
def _real_text(number: Decimal) -> str:
    text = str(number)
    if _INTEGRAL_TEXT.fullmatch(text):
        text += ".0"                   # keep it a real when read back
    return text


def dumps(value: Value) -> str:
    """
    Render a value as JSON text.

    Objects use a fixed spacing, `{ "k1" : v1, "k2" : v2 }`, and `{ }` when
    empty. Everything else takes the usual compact token shape with `", "`
    between array elements.
    """
    if isinstance(value, JSONObject):
        if not len(value):
            return "{ }"
        pairs = ", ".join(f"{dumps(key)} : {dumps(item)}" for key, item in value)
        return "{ " + pairs + " }"
    if isinstance(value, JSONArray):
        return "[" + ", ".join(dumps(item) for item in value) + "]"
    if isinstance(value, JSONString):
        return '"' + value.value + '"'
    if isinstance(value, JSONInteger):
        return str(value.value)
    if isinstance(value, JSONReal):
        return _real_text(value.value)
    if isinstance(value, JSONConstant):
        return value.value
    raise TypeError(f"not a JSON value: {value!r}")


def dump(value: Value, stream: TextIO) -> None:
    """Write `value` to an open text stream, followed by a newline."""
    stream.write(dumps(value))
    stream.write("\n")
