"""
Supported variable types and their text coercion rules.

Each type name maps to a storage tag and to the coercion function for that
tag. The table is built once at import time and never changes. Boxed names
(``Integer``, ``Long``...) share their primitive's tag and rule.

Usage:
    from dumbjshell.core.types import coerce, lookup

    lookup("int").tag          # StorageTag.INT32
    coerce("double", "5")      # Value(tag=StorageTag.FLOAT64, data=5.0)
    coerce("double", "5").display()   # "5.0"
"""

from __future__ import annotations

import math
import re
import struct
from collections.abc import Callable
from dataclasses import dataclass
from decimal import Decimal
from enum import StrEnum

from dumbjshell.core.errors import CoercionError, UnknownTypeError

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class StorageTag(StrEnum):
    """Runtime representation of a value."""

    INT32 = "Int32"
    INT64 = "Int64"
    BOOL = "Bool"
    FLOAT32 = "Float32"
    FLOAT64 = "Float64"
    STR = "Str"


@dataclass(frozen=True)
class Value:
    """A tagged value. ``data`` is always the Python type matching ``tag``."""

    tag: StorageTag
    data: int | float | bool | str

    def display(self) -> str:
        """Canonical string form, used for output and re-coercion."""
        if self.tag == StorageTag.BOOL:
            return "true" if self.data else "false"
        if self.tag == StorageTag.STR:
            return str(self.data)
        if self.tag == StorageTag.FLOAT64:
            return _java_float_text(float(self.data), repr(float(self.data)))
        if self.tag == StorageTag.FLOAT32:
            return _java_float_text(float(self.data), _shortest_float32(float(self.data)))
        return str(self.data)

    def __str__(self) -> str:
        return self.display()


@dataclass(frozen=True)
class TypeEntry:
    """One row of the type table."""

    type_name: str
    tag: StorageTag
    coerce: Callable[[str], Value]


# ---------------------------------------------------------------------------
# Coercion rules, one per storage tag
# ---------------------------------------------------------------------------

_INT_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(
    r"[+-]?(?:NaN|Infinity|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?[fFdD]?)"
)


def _parse_integer(text: str, low: int, high: int, type_label: str) -> int:
    if not _INT_RE.fullmatch(text):
        raise CoercionError(f'For input string: "{text}" (not a valid {type_label})')
    number = int(text)
    if number < low or number > high:
        raise CoercionError(f'For input string: "{text}" (out of range for {type_label})')
    return number


def _coerce_int32(text: str) -> Value:
    return Value(StorageTag.INT32, _parse_integer(text, INT32_MIN, INT32_MAX, "int"))


def _coerce_int64(text: str) -> Value:
    return Value(StorageTag.INT64, _parse_integer(text, INT64_MIN, INT64_MAX, "long"))


def _coerce_bool(text: str) -> Value:
    if text == "true":
        return Value(StorageTag.BOOL, True)
    if text == "false":
        return Value(StorageTag.BOOL, False)
    raise CoercionError(f'For input string: "{text}" (expected true or false)')


def _parse_float(text: str, type_label: str) -> float:
    stripped = text.strip()
    if not _FLOAT_RE.fullmatch(stripped):
        raise CoercionError(f'For input string: "{text}" (not a valid {type_label})')
    body = stripped.rstrip("fFdD") if stripped[-1:] in "fFdD" else stripped
    sign = -1.0 if body.startswith("-") else 1.0
    unsigned = body.lstrip("+-")
    if unsigned == "NaN":
        return math.nan
    if unsigned == "Infinity":
        return sign * math.inf
    return float(body)


def _to_float32(number: float) -> float:
    if math.isnan(number) or math.isinf(number):
        return number
    # pack rounds to nearest first and only overflows when the result is infinite
    try:
        packed = struct.pack("<f", number)
    except OverflowError:
        return math.copysign(math.inf, number)
    return struct.unpack("<f", packed)[0]


def _coerce_float32(text: str) -> Value:
    return Value(StorageTag.FLOAT32, _to_float32(_parse_float(text, "float")))


def _coerce_float64(text: str) -> Value:
    return Value(StorageTag.FLOAT64, _parse_float(text, "double"))


def _coerce_str(text: str) -> Value:
    return Value(StorageTag.STR, text)


_COERCERS: dict[StorageTag, Callable[[str], Value]] = {
    StorageTag.INT32: _coerce_int32,
    StorageTag.INT64: _coerce_int64,
    StorageTag.BOOL: _coerce_bool,
    StorageTag.FLOAT32: _coerce_float32,
    StorageTag.FLOAT64: _coerce_float64,
    StorageTag.STR: _coerce_str,
}


# ---------------------------------------------------------------------------
# Float display
# ---------------------------------------------------------------------------


def _shortest_float32(number: float) -> str:
    """Shortest decimal text that reads back as the same single-precision value."""
    if math.isnan(number) or math.isinf(number):
        return repr(number)
    for precision in range(1, 10):
        text = f"{number:.{precision}g}"
        if _to_float32(float(text)) == number:
            return text
    return repr(number)


def _java_float_text(number: float, digits_text: str) -> str:
    """Render like Java's ``Double.toString``/``Float.toString``."""
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "Infinity" if number > 0 else "-Infinity"
    if number == 0.0:
        return "-0.0" if math.copysign(1.0, number) < 0 else "0.0"

    sign, digit_tuple, exponent = Decimal(digits_text).as_tuple()
    digits = "".join(str(d) for d in digit_tuple).rstrip("0") or "0"
    # Position of the decimal point relative to the first significant digit
    point = len(digit_tuple) + int(exponent)
    prefix = "-" if sign else ""

    if 1e-3 <= abs(number) < 1e7:
        if point <= 0:
            return f"{prefix}0.{'0' * -point}{digits}"
        whole = digits[:point].ljust(point, "0")
        frac = digits[point:] or "0"
        return f"{prefix}{whole}.{frac}"

    mantissa = digits[0] + "." + (digits[1:] or "0")
    return f"{prefix}{mantissa}E{point - 1}"


# ---------------------------------------------------------------------------
# Type table
# ---------------------------------------------------------------------------

_TYPE_TAGS: list[tuple[str, StorageTag]] = [
    ("int", StorageTag.INT32),
    ("long", StorageTag.INT64),
    ("boolean", StorageTag.BOOL),
    ("double", StorageTag.FLOAT64),
    ("float", StorageTag.FLOAT32),
    ("String", StorageTag.STR),
    ("Integer", StorageTag.INT32),
    ("Long", StorageTag.INT64),
    ("Boolean", StorageTag.BOOL),
    ("Double", StorageTag.FLOAT64),
    ("Float", StorageTag.FLOAT32),
]

_REGISTRY: dict[str, TypeEntry] = {
    name: TypeEntry(type_name=name, tag=tag, coerce=_COERCERS[tag]) for name, tag in _TYPE_TAGS
}


def lookup(type_name: str) -> TypeEntry:
    """Return the table entry for ``type_name``.

    Raises:
        UnknownTypeError: If the name is not a supported type.
    """
    entry = _REGISTRY.get(type_name)
    if entry is None:
        raise UnknownTypeError(f"Unsupported type: {type_name}")
    return entry


def coerce(type_name: str, text: str) -> Value:
    """Convert ``text`` into a value of ``type_name``.

    Raises:
        UnknownTypeError: If the name is not a supported type.
        CoercionError: If the text does not parse under the type's rule.
    """
    return lookup(type_name).coerce(text)


def supported_types() -> list[str]:
    """Registered type names in table order."""
    return list(_REGISTRY)
