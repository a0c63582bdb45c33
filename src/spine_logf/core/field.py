"""
Typed key-value fields - the atomic unit of structured log data.

A Field pairs a key with a typed value. The type tag (FieldType) decides
which FieldEncoder method receives the value, so encoding never inspects
the value itself.

Manifesto:
    - **Immutable:** Fields are frozen dataclasses; sequence values are
      copied into tuples so a published Field never aliases caller storage
    - **Typed at the call site:** The constructor you call picks the tag
    - **No reflection:** Dispatch goes through a static tag -> method table

Architecture:
    ::

        string("user", "bob") ──► Field(key="user", type=STRING, value="bob")
                                            │
                                  field.accept(encoder)
                                            │
                                            ▼
                             encoder.encode_field_string("user", "bob")

Examples:
    >>> f = string("user", "bob")
    >>> f.key, f.type
    ('user', <FieldType.STRING: 'string'>)
    >>> ints32("ids", [1, 2]).value
    (1, 2)

Tags:
    field, structured-logging, visitor, spine-logf
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from spine_logf.core.encoder import ArrayEncoder, FieldEncoder, ObjectEncoder


class FieldValueError(ValueError):
    """Raised when a value does not fit the requested field type."""


class FieldType(str, Enum):
    """Kind of value carried by a Field."""

    ANY = "any"
    BOOL = "bool"
    INT64 = "int64"
    INT32 = "int32"
    INT16 = "int16"
    INT8 = "int8"
    UINT64 = "uint64"
    UINT32 = "uint32"
    UINT16 = "uint16"
    UINT8 = "uint8"
    FLOAT64 = "float64"
    FLOAT32 = "float32"
    STRING = "string"
    BYTES = "bytes"
    DURATION = "duration"
    TIME = "time"
    ERROR = "error"
    ARRAY = "array"
    OBJECT = "object"

    # Homogeneous sequences
    BOOLS = "bools"
    INTS64 = "ints64"
    INTS32 = "ints32"
    INTS16 = "ints16"
    INTS8 = "ints8"
    UINTS64 = "uints64"
    UINTS32 = "uints32"
    UINTS16 = "uints16"
    UINTS8 = "uints8"
    FLOATS64 = "floats64"
    FLOATS32 = "floats32"
    DURATIONS = "durations"
    STRINGS = "strings"


# FieldType -> FieldEncoder method name
_ENCODE_METHODS: dict[FieldType, str] = {
    FieldType.ANY: "encode_field_any",
    FieldType.BOOL: "encode_field_bool",
    FieldType.INT64: "encode_field_int64",
    FieldType.INT32: "encode_field_int32",
    FieldType.INT16: "encode_field_int16",
    FieldType.INT8: "encode_field_int8",
    FieldType.UINT64: "encode_field_uint64",
    FieldType.UINT32: "encode_field_uint32",
    FieldType.UINT16: "encode_field_uint16",
    FieldType.UINT8: "encode_field_uint8",
    FieldType.FLOAT64: "encode_field_float64",
    FieldType.FLOAT32: "encode_field_float32",
    FieldType.STRING: "encode_field_string",
    FieldType.BYTES: "encode_field_bytes",
    FieldType.DURATION: "encode_field_duration",
    FieldType.TIME: "encode_field_time",
    FieldType.ERROR: "encode_field_error",
    FieldType.ARRAY: "encode_field_array",
    FieldType.OBJECT: "encode_field_object",
    FieldType.BOOLS: "encode_field_bools",
    FieldType.INTS64: "encode_field_ints64",
    FieldType.INTS32: "encode_field_ints32",
    FieldType.INTS16: "encode_field_ints16",
    FieldType.INTS8: "encode_field_ints8",
    FieldType.UINTS64: "encode_field_uints64",
    FieldType.UINTS32: "encode_field_uints32",
    FieldType.UINTS16: "encode_field_uints16",
    FieldType.UINTS8: "encode_field_uints8",
    FieldType.FLOATS64: "encode_field_floats64",
    FieldType.FLOATS32: "encode_field_floats32",
    FieldType.DURATIONS: "encode_field_durations",
    FieldType.STRINGS: "encode_field_strings",
}

# Inclusive integer bounds per width
_INT_BOUNDS: dict[FieldType, tuple[int, int]] = {
    FieldType.INT64: (-(2**63), 2**63 - 1),
    FieldType.INT32: (-(2**31), 2**31 - 1),
    FieldType.INT16: (-(2**15), 2**15 - 1),
    FieldType.INT8: (-(2**7), 2**7 - 1),
    FieldType.UINT64: (0, 2**64 - 1),
    FieldType.UINT32: (0, 2**32 - 1),
    FieldType.UINT16: (0, 2**16 - 1),
    FieldType.UINT8: (0, 2**8 - 1),
}


@dataclass(frozen=True)
class Field:
    """
    Immutable (key, typed value) pair.

    Attributes:
        key: Field name, any string (duplicates are allowed)
        type: FieldType tag selecting the encoder method
        value: The value, already normalized by its constructor
    """

    key: str
    type: FieldType
    value: Any

    def equal(self, other: Field) -> bool:
        """Return True if both fields carry the same key, type and value."""
        if self.key != other.key or self.type != other.type:
            return False
        if self.value is other.value:
            return True
        try:
            return bool(self.value == other.value)
        except (TypeError, ValueError):
            # Array-like values compare elementwise and have no truth value
            return False

    def accept(self, encoder: FieldEncoder) -> None:
        """Hand this field to the matching ``encoder.encode_field_*`` method."""
        getattr(encoder, _ENCODE_METHODS[self.type])(self.key, self.value)


# =============================================================================
# Helpers
# =============================================================================


def _checked_int(key: str, value: int, kind: FieldType) -> int:
    lo, hi = _INT_BOUNDS[kind]
    v = int(value)
    if not lo <= v <= hi:
        raise FieldValueError(f"field {key!r}: {v} out of range for {kind.value}")
    return v


def _checked_ints(key: str, values: Iterable[int], kind: FieldType) -> tuple[int, ...]:
    return tuple(_checked_int(key, v, kind) for v in values)


# =============================================================================
# Scalar constructors
# =============================================================================


def any_(key: str, value: Any) -> Field:
    return Field(key, FieldType.ANY, value)


def bool_(key: str, value: bool) -> Field:
    return Field(key, FieldType.BOOL, bool(value))


def int64(key: str, value: int) -> Field:
    return Field(key, FieldType.INT64, _checked_int(key, value, FieldType.INT64))


int_ = int64


def int32(key: str, value: int) -> Field:
    return Field(key, FieldType.INT32, _checked_int(key, value, FieldType.INT32))


def int16(key: str, value: int) -> Field:
    return Field(key, FieldType.INT16, _checked_int(key, value, FieldType.INT16))


def int8(key: str, value: int) -> Field:
    return Field(key, FieldType.INT8, _checked_int(key, value, FieldType.INT8))


def uint64(key: str, value: int) -> Field:
    return Field(key, FieldType.UINT64, _checked_int(key, value, FieldType.UINT64))


def uint32(key: str, value: int) -> Field:
    return Field(key, FieldType.UINT32, _checked_int(key, value, FieldType.UINT32))


def uint16(key: str, value: int) -> Field:
    return Field(key, FieldType.UINT16, _checked_int(key, value, FieldType.UINT16))


def uint8(key: str, value: int) -> Field:
    return Field(key, FieldType.UINT8, _checked_int(key, value, FieldType.UINT8))


def float64(key: str, value: float) -> Field:
    return Field(key, FieldType.FLOAT64, float(value))


def float32(key: str, value: float) -> Field:
    return Field(key, FieldType.FLOAT32, float(value))


def string(key: str, value: str) -> Field:
    return Field(key, FieldType.STRING, str(value))


def bytes_(key: str, value: bytes | bytearray | memoryview) -> Field:
    # bytes() copies mutable buffers
    return Field(key, FieldType.BYTES, bytes(value))


def duration(key: str, value: dt.timedelta) -> Field:
    return Field(key, FieldType.DURATION, value)


def time(key: str, value: dt.datetime) -> Field:
    return Field(key, FieldType.TIME, value)


def named_error(key: str, err: BaseException | None) -> Field:
    return Field(key, FieldType.ERROR, err)


def error(err: BaseException | None) -> Field:
    """Error field under the conventional ``"error"`` key."""
    return named_error("error", err)


def array(key: str, value: ArrayEncoder) -> Field:
    return Field(key, FieldType.ARRAY, value)


def object_(key: str, value: ObjectEncoder) -> Field:
    return Field(key, FieldType.OBJECT, value)


# =============================================================================
# Sequence constructors
# =============================================================================


def bools(key: str, values: Iterable[bool]) -> Field:
    return Field(key, FieldType.BOOLS, tuple(bool(v) for v in values))


def ints64(key: str, values: Iterable[int]) -> Field:
    return Field(key, FieldType.INTS64, _checked_ints(key, values, FieldType.INT64))


def ints32(key: str, values: Iterable[int]) -> Field:
    return Field(key, FieldType.INTS32, _checked_ints(key, values, FieldType.INT32))


def ints16(key: str, values: Iterable[int]) -> Field:
    return Field(key, FieldType.INTS16, _checked_ints(key, values, FieldType.INT16))


def ints8(key: str, values: Iterable[int]) -> Field:
    return Field(key, FieldType.INTS8, _checked_ints(key, values, FieldType.INT8))


def uints64(key: str, values: Iterable[int]) -> Field:
    return Field(key, FieldType.UINTS64, _checked_ints(key, values, FieldType.UINT64))


def uints32(key: str, values: Iterable[int]) -> Field:
    return Field(key, FieldType.UINTS32, _checked_ints(key, values, FieldType.UINT32))


def uints16(key: str, values: Iterable[int]) -> Field:
    return Field(key, FieldType.UINTS16, _checked_ints(key, values, FieldType.UINT16))


def uints8(key: str, values: Iterable[int]) -> Field:
    return Field(key, FieldType.UINTS8, _checked_ints(key, values, FieldType.UINT8))


def floats64(key: str, values: Iterable[float]) -> Field:
    return Field(key, FieldType.FLOATS64, tuple(float(v) for v in values))


def floats32(key: str, values: Iterable[float]) -> Field:
    return Field(key, FieldType.FLOATS32, tuple(float(v) for v in values))


def durations(key: str, values: Iterable[dt.timedelta]) -> Field:
    return Field(key, FieldType.DURATIONS, tuple(values))


def strings(key: str, values: Iterable[str]) -> Field:
    return Field(key, FieldType.STRINGS, tuple(str(v) for v in values))


__all__ = [
    "Field",
    "FieldType",
    "FieldValueError",
    # Scalars
    "any_",
    "bool_",
    "int_",
    "int64",
    "int32",
    "int16",
    "int8",
    "uint64",
    "uint32",
    "uint16",
    "uint8",
    "float64",
    "float32",
    "string",
    "bytes_",
    "duration",
    "time",
    "named_error",
    "error",
    "array",
    "object_",
    # Sequences
    "bools",
    "ints64",
    "ints32",
    "ints16",
    "ints8",
    "uints64",
    "uints32",
    "uints16",
    "uints8",
    "floats64",
    "floats32",
    "durations",
    "strings",
]
