"""
Encoder contracts for structured fields.

FieldEncoder is a visitor: one ``encode_field_*`` method per supported value
kind, plus two structural hooks (array, object) for recursive values. Any
object with these methods satisfies the protocol; concrete encoders decide
how values end up in their backing representation.

Architecture:
    ::

        typing.Protocol contracts (structural subtyping)
        ├── TypeEncoder     - keyless values (array elements, levels)
        ├── FieldEncoder    - keyed values (log record fields)
        ├── ArrayEncoder    - value that encodes itself into a TypeEncoder
        └── ObjectEncoder   - value that encodes itself into a FieldEncoder

        PrefixingFieldEncoder(prefix, origin)
            encode_field_x(k, v) ──► origin.encode_field_x(prefix + k, v)

Guardrails:
    ❌ DON'T: Deduplicate keys inside an encoder
    ✅ DO: Deduplicate upstream with join_fields()

    ❌ DON'T: Block or do I/O inside encode_field_* calls
    ✅ DO: Buffer in the concrete sink and flush separately

Tags:
    encoder, visitor, protocol, prefix, spine-logf
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class TypeEncoder(Protocol):
    """Encodes keyless values (array elements, levels)."""

    def encode_type_any(self, v: Any) -> None: ...
    def encode_type_bool(self, v: bool) -> None: ...
    def encode_type_int64(self, v: int) -> None: ...
    def encode_type_int32(self, v: int) -> None: ...
    def encode_type_int16(self, v: int) -> None: ...
    def encode_type_int8(self, v: int) -> None: ...
    def encode_type_uint64(self, v: int) -> None: ...
    def encode_type_uint32(self, v: int) -> None: ...
    def encode_type_uint16(self, v: int) -> None: ...
    def encode_type_uint8(self, v: int) -> None: ...
    def encode_type_float64(self, v: float) -> None: ...
    def encode_type_float32(self, v: float) -> None: ...
    def encode_type_string(self, v: str) -> None: ...
    def encode_type_bytes(self, v: bytes) -> None: ...
    def encode_type_duration(self, v: dt.timedelta) -> None: ...
    def encode_type_time(self, v: dt.datetime) -> None: ...
    def encode_type_bools(self, v: Sequence[bool]) -> None: ...
    def encode_type_ints64(self, v: Sequence[int]) -> None: ...
    def encode_type_ints32(self, v: Sequence[int]) -> None: ...
    def encode_type_ints16(self, v: Sequence[int]) -> None: ...
    def encode_type_ints8(self, v: Sequence[int]) -> None: ...
    def encode_type_uints64(self, v: Sequence[int]) -> None: ...
    def encode_type_uints32(self, v: Sequence[int]) -> None: ...
    def encode_type_uints16(self, v: Sequence[int]) -> None: ...
    def encode_type_uints8(self, v: Sequence[int]) -> None: ...
    def encode_type_floats64(self, v: Sequence[float]) -> None: ...
    def encode_type_floats32(self, v: Sequence[float]) -> None: ...
    def encode_type_durations(self, v: Sequence[dt.timedelta]) -> None: ...
    def encode_type_strings(self, v: Sequence[str]) -> None: ...
    def encode_type_array(self, v: ArrayEncoder) -> None: ...
    def encode_type_object(self, v: ObjectEncoder) -> None: ...


@runtime_checkable
class FieldEncoder(Protocol):
    """
    Visitor that records one typed field per call.

    Every method takes a key and a value, returns None, and has the side
    effect of recording the field. Keys may be any string, duplicates
    included.
    """

    def encode_field_any(self, k: str, v: Any) -> None: ...
    def encode_field_bool(self, k: str, v: bool) -> None: ...
    def encode_field_int64(self, k: str, v: int) -> None: ...
    def encode_field_int32(self, k: str, v: int) -> None: ...
    def encode_field_int16(self, k: str, v: int) -> None: ...
    def encode_field_int8(self, k: str, v: int) -> None: ...
    def encode_field_uint64(self, k: str, v: int) -> None: ...
    def encode_field_uint32(self, k: str, v: int) -> None: ...
    def encode_field_uint16(self, k: str, v: int) -> None: ...
    def encode_field_uint8(self, k: str, v: int) -> None: ...
    def encode_field_float64(self, k: str, v: float) -> None: ...
    def encode_field_float32(self, k: str, v: float) -> None: ...
    def encode_field_string(self, k: str, v: str) -> None: ...
    def encode_field_bytes(self, k: str, v: bytes) -> None: ...
    def encode_field_duration(self, k: str, v: dt.timedelta) -> None: ...
    def encode_field_time(self, k: str, v: dt.datetime) -> None: ...
    def encode_field_error(self, k: str, v: BaseException | None) -> None: ...

    def encode_field_bools(self, k: str, v: Sequence[bool]) -> None: ...
    def encode_field_ints64(self, k: str, v: Sequence[int]) -> None: ...
    def encode_field_ints32(self, k: str, v: Sequence[int]) -> None: ...
    def encode_field_ints16(self, k: str, v: Sequence[int]) -> None: ...
    def encode_field_ints8(self, k: str, v: Sequence[int]) -> None: ...
    def encode_field_uints64(self, k: str, v: Sequence[int]) -> None: ...
    def encode_field_uints32(self, k: str, v: Sequence[int]) -> None: ...
    def encode_field_uints16(self, k: str, v: Sequence[int]) -> None: ...
    def encode_field_uints8(self, k: str, v: Sequence[int]) -> None: ...
    def encode_field_floats64(self, k: str, v: Sequence[float]) -> None: ...
    def encode_field_floats32(self, k: str, v: Sequence[float]) -> None: ...
    def encode_field_durations(self, k: str, v: Sequence[dt.timedelta]) -> None: ...
    def encode_field_strings(self, k: str, v: Sequence[str]) -> None: ...

    def encode_field_array(self, k: str, v: ArrayEncoder) -> None: ...
    def encode_field_object(self, k: str, v: ObjectEncoder) -> None: ...


@runtime_checkable
class ArrayEncoder(Protocol):
    """A value that knows how to encode itself as an array."""

    def encode_log_array(self, enc: TypeEncoder) -> None: ...


@runtime_checkable
class ObjectEncoder(Protocol):
    """A value that knows how to encode itself as an object."""

    def encode_log_object(self, enc: FieldEncoder) -> None: ...


class PrefixingFieldEncoder:
    """
    FieldEncoder decorator that namespaces every key with a fixed prefix.

    Lets a nested object's fields flatten into the parent namespace, e.g.
    encoding ``verbose`` through ``PrefixingFieldEncoder("error.", enc)``
    lands in ``enc`` as ``error.verbose``.
    """

    __slots__ = ("prefix", "origin")

    def __init__(self, prefix: str, origin: FieldEncoder):
        self.prefix = prefix
        self.origin = origin

    def __repr__(self) -> str:
        return f"PrefixingFieldEncoder({self.prefix!r}, {self.origin!r})"

    def key(self, k: str) -> str:
        return self.prefix + k

    def encode_field_any(self, k: str, v: Any) -> None:
        self.origin.encode_field_any(self.key(k), v)

    def encode_field_bool(self, k: str, v: bool) -> None:
        self.origin.encode_field_bool(self.key(k), v)

    def encode_field_int64(self, k: str, v: int) -> None:
        self.origin.encode_field_int64(self.key(k), v)

    def encode_field_int32(self, k: str, v: int) -> None:
        self.origin.encode_field_int32(self.key(k), v)

    def encode_field_int16(self, k: str, v: int) -> None:
        self.origin.encode_field_int16(self.key(k), v)

    def encode_field_int8(self, k: str, v: int) -> None:
        self.origin.encode_field_int8(self.key(k), v)

    def encode_field_uint64(self, k: str, v: int) -> None:
        self.origin.encode_field_uint64(self.key(k), v)

    def encode_field_uint32(self, k: str, v: int) -> None:
        self.origin.encode_field_uint32(self.key(k), v)

    def encode_field_uint16(self, k: str, v: int) -> None:
        self.origin.encode_field_uint16(self.key(k), v)

    def encode_field_uint8(self, k: str, v: int) -> None:
        self.origin.encode_field_uint8(self.key(k), v)

    def encode_field_float64(self, k: str, v: float) -> None:
        self.origin.encode_field_float64(self.key(k), v)

    def encode_field_float32(self, k: str, v: float) -> None:
        self.origin.encode_field_float32(self.key(k), v)

    def encode_field_string(self, k: str, v: str) -> None:
        self.origin.encode_field_string(self.key(k), v)

    def encode_field_bytes(self, k: str, v: bytes) -> None:
        self.origin.encode_field_bytes(self.key(k), v)

    def encode_field_duration(self, k: str, v: dt.timedelta) -> None:
        self.origin.encode_field_duration(self.key(k), v)

    def encode_field_time(self, k: str, v: dt.datetime) -> None:
        self.origin.encode_field_time(self.key(k), v)

    def encode_field_error(self, k: str, v: BaseException | None) -> None:
        self.origin.encode_field_error(self.key(k), v)

    def encode_field_bools(self, k: str, v: Sequence[bool]) -> None:
        self.origin.encode_field_bools(self.key(k), v)

    def encode_field_ints64(self, k: str, v: Sequence[int]) -> None:
        self.origin.encode_field_ints64(self.key(k), v)

    def encode_field_ints32(self, k: str, v: Sequence[int]) -> None:
        self.origin.encode_field_ints32(self.key(k), v)

    def encode_field_ints16(self, k: str, v: Sequence[int]) -> None:
        self.origin.encode_field_ints16(self.key(k), v)

    def encode_field_ints8(self, k: str, v: Sequence[int]) -> None:
        self.origin.encode_field_ints8(self.key(k), v)

    def encode_field_uints64(self, k: str, v: Sequence[int]) -> None:
        self.origin.encode_field_uints64(self.key(k), v)

    def encode_field_uints32(self, k: str, v: Sequence[int]) -> None:
        self.origin.encode_field_uints32(self.key(k), v)

    def encode_field_uints16(self, k: str, v: Sequence[int]) -> None:
        self.origin.encode_field_uints16(self.key(k), v)

    def encode_field_uints8(self, k: str, v: Sequence[int]) -> None:
        self.origin.encode_field_uints8(self.key(k), v)

    def encode_field_floats64(self, k: str, v: Sequence[float]) -> None:
        self.origin.encode_field_floats64(self.key(k), v)

    def encode_field_floats32(self, k: str, v: Sequence[float]) -> None:
        self.origin.encode_field_floats32(self.key(k), v)

    def encode_field_durations(self, k: str, v: Sequence[dt.timedelta]) -> None:
        self.origin.encode_field_durations(self.key(k), v)

    def encode_field_strings(self, k: str, v: Sequence[str]) -> None:
        self.origin.encode_field_strings(self.key(k), v)

    def encode_field_array(self, k: str, v: ArrayEncoder) -> None:
        self.origin.encode_field_array(self.key(k), v)

    def encode_field_object(self, k: str, v: ObjectEncoder) -> None:
        self.origin.encode_field_object(self.key(k), v)


__all__ = [
    "TypeEncoder",
    "FieldEncoder",
    "ArrayEncoder",
    "ObjectEncoder",
    "PrefixingFieldEncoder",
]
