"""
Dict-backed encoders bridging Fields into structlog event dicts.

``DictFieldEncoder`` records every ``encode_field_*`` call into a plain dict
that structlog renders with its own JSON or console renderer. Values are
normalized to JSON-friendly types:

- timedelta  -> float seconds
- datetime   -> ISO-8601 string
- bytes      -> base64 text
- sequences  -> lists
- errors     -> whatever the configured ErrorEncoder emits
- arrays     -> lists built by ListTypeEncoder
- objects    -> nested dicts, or ``parent.child`` keys when flattening

Duplicate keys overwrite earlier ones; deduplication is join_fields()'s job.
"""

from __future__ import annotations

import base64
import datetime as dt
from collections.abc import Iterable, Sequence
from typing import Any

from spine_logf.core.encoder import ArrayEncoder, ObjectEncoder, PrefixingFieldEncoder
from spine_logf.core.errors import ErrorEncoder, default_error_encoder
from spine_logf.core.field import Field


def _seconds(v: dt.timedelta) -> float:
    return v.total_seconds()


def _isoformat(v: dt.datetime) -> str:
    return v.isoformat()


def _b64(v: bytes) -> str:
    return base64.b64encode(v).decode("ascii")


class DictFieldEncoder:
    """FieldEncoder recording into ``target``."""

    def __init__(
        self,
        target: dict[str, Any] | None = None,
        *,
        error_encoder: ErrorEncoder = default_error_encoder,
        flatten_objects: bool = False,
    ):
        self.target: dict[str, Any] = {} if target is None else target
        self.error_encoder = error_encoder
        self.flatten_objects = flatten_objects

    def encode(self, fields: Iterable[Field]) -> dict[str, Any]:
        """Encode ``fields`` in order and return the target dict."""
        for f in fields:
            f.accept(self)
        return self.target

    def _child(self) -> DictFieldEncoder:
        return DictFieldEncoder(error_encoder=self.error_encoder, flatten_objects=self.flatten_objects)

    # ── Scalars ──────────────────────────────────────────────────

    def encode_field_any(self, k: str, v: Any) -> None:
        self.target[k] = v

    def encode_field_bool(self, k: str, v: bool) -> None:
        self.target[k] = v

    def encode_field_int64(self, k: str, v: int) -> None:
        self.target[k] = v

    def encode_field_int32(self, k: str, v: int) -> None:
        self.target[k] = v

    def encode_field_int16(self, k: str, v: int) -> None:
        self.target[k] = v

    def encode_field_int8(self, k: str, v: int) -> None:
        self.target[k] = v

    def encode_field_uint64(self, k: str, v: int) -> None:
        self.target[k] = v

    def encode_field_uint32(self, k: str, v: int) -> None:
        self.target[k] = v

    def encode_field_uint16(self, k: str, v: int) -> None:
        self.target[k] = v

    def encode_field_uint8(self, k: str, v: int) -> None:
        self.target[k] = v

    def encode_field_float64(self, k: str, v: float) -> None:
        self.target[k] = v

    def encode_field_float32(self, k: str, v: float) -> None:
        self.target[k] = v

    def encode_field_string(self, k: str, v: str) -> None:
        self.target[k] = v

    def encode_field_bytes(self, k: str, v: bytes) -> None:
        self.target[k] = _b64(v)

    def encode_field_duration(self, k: str, v: dt.timedelta) -> None:
        self.target[k] = _seconds(v)

    def encode_field_time(self, k: str, v: dt.datetime) -> None:
        self.target[k] = _isoformat(v)

    def encode_field_error(self, k: str, v: BaseException | None) -> None:
        self.error_encoder(k, v, self)

    # ── Sequences ────────────────────────────────────────────────

    def encode_field_bools(self, k: str, v: Sequence[bool]) -> None:
        self.target[k] = list(v)

    def encode_field_ints64(self, k: str, v: Sequence[int]) -> None:
        self.target[k] = list(v)

    def encode_field_ints32(self, k: str, v: Sequence[int]) -> None:
        self.target[k] = list(v)

    def encode_field_ints16(self, k: str, v: Sequence[int]) -> None:
        self.target[k] = list(v)

    def encode_field_ints8(self, k: str, v: Sequence[int]) -> None:
        self.target[k] = list(v)

    def encode_field_uints64(self, k: str, v: Sequence[int]) -> None:
        self.target[k] = list(v)

    def encode_field_uints32(self, k: str, v: Sequence[int]) -> None:
        self.target[k] = list(v)

    def encode_field_uints16(self, k: str, v: Sequence[int]) -> None:
        self.target[k] = list(v)

    def encode_field_uints8(self, k: str, v: Sequence[int]) -> None:
        self.target[k] = list(v)

    def encode_field_floats64(self, k: str, v: Sequence[float]) -> None:
        self.target[k] = list(v)

    def encode_field_floats32(self, k: str, v: Sequence[float]) -> None:
        self.target[k] = list(v)

    def encode_field_durations(self, k: str, v: Sequence[dt.timedelta]) -> None:
        self.target[k] = [_seconds(d) for d in v]

    def encode_field_strings(self, k: str, v: Sequence[str]) -> None:
        self.target[k] = list(v)

    # ── Structural ───────────────────────────────────────────────

    def encode_field_array(self, k: str, v: ArrayEncoder) -> None:
        items = ListTypeEncoder(error_encoder=self.error_encoder, flatten_objects=self.flatten_objects)
        v.encode_log_array(items)
        self.target[k] = items.items

    def encode_field_object(self, k: str, v: ObjectEncoder) -> None:
        if self.flatten_objects:
            v.encode_log_object(PrefixingFieldEncoder(k + ".", self))
            return
        child = self._child()
        v.encode_log_object(child)
        self.target[k] = child.target


class ListTypeEncoder:
    """TypeEncoder collecting array elements into ``items``."""

    def __init__(
        self,
        *,
        error_encoder: ErrorEncoder = default_error_encoder,
        flatten_objects: bool = False,
    ):
        self.items: list[Any] = []
        self.error_encoder = error_encoder
        self.flatten_objects = flatten_objects

    def encode_type_any(self, v: Any) -> None:
        self.items.append(v)

    def encode_type_bool(self, v: bool) -> None:
        self.items.append(v)

    def encode_type_int64(self, v: int) -> None:
        self.items.append(v)

    def encode_type_int32(self, v: int) -> None:
        self.items.append(v)

    def encode_type_int16(self, v: int) -> None:
        self.items.append(v)

    def encode_type_int8(self, v: int) -> None:
        self.items.append(v)

    def encode_type_uint64(self, v: int) -> None:
        self.items.append(v)

    def encode_type_uint32(self, v: int) -> None:
        self.items.append(v)

    def encode_type_uint16(self, v: int) -> None:
        self.items.append(v)

    def encode_type_uint8(self, v: int) -> None:
        self.items.append(v)

    def encode_type_float64(self, v: float) -> None:
        self.items.append(v)

    def encode_type_float32(self, v: float) -> None:
        self.items.append(v)

    def encode_type_string(self, v: str) -> None:
        self.items.append(v)

    def encode_type_bytes(self, v: bytes) -> None:
        self.items.append(_b64(v))

    def encode_type_duration(self, v: dt.timedelta) -> None:
        self.items.append(_seconds(v))

    def encode_type_time(self, v: dt.datetime) -> None:
        self.items.append(_isoformat(v))

    # Sequence elements become nested lists

    def encode_type_bools(self, v: Sequence[bool]) -> None:
        self.items.append(list(v))

    def encode_type_ints64(self, v: Sequence[int]) -> None:
        self.items.append(list(v))

    def encode_type_ints32(self, v: Sequence[int]) -> None:
        self.items.append(list(v))

    def encode_type_ints16(self, v: Sequence[int]) -> None:
        self.items.append(list(v))

    def encode_type_ints8(self, v: Sequence[int]) -> None:
        self.items.append(list(v))

    def encode_type_uints64(self, v: Sequence[int]) -> None:
        self.items.append(list(v))

    def encode_type_uints32(self, v: Sequence[int]) -> None:
        self.items.append(list(v))

    def encode_type_uints16(self, v: Sequence[int]) -> None:
        self.items.append(list(v))

    def encode_type_uints8(self, v: Sequence[int]) -> None:
        self.items.append(list(v))

    def encode_type_floats64(self, v: Sequence[float]) -> None:
        self.items.append(list(v))

    def encode_type_floats32(self, v: Sequence[float]) -> None:
        self.items.append(list(v))

    def encode_type_durations(self, v: Sequence[dt.timedelta]) -> None:
        self.items.append([_seconds(d) for d in v])

    def encode_type_strings(self, v: Sequence[str]) -> None:
        self.items.append(list(v))

    def encode_type_array(self, v: ArrayEncoder) -> None:
        nested = ListTypeEncoder(error_encoder=self.error_encoder, flatten_objects=self.flatten_objects)
        v.encode_log_array(nested)
        self.items.append(nested.items)

    def encode_type_object(self, v: ObjectEncoder) -> None:
        # Array elements have no key to prefix, so objects always nest here
        obj = DictFieldEncoder(error_encoder=self.error_encoder)
        v.encode_log_object(obj)
        self.items.append(obj.target)


def encode_fields(
    fields: Iterable[Field],
    target: dict[str, Any] | None = None,
    *,
    error_encoder: ErrorEncoder = default_error_encoder,
    flatten_objects: bool = False,
) -> dict[str, Any]:
    """Encode ``fields`` into a dict (``target`` if given)."""
    enc = DictFieldEncoder(target, error_encoder=error_encoder, flatten_objects=flatten_objects)
    return enc.encode(fields)


__all__ = [
    "DictFieldEncoder",
    "ListTypeEncoder",
    "encode_fields",
]
