"""
Structlog processors for errors carrying fields.

``ErrorFieldsProcessor`` looks for an exception in the event dict, either
under the configured error key (``log.error("load.failed", error=exc)``) or
in ``exc_info`` (``log.exception(...)``), recovers the fields attached with
wrap_error() along its chain and adds them to the event.

    event_dict in:   {"event": "load.failed", "error": ErrorWrapper(...)}
    event_dict out:  {"event": "load.failed", "error": "bad row",
                      "file": "a.csv", "row": 17}

Explicit event keys always win over recovered ones.
"""

from __future__ import annotations

import sys
from typing import Any

from spine_logf.core.encoder import FieldEncoder, PrefixingFieldEncoder
from spine_logf.core.errors import ErrorEncoder, collect_error_fields, default_error_encoder
from spine_logf.logging.encoder import DictFieldEncoder


def _exc_info_error(exc_info: Any) -> BaseException | None:
    if isinstance(exc_info, BaseException):
        return exc_info
    if isinstance(exc_info, tuple) and len(exc_info) == 3:
        return exc_info[1]
    if exc_info is True:
        return sys.exc_info()[1]
    return None


def add_error_fields(
    err: BaseException | None,
    target: dict[str, Any],
    *,
    prefix: str | None = None,
    error_encoder: ErrorEncoder = default_error_encoder,
    flatten_objects: bool = False,
) -> dict[str, Any]:
    """
    Add the fields recovered from ``err``'s chain to ``target``.

    Keys already present in ``target`` are kept. Recovered fields come
    outer layer first, so the first occurrence of a key wins. With
    ``prefix`` every recovered key is namespaced through a
    PrefixingFieldEncoder.
    """
    fields = collect_error_fields(err)
    if not fields:
        return target

    for f in fields:
        # One field may write several keys (error + error.verbose)
        scratch: dict[str, Any] = {}
        enc: FieldEncoder = DictFieldEncoder(
            scratch,
            error_encoder=error_encoder,
            flatten_objects=flatten_objects,
        )
        if prefix:
            enc = PrefixingFieldEncoder(prefix, enc)
        f.accept(enc)
        for key, value in scratch.items():
            target.setdefault(key, value)
    return target


class ErrorFieldsProcessor:
    """
    Structlog processor expanding wrapped errors into event fields.

    Args:
        error_key: Event key holding the exception
        error_encoder: Encodes the exception's own message (and verbose form)
        prefix: Optional namespace for recovered fields, e.g. ``"error."``
        flatten_objects: Flatten nested object fields into dotted keys
    """

    def __init__(
        self,
        error_key: str = "error",
        *,
        error_encoder: ErrorEncoder = default_error_encoder,
        prefix: str | None = None,
        flatten_objects: bool = False,
    ):
        self.error_key = error_key
        self.error_encoder = error_encoder
        self.prefix = prefix
        self.flatten_objects = flatten_objects

    def __call__(self, logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        err = event_dict.get(self.error_key)
        if isinstance(err, BaseException):
            del event_dict[self.error_key]
            self._recover(err, event_dict)
            self.error_encoder(self.error_key, err, DictFieldEncoder(event_dict))
            return event_dict

        exc = _exc_info_error(event_dict.get("exc_info"))
        if exc is not None:
            self._recover(exc, event_dict)
        return event_dict

    def _recover(self, err: BaseException, event_dict: dict[str, Any]) -> None:
        add_error_fields(
            err,
            event_dict,
            prefix=self.prefix,
            error_encoder=self.error_encoder,
            flatten_objects=self.flatten_objects,
        )


__all__ = ["ErrorFieldsProcessor", "add_error_fields"]
