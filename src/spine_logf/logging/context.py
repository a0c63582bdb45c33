"""
Contextual fields using contextvars.

Fields bound here ride along implicitly: FieldLogger includes them in every
message, and wrap_error()/new_error() attach them to errors created in the
current context. Thread-safe and asyncio-compatible, like the rest of the
spine logging context.

Usage:
    with FieldContext(f.string("request_id", rid)):
        try:
            handle(request)
        except LookupError as e:
            raise wrap_error(e) from e      # carries request_id
"""

from __future__ import annotations

from contextvars import ContextVar, Token
from typing import Any

from spine_logf.core import errors as core_errors
from spine_logf.core.field import Field

_fields: ContextVar[tuple[Field, ...]] = ContextVar("spine_logf_fields", default=())


def get_fields() -> tuple[Field, ...]:
    """Fields bound to the current context."""
    return _fields.get()


def set_fields(*fields: Field) -> tuple[Field, ...]:
    """Replace the current context's fields."""
    _fields.set(tuple(fields))
    return fields


def bind_fields(*fields: Field) -> tuple[Field, ...]:
    """Append ``fields`` to the current context's fields."""
    updated = _fields.get() + fields
    _fields.set(updated)
    return updated


def clear_fields() -> None:
    _fields.set(())


class FieldContext:
    """
    Context manager for scoped fields.

    Example:
        with FieldContext(f.string("workflow", "ingest")):
            log.info("step.started")
        # fields restored here
    """

    def __init__(self, *fields: Field):
        self._fields = fields
        self._token: Token[tuple[Field, ...]] | None = None

    def __enter__(self) -> FieldContext:
        self._token = _fields.set(_fields.get() + self._fields)
        return self

    def __exit__(self, *args: Any) -> None:
        if self._token is not None:
            _fields.reset(self._token)
            self._token = None

    async def __aenter__(self) -> FieldContext:
        return self.__enter__()

    async def __aexit__(self, *args: Any) -> None:
        self.__exit__(*args)


def wrap_error(err: BaseException | None) -> core_errors.ErrorWrapper:
    """Wrap ``err`` with the current context's fields."""
    return core_errors.wrap_error(err, *_fields.get())


def new_error(text: str, *args: Any) -> core_errors.ErrorWrapper:
    """
    Create an error from ``text % args`` carrying the current context's fields.

    The message is formatted only when ``args`` are given, so a literal
    ``%`` in a plain message is left alone.
    """
    msg = text % args if args else text
    return wrap_error(Exception(msg))


def with_error_fields(err: BaseException | None) -> tuple[Field, ...]:
    """Append the fields recovered from ``err`` to the current context."""
    return bind_fields(*core_errors.collect_error_fields(err))


__all__ = [
    "FieldContext",
    "bind_fields",
    "clear_fields",
    "get_fields",
    "new_error",
    "set_fields",
    "with_error_fields",
    "wrap_error",
]
