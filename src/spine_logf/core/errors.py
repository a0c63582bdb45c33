"""
Error wrapping with structured fields.

Lets callers attach Fields to an exception where it is created or re-raised,
and lets the log emitter later recover every field set attached along the
cause chain, merged into one ordered, deduplicated list.

Manifesto:
    - **Context at the source:** The code that knows the user id, file name
      or request id attaches it when the error happens, not when it is logged
    - **Transparent chains:** A wrapper is an exception with a cause, so it
      composes with ``raise ... from`` and with domain errors carrying ``cause``
    - **Immutable once published:** Each wrap owns its own tuple of fields
    - **Positional dedup:** Layers that extend one another collapse into one
      list without per-key hashing

Architecture:
    ::

        raise wrap_error(e, f1, f2)               # innermost layer
              │
        raise wrap_error(err, f1, f2, f3)         # outer layer, more fields
              │
        ─────────────── log time ──────────────────────────────────────
        extract_error_fields(err, sink)
              sink((f1, f2, f3))                  # outer first
              sink((f1, f2))                      # then inner
        join_fields folds the layers:
              [] + (f1, f2, f3) + (f1, f2)  ──►  [f1, f2, f3]

        Diverging layers keep everything after the divergence point:

              (a, b, c)    (a, b, d)   ──►  [a, b, c, d]

Features:
    - **ErrorWrapper:** Exception carrying ``cause`` + ``fields``
    - **wrap_error():** Build a wrapper from an error and fields
    - **extract_error_fields():** Outer-to-inner walk reporting field layers
    - **join_fields():** Positional-prefix merge of layers
    - **collect_error_fields():** extract + join in one call
    - **default_error_encoder():** ``key`` message + optional ``key.verbose``

Guardrails:
    ❌ DON'T: Build cyclic cause chains; the walk does not detect cycles
    ✅ DO: Chain with ``raise ... from`` or wrap_error()

    ❌ DON'T: Expect join_fields() to merge same-keyed fields at different
       positions; only a shared positional prefix is collapsed
    ✅ DO: Build each layer by extending the previous layer's fields

Examples:
    >>> from spine_logf.core import field as f
    >>> err = wrap_error(ValueError("bad row"), f.string("file", "a.csv"))
    >>> str(err)
    'bad row'
    >>> collect_error_fields(err)
    [Field(key='file', type=<FieldType.STRING: 'string'>, value='a.csv')]

Tags:
    error-handling, error-chaining, structured-logging, fields, spine-logf
"""

from __future__ import annotations

import traceback
from collections.abc import Callable, Iterable, Sequence
from typing import Protocol, runtime_checkable

from spine_logf.core.encoder import FieldEncoder
from spine_logf.core.field import Field

# Called with each layer's fields during extract_error_fields()
FieldSink = Callable[[tuple[Field, ...]], None]

# (key, error, encoder) -> None
ErrorEncoder = Callable[[str, BaseException | None, FieldEncoder], None]


@runtime_checkable
class VerboseError(Protocol):
    """An error that can render a detailed form distinct from ``str(err)``."""

    def format_verbose(self) -> str: ...


class TracebackError(Exception):
    """
    Exception whose verbose form is its formatted traceback.

    Subclass it to have default_error_encoder() emit a ``<key>.verbose``
    field with the stack of the raise site.
    """

    def format_verbose(self) -> str:
        return "".join(traceback.format_exception(type(self), self, self.__traceback__))


class ErrorWrapper(Exception):
    """
    Exception that attaches Fields to an underlying cause.

    ``str(wrapper)`` is the cause's message, so wrapping never changes what
    the error says. ``__cause__`` points at the cause, so Python tracebacks
    show the chain as well.

    Attributes:
        cause: The wrapped exception
        fields: Fields attached at this layer (tuple, never mutated)
    """

    def __init__(self, cause: BaseException | None, fields: Iterable[Field] | None = None):
        super().__init__(cause)
        self.cause = cause
        self.fields: tuple[Field, ...] = tuple(fields) if fields else ()
        self.__cause__ = cause

    def __str__(self) -> str:
        return "" if self.cause is None else str(self.cause)

    def __repr__(self) -> str:
        keys = ", ".join(f.key for f in self.fields)
        return f"ErrorWrapper({self.cause!r}, fields=[{keys}])"


def wrap_error(err: BaseException | None, *fields: Field) -> ErrorWrapper:
    """Wrap ``err`` with ``fields``; the wrapper owns its own copy of them."""
    return ErrorWrapper(err, fields)


def get_cause(err: BaseException) -> BaseException | None:
    """
    Return the explicit cause of ``err``, or None.

    Follows ``raise ... from`` (``__cause__``) first, then a ``cause``
    attribute as carried by domain error classes. The implicit
    ``__context__`` is not followed.
    """
    cause = getattr(err, "__cause__", None)
    if cause is None:
        cause = getattr(err, "cause", None)
    if isinstance(cause, BaseException):
        return cause
    return None


def extract_error_fields(err: BaseException | None, sink: FieldSink) -> None:
    """
    Call ``sink`` with each wrapper's fields, outer to inner.

    Plain caused errors are stepped over without calling ``sink``; the walk
    stops at the first error that has no cause.
    """
    while err is not None:
        if isinstance(err, ErrorWrapper):
            sink(err.fields)
            err = err.cause
        else:
            err = get_cause(err)


def join_fields(result: list[Field], fields: Sequence[Field]) -> list[Field]:
    """
    Append the layer ``fields`` to ``result``, skipping a shared prefix.

    Fields of ``fields`` that positionally match ``result`` are treated as
    already recorded. From the first mismatch on, every remaining field is
    appended, even if a same-keyed field sits elsewhere in ``result``.

    Mutates and returns ``result``.
    """
    matching = True
    for i, f in enumerate(fields):
        if not matching or len(result) <= i or not result[i].equal(f):
            result.append(f)
            matching = False
    return result


def collect_error_fields(err: BaseException | None) -> list[Field]:
    """Return the joined fields of every wrapper in ``err``'s chain."""
    result: list[Field] = []

    def sink(fields: tuple[Field, ...]) -> None:
        join_fields(result, fields)

    extract_error_fields(err, sink)
    return result


def default_error_encoder(key: str, err: BaseException | None, enc: FieldEncoder) -> None:
    """
    Encode ``err`` as a ``key`` message field.

    ``"<nil>"`` stands in for a missing error. If the error is a VerboseError
    whose verbose text differs from the message, a second ``key.verbose``
    field carries it.
    """
    msg = "<nil>" if err is None else str(err)
    enc.encode_field_string(key, msg)

    if isinstance(err, VerboseError):
        verbose = err.format_verbose()
        if verbose != msg:
            enc.encode_field_string(key + ".verbose", verbose)


__all__ = [
    "ErrorEncoder",
    "ErrorWrapper",
    "FieldSink",
    "TracebackError",
    "VerboseError",
    "collect_error_fields",
    "default_error_encoder",
    "extract_error_fields",
    "get_cause",
    "join_fields",
    "wrap_error",
]
