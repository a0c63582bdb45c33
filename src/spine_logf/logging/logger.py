"""
FieldLogger - a structlog logger that speaks Fields.

FieldLogger keeps an immutable tuple of Fields, checks levels through a
LevelChecker before doing any encoding work, and expands the fields carried
by wrapped errors into the emitted event.

Field precedence in an emitted event (first wins):

1. fields passed to the log call
2. fields bound with with_fields()
3. fields bound in the current context (spine_logf.logging.context)
4. fields recovered from the cause chains of error fields at any of the
   levels above, outer wrapper first

Usage:
    log = get_logger(__name__).with_fields(f.string("workflow", "ingest"))
    try:
        load(path)
    except OSError as e:
        log.error("load.failed", f.error(e), f.string("path", path))
"""

from __future__ import annotations

from typing import Any

import structlog

from spine_logf.core import errors as core_errors
from spine_logf.core.errors import ErrorEncoder, default_error_encoder
from spine_logf.core.field import Field, FieldType
from spine_logf.core.level import Level, LevelChecker, LevelCheckerGetter
from spine_logf.logging.config import active_settings
from spine_logf.logging.context import get_fields
from spine_logf.logging.encoder import DictFieldEncoder
from spine_logf.logging.processors import add_error_fields

_METHODS: dict[Level, str] = {
    Level.DEBUG: "debug",
    Level.INFO: "info",
    Level.WARN: "warning",
    Level.ERROR: "error",
}


class FieldLogger:
    """
    Structured logger carrying Fields.

    Args:
        bound: structlog logger to emit through
        checker: Predicate deciding which levels are emitted
        fields: Fields included in every message
        error_encoder: Encodes error-typed fields
        error_fields_prefix: Namespace for fields recovered from errors
        flatten_objects: Flatten object fields into dotted keys
    """

    def __init__(
        self,
        bound: Any,
        checker: LevelChecker,
        fields: tuple[Field, ...] = (),
        *,
        error_encoder: ErrorEncoder = default_error_encoder,
        error_fields_prefix: str | None = None,
        flatten_objects: bool = False,
    ):
        self._bound = bound
        self._checker = checker
        self._fields = tuple(fields)
        self._error_encoder = error_encoder
        self._error_fields_prefix = error_fields_prefix
        self._flatten_objects = flatten_objects

    @property
    def fields(self) -> tuple[Field, ...]:
        return self._fields

    def _copy(self, *, bound: Any = None, fields: tuple[Field, ...] | None = None) -> FieldLogger:
        return FieldLogger(
            self._bound if bound is None else bound,
            self._checker,
            self._fields if fields is None else fields,
            error_encoder=self._error_encoder,
            error_fields_prefix=self._error_fields_prefix,
            flatten_objects=self._flatten_objects,
        )

    # ── Derivation ───────────────────────────────────────────────

    def with_fields(self, *fields: Field) -> FieldLogger:
        """Return a logger with ``fields`` appended."""
        return self._copy(fields=self._fields + fields)

    def with_name(self, name: str) -> FieldLogger:
        return self._copy(bound=self._bound.bind(logger=name))

    def with_error_fields(self, err: BaseException | None) -> FieldLogger:
        """Return a logger carrying the fields recovered from ``err``."""
        return self.with_fields(*core_errors.collect_error_fields(err))

    def wrap_error(self, err: BaseException | None) -> core_errors.ErrorWrapper:
        """Wrap ``err`` with the context's and this logger's fields."""
        return core_errors.wrap_error(err, *get_fields(), *self._fields)

    # ── Emission ─────────────────────────────────────────────────

    def enabled(self, level: Level) -> bool:
        return self._checker(level)

    def debug(self, text: str, *fields: Field) -> None:
        self._log(Level.DEBUG, text, fields)

    def info(self, text: str, *fields: Field) -> None:
        self._log(Level.INFO, text, fields)

    def warn(self, text: str, *fields: Field) -> None:
        self._log(Level.WARN, text, fields)

    warning = warn

    def error(self, text: str, *fields: Field) -> None:
        self._log(Level.ERROR, text, fields)

    def _log(self, level: Level, text: str, fields: tuple[Field, ...]) -> None:
        if not self._checker(level):
            return

        event: dict[str, Any] = {}
        enc = DictFieldEncoder(
            event,
            error_encoder=self._error_encoder,
            flatten_objects=self._flatten_objects,
        )
        # Later writes win, so encode from lowest to highest precedence
        enc.encode(get_fields())
        enc.encode(self._fields)
        enc.encode(fields)

        # Highest precedence first; recovered keys never overwrite
        for f in (*fields, *self._fields, *get_fields()):
            if f.type is FieldType.ERROR and f.value is not None:
                add_error_fields(
                    f.value,
                    event,
                    prefix=self._error_fields_prefix,
                    error_encoder=self._error_encoder,
                    flatten_objects=self._flatten_objects,
                )

        # bind() keeps field keys from clashing with structlog's ``event`` argument
        getattr(self._bound.bind(**event), _METHODS[level])(text)


def get_logger(
    name: str | None = None,
    *,
    level: Level | LevelCheckerGetter | None = None,
) -> FieldLogger:
    """
    Get a FieldLogger.

    Args:
        name: Logger name (usually __name__), bound as ``logger``
        level: Level or LevelCheckerGetter; defaults to the configured level
    """
    settings = active_settings()
    getter: LevelCheckerGetter = level if level is not None else settings.log_level

    bound = structlog.get_logger()
    if name:
        bound = bound.bind(logger=name)

    return FieldLogger(
        bound,
        getter.level_checker(),
        error_fields_prefix=settings.error_fields_prefix,
        flatten_objects=settings.flatten_objects,
    )


__all__ = ["FieldLogger", "get_logger"]
