"""
Severity levels and level checkers.

Level is ordered from least to most verbose: ERROR < WARN < INFO < DEBUG.
A logger configured at INFO lets ERROR, WARN and INFO through and drops DEBUG.

A LevelChecker is a plain predicate ``(Level) -> bool``. Loggers depend on
the predicate, not on a Level value, so thresholds can change at runtime::

    threshold = {"level": Level.INFO}
    getter = LevelCheckerGetterFunc(lambda: threshold["level"].checker())
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import IntEnum
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from spine_logf.core.encoder import TypeEncoder


class Level(IntEnum):
    """Severity level of a log message."""

    # Errors only
    ERROR = 0
    # Errors and warnings
    WARN = 1
    # Default: errors, warnings and infos
    INFO = 2
    # Everything
    DEBUG = 3

    def enabled(self, other: Level) -> bool:
        """Return True if ``other`` is allowed at this level."""
        return self >= other

    def checker(self) -> LevelChecker:
        def check(other: Level) -> bool:
            return self.enabled(other)

        return check

    def level_checker(self) -> LevelChecker:
        """Satisfy LevelCheckerGetter."""
        return self.checker()

    def to_logging_level(self) -> int:
        """Matching stdlib ``logging`` level number."""
        return _STDLIB_LEVELS[self]

    @classmethod
    def parse(cls, name: str) -> Level:
        """Like new_level_with_string() but raises ValueError on unknown names."""
        lvl, ok = new_level_with_string(name)
        if not ok:
            raise ValueError(f"unknown log level: {name!r}")
        return lvl

    def __str__(self) -> str:
        return _NAMES.get(self, "unknown")


_NAMES: dict[Level, str] = {
    Level.DEBUG: "debug",
    Level.INFO: "info",
    Level.WARN: "warning",
    Level.ERROR: "error",
}

_STDLIB_LEVELS: dict[Level, int] = {
    Level.DEBUG: logging.DEBUG,
    Level.INFO: logging.INFO,
    Level.WARN: logging.WARNING,
    Level.ERROR: logging.ERROR,
}


def new_level_with_string(name: str) -> tuple[Level, bool]:
    """
    Parse a level name, case-insensitively.

    ``"warn"`` is accepted as an alias for ``"warning"``. Unknown names give
    ``(Level.ERROR, False)``.
    """
    match name.lower():
        case "debug":
            return Level.DEBUG, True
        case "info":
            return Level.INFO, True
        case "warn" | "warning":
            return Level.WARN, True
        case "error":
            return Level.ERROR, True
    return Level.ERROR, False


LevelChecker = Callable[[Level], bool]


@runtime_checkable
class LevelCheckerGetter(Protocol):
    """Anything that can hand a logger its LevelChecker."""

    def level_checker(self) -> LevelChecker: ...


class LevelCheckerGetterFunc:
    """Adapt a zero-argument function into a LevelCheckerGetter."""

    def __init__(self, fn: Callable[[], LevelChecker]):
        self._fn = fn

    def level_checker(self) -> LevelChecker:
        return self._fn()


def default_level_encoder(lvl: Level, enc: TypeEncoder) -> None:
    enc.encode_type_string(str(lvl))


__all__ = [
    "Level",
    "LevelChecker",
    "LevelCheckerGetter",
    "LevelCheckerGetterFunc",
    "default_level_encoder",
    "new_level_with_string",
]
