"""
Logging configuration.

Provides a single entry point for configuring structlog with error-field
expansion. Values are resolved from, in order of precedence:

- explicit arguments to configure_logging()
- the LogfSettings instance passed in
- ``SPINE_LOGF_*`` environment variables / ``.env``

Usage:
    # Configure at application startup
    from spine_logf.logging import configure_logging
    configure_logging()

    # Or with explicit settings
    configure_logging(level="debug", format="json")
"""

from __future__ import annotations

import logging
import sys
from typing import Any, Literal

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from spine_logf.core.level import Level
from spine_logf.core.settings import LogfSettings, get_settings
from spine_logf.logging.processors import ErrorFieldsProcessor

# Track if logging has been configured
_configured = False
_active_settings: LogfSettings | None = None


def _service_processor(service: str) -> Processor:
    def add_service_metadata(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
        event_dict.setdefault("service", service)
        return event_dict

    return add_service_metadata


def configure_logging(
    settings: LogfSettings | None = None,
    *,
    level: Level | str | None = None,
    format: Literal["json", "console"] | None = None,
    force: bool = False,
) -> LogfSettings:
    """
    Configure structured logging for the application.

    Should be called once at application startup. Subsequent calls are
    no-ops unless force=True.

    Args:
        settings: Base settings (defaults to environment-loaded settings)
        level: Level override, a Level or a level name
        format: Output format override
        force: Reconfigure even if already configured

    Returns:
        The effective settings
    """
    global _configured, _active_settings

    if _configured and not force and _active_settings is not None:
        return _active_settings

    base = settings or get_settings()
    overrides: dict[str, Any] = {}
    if level is not None:
        overrides["level"] = str(level)
    if format is not None:
        overrides["format"] = format
    effective = LogfSettings(**{**base.model_dump(), **overrides}) if overrides else base

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _service_processor(effective.service),
        ErrorFieldsProcessor(
            effective.error_key,
            prefix=effective.error_fields_prefix,
            flatten_objects=effective.flatten_objects,
        ),
        structlog.processors.StackInfoRenderer(),
    ]

    # Choose renderer based on format
    if effective.format == "json":
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    stdlib_level = effective.log_level.to_logging_level()
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(stdlib_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Configure stdlib logging to match
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=stdlib_level,
        force=True,
    )

    _configured = True
    _active_settings = effective

    structlog.get_logger("spine_logf").debug(
        "logging.configured",
        level=effective.level,
        format=effective.format,
    )
    return effective


def active_settings() -> LogfSettings:
    """Settings from the last configure_logging() call, else from the environment."""
    return _active_settings if _active_settings is not None else get_settings()


def is_configured() -> bool:
    """Check if logging has been configured."""
    return _configured


def reset_logging() -> None:
    """Forget the current configuration and restore structlog defaults."""
    global _configured, _active_settings
    _configured = False
    _active_settings = None
    structlog.reset_defaults()


__all__ = [
    "active_settings",
    "configure_logging",
    "is_configured",
    "reset_logging",
]
