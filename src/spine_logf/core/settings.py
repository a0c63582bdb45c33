"""
Settings for spine-logf.

Manifesto:
    Logging behaviour should be explicit, validated, and environment-driven.
    ``LogfSettings`` collects the knobs ``configure_logging()`` needs and
    validates them once, at startup, instead of on every log call.

Features:
    - **level:** Parsed with new_level_with_string(), stored canonical
      (``"warn"`` becomes ``"warning"``)
    - **format:** ``json`` for aggregation, ``console`` for development
    - **error_key:** Event key holding the logged exception
    - **error_fields_prefix:** Namespace for fields recovered from errors
    - **flatten_objects:** Encode nested objects as ``parent.child`` keys
    - **.env file support:** Automatic loading via pydantic-settings

Examples:
    >>> from spine_logf.core.settings import LogfSettings
    >>> LogfSettings(level="WARN").level
    'warning'

Tags:
    settings, configuration, pydantic, environment, spine-logf

Doc-Types:
    - API Reference
    - Configuration Guide
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from spine_logf.core.level import Level, new_level_with_string


class LogfSettings(BaseSettings):
    """Logging configuration, read from ``SPINE_LOGF_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SPINE_LOGF_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Output ───────────────────────────────────────────────────
    level: str = Field(default="info", description="debug | info | warn(ing) | error")
    format: Literal["json", "console"] = Field(default="console")
    service: str = Field(default="spine")

    # ── Error fields ─────────────────────────────────────────────
    error_key: str = Field(default="error", min_length=1)
    error_fields_prefix: str | None = Field(
        default=None,
        description="Prefix for fields recovered from wrapped errors (e.g. 'error.')",
    )
    flatten_objects: bool = Field(default=False)

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Reject unknown level names and normalize known ones."""
        lvl, ok = new_level_with_string(v)
        if not ok:
            raise ValueError(f"Unknown log level: {v!r}")
        return str(lvl)

    @property
    def log_level(self) -> Level:
        return Level.parse(self.level)


# ── Settings factory with caching ────────────────────────────────────────

_settings_cache: dict[str, LogfSettings] = {}


def get_settings(*, _force_reload: bool = False) -> LogfSettings:
    """Load, validate, and cache a :class:`LogfSettings` instance."""
    if not _force_reload and "default" in _settings_cache:
        return _settings_cache["default"]
    settings = LogfSettings()
    _settings_cache["default"] = settings
    return settings


def clear_settings_cache() -> None:
    _settings_cache.clear()


__all__ = [
    "LogfSettings",
    "clear_settings_cache",
    "get_settings",
]
