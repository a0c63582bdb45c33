"""
Spine-logf Logging - structlog integration for Fields.

This module provides:
- DictFieldEncoder, the FieldEncoder behind structlog event dicts
- ErrorFieldsProcessor, expanding wrapped errors into event fields
- Contextual fields via contextvars
- FieldLogger, a level-checked logger speaking Fields
- Environment-based configuration

Usage:
    from spine_logf.core import field as f
    from spine_logf.logging import configure_logging, get_logger

    # Configure once at startup
    configure_logging()

    log = get_logger(__name__)
    log.info("ingest.started", f.string("source", "finra"), f.int_("rows", 120))
"""

from spine_logf.logging.config import (
    active_settings,
    configure_logging,
    is_configured,
    reset_logging,
)
from spine_logf.logging.context import (
    FieldContext,
    bind_fields,
    clear_fields,
    get_fields,
    new_error,
    set_fields,
    with_error_fields,
    wrap_error,
)
from spine_logf.logging.encoder import DictFieldEncoder, ListTypeEncoder, encode_fields
from spine_logf.logging.logger import FieldLogger, get_logger
from spine_logf.logging.processors import ErrorFieldsProcessor, add_error_fields

__all__ = [
    # Configuration
    "active_settings",
    "configure_logging",
    "is_configured",
    "reset_logging",
    # Context
    "FieldContext",
    "bind_fields",
    "clear_fields",
    "get_fields",
    "new_error",
    "set_fields",
    "with_error_fields",
    "wrap_error",
    # Encoding
    "DictFieldEncoder",
    "ListTypeEncoder",
    "encode_fields",
    "ErrorFieldsProcessor",
    "add_error_fields",
    # Logger
    "FieldLogger",
    "get_logger",
]
