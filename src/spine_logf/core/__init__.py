"""Spine-logf core -- fields, encoders, error wrapping and levels.

Manifesto:
    Structured context belongs to the error, not to the log line that
    eventually reports it.  ``spine_logf.core`` lets code attach typed fields
    to an exception at the point it happens and lets the logger recover them,
    merged and in order, however many layers the error passed through.

    The core is pure: no I/O, no global state, no logging of its own.

Architecture::

    field.py       Field, FieldType and typed constructors (string, int64, ...)
    encoder.py     FieldEncoder / TypeEncoder contracts + PrefixingFieldEncoder
    errors.py      wrap_error, extract_error_fields, join_fields,
                   default_error_encoder
    level.py       Level, LevelChecker, new_level_with_string
    settings.py    LogfSettings (pydantic-settings)

Usage:
    from spine_logf.core import field as f
    from spine_logf.core import wrap_error, collect_error_fields

    try:
        load(path)
    except OSError as e:
        raise wrap_error(e, f.string("path", path)) from e
"""

from spine_logf.core import field
from spine_logf.core.encoder import (
    ArrayEncoder,
    FieldEncoder,
    ObjectEncoder,
    PrefixingFieldEncoder,
    TypeEncoder,
)
from spine_logf.core.errors import (
    ErrorEncoder,
    ErrorWrapper,
    TracebackError,
    VerboseError,
    collect_error_fields,
    default_error_encoder,
    extract_error_fields,
    get_cause,
    join_fields,
    wrap_error,
)
from spine_logf.core.field import Field, FieldType, FieldValueError
from spine_logf.core.level import (
    Level,
    LevelChecker,
    LevelCheckerGetter,
    LevelCheckerGetterFunc,
    default_level_encoder,
    new_level_with_string,
)

__all__ = [
    "field",
    # Fields
    "Field",
    "FieldType",
    "FieldValueError",
    # Encoders
    "ArrayEncoder",
    "FieldEncoder",
    "ObjectEncoder",
    "PrefixingFieldEncoder",
    "TypeEncoder",
    # Errors
    "ErrorEncoder",
    "ErrorWrapper",
    "TracebackError",
    "VerboseError",
    "collect_error_fields",
    "default_error_encoder",
    "extract_error_fields",
    "get_cause",
    "join_fields",
    "wrap_error",
    # Levels
    "Level",
    "LevelChecker",
    "LevelCheckerGetter",
    "LevelCheckerGetterFunc",
    "default_level_encoder",
    "new_level_with_string",
]
