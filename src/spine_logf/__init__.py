"""
Spine-logf - structured fields for errors and logs.

- spine_logf.core: Fields, encoders, error wrapping, levels (pure, no I/O)
- spine_logf.logging: structlog integration (encoder, processor, logger)
"""

__version__ = "0.1.0"

from spine_logf.core import *  # noqa
