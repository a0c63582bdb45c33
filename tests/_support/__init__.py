"""
Test support utilities for spine-logf tests.

Helpers that don't fit as pytest fixtures but are shared across test files.
"""

from tests._support.encoders import RecordingFieldEncoder, RecordingTypeEncoder

__all__ = ["RecordingFieldEncoder", "RecordingTypeEncoder"]
