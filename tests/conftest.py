"""
Shared pytest fixtures and configuration for spine-logf tests.

This module provides:
- Context and logging-configuration cleanup for test isolation
- Recording encoders
- Sample field layers for chain/join tests

Usage:
    Fixtures are auto-discovered by pytest. Use them as function arguments.
"""

import sys
from pathlib import Path
from typing import Generator

import pytest

# Ensure spine_logf and tests._support are importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
sys.path.insert(0, str(Path(__file__).parent.parent))

from spine_logf.core import field as f
from spine_logf.core.field import Field
from spine_logf.core.settings import clear_settings_cache
from spine_logf.logging import clear_fields, reset_logging
from tests._support.encoders import RecordingFieldEncoder, RecordingTypeEncoder


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Mark all tests without explicit markers as unit tests."""
    for item in items:
        markers = {mark.name for mark in item.iter_markers()}
        if not markers.intersection({"unit", "integration"}):
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Isolation Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def clean_logging_state() -> Generator[None, None, None]:
    """
    Reset contextual fields, cached settings and structlog configuration.

    No test can affect another by leaving fields bound or logging configured.
    """
    clear_fields()
    clear_settings_cache()
    reset_logging()
    yield
    clear_fields()
    clear_settings_cache()
    reset_logging()


# =============================================================================
# Encoder Fixtures
# =============================================================================


@pytest.fixture
def recorder() -> RecordingFieldEncoder:
    return RecordingFieldEncoder()


@pytest.fixture
def type_recorder() -> RecordingTypeEncoder:
    return RecordingTypeEncoder()


# =============================================================================
# Field Layer Fixtures
# =============================================================================


@pytest.fixture
def base_fields() -> list[Field]:
    """Two-field layer every other layer extends."""
    return [f.string("f1", "f1v"), f.int_("f2", 1)]
