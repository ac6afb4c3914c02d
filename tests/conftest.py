"""Pytest configuration for all tests."""

import pytest
import structlog

from promptgate.core.config import get_settings


@pytest.fixture(autouse=True)
def _isolated_settings():
    """Reload settings for every test so environment patches take effect."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    structlog.contextvars.clear_contextvars()
