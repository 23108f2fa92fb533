"""Shared pytest fixtures."""

import pytest
import structlog


@pytest.fixture(autouse=True)
def _reset_structlog():
    """Undo configure_logging() so loggers don't keep a closed capture stream."""
    yield
    structlog.reset_defaults()
