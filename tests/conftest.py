"""Shared fixtures."""

from unittest.mock import MagicMock

import pytest


@pytest.fixture
def session() -> MagicMock:
    """Create a mock aiohttp session."""
    return MagicMock()
