"""Shared pytest fixtures for the test suite."""

import logging
from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock

import pytest

from plantmon.lib.client import MonitorClient
from plantmon.lib.config import Settings
from plantmon.lib.config.testing import set_settings
from plantmon.lib.reading import Reading


@pytest.fixture(autouse=True)
def configure_caplog(caplog):
    """Ensure caplog captures logs from the plantmon namespace."""
    caplog.set_level(logging.DEBUG, logger="plantmon")


@pytest.fixture(autouse=True)
def test_settings():
    """Use default settings, ignoring any local .env file."""
    settings = Settings(_env_file=None)
    set_settings(settings)
    yield settings
    set_settings(None)


@pytest.fixture
def frozen_time():
    """Return a fixed datetime for deterministic tests."""
    return datetime(2024, 6, 15, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def make_reading(frozen_time):
    """Factory for readings taken a number of minutes before frozen_time."""

    def _make(minutes_ago: float = 0, **fields) -> Reading:
        return Reading(
            timestamp=frozen_time - timedelta(minutes=minutes_ago),
            **fields,
        )

    return _make


@pytest.fixture
def mock_source():
    """Create a mock JSON source."""
    source = AsyncMock()
    source.get_json = AsyncMock()
    source.close = AsyncMock()
    return source


@pytest.fixture
def client(mock_source):
    """Create a MonitorClient over the mock source."""
    return MonitorClient(mock_source)
