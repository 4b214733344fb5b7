"""
Pytest configuration and fixtures for tubelist tests.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from tubelist.config.settings import Settings
from tubelist.services.interfaces import HttpTransport


@pytest.fixture
def mock_settings(tmp_path: Path) -> Settings:
    """Settings with diagnostic dumps redirected to a temporary directory."""
    return Settings(
        dump_dir=tmp_path / "dumps",
        request_timeout=5.0,
        playlist_limit=100,
        search_limit=10,
    )


@pytest.fixture
def mock_transport() -> AsyncMock:
    """Transport double; set ``get_text``/``post_json`` side effects per test."""
    transport = AsyncMock(spec=HttpTransport)
    return transport
