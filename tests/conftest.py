"""Shared test configuration for fatenums tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from typing import Any

import pytest


@pytest.fixture
def fatenums_debug_logs(caplog: pytest.LogCaptureFixture) -> Generator[pytest.LogCaptureFixture]:
    """Capture DEBUG records emitted by the fatenums package."""
    caplog.set_level(logging.DEBUG, logger="fatenums")
    yield caplog


# Test markers for different test types
def pytest_configure(config: Any) -> None:
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test (fast, no I/O)"
    )
    config.addinivalue_line(
        "markers", "orm: mark test as exercising the SQLAlchemy column type"
    )
