"""Pytest configuration and shared fixtures"""

import logging

import pytest

from stream_windows.windows.spec import TimeWindows


@pytest.fixture(autouse=True)
def configure_test_logging():
    """Configure logging for tests"""
    logging.basicConfig(
        level=logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


@pytest.fixture(autouse=True)
def reset_env_vars(monkeypatch):
    """Clear window and logging environment variables before each test."""
    env_vars_to_clear = [
        "WINDOW_SIZE_MS",
        "WINDOW_ADVANCE_MS",
        "WINDOW_GRACE_MS",
        "WINDOW_RETENTION_MS",
        "WINDOW_SEGMENTS",
        "LOG_LEVEL",
        "LOG_FORMAT",
        "LOG_FILE",
    ]

    for var in env_vars_to_clear:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def hopping_spec():
    """5 second windows advancing every second"""
    return TimeWindows.of(5000).advance_by(1000)


@pytest.fixture
def tumbling_spec():
    """1 minute tumbling windows"""
    return TimeWindows.of(60_000)
