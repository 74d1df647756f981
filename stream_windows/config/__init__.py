"""Configuration management"""

from stream_windows.config.settings import (
    Settings,
    WindowSettings,
    LoggingSettings,
    load_settings,
)
from stream_windows.config.logging import (
    JSONFormatter,
    ContextLogger,
    setup_logging,
    get_logger,
)

__all__ = [
    "Settings",
    "WindowSettings",
    "LoggingSettings",
    "load_settings",
    "JSONFormatter",
    "ContextLogger",
    "setup_logging",
    "get_logger",
]
