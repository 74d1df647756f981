"""Configuration settings using Pydantic Settings"""

import logging
from typing import TYPE_CHECKING, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from stream_windows.windows.retention import DEFAULT_SEGMENTS

if TYPE_CHECKING:
    from stream_windows.windows.spec import TimeWindows


class WindowSettings(BaseSettings):
    """Window specification settings"""

    size_ms: int = Field(alias="WINDOW_SIZE_MS")
    advance_ms: int | None = Field(default=None, alias="WINDOW_ADVANCE_MS")
    grace_ms: int | None = Field(default=None, alias="WINDOW_GRACE_MS")
    retention_ms: int | None = Field(default=None, alias="WINDOW_RETENTION_MS")
    segments: int = Field(default=DEFAULT_SEGMENTS, alias="WINDOW_SEGMENTS")

    model_config = SettingsConfigDict(env_file=".env.local", extra="ignore")

    def to_spec(self) -> "TimeWindows":
        """
        Build the window specification described by these settings.

        Without an advance the windows are tumbling; without a retention time the
        one-day default applies; without a grace period it is derived from
        the retention time.

        Returns:
            TimeWindows instance

        Raises:
            InvalidConfiguration: If the values do not form a valid specification
        """
        from stream_windows.windows.spec import TimeWindows

        spec = TimeWindows.of(self.size_ms).with_segments(self.segments)
        if self.advance_ms is not None:
            spec = spec.advance_by(self.advance_ms)
        if self.retention_ms is not None:
            spec = spec.with_retention(self.retention_ms)
        if self.grace_ms is not None:
            spec = spec.with_grace(self.grace_ms)
        return spec


class LoggingSettings(BaseSettings):
    """Logging configuration settings"""

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: Literal["json", "text"] = Field(default="json", alias="LOG_FORMAT")
    log_file: str | None = Field(default=None, alias="LOG_FILE")

    model_config = SettingsConfigDict(env_file=".env.local", extra="ignore")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level


class Settings(BaseSettings):
    """Main settings class that aggregates all configuration"""

    window: WindowSettings = Field(default_factory=WindowSettings)
    log: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = SettingsConfigDict(env_file=".env.local", extra="ignore")


def load_settings() -> Settings:
    """Load settings from the environment and ``.env.local``."""
    return Settings()
