"""
Structured logging for window assignment components.

Components log through a ``ContextLogger`` carrying the window
specification they serve, so every line emitted on behalf of one spec
(size, grace, retention) can be correlated in JSON output. Nothing is
configured on import; applications call ``setup_logging()`` once at startup.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from typing import TYPE_CHECKING, Any, Dict

if TYPE_CHECKING:
    from stream_windows.config.settings import LoggingSettings


class JSONFormatter(logging.Formatter):
    """
    Format log records as one JSON object per line.

    The ``context`` extra set by ``ContextLogger`` is emitted as a nested
    object; exceptions are flattened to type, message and traceback.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            # Partition threads show up here
            "thread": record.threadName,
        }

        context = getattr(record, "context", None)
        if context:
            log_data["context"] = context

        if record.exc_info:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "traceback": self.formatException(record.exc_info),
            }

        return json.dumps(log_data, default=str)


class ContextLogger(logging.LoggerAdapter):
    """
    Logger adapter that attaches persistent context to every record.

    Per-call context passed as ``extra={"context": {...}}`` is merged on top.
    """

    def process(self, msg: str, kwargs: Dict[str, Any]) -> tuple:
        extra = kwargs.setdefault("extra", {})
        extra["context"] = {**self.extra, **extra.get("context", {})}
        return msg, kwargs


def get_logger(name: str, context: Dict[str, Any] | None = None) -> ContextLogger:
    """
    Get a context-aware logger.

    Args:
        name: Logger name (typically __name__)
        context: Context added to all records of this logger
    """
    return ContextLogger(logging.getLogger(name), context or {})


def setup_logging(
    settings: "LoggingSettings | None" = None,
    max_bytes: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5,
) -> logging.Logger:
    """
    Configure the root logger from logging settings.

    Args:
        settings: Logging settings; read from the environment if None
        max_bytes: Maximum log file size before rotation
        backup_count: Number of rotated log files to keep

    Returns:
        Configured root logger
    """
    if settings is None:
        from stream_windows.config.settings import LoggingSettings

        settings = LoggingSettings()

    if settings.log_format == "json":
        formatter: logging.Formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if settings.log_file:
        handlers.append(
            RotatingFileHandler(settings.log_file, maxBytes=max_bytes, backupCount=backup_count)
        )

    root_logger = logging.getLogger()
    root_logger.setLevel(settings.log_level)
    root_logger.handlers.clear()
    for handler in handlers:
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    root_logger.info(
        "Logging configured",
        extra={"context": settings.model_dump()},
    )
    return root_logger
