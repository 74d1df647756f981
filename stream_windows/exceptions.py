"""Custom exceptions for window assignment and retention planning."""

from typing import Any, Dict


class WindowingError(Exception):
    """
    Base class for all windowing errors.

    Attributes:
        message: Error message
        details: Optional error details (field, provided, expected, ...)
    """

    def __init__(self, message: str, details: Dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the error to a dictionary, e.g. for an error side channel.

        Returns:
            Dictionary with error type, message and details
        """
        error_dict: Dict[str, Any] = {
            "type": type(self).__name__,
            "message": self.message,
        }
        if self.details:
            error_dict["details"] = self.details
        return {"error": error_dict}


class InvalidConfiguration(WindowingError, ValueError):
    """Raised when a window specification is built with invalid values."""


class InvalidTimestamp(WindowingError, ValueError):
    """Raised when a record timestamp cannot be assigned to windows."""
