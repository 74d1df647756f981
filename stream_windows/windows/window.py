"""
Window value type.

A window is a half-open time interval ``[start_ms, end_ms)`` to which the
values of matching records are aggregated.
"""

from dataclasses import dataclass

from stream_windows.exceptions import InvalidConfiguration

# Largest representable timestamp, used as the end of never-closing windows
MAX_TIMESTAMP_MS = 2**63 - 1


@dataclass(frozen=True, order=True)
class Window:
    """
    Time window with inclusive start and exclusive end, both in milliseconds.

    Two windows are equal iff their start and end are equal.
    """

    start_ms: int
    end_ms: int

    def __post_init__(self):
        if self.start_ms < 0:
            raise InvalidConfiguration(
                f"Window start must not be negative, got {self.start_ms}",
                details={"field": "start_ms", "provided": self.start_ms},
            )
        if self.end_ms <= self.start_ms:
            raise InvalidConfiguration(
                f"Window end ({self.end_ms}) must be after window start ({self.start_ms})",
                details={"field": "end_ms", "provided": self.end_ms},
            )

    @property
    def size_ms(self) -> int:
        return self.end_ms - self.start_ms

    def contains(self, timestamp_ms: int) -> bool:
        """Check if the timestamp falls inside ``[start_ms, end_ms)``."""
        return self.start_ms <= timestamp_ms < self.end_ms

    def overlaps(self, other: "Window") -> bool:
        """Check if this window shares at least one millisecond with ``other``."""
        return self.start_ms < other.end_ms and other.start_ms < self.end_ms
