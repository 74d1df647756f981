"""
Window assignment.

Maps a record timestamp to every window of a specification that contains it.
Assignment is pure: the result depends only on the timestamp and the
specification, so it is safe to call concurrently from any number of
partition threads.
"""

from typing import TYPE_CHECKING, Dict

from stream_windows.exceptions import InvalidTimestamp
from stream_windows.windows.window import Window

if TYPE_CHECKING:
    from stream_windows.windows.spec import WindowSpec


def check_timestamp(timestamp_ms: int) -> int:
    """
    Validate a record timestamp.

    Args:
        timestamp_ms: Record timestamp in milliseconds

    Returns:
        The timestamp, unchanged

    Raises:
        InvalidTimestamp: If the timestamp is not a non-negative integer
    """
    if isinstance(timestamp_ms, bool) or not isinstance(timestamp_ms, int):
        raise InvalidTimestamp(
            f"Timestamp must be an integer, got {type(timestamp_ms).__name__}",
            details={"field": "timestamp_ms", "provided": repr(timestamp_ms)},
        )
    if timestamp_ms < 0:
        raise InvalidTimestamp(
            f"Timestamp must not be negative, got {timestamp_ms}",
            details={"field": "timestamp_ms", "provided": timestamp_ms, "expected": ">= 0"},
        )
    return timestamp_ms


def hopping_windows_for(timestamp_ms: int, size_ms: int, advance_ms: int) -> Dict[int, Window]:
    """
    Create all hopping windows of the given size and advance containing the timestamp.

    Window starts lie on the grid ``k * advance_ms``. The earliest candidate is
    the first grid point after ``timestamp_ms - size_ms``; windows with a
    negative start are never created, so timestamps close to zero belong to
    fewer windows.

    Args:
        timestamp_ms: Record timestamp in milliseconds
        size_ms: Window size in milliseconds
        advance_ms: Distance between window starts in milliseconds

    Returns:
        Mapping of window start to window, ordered by ascending start

    Raises:
        InvalidTimestamp: If the timestamp is negative
    """
    check_timestamp(timestamp_ms)

    last_start = timestamp_ms - timestamp_ms % advance_ms
    first_start = (max(0, timestamp_ms - size_ms + advance_ms) // advance_ms) * advance_ms

    windows: Dict[int, Window] = {}
    for start in range(first_start, last_start + 1, advance_ms):
        windows[start] = Window(start, start + size_ms)
    return windows


class WindowAssigner:
    """
    Assigns record timestamps to the windows of one specification.

    Example:
        >>> assigner = WindowAssigner(TimeWindows.of(5000).advance_by(1000))
        >>> list(assigner.windows_for(12345))
        [8000, 9000, 10000, 11000, 12000]
    """

    def __init__(self, spec: "WindowSpec"):
        self.spec = spec

    def windows_for(self, timestamp_ms: int) -> Dict[int, Window]:
        """
        Create all windows that contain the timestamp.

        Raises:
            InvalidTimestamp: If the timestamp is negative
        """
        return self.spec.windows_for(timestamp_ms)

    def size(self) -> int:
        """Return the window size in milliseconds."""
        return self.spec.size()
