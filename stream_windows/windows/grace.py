"""
Grace period gate for late-arriving records.

A window is closed once stream time has passed its end plus the grace
period. Updates to a closed window are rejected. The check is made per
(record, window) pair: one record may still update some of its windows
while others have already closed.
"""

import logging
from typing import TYPE_CHECKING, Iterable, List, Tuple

from stream_windows.windows.window import Window

if TYPE_CHECKING:
    from stream_windows.windows.spec import WindowSpec

logger = logging.getLogger(__name__)


class GracePeriodGate:
    """
    Decides whether windows of one specification may still be updated.

    The gate holds no state besides the specification; stream time is passed
    in on every call by the surrounding pipeline.
    """

    def __init__(self, spec: "WindowSpec"):
        self.spec = spec

    def grace_period_ms(self) -> int:
        return self.spec.grace_period_ms()

    def close_time_ms(self, window: Window) -> int:
        """Return the last stream time at which ``window`` still accepts updates."""
        return window.end_ms + self.grace_period_ms()

    def is_late(self, window: Window, stream_time_ms: int) -> bool:
        """
        Check if the window is closed at the given stream time.

        Returns:
            True if ``stream_time_ms > window.end_ms + grace``
        """
        return stream_time_ms > self.close_time_ms(window)

    def split(
        self, windows: Iterable[Window], stream_time_ms: int
    ) -> Tuple[List[Window], List[Window]]:
        """
        Split windows into those still open and those already closed.

        Args:
            windows: Candidate windows, e.g. the values of ``windows_for()``
            stream_time_ms: Current stream time in milliseconds

        Returns:
            Tuple of (open_windows, closed_windows), each in input order
        """
        open_windows: List[Window] = []
        closed_windows: List[Window] = []
        for window in windows:
            if self.is_late(window, stream_time_ms):
                closed_windows.append(window)
            else:
                open_windows.append(window)
        if closed_windows:
            logger.debug(
                f"{len(closed_windows)} window(s) closed at stream time {stream_time_ms}ms, "
                f"grace {self.grace_period_ms()}ms"
            )
        return open_windows, closed_windows
