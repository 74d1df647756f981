"""
Window specifications for fixed-size windows.

A window specification defines window boundaries, the grace period during
which late-arriving records are still admitted, and the retention that the
backing state store must honor.

Specifications are immutable: every ``with_*`` / ``advance_by`` call returns a
new value, so one specification can be shared between pipeline definitions
and processing threads without copying.

Example:
    >>> spec = TimeWindows.of(5000).advance_by(1000).with_grace(500)
    >>> sorted(spec.windows_for(12345))
    [8000, 9000, 10000, 11000, 12000]
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from typing import Dict

from stream_windows.exceptions import InvalidConfiguration
from stream_windows.windows.assigner import check_timestamp, hopping_windows_for
from stream_windows.windows.retention import (
    DEFAULT_RETENTION_MS,
    DEFAULT_SEGMENTS,
    MIN_SEGMENT_INTERVAL_MS,
    MIN_SEGMENTS,
    ExplicitGrace,
    GracePolicy,
    LegacyGrace,
)
from stream_windows.windows.window import MAX_TIMESTAMP_MS, Window

logger = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class WindowSpec(ABC):
    """
    Capability shared by all fixed-size window flavors.

    Concrete flavors supply ``windows_for()`` and ``size()``; grace period,
    retention and segmentation are derived here.

    Attributes:
        retention_ms: Configured lower bound for how long window state is kept
        segments: Number of rolling storage segments
        grace_policy: Where the grace period comes from (legacy or explicit)
    """

    retention_ms: int = DEFAULT_RETENTION_MS
    segments: int = DEFAULT_SEGMENTS
    grace_policy: GracePolicy = field(default_factory=LegacyGrace)

    def __post_init__(self):
        if self.retention_ms < 0:
            raise InvalidConfiguration(
                "Window retention time must not be negative.",
                details={"field": "retention_ms", "provided": self.retention_ms, "expected": ">= 0"},
            )
        if self.segments < MIN_SEGMENTS:
            raise InvalidConfiguration(
                f"Number of segments must be at least {MIN_SEGMENTS}.",
                details={"field": "segments", "provided": self.segments, "expected": f">= {MIN_SEGMENTS}"},
            )

    @abstractmethod
    def windows_for(self, timestamp_ms: int) -> Dict[int, Window]:
        """
        Create all windows that contain the timestamp.

        Args:
            timestamp_ms: Record timestamp in milliseconds

        Returns:
            Mapping of window start timestamp to window, ordered by start

        Raises:
            InvalidTimestamp: If the timestamp is negative
        """

    @abstractmethod
    def size(self) -> int:
        """Return the window size in milliseconds."""

    def retention_period_ms(self) -> int:
        """Return the effective retention time in milliseconds."""
        return self.retention_ms

    def grace_period_ms(self) -> int:
        """
        Return the time to admit late-arriving records after a window's end.

        Uses the explicit grace period if one was set, otherwise falls back to
        ``retention - size`` (never negative).
        """
        return self.grace_policy.grace_period_ms(self.size(), self.retention_period_ms())

    def segment_interval_ms(self) -> int:
        """Return the time span covered by one storage segment."""
        # Pinned to a minimum of one minute regardless of retention/segments
        return max(self.retention_period_ms() // (self.segments - 1), MIN_SEGMENT_INTERVAL_MS)

    def with_grace(self, grace_ms: int) -> "WindowSpec":
        """
        Reject records that arrive more than ``grace_ms`` after their window's end.

        Raises:
            InvalidConfiguration: If ``grace_ms`` is negative
        """
        return replace(self, grace_policy=ExplicitGrace(grace_ms))

    def with_retention(self, retention_ms: int) -> "WindowSpec":
        """
        Set the window retention time, a lower bound on how long state is kept.

        If no grace period is set explicitly, it is derived from this value.

        Raises:
            InvalidConfiguration: If ``retention_ms`` is negative
        """
        if retention_ms < 0:
            raise InvalidConfiguration(
                "Window retention time must not be negative.",
                details={"field": "retention_ms", "provided": retention_ms, "expected": ">= 0"},
            )
        return replace(self, retention_ms=retention_ms)

    def with_segments(self, segments: int) -> "WindowSpec":
        """
        Set the number of segments used for rolling the window store.

        Raises:
            InvalidConfiguration: If ``segments`` is smaller than 2
        """
        return replace(self, segments=segments)


@dataclass(frozen=True, kw_only=True)
class TimeWindows(WindowSpec):
    """
    Fixed-size windows that advance by a fixed hop.

    With ``advance_ms == size_ms`` the windows are tumbling (non-overlapping);
    with a smaller advance they are hopping and a record belongs to up to
    ``ceil(size_ms / advance_ms)`` windows.

    Attributes:
        size_ms: Window size in milliseconds
        advance_ms: Distance between consecutive window starts in milliseconds
    """

    size_ms: int
    advance_ms: int

    def __post_init__(self):
        super().__post_init__()
        if self.size_ms <= 0:
            raise InvalidConfiguration(
                "Window size must be larger than zero.",
                details={"field": "size_ms", "provided": self.size_ms, "expected": "> 0"},
            )
        if self.advance_ms <= 0 or self.advance_ms > self.size_ms:
            raise InvalidConfiguration(
                f"Window advance interval must lie within interval (0, {self.size_ms}].",
                details={
                    "field": "advance_ms",
                    "provided": self.advance_ms,
                    "expected": f"(0, {self.size_ms}]",
                },
            )
        logger.debug(
            f"Window spec created: size={self.size_ms}ms, advance={self.advance_ms}ms, "
            f"grace={self.grace_period_ms()}ms, retention={self.retention_period_ms()}ms, "
            f"segments={self.segments}"
        )

    @classmethod
    def of(cls, size_ms: int) -> "TimeWindows":
        """
        Create tumbling windows of the given size.

        Use ``advance_by()`` on the result to get hopping windows.

        Raises:
            InvalidConfiguration: If ``size_ms`` is zero or negative
        """
        return cls(size_ms=size_ms, advance_ms=size_ms)

    def advance_by(self, advance_ms: int) -> "TimeWindows":
        """
        Return hopping windows that advance by ``advance_ms``.

        Raises:
            InvalidConfiguration: If ``advance_ms`` is not within ``(0, size_ms]``
        """
        return replace(self, advance_ms=advance_ms)

    @property
    def is_tumbling(self) -> bool:
        return self.advance_ms == self.size_ms

    def size(self) -> int:
        return self.size_ms

    def retention_period_ms(self) -> int:
        # Never shorter than a single window
        return max(self.retention_ms, self.size_ms)

    def with_retention(self, retention_ms: int) -> "TimeWindows":
        """
        Set the window retention time.

        Raises:
            InvalidConfiguration: If ``retention_ms`` is negative or smaller
                than the window size
        """
        spec = super().with_retention(retention_ms)
        if retention_ms < self.size_ms:
            raise InvalidConfiguration(
                "Window retention time must not be smaller than the window size.",
                details={
                    "field": "retention_ms",
                    "provided": retention_ms,
                    "expected": f">= {self.size_ms}",
                },
            )
        return spec

    def windows_for(self, timestamp_ms: int) -> Dict[int, Window]:
        return hopping_windows_for(timestamp_ms, self.size_ms, self.advance_ms)


@dataclass(frozen=True, kw_only=True)
class UnlimitedWindows(WindowSpec):
    """
    A single window that starts at a fixed point in time and never ends.

    Grace period and retention do not apply: the window never closes, so
    its state is retained for as long as the store exists.

    Attributes:
        start_ms: Start of the window in milliseconds
    """

    start_ms: int = 0

    def __post_init__(self):
        super().__post_init__()
        if self.start_ms < 0:
            raise InvalidConfiguration(
                "Window start time must not be negative.",
                details={"field": "start_ms", "provided": self.start_ms, "expected": ">= 0"},
            )

    @classmethod
    def starting_at(cls, start_ms: int = 0) -> "UnlimitedWindows":
        return cls(start_ms=start_ms)

    def size(self) -> int:
        return MAX_TIMESTAMP_MS

    def retention_period_ms(self) -> int:
        return MAX_TIMESTAMP_MS

    def with_grace(self, grace_ms: int) -> "UnlimitedWindows":
        raise InvalidConfiguration(
            "Grace period cannot be set for UnlimitedWindows.",
            details={"field": "grace_ms", "provided": grace_ms},
        )

    def with_retention(self, retention_ms: int) -> "UnlimitedWindows":
        raise InvalidConfiguration(
            "Window retention time cannot be set for UnlimitedWindows.",
            details={"field": "retention_ms", "provided": retention_ms},
        )

    def windows_for(self, timestamp_ms: int) -> Dict[int, Window]:
        check_timestamp(timestamp_ms)
        if timestamp_ms < self.start_ms:
            return {}
        return {self.start_ms: Window(self.start_ms, MAX_TIMESTAMP_MS)}
