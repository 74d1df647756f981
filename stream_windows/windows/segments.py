"""
Segment-based retention planning for window stores.

Window state is stored in time-sliced segments. Once every window inside a
segment is past retention, the whole segment can be dropped at once. The
planner only reports which segments may be dropped; reclaiming them is up
to the store.
"""

from typing import TYPE_CHECKING, Iterable, List

from stream_windows.config.logging import get_logger
from stream_windows.exceptions import InvalidConfiguration
from stream_windows.windows.assigner import check_timestamp

if TYPE_CHECKING:
    from stream_windows.windows.spec import WindowSpec


class SegmentRetentionPlanner:
    """
    Plans segment lifecycle for a window store.

    Construction fails unless retention covers a full window plus its grace
    period, so no segment can be reported as expired while a window inside
    it is still open.
    """

    def __init__(self, spec: "WindowSpec"):
        retention_ms = spec.retention_period_ms()
        required_ms = spec.size() + spec.grace_period_ms()
        if retention_ms < required_ms:
            raise InvalidConfiguration(
                f"Window retention time ({retention_ms}ms) must be at least window size "
                f"plus grace period ({required_ms}ms).",
                details={
                    "field": "retention_ms",
                    "provided": retention_ms,
                    "expected": f">= {required_ms}",
                },
            )

        self.spec = spec
        self.retention_ms = retention_ms
        self.segment_interval_ms = spec.segment_interval_ms()
        self.logger = get_logger(
            __name__,
            context={
                "retention_ms": self.retention_ms,
                "segment_interval_ms": self.segment_interval_ms,
            },
        )
        self.logger.info(f"Segment retention planner initialized with {spec.segments} segments")

    def segment_id(self, timestamp_ms: int) -> int:
        """
        Return the id of the segment covering the timestamp.

        Raises:
            InvalidTimestamp: If the timestamp is negative
        """
        return check_timestamp(timestamp_ms) // self.segment_interval_ms

    def segment_start_ms(self, segment_id: int) -> int:
        return segment_id * self.segment_interval_ms

    def is_expired(self, segment_id: int, stream_time_ms: int) -> bool:
        """Check if a segment lies entirely before the retention horizon."""
        segment_end_ms = self.segment_start_ms(segment_id + 1)
        return segment_end_ms < stream_time_ms - self.retention_ms

    def expired_segments(self, segment_ids: Iterable[int], stream_time_ms: int) -> List[int]:
        """
        Select the segments that may be dropped.

        Args:
            segment_ids: Ids of the segments currently held by the store
            stream_time_ms: Current stream time in milliseconds

        Returns:
            Sorted ids of expired segments
        """
        expired = sorted(
            sid for sid in set(segment_ids) if self.is_expired(sid, stream_time_ms)
        )
        if expired:
            self.logger.debug(
                f"{len(expired)} segment(s) expired",
                extra={"context": {"stream_time_ms": stream_time_ms, "segment_ids": expired}},
            )
        return expired
