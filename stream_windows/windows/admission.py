"""
Per-record window admission.

Combines window assignment and the grace period gate: for each incoming
record the candidate windows are computed and every (record, window) pair
is checked against the current stream time. The aggregation operator then
updates only the open windows.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict

from stream_windows.config.logging import get_logger
from stream_windows.windows.assigner import WindowAssigner
from stream_windows.windows.grace import GracePeriodGate
from stream_windows.windows.window import Window

if TYPE_CHECKING:
    from stream_windows.windows.spec import WindowSpec


@dataclass(frozen=True)
class AdmissionResult:
    """
    Outcome of admitting one record.

    Attributes:
        timestamp_ms: Record timestamp
        stream_time_ms: Stream time the decision was made at
        open_windows: Windows the record may update, keyed by start
        late_windows: Windows that were already closed, keyed by start
    """

    timestamp_ms: int
    stream_time_ms: int
    open_windows: Dict[int, Window] = field(default_factory=dict)
    late_windows: Dict[int, Window] = field(default_factory=dict)

    @property
    def is_dropped(self) -> bool:
        """True if the record cannot update any window."""
        return not self.open_windows


class LatenessMetrics:
    """
    Track window admission metrics for monitoring.

    One instance per partition; not safe to share between threads.
    """

    def __init__(self):
        self.records_seen = 0
        self.windows_assigned = 0
        self.late_window_updates = 0
        self.dropped_records = 0
        self.max_lateness_ms = 0

    def record_admission(self, result: AdmissionResult, grace_period_ms: int):
        """
        Update metrics from an admission result.

        Args:
            result: Admission result for one record
            grace_period_ms: Grace period the result was computed with
        """
        self.records_seen += 1
        self.windows_assigned += len(result.open_windows) + len(result.late_windows)
        self.late_window_updates += len(result.late_windows)
        if result.is_dropped:
            self.dropped_records += 1

        for window in result.late_windows.values():
            lateness = result.stream_time_ms - (window.end_ms + grace_period_ms)
            self.max_lateness_ms = max(self.max_lateness_ms, lateness)

    def get_metrics(self) -> Dict[str, Any]:
        """
        Get current admission metrics.

        Returns:
            Dictionary with metric values
        """
        drop_rate = (
            self.dropped_records / self.records_seen * 100 if self.records_seen > 0 else 0
        )
        return {
            'records_seen': self.records_seen,
            'windows_assigned': self.windows_assigned,
            'late_window_updates': self.late_window_updates,
            'dropped_records': self.dropped_records,
            'dropped_record_rate_percent': drop_rate,
            'max_lateness_ms': self.max_lateness_ms,
        }


class WindowAdmission:
    """
    Assigns a record to windows and filters out the closed ones.

    Example:
        >>> admission = WindowAdmission(TimeWindows.of(5000).with_grace(500))
        >>> result = admission.admit(timestamp_ms=9000, stream_time_ms=10400)
        >>> list(result.open_windows)
        [5000]
    """

    def __init__(self, spec: "WindowSpec", metrics: LatenessMetrics | None = None):
        self.spec = spec
        self.assigner = WindowAssigner(spec)
        self.gate = GracePeriodGate(spec)
        self.metrics = metrics
        self.logger = get_logger(
            __name__,
            context={"window_size_ms": spec.size(), "grace_period_ms": spec.grace_period_ms()},
        )

    def admit(self, timestamp_ms: int, stream_time_ms: int) -> AdmissionResult:
        """
        Decide which windows a record may update.

        Args:
            timestamp_ms: Record timestamp in milliseconds
            stream_time_ms: Current stream time of the partition

        Returns:
            AdmissionResult with open and late windows

        Raises:
            InvalidTimestamp: If the timestamp is negative
        """
        candidates = self.assigner.windows_for(timestamp_ms)
        open_list, late_list = self.gate.split(candidates.values(), stream_time_ms)

        result = AdmissionResult(
            timestamp_ms=timestamp_ms,
            stream_time_ms=stream_time_ms,
            open_windows={w.start_ms: w for w in open_list},
            late_windows={w.start_ms: w for w in late_list},
        )

        if self.metrics is not None:
            self.metrics.record_admission(result, self.gate.grace_period_ms())

        if result.is_dropped and late_list:
            self.logger.warning(
                "Dropping late record: all windows closed",
                extra={
                    "context": {
                        "timestamp_ms": timestamp_ms,
                        "stream_time_ms": stream_time_ms,
                        "late_windows": len(late_list),
                    }
                },
            )

        return result

