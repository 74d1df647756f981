"""
Tests for segment retention planning.
"""

import pytest

from stream_windows.exceptions import InvalidConfiguration, InvalidTimestamp
from stream_windows.windows.grace import GracePeriodGate
from stream_windows.windows.segments import SegmentRetentionPlanner
from stream_windows.windows.spec import TimeWindows


@pytest.fixture
def spec():
    """One minute windows kept for an hour in 4 segments (20 minute interval)"""
    return TimeWindows.of(60_000).with_retention(3_600_000).with_segments(4)


@pytest.fixture
def planner(spec):
    return SegmentRetentionPlanner(spec)


class TestSegmentId:
    """Tests for segment id calculation"""

    def test_segment_interval(self, planner):
        assert planner.segment_interval_ms == 1_200_000

    @pytest.mark.parametrize(
        "timestamp, expected",
        [(0, 0), (1_199_999, 0), (1_200_000, 1), (3_600_000, 3)],
    )
    def test_segment_id(self, planner, timestamp, expected):
        assert planner.segment_id(timestamp) == expected

    def test_segment_start(self, planner):
        assert planner.segment_start_ms(3) == 3_600_000
        assert planner.segment_id(planner.segment_start_ms(3)) == 3

    def test_negative_timestamp_rejected(self, planner):
        with pytest.raises(InvalidTimestamp):
            planner.segment_id(-1)


class TestExpiry:
    """Tests for segment expiry"""

    def test_expiry_boundary(self, planner):
        # Segment 0 ends at 1_200_000; horizon is stream time minus one hour
        assert not planner.is_expired(0, 4_800_000)
        assert planner.is_expired(0, 4_800_001)

    def test_recent_segment_not_expired(self, planner):
        stream_time = 10_000_000
        assert not planner.is_expired(planner.segment_id(stream_time), stream_time)

    def test_expiry_is_monotonic(self, planner):
        for sid in range(5):
            expired_at = None
            for stream_time in range(0, 20_000_000, 100_000):
                expired = planner.is_expired(sid, stream_time)
                if expired_at is not None:
                    assert expired
                elif expired:
                    expired_at = stream_time
            assert expired_at is not None

    def test_expired_segments(self, planner):
        expired = planner.expired_segments([5, 0, 3, 1, 2, 0], 8_400_000)
        assert expired == [0, 1, 2]

    def test_nothing_expired_early(self, planner):
        assert planner.expired_segments(range(3), 1000) == []

    @pytest.mark.parametrize("grace_ms", [0, 120_000, 540_000])
    def test_segment_of_open_window_never_expired(self, grace_ms):
        spec = TimeWindows.of(60_000).with_retention(600_000).with_grace(grace_ms)
        planner = SegmentRetentionPlanner(spec)
        gate = GracePeriodGate(spec)

        for timestamp in range(0, 3_000_000, 7_000):
            for window in spec.windows_for(timestamp).values():
                stream_time = gate.close_time_ms(window)
                assert not gate.is_late(window, stream_time)
                assert not planner.is_expired(planner.segment_id(window.start_ms), stream_time)


class TestPlannerValidation:
    """Retention must cover a window plus its grace period"""

    @pytest.mark.parametrize("grace_ms", [60_001, 600_000])
    def test_grace_exceeding_retention_rejected(self, grace_ms):
        spec = TimeWindows.of(60_000).with_retention(120_000).with_grace(grace_ms)
        with pytest.raises(InvalidConfiguration) as exc_info:
            SegmentRetentionPlanner(spec)
        assert exc_info.value.details["field"] == "retention_ms"

    def test_retention_equal_to_size_plus_grace_allowed(self):
        spec = TimeWindows.of(60_000).with_retention(120_000).with_grace(60_000)
        assert SegmentRetentionPlanner(spec).retention_ms == 120_000

    def test_legacy_grace_always_valid(self):
        spec = TimeWindows.of(60_000).with_retention(90_000)
        SegmentRetentionPlanner(spec)

    def test_expiry_only_available_through_planner(self):
        spec = TimeWindows.of(60_000).with_retention(120_000).with_grace(600_000)
        assert not hasattr(spec, "is_expired")
        assert not hasattr(spec, "segment_id")
