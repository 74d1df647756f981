"""
Window specification and assignment.

This package decides, for every timestamped record:
- Which fixed-size windows it belongs to (hopping or tumbling)
- Whether each of those windows still accepts updates (grace period)
- When the storage segments backing old windows may be dropped
"""

from stream_windows.windows.window import (
    MAX_TIMESTAMP_MS,
    Window,
)
from stream_windows.windows.retention import (
    DEFAULT_RETENTION_MS,
    DEFAULT_SEGMENTS,
    MIN_SEGMENT_INTERVAL_MS,
    ExplicitGrace,
    GracePolicy,
    LegacyGrace,
)
from stream_windows.windows.spec import (
    WindowSpec,
    TimeWindows,
    UnlimitedWindows,
)
from stream_windows.windows.assigner import (
    WindowAssigner,
    hopping_windows_for,
)
from stream_windows.windows.grace import (
    GracePeriodGate,
)
from stream_windows.windows.segments import (
    SegmentRetentionPlanner,
)
from stream_windows.windows.admission import (
    AdmissionResult,
    LatenessMetrics,
    WindowAdmission,
)

__all__ = [
    # Windows
    'MAX_TIMESTAMP_MS',
    'Window',
    # Retention
    'DEFAULT_RETENTION_MS',
    'DEFAULT_SEGMENTS',
    'MIN_SEGMENT_INTERVAL_MS',
    'ExplicitGrace',
    'GracePolicy',
    'LegacyGrace',
    # Specs
    'WindowSpec',
    'TimeWindows',
    'UnlimitedWindows',
    # Assignment
    'WindowAssigner',
    'hopping_windows_for',
    # Grace
    'GracePeriodGate',
    # Segments
    'SegmentRetentionPlanner',
    # Admission
    'AdmissionResult',
    'LatenessMetrics',
    'WindowAdmission',
]
