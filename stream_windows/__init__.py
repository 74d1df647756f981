"""
Window specification and assignment core for streaming aggregations.

Decides which time windows a record belongs to, whether it arrives too late
to update them, and how long the state backing each window is retained.
"""

from stream_windows.exceptions import (
    InvalidConfiguration,
    InvalidTimestamp,
    WindowingError,
)
from stream_windows.windows import (
    AdmissionResult,
    GracePeriodGate,
    LatenessMetrics,
    SegmentRetentionPlanner,
    TimeWindows,
    UnlimitedWindows,
    Window,
    WindowAdmission,
    WindowAssigner,
    WindowSpec,
)

__version__ = "0.1.0"

__all__ = [
    "InvalidConfiguration",
    "InvalidTimestamp",
    "WindowingError",
    "AdmissionResult",
    "GracePeriodGate",
    "LatenessMetrics",
    "SegmentRetentionPlanner",
    "TimeWindows",
    "UnlimitedWindows",
    "Window",
    "WindowAdmission",
    "WindowAssigner",
    "WindowSpec",
]
