"""
Grace period policies and retention defaults.

A window's grace period comes from exactly one of two sources:

- ``ExplicitGrace``: configured directly with ``with_grace()``
- ``LegacyGrace``: derived from the retention time as ``retention - size``

``grace_period_ms()`` is the single place where the choice is resolved, so
callers never need to know which path was used.
"""

from dataclasses import dataclass
from typing import Union

from stream_windows.exceptions import InvalidConfiguration

# One day
DEFAULT_RETENTION_MS = 24 * 60 * 60 * 1000
DEFAULT_SEGMENTS = 3
MIN_SEGMENTS = 2
MIN_SEGMENT_INTERVAL_MS = 60_000


@dataclass(frozen=True)
class LegacyGrace:
    """Grace period derived from the retention time."""

    def grace_period_ms(self, size_ms: int, retention_ms: int) -> int:
        return max(retention_ms - size_ms, 0)


@dataclass(frozen=True)
class ExplicitGrace:
    """Grace period set explicitly, independent of retention."""

    grace_ms: int

    def __post_init__(self):
        if self.grace_ms < 0:
            raise InvalidConfiguration(
                "Grace period must not be negative.",
                details={"field": "grace_ms", "provided": self.grace_ms, "expected": ">= 0"},
            )

    def grace_period_ms(self, size_ms: int, retention_ms: int) -> int:
        return self.grace_ms


GracePolicy = Union[LegacyGrace, ExplicitGrace]
