"""Lookback periods shared by the dashboard aggregates."""

import enum
from datetime import datetime, timedelta

from interface_monitor.core.datetime_utils import utc_now


class Period(str, enum.Enum):
    """Dashboard lookback window selector."""

    HOUR = "1h"
    DAY = "24h"
    WEEK = "7d"
    MONTH = "30d"

    @property
    def window(self) -> timedelta:
        return _WINDOWS[self]

    @property
    def bucket_seconds(self) -> int:
        """Width of a trend bucket for this period."""
        return _BUCKETS[self]

    def cutoff(self, now: datetime | None = None) -> datetime:
        """Start of the lookback window (naive UTC)."""
        return (now or utc_now()) - self.window

    @classmethod
    def parse(cls, value: str | None, default: "Period | None" = None) -> "Period":
        """Parse a period string, falling back to the default for unknown values."""
        fallback = default or cls.DAY
        if not value:
            return fallback
        try:
            return cls(value)
        except ValueError:
            return fallback


_WINDOWS = {
    Period.HOUR: timedelta(hours=1),
    Period.DAY: timedelta(hours=24),
    Period.WEEK: timedelta(days=7),
    Period.MONTH: timedelta(days=30),
}

_BUCKETS = {
    Period.HOUR: 5 * 60,
    Period.DAY: 60 * 60,
    Period.WEEK: 6 * 60 * 60,
    Period.MONTH: 24 * 60 * 60,
}
