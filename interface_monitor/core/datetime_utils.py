"""Centralized datetime utilities for consistent timezone handling.

All functions return naive UTC datetimes for database compatibility
(SQLAlchemy models store naive UTC). Values leaving the API are rendered
back as explicit UTC with a "Z" suffix.

Usage:
    from interface_monitor.core.datetime_utils import utc_now, to_utc_isoformat

    # Current time
    now = utc_now()

    # Parse a user supplied date filter
    end = parse_datetime_bound("2026-01-31", end_of_day=True)

    # Render for JSON
    to_utc_isoformat(now)  # "2026-01-31T10:00:00.000Z"
"""

from datetime import UTC, date, datetime, time


def utc_now() -> datetime:
    """Get current UTC time as naive datetime.

    Returns naive datetime for database compatibility.
    Replaces deprecated datetime.utcnow().
    """
    return datetime.now(UTC).replace(tzinfo=None)


def to_naive_utc(dt: datetime) -> datetime:
    """Convert a datetime to naive UTC.

    Args:
        dt: Datetime to convert (can be aware or naive)

    Returns:
        Naive UTC datetime for database compatibility
    """
    if dt.tzinfo is None:
        # Already naive, assume it's UTC
        return dt
    return dt.astimezone(UTC).replace(tzinfo=None)


def from_epoch(seconds: float) -> datetime:
    """Convert Unix epoch seconds to a naive UTC datetime."""
    return datetime.fromtimestamp(seconds, UTC).replace(tzinfo=None)


def parse_datetime_bound(value: str, end_of_day: bool = False) -> datetime:
    """Parse an ISO-8601 date or datetime string used as a query bound.

    Args:
        value: "2026-01-31", "2026-01-31T10:00:00" or with offset/"Z"
        end_of_day: For plain dates, return the last instant of that day

    Returns:
        Naive UTC datetime

    Raises:
        ValueError: If the value is not a valid ISO-8601 date or datetime
    """
    text = value.strip()
    if not text:
        raise ValueError("empty date")

    if len(text) == 10:
        day = date.fromisoformat(text)
        if end_of_day:
            return datetime.combine(day, time.max)
        return datetime.combine(day, time.min)

    return to_naive_utc(datetime.fromisoformat(text))


def to_utc_isoformat(dt: datetime) -> str:
    """Render a datetime as ISO-8601 UTC with millisecond precision and "Z"."""
    return to_naive_utc(dt).isoformat(timespec="milliseconds") + "Z"
