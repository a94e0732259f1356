"""
Centralized DateTime Utilities
==============================

Provides consistent datetime handling across the platform.

MongoDB stores datetimes as naive UTC with millisecond precision, so every
timestamp the platform creates follows the same convention. That way an
entity read back from the store compares equal to the one that was written.

Functions:
- now(): Current naive UTC datetime, truncated to milliseconds
- to_storage(): Normalize any datetime to the storage convention
- inclusive_days(): Calendar days covered by an inclusive date range
- span_days(): Fractional days between two datetimes
"""
from datetime import datetime, timezone as dt_timezone


def to_storage(value: datetime) -> datetime:
    """
    Normalize a datetime to naive UTC with millisecond precision.

    Args:
        value: timezone-aware or naive datetime (naive is assumed UTC)

    Returns:
        naive UTC datetime as MongoDB would return it
    """
    if value.tzinfo is not None:
        value = value.astimezone(dt_timezone.utc).replace(tzinfo=None)
    return value.replace(microsecond=(value.microsecond // 1000) * 1000)


def now() -> datetime:
    """
    Get current UTC datetime in storage convention.

    Returns:
        naive UTC datetime with millisecond precision
    """
    return to_storage(datetime.now(dt_timezone.utc))


def inclusive_days(start: datetime, end: datetime) -> int:
    """Number of calendar days from start to end, both days counted."""
    return (end.date() - start.date()).days + 1


def span_days(start: datetime, end: datetime) -> float:
    """Fractional days between start and end."""
    return (end - start).total_seconds() / 86400.0
