"""
Core Utilities.

Shared utility functions used across the backend.
All modules should import utilities from this module.
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """
    Return current UTC time as timezone-naive datetime.

    All datetime values in the application should be timezone-naive
    and assumed to be UTC. This ensures consistent behavior across
    the codebase and simplifies database storage.

    Returns:
        Current UTC time with tzinfo stripped
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def utc_now_seconds() -> datetime:
    """
    Return current UTC time truncated to whole seconds.

    Timestamps are persisted as integer epoch seconds, so records
    built in memory use the same resolution as records read back.
    """
    return utc_now().replace(microsecond=0)


def to_epoch_seconds(value: datetime) -> int:
    """Convert a timezone-naive UTC datetime to integer epoch seconds."""
    return int(value.replace(tzinfo=timezone.utc).timestamp())


def from_epoch_seconds(value: int) -> datetime:
    """Convert integer epoch seconds to a timezone-naive UTC datetime."""
    return datetime.fromtimestamp(int(value), timezone.utc).replace(tzinfo=None)


def to_iso_utc(value: datetime) -> str:
    """
    Format a timezone-naive UTC datetime for API responses.

    Always millisecond precision with a trailing Z, for example
    2024-01-01T12:00:00.000Z.
    """
    return value.replace(tzinfo=None).isoformat(timespec="milliseconds") + "Z"
