"""Timestamp helpers."""

from datetime import UTC, datetime


def utc_timestamp() -> str:
    """Return the current UTC time as an ISO-8601 string with millisecond precision."""
    return datetime.now(UTC).isoformat(timespec='milliseconds').replace('+00:00', 'Z')
