"""Timestamp helpers.

Every timestamp leaving the database is rendered as an ISO-8601 UTC string
with millisecond precision and a trailing "Z", e.g. 2024-01-03T10:15:00.000Z.
Strings in this shape sort lexicographically in chronological order, which
the aggregation layer relies on.
"""

from __future__ import annotations

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def format_timestamp(value: datetime) -> str:
    """Render a datetime as an ISO-8601 UTC string.

    Naive datetimes (as returned by SQLite) are taken to be UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    else:
        value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def parse_timestamp(value: str) -> datetime | None:
    """Parse an ISO-8601 string into an aware UTC datetime.

    Returns:
        The parsed datetime, or None when the string is not a valid timestamp.
    """
    try:
        parsed = datetime.fromisoformat(value)
    except (TypeError, ValueError):
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)
