"""Response filters.

A filter is a (type, value) pair taken straight from the query string.
It becomes a predicate over a response's ISO timestamp:

- "after":   keep timestamps >= value (string comparison)
- "weekday": keep timestamps on day index value (Sunday=0 .. Saturday=6)
- anything else ("all", "week", "month", unknown): keep everything

A missing or unusable value disables the filter rather than emptying it.
"""

from __future__ import annotations

from typing import Callable, Iterable

from surveybot.core.timestamps import parse_timestamp
from surveybot.models.domain import ResponseEntity

Predicate = Callable[[str], bool]

FILTER_ALL = "all"
FILTER_AFTER = "after"
FILTER_WEEKDAY = "weekday"
FILTER_WEEK = "week"
FILTER_MONTH = "month"


def _keep_all(timestamp: str) -> bool:
    return True


def weekday_index(timestamp: str) -> int | None:
    """Day of week for a timestamp, Sunday=0 through Saturday=6 (UTC).

    Returns:
        The day index, or None when the timestamp cannot be parsed.
    """
    parsed = parse_timestamp(timestamp)
    if parsed is None:
        return None
    return parsed.isoweekday() % 7


def build_predicate(filter_type: str | None, value: str | None) -> Predicate:
    """Build a timestamp predicate for a filter.

    Args:
        filter_type: One of "all", "after", "weekday" (others keep all).
        value: Filter argument as received; may be empty.

    Returns:
        Callable returning True for timestamps to keep.
    """
    value = value or ""

    if filter_type == FILTER_AFTER:
        if not value:
            return _keep_all
        return lambda timestamp: timestamp >= value

    if filter_type == FILTER_WEEKDAY:
        try:
            number = float(value)
        except ValueError:
            return _keep_all
        if not number.is_integer():
            return _keep_all
        day = int(number)
        return lambda timestamp: weekday_index(timestamp) == day

    return _keep_all


def apply_filter(
    responses: Iterable[ResponseEntity],
    filter_type: str | None,
    value: str | None,
) -> list[ResponseEntity]:
    """Keep the responses matching a filter, preserving order."""
    predicate = build_predicate(filter_type, value)
    return [response for response in responses if predicate(response.created_at)]
