"""Time bucketing for trend charts.

Groups responses by ISO-8601 week ("2025-W01") or calendar month
("2025-01"), computed in UTC.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Iterable

from surveybot.aggregation.filters import FILTER_MONTH, FILTER_WEEK
from surveybot.core.timestamps import parse_timestamp
from surveybot.models.domain import ResponseEntity
from surveybot.models.types import Bucket


@dataclass
class _Accumulator:
    count: int = 0
    rating_sum: int = 0


def _iso_week(moment: datetime) -> str:
    # ISO year, not calendar year: Dec 30 can be 2025-W01
    iso_year, iso_week, _ = moment.isocalendar()
    return f"{iso_year}-W{iso_week:02d}"


def _month(moment: datetime) -> str:
    return f"{moment.year}-{moment.month:02d}"


_LABELERS: dict[str, Callable[[datetime], str]] = {
    FILTER_WEEK: _iso_week,
    FILTER_MONTH: _month,
}


def week_label(timestamp: str) -> str | None:
    """ISO week label (YYYY-Www) for a timestamp, or None if unparseable."""
    parsed = parse_timestamp(timestamp)
    return _iso_week(parsed) if parsed else None


def month_label(timestamp: str) -> str | None:
    """Month label (YYYY-MM) for a timestamp, or None if unparseable."""
    parsed = parse_timestamp(timestamp)
    return _month(parsed) if parsed else None


def bucket_responses(responses: Iterable[ResponseEntity], period: str) -> list[Bucket]:
    """Group responses into time buckets.

    Args:
        responses: Responses to group (callers pass the unfiltered set).
        period: "week" or "month". Any other value yields no buckets.

    Returns:
        Buckets sorted by label, each with its count and rounded average.
    """
    labeler = _LABELERS.get(period)
    if labeler is None:
        return []

    accumulators: dict[str, _Accumulator] = {}
    for response in responses:
        parsed = parse_timestamp(response.created_at)
        if parsed is None:
            continue
        entry = accumulators.setdefault(labeler(parsed), _Accumulator())
        entry.count += 1
        entry.rating_sum += response.rating

    return [
        Bucket(
            label=label,
            count=entry.count,
            average=round(entry.rating_sum / entry.count, 2) if entry.count else 0.0,
        )
        for label, entry in sorted(accumulators.items())
    ]
