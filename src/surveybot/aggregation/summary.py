"""Survey statistics aggregation.

Computes totals, averages, rating distributions and trend buckets.
Domain logic is pure - database operations go through repo.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from surveybot.aggregation.buckets import bucket_responses
from surveybot.aggregation.filters import FILTER_ALL, apply_filter
from surveybot.db import repo
from surveybot.db.repo import DbSession
from surveybot.models.domain import RATING_VALUES, ResponseEntity, SurveyEntity
from surveybot.models.types import FilterInfo, SurveyDetail, SurveyStats, SurveyStatsResponse

EMPTY_AVERAGE = "0.00"


@dataclass
class ResponseStats:
    """Aggregates over one set of responses."""

    total: int
    average: str
    distribution: dict[int, int] = field(default_factory=dict)
    latest: str | None = None


def format_average(rating_sum: int, total: int) -> str:
    """Mean rating with two decimals; "0.00" for an empty set."""
    if total == 0:
        return EMPTY_AVERAGE
    return f"{rating_sum / total:.2f}"


def compute_stats(responses: Sequence[ResponseEntity]) -> ResponseStats:
    """Compute total, average, distribution and latest timestamp.

    Pure function - no database access.

    Args:
        responses: Already-filtered responses.

    Returns:
        ResponseStats; distribution always holds every rating value.
    """
    distribution = {value: 0 for value in RATING_VALUES}
    rating_sum = 0
    for response in responses:
        distribution[response.rating] += 1
        rating_sum += response.rating

    total = len(responses)
    latest = max((r.created_at for r in responses), default=None)

    return ResponseStats(
        total=total,
        average=format_average(rating_sum, total),
        distribution=distribution,
        latest=latest,
    )


def summarize_survey(
    session: DbSession,
    survey: SurveyEntity,
    filter_type: str | None = FILTER_ALL,
    value: str | None = "",
) -> SurveyStatsResponse:
    """Compute the statistics payload for one survey.

    Week and month filters do not narrow the response set; they ask
    for trend buckets, which are always built from every response.

    Args:
        session: Database session.
        survey: Survey to summarize (already access-checked).
        filter_type: Filter type from the query string.
        value: Filter value from the query string.

    Returns:
        SurveyStatsResponse with survey detail, stats and the echoed filter.
    """
    filter_type = filter_type or FILTER_ALL
    value = value or ""

    responses = repo.get_responses_for_survey(session, survey.id)
    stats = compute_stats(apply_filter(responses, filter_type, value))

    return SurveyStatsResponse(
        survey=SurveyDetail(
            id=survey.id,
            name=survey.name,
            slug=survey.slug,
            created_at=survey.created_at,
            category_name=survey.category_name,
        ),
        stats=SurveyStats(
            total=stats.total,
            average=stats.average,
            distribution=stats.distribution,
            latest=stats.latest,
            buckets=bucket_responses(responses, filter_type),
        ),
        filter=FilterInfo(type=filter_type, value=value),
    )
