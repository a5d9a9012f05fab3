"""Per-category rollup of survey statistics."""

from __future__ import annotations

from surveybot.aggregation.filters import FILTER_ALL, apply_filter
from surveybot.aggregation.summary import compute_stats
from surveybot.db import repo
from surveybot.db.repo import DbSession
from surveybot.models.domain import CategoryEntity, ResponseEntity
from surveybot.models.types import CategoryRollup, CategoryRollupResponse, FilterInfo


def rollup_categories(
    session: DbSession,
    issuer_id: int,
    filter_type: str | None = FILTER_ALL,
    value: str | None = "",
) -> CategoryRollupResponse:
    """Aggregate an issuer's responses per category.

    Only surveys with a category contribute. Every category of the issuer
    appears in the result, sorted by name, even when it has no responses.

    Args:
        session: Database session.
        issuer_id: Issuer whose categories to roll up.
        filter_type: Filter type from the query string.
        value: Filter value from the query string.

    Returns:
        CategoryRollupResponse with one entry per category.
    """
    filter_type = filter_type or FILTER_ALL
    value = value or ""

    categories = repo.list_categories_by_name(session, issuer_id)
    responses = apply_filter(
        repo.get_categorized_responses_for_issuer(session, issuer_id), filter_type, value
    )

    return CategoryRollupResponse(
        rollup=_compute_rollup(categories, responses),
        filter=FilterInfo(type=filter_type, value=value),
    )


def _compute_rollup(
    categories: list[CategoryEntity],
    responses: list[ResponseEntity],
) -> list[CategoryRollup]:
    """Pure function - no database access."""
    by_category: dict[int, list[ResponseEntity]] = {}
    for response in responses:
        by_category.setdefault(response.category_id, []).append(response)

    rollup = []
    for category in categories:
        stats = compute_stats(by_category.get(category.id, []))
        rollup.append(
            CategoryRollup(
                id=category.id,
                name=category.name,
                total=stats.total,
                average=stats.average,
                distribution=stats.distribution,
            )
        )
    return rollup
