"""Repository pattern for database operations.

Encapsulates all SQLAlchemy queries, keeping domain logic pure.
Returns domain models (not SQLAlchemy entities) to external callers.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from surveybot.core.timestamps import format_timestamp
from surveybot.db.schema import Category, Issuer, Response, Survey
from surveybot.models.domain import (
    CategoryEntity,
    IssuerEntity,
    ResponseEntity,
    SurveyEntity,
)

if TYPE_CHECKING:
    from sqlalchemy.orm import Session as DbSession
else:
    DbSession = Session

# Re-export for external use
__all__ = ["DbSession"]

# SQLite INTEGER is a signed 64-bit value
MAX_ROW_ID = 2**63 - 1


def _is_row_id(value: int) -> bool:
    return -MAX_ROW_ID - 1 <= value <= MAX_ROW_ID


# ============================================================================
# Converters: SQLAlchemy -> Domain
# ============================================================================


def _issuer_to_entity(issuer: Issuer) -> IssuerEntity:
    """Convert SQLAlchemy Issuer to domain entity."""
    return IssuerEntity(
        id=issuer.id,
        username=issuer.username,
        password_hash=issuer.password_hash,
        created_at=format_timestamp(issuer.created_at),
    )


def _category_to_entity(category: Category) -> CategoryEntity:
    """Convert SQLAlchemy Category to domain entity."""
    return CategoryEntity(
        id=category.id,
        issuer_id=category.issuer_id,
        name=category.name,
        created_at=format_timestamp(category.created_at),
    )


def _survey_to_entity(survey: Survey, category_name: str | None = None) -> SurveyEntity:
    """Convert SQLAlchemy Survey (plus joined category name) to domain entity."""
    return SurveyEntity(
        id=survey.id,
        name=survey.name,
        slug=survey.slug,
        issuer_id=survey.issuer_id,
        category_id=survey.category_id,
        category_name=category_name,
        created_at=format_timestamp(survey.created_at),
    )


def _response_row_to_entity(
    survey_id: int,
    rating: int,
    created_at: datetime,
    category_id: int | None = None,
    response_id: int | None = None,
) -> ResponseEntity:
    """Convert a response row to domain entity."""
    return ResponseEntity(
        id=response_id,
        survey_id=survey_id,
        rating=rating,
        created_at=format_timestamp(created_at),
        category_id=category_id,
    )


# ============================================================================
# Issuer Repository
# ============================================================================


def get_issuer_by_username(session: DbSession, username: str) -> IssuerEntity | None:
    """Get issuer by username."""
    issuer = session.query(Issuer).filter(Issuer.username == username).first()
    return _issuer_to_entity(issuer) if issuer else None


def create_issuer(session: DbSession, username: str, password_hash: str) -> int:
    """Create a new issuer and return its ID."""
    issuer = Issuer(username=username, password_hash=password_hash)
    session.add(issuer)
    session.flush()
    return issuer.id


# ============================================================================
# Category Repository
# ============================================================================


def get_category_for_issuer(
    session: DbSession, category_id: int, issuer_id: int
) -> CategoryEntity | None:
    """Get a category owned by an issuer."""
    if not _is_row_id(category_id):
        return None
    category = (
        session.query(Category)
        .filter(Category.id == category_id, Category.issuer_id == issuer_id)
        .first()
    )
    return _category_to_entity(category) if category else None


def list_categories(session: DbSession, issuer_id: int) -> list[CategoryEntity]:
    """Get an issuer's categories, newest first."""
    categories = (
        session.query(Category)
        .filter(Category.issuer_id == issuer_id)
        .order_by(Category.created_at.desc(), Category.id.desc())
        .all()
    )
    return [_category_to_entity(c) for c in categories]


def list_categories_by_name(session: DbSession, issuer_id: int) -> list[CategoryEntity]:
    """Get an issuer's categories in name order."""
    categories = (
        session.query(Category)
        .filter(Category.issuer_id == issuer_id)
        .order_by(Category.name.asc())
        .all()
    )
    return [_category_to_entity(c) for c in categories]


def create_category(session: DbSession, issuer_id: int, name: str) -> int:
    """Create a new category and return its ID."""
    category = Category(issuer_id=issuer_id, name=name)
    session.add(category)
    session.flush()
    return category.id


# ============================================================================
# Survey Repository
# ============================================================================


def list_surveys(session: DbSession, issuer_id: int) -> list[SurveyEntity]:
    """Get an issuer's surveys with category names, newest first."""
    rows = (
        session.query(Survey, Category.name)
        .outerjoin(Category, Category.id == Survey.category_id)
        .filter(Survey.issuer_id == issuer_id)
        .order_by(Survey.created_at.desc(), Survey.id.desc())
        .all()
    )
    return [_survey_to_entity(survey, category_name) for survey, category_name in rows]


def get_survey_for_issuer(
    session: DbSession, survey_id: int, issuer_id: int
) -> SurveyEntity | None:
    """Get a survey (with category name) owned by an issuer."""
    if not _is_row_id(survey_id):
        return None
    row = (
        session.query(Survey, Category.name)
        .outerjoin(Category, Category.id == Survey.category_id)
        .filter(Survey.id == survey_id, Survey.issuer_id == issuer_id)
        .first()
    )
    if row is None:
        return None
    survey, category_name = row
    return _survey_to_entity(survey, category_name)


def get_survey_by_slug(session: DbSession, slug: str) -> SurveyEntity | None:
    """Get survey by its public slug."""
    survey = session.query(Survey).filter(Survey.slug == slug).first()
    return _survey_to_entity(survey) if survey else None


def create_survey(
    session: DbSession,
    issuer_id: int,
    name: str,
    slug: str,
    category_id: int | None = None,
) -> int:
    """Create a new survey and return its ID."""
    survey = Survey(name=name, slug=slug, issuer_id=issuer_id, category_id=category_id)
    session.add(survey)
    session.flush()
    return survey.id


# ============================================================================
# Response Repository
# ============================================================================


def get_responses_for_survey(session: DbSession, survey_id: int) -> list[ResponseEntity]:
    """Get all responses for a survey, oldest first."""
    rows = (
        session.query(Response.id, Response.survey_id, Response.rating, Response.created_at)
        .filter(Response.survey_id == survey_id)
        .order_by(Response.created_at.asc(), Response.id.asc())
        .all()
    )
    return [
        _response_row_to_entity(survey_id, rating, created_at, response_id=response_id)
        for response_id, survey_id, rating, created_at in rows
    ]


def get_categorized_responses_for_issuer(
    session: DbSession, issuer_id: int
) -> list[ResponseEntity]:
    """Get responses of an issuer's surveys that have a category."""
    rows = (
        session.query(
            Response.id,
            Response.survey_id,
            Response.rating,
            Response.created_at,
            Survey.category_id,
        )
        .join(Survey, Survey.id == Response.survey_id)
        .filter(Survey.issuer_id == issuer_id, Survey.category_id.is_not(None))
        .order_by(Response.created_at.asc(), Response.id.asc())
        .all()
    )
    return [
        _response_row_to_entity(
            survey_id, rating, created_at, category_id=category_id, response_id=response_id
        )
        for response_id, survey_id, rating, created_at, category_id in rows
    ]


def create_response(session: DbSession, survey_id: int, rating: int) -> int:
    """Append a response and return its ID."""
    response = Response(survey_id=survey_id, rating=rating)
    session.add(response)
    session.flush()
    return response.id


# ============================================================================
# Batch Operations
# ============================================================================


def commit(session: DbSession) -> None:
    """Commit current transaction."""
    session.commit()


def rollback(session: DbSession) -> None:
    """Roll back current transaction."""
    session.rollback()
