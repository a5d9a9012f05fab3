"""Survey management for issuers."""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from surveybot.db import repo
from surveybot.db.repo import DbSession
from surveybot.models.domain import SurveyEntity
from surveybot.service.errors import DuplicateError, InvalidInputError, NotFoundError

logger = logging.getLogger(__name__)


def create_survey(
    session: DbSession,
    issuer_id: int,
    name: str | None,
    slug: str | None,
    category_id: int | None = None,
) -> int:
    """Create a survey owned by an issuer.

    Args:
        session: Database session.
        issuer_id: Owning issuer.
        name: Display name.
        slug: Public identifier, unique across all issuers.
        category_id: Optional category; must belong to the issuer.

    Returns:
        The new survey ID.

    Raises:
        InvalidInputError: If name or slug is empty.
        NotFoundError: If the category is not the issuer's.
        DuplicateError: If the slug is taken.
    """
    if not name or not slug:
        raise InvalidInputError("Name and slug are required")

    if category_id is not None and repo.get_category_for_issuer(
        session, category_id, issuer_id
    ) is None:
        raise NotFoundError("Category not found")

    try:
        survey_id = repo.create_survey(session, issuer_id, name, slug, category_id)
        repo.commit(session)
    except IntegrityError as e:
        repo.rollback(session)
        raise DuplicateError("Survey slug already exists") from e

    logger.info(f"Issuer {issuer_id} created survey '{slug}' (id={survey_id})")
    return survey_id


def list_surveys(session: DbSession, issuer_id: int) -> list[SurveyEntity]:
    """List an issuer's surveys, newest first."""
    return repo.list_surveys(session, issuer_id)


def get_issuer_survey(session: DbSession, survey_id: int, issuer_id: int) -> SurveyEntity:
    """Get a survey the issuer owns.

    Raises:
        NotFoundError: If the survey does not exist or belongs to someone else.
    """
    survey = repo.get_survey_for_issuer(session, survey_id, issuer_id)
    if survey is None:
        raise NotFoundError("Survey not found")
    return survey


def get_public_survey(session: DbSession, slug: str) -> SurveyEntity:
    """Get a survey by slug for anonymous respondents.

    Raises:
        NotFoundError: If no survey has this slug.
    """
    survey = repo.get_survey_by_slug(session, slug)
    if survey is None:
        raise NotFoundError("Survey not found")
    return survey
