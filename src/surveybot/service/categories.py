"""Category management for issuers."""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from surveybot.db import repo
from surveybot.db.repo import DbSession
from surveybot.models.domain import CategoryEntity
from surveybot.service.errors import DuplicateError, InvalidInputError

logger = logging.getLogger(__name__)


def create_category(session: DbSession, issuer_id: int, name: str | None) -> int:
    """Create a category for an issuer.

    Raises:
        InvalidInputError: If name is empty.
        DuplicateError: If the issuer already has a category with this name.
    """
    if not name:
        raise InvalidInputError("Name is required")

    try:
        category_id = repo.create_category(session, issuer_id, name)
        repo.commit(session)
    except IntegrityError as e:
        repo.rollback(session)
        raise DuplicateError("Category already exists") from e

    logger.info(f"Issuer {issuer_id} created category '{name}' (id={category_id})")
    return category_id


def list_categories(session: DbSession, issuer_id: int) -> list[CategoryEntity]:
    """List an issuer's categories, newest first."""
    return repo.list_categories(session, issuer_id)
