"""Anonymous response submission.

Domain logic is pure - database operations go through repo.
"""

from __future__ import annotations

import logging
from typing import Any

from surveybot.db import repo
from surveybot.db.repo import DbSession
from surveybot.models.domain import RATING_VALUES
from surveybot.service.errors import InvalidInputError, NotFoundError

logger = logging.getLogger(__name__)

INVALID_RATING = "Rating must be 1-4"


def parse_rating(value: Any) -> int:
    """Coerce a submitted rating to an int in 1-4.

    Accepts integers, integral floats and numeric strings ("3", " 4 ").

    Raises:
        InvalidInputError: For anything else, including booleans and None.
    """
    if value is None or isinstance(value, bool):
        raise InvalidInputError(INVALID_RATING)
    if isinstance(value, int):
        number = value
    else:
        try:
            number = float(value)
        except (TypeError, ValueError, OverflowError):
            raise InvalidInputError(INVALID_RATING) from None
    if number not in RATING_VALUES:
        raise InvalidInputError(INVALID_RATING)
    return int(number)


def submit_response(session: DbSession, slug: str, rating: Any) -> int:
    """Record a rating for the survey with this slug.

    The rating is validated before the survey is looked up.

    Returns:
        The new response ID.

    Raises:
        InvalidInputError: If the rating is not 1-4.
        NotFoundError: If no survey has this slug.
    """
    value = parse_rating(rating)

    survey = repo.get_survey_by_slug(session, slug)
    if survey is None:
        raise NotFoundError("Survey not found")

    response_id = repo.create_response(session, survey.id, value)
    repo.commit(session)

    logger.debug(f"Recorded rating {value} for survey '{slug}'")
    return response_id
