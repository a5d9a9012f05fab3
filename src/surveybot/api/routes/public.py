"""Public survey endpoints (no login).

GET /api/surveys/slug/{slug} - Survey title for the respondent page
POST /api/surveys/{slug}/responses - Submit an anonymous rating
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from surveybot.api.app import get_db_session
from surveybot.api.auth import http_error
from surveybot.db.repo import DbSession
from surveybot.models.types import (
    OkResponse,
    PublicSurvey,
    PublicSurveyResponse,
    ResponseSubmission,
)
from surveybot.service.errors import SurveybotError
from surveybot.service.responses import submit_response
from surveybot.service.surveys import get_public_survey

router = APIRouter()


@router.get("/surveys/slug/{slug}", response_model=PublicSurveyResponse)
def get_survey_by_slug(
    slug: str,
    session: DbSession = Depends(get_db_session),
) -> PublicSurveyResponse:
    """Get the public view of a survey.

    Raises:
        HTTPException: 404 if no survey has this slug.
    """
    try:
        survey = get_public_survey(session, slug)
    except SurveybotError as e:
        raise http_error(e) from e

    return PublicSurveyResponse(
        survey=PublicSurvey(
            id=survey.id,
            name=survey.name,
            slug=survey.slug,
            created_at=survey.created_at,
        )
    )


@router.post("/surveys/{slug}/responses", response_model=OkResponse)
def create_response(
    slug: str,
    submission: ResponseSubmission,
    session: DbSession = Depends(get_db_session),
) -> OkResponse:
    """Submit a rating for a survey.

    Raises:
        HTTPException: 400 if the rating is not 1-4, 404 if the slug is unknown.
    """
    try:
        submit_response(session, slug, submission.rating)
    except SurveybotError as e:
        raise http_error(e) from e

    return OkResponse()
