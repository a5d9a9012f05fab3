"""Issuer survey endpoints.

GET /api/surveys - List the issuer's surveys
POST /api/surveys - Create a survey
GET /api/surveys/{survey_id}/stats - Aggregated statistics for a survey
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from surveybot.aggregation.summary import summarize_survey
from surveybot.api.app import get_db_session
from surveybot.api.auth import http_error, require_issuer
from surveybot.db.repo import DbSession
from surveybot.models.domain import SurveyEntity
from surveybot.models.types import (
    OkResponse,
    SurveyCreate,
    SurveyDetail,
    SurveyList,
    SurveyStatsResponse,
)
from surveybot.service import surveys as survey_service
from surveybot.service.errors import SurveybotError

router = APIRouter()


def _survey_to_detail(survey: SurveyEntity) -> SurveyDetail:
    """Convert SurveyEntity to SurveyDetail."""
    return SurveyDetail(
        id=survey.id,
        name=survey.name,
        slug=survey.slug,
        created_at=survey.created_at,
        category_name=survey.category_name,
    )


@router.get("/surveys", response_model=SurveyList)
def list_surveys(
    issuer_id: int = Depends(require_issuer),
    session: DbSession = Depends(get_db_session),
) -> SurveyList:
    """List the logged-in issuer's surveys, newest first."""
    surveys = survey_service.list_surveys(session, issuer_id)
    return SurveyList(surveys=[_survey_to_detail(s) for s in surveys])


@router.post("/surveys", response_model=OkResponse, status_code=201)
def create_survey(
    payload: SurveyCreate,
    issuer_id: int = Depends(require_issuer),
    session: DbSession = Depends(get_db_session),
) -> OkResponse:
    """Create a survey.

    Raises:
        HTTPException: 400 if name/slug missing, 404 if the category is
            unknown, 409 if the slug is taken.
    """
    try:
        survey_service.create_survey(
            session,
            issuer_id,
            name=payload.name,
            slug=payload.slug,
            category_id=payload.category_id,
        )
    except SurveybotError as e:
        raise http_error(e) from e

    return OkResponse()


@router.get("/surveys/{survey_id}/stats", response_model=SurveyStatsResponse)
def get_survey_stats(
    survey_id: int,
    filter_type: str = Query(default="all", alias="filter"),
    value: str = Query(default=""),
    issuer_id: int = Depends(require_issuer),
    session: DbSession = Depends(get_db_session),
) -> SurveyStatsResponse:
    """Get statistics for one of the issuer's surveys.

    Args:
        survey_id: Survey to summarize.
        filter_type: "all", "after", "weekday", "week" or "month".
        value: Filter argument (ISO date for "after", 0-6 for "weekday").

    Raises:
        HTTPException: 404 if the survey is not the issuer's.
    """
    try:
        survey = survey_service.get_issuer_survey(session, survey_id, issuer_id)
    except SurveybotError as e:
        raise http_error(e) from e

    return summarize_survey(session, survey, filter_type, value)
