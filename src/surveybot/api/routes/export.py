"""Export API endpoint.

GET /api/surveys/{survey_id}/export - Export filtered responses as CSV
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from surveybot.aggregation.csv_export import export_filename, render_csv
from surveybot.aggregation.filters import apply_filter
from surveybot.api.app import get_db_session
from surveybot.api.auth import http_error, require_issuer
from surveybot.db import repo
from surveybot.db.repo import DbSession
from surveybot.service.errors import SurveybotError
from surveybot.service.surveys import get_issuer_survey

router = APIRouter()


@router.get("/surveys/{survey_id}/export")
def export_survey(
    survey_id: int,
    filter_type: str = Query(default="all", alias="filter"),
    value: str = Query(default=""),
    issuer_id: int = Depends(require_issuer),
    session: DbSession = Depends(get_db_session),
) -> Response:
    """Export a survey's responses as a downloadable CSV file.

    The same filter as the stats endpoint applies; rows are oldest first.

    Raises:
        HTTPException: 404 if the survey is not the issuer's.
    """
    try:
        survey = get_issuer_survey(session, survey_id, issuer_id)
    except SurveybotError as e:
        raise http_error(e) from e

    responses = apply_filter(
        repo.get_responses_for_survey(session, survey.id), filter_type, value
    )

    return Response(
        content=render_csv(survey, responses),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{export_filename(survey)}"'},
    )
