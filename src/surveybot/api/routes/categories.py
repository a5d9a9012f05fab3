"""Category endpoints.

GET /api/categories - List the issuer's categories
POST /api/categories - Create a category
GET /api/categories/rollup - Statistics per category
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from surveybot.aggregation.rollup import rollup_categories
from surveybot.api.app import get_db_session
from surveybot.api.auth import http_error, require_issuer
from surveybot.db.repo import DbSession
from surveybot.models.types import (
    CategoryCreate,
    CategoryDetail,
    CategoryList,
    CategoryRollupResponse,
    OkResponse,
)
from surveybot.service import categories as category_service
from surveybot.service.errors import SurveybotError

router = APIRouter()


@router.get("/categories", response_model=CategoryList)
def list_categories(
    issuer_id: int = Depends(require_issuer),
    session: DbSession = Depends(get_db_session),
) -> CategoryList:
    """List the issuer's categories, newest first."""
    categories = category_service.list_categories(session, issuer_id)
    return CategoryList(
        categories=[
            CategoryDetail(id=c.id, name=c.name, created_at=c.created_at) for c in categories
        ]
    )


@router.post("/categories", response_model=OkResponse, status_code=201)
def create_category(
    payload: CategoryCreate,
    issuer_id: int = Depends(require_issuer),
    session: DbSession = Depends(get_db_session),
) -> OkResponse:
    """Create a category.

    Raises:
        HTTPException: 400 if name missing, 409 if the issuer already has it.
    """
    try:
        category_service.create_category(session, issuer_id, payload.name)
    except SurveybotError as e:
        raise http_error(e) from e

    return OkResponse()


@router.get("/categories/rollup", response_model=CategoryRollupResponse)
def get_category_rollup(
    filter_type: str = Query(default="all", alias="filter"),
    value: str = Query(default=""),
    issuer_id: int = Depends(require_issuer),
    session: DbSession = Depends(get_db_session),
) -> CategoryRollupResponse:
    """Aggregate the issuer's categorized responses per category."""
    return rollup_categories(session, issuer_id, filter_type, value)
