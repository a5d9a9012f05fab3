"""Issuer authentication gate and service-error translation."""

from __future__ import annotations

from fastapi import HTTPException, Request

from surveybot.service.errors import (
    AuthenticationError,
    DuplicateError,
    InvalidInputError,
    NotFoundError,
    SurveybotError,
)

SESSION_ISSUER_KEY = "issuer_id"

_STATUS_BY_ERROR: dict[type[SurveybotError], int] = {
    InvalidInputError: 400,
    AuthenticationError: 401,
    NotFoundError: 404,
    DuplicateError: 409,
}


def require_issuer(request: Request) -> int:
    """Dependency returning the logged-in issuer's ID.

    Raises:
        HTTPException: 401 if the session carries no issuer.
    """
    issuer_id = request.session.get(SESSION_ISSUER_KEY)
    if not issuer_id:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return int(issuer_id)


def login_session(request: Request, issuer_id: int) -> None:
    """Mark the session as belonging to an issuer."""
    request.session[SESSION_ISSUER_KEY] = issuer_id


def logout_session(request: Request) -> None:
    """Drop all session state."""
    request.session.clear()


def http_error(error: SurveybotError) -> HTTPException:
    """Translate a service error into an HTTPException."""
    for error_type, status_code in _STATUS_BY_ERROR.items():
        if isinstance(error, error_type):
            return HTTPException(status_code=status_code, detail=str(error))
    return HTTPException(status_code=400, detail=str(error))
