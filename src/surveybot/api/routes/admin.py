"""Issuer login form endpoints.

POST /admin/login - Log in with username/password form fields
POST /admin/signup - Create an issuer account and log in
POST /admin/logout - Clear the session

These back HTML forms, so failures are plain text and success redirects.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import PlainTextResponse, RedirectResponse

from surveybot.api.app import get_db_session
from surveybot.api.auth import http_error, login_session, logout_session
from surveybot.db.repo import DbSession
from surveybot.service.accounts import authenticate, register_issuer
from surveybot.service.errors import SurveybotError

router = APIRouter()

DASHBOARD_URL = "/admin/dashboard"
LOGIN_URL = "/admin"


def _plain_error(error: SurveybotError) -> PlainTextResponse:
    exc = http_error(error)
    return PlainTextResponse(str(exc.detail), status_code=exc.status_code)


@router.post("/admin/login", response_model=None)
def login(
    request: Request,
    username: str | None = Form(default=None),
    password: str | None = Form(default=None),
    session: DbSession = Depends(get_db_session),
) -> RedirectResponse | PlainTextResponse:
    """Log an issuer in and redirect to the dashboard.

    Returns:
        303 redirect on success; 400 or 401 plain-text response otherwise.
    """
    try:
        issuer_id = authenticate(session, username, password)
    except SurveybotError as e:
        return _plain_error(e)

    login_session(request, issuer_id)
    return RedirectResponse(DASHBOARD_URL, status_code=303)


@router.post("/admin/signup", response_model=None)
def signup(
    request: Request,
    username: str | None = Form(default=None),
    password: str | None = Form(default=None),
    session: DbSession = Depends(get_db_session),
) -> RedirectResponse | PlainTextResponse:
    """Create an issuer account, log it in and redirect to the dashboard.

    Returns:
        303 redirect on success; 400 or 409 plain-text response otherwise.
    """
    settings = request.app.state.settings
    try:
        issuer_id = register_issuer(session, username, password, rounds=settings.bcrypt_rounds)
    except SurveybotError as e:
        return _plain_error(e)

    login_session(request, issuer_id)
    return RedirectResponse(DASHBOARD_URL, status_code=303)


@router.post("/admin/logout")
def logout(request: Request) -> RedirectResponse:
    """Clear the session and redirect to the login page."""
    logout_session(request)
    return RedirectResponse(LOGIN_URL, status_code=303)
