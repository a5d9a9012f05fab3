"""FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Generator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.sessions import SessionMiddleware

from surveybot import __version__
from surveybot.core.config import Settings, get_settings
from surveybot.db.repo import DbSession
from surveybot.db.session import get_database
from surveybot.service.accounts import ensure_default_issuer

logger = logging.getLogger(__name__)

SESSION_COOKIE = "surveybot_session"


def get_db_session(request: Request) -> Generator[DbSession, None, None]:
    """Dependency to get database session.

    Yields:
        Database session, committed and closed after the request.
    """
    with get_database(request.app.state.settings.db_path).scope() as session:
        yield session


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create tables and the bootstrap issuer before serving."""
    settings: Settings = app.state.settings
    database = get_database(settings.db_path)
    database.create_schema()
    with database.scope() as session:
        ensure_default_issuer(
            session,
            settings.issuer_username,
            settings.issuer_password,
            rounds=settings.bcrypt_rounds,
        )
    logger.info(f"Surveybot ready (db={settings.db_path})")
    yield


async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    return JSONResponse(status_code=400, content={"error": message})


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create FastAPI application.

    Args:
        settings: Optional settings; defaults to the environment.

    Returns:
        Configured FastAPI application.
    """
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title="Surveybot API",
        description="Anonymous rating surveys with aggregated statistics",
        version=__version__,
        lifespan=_lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.session_secret,
        session_cookie=SESSION_COOKIE,
        same_site="lax",
        https_only=False,
    )

    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(RequestValidationError, _validation_error)

    # Include routes; public comes first so /surveys/slug/{slug} wins
    from surveybot.api.routes import admin, categories, export, public, surveys

    app.include_router(public.router, prefix="/api")
    app.include_router(surveys.router, prefix="/api")
    app.include_router(export.router, prefix="/api")
    app.include_router(categories.router, prefix="/api")
    app.include_router(admin.router)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "ok"}

    return app


# Default app instance
app = create_app()
