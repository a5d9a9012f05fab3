"""Shared pytest fixtures for surveybot tests."""

from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from surveybot.core.config import Settings
from surveybot.core.security import hash_password
from surveybot.db.schema import Base, Category, Issuer, Response, Survey

TEST_PASSWORD = "correct-horse"
TEST_ROUNDS = 4


@pytest.fixture
def engine():
    """Create an in-memory SQLite engine for testing."""
    engine = create_engine("sqlite:///:memory:", echo=False)
    Base.metadata.create_all(engine)
    return engine


@pytest.fixture
def session(engine):
    """Create a database session for testing."""
    Session = sessionmaker(bind=engine)
    session = Session()
    yield session
    session.close()


@pytest.fixture
def api_engine():
    """In-memory engine shared across threads for API tests."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return engine


@pytest.fixture
def client(api_engine):
    """TestClient for an app whose DB dependency points at api_engine."""
    from surveybot.api.app import create_app, get_db_session

    app = create_app(Settings(session_secret="test-secret", bcrypt_rounds=TEST_ROUNDS))

    def override_get_db():
        with Session(api_engine) as session:
            yield session

    app.dependency_overrides[get_db_session] = override_get_db
    return TestClient(app)


def add_issuer(engine, username: str, password: str = TEST_PASSWORD) -> int:
    """Insert an issuer directly and return its ID."""
    with Session(engine) as db_session:
        issuer = Issuer(
            username=username, password_hash=hash_password(password, rounds=TEST_ROUNDS)
        )
        db_session.add(issuer)
        db_session.commit()
        return issuer.id


def add_survey(
    engine,
    issuer_id: int,
    slug: str,
    name: str = "Survey",
    category_id: int | None = None,
) -> int:
    """Insert a survey directly and return its ID."""
    with Session(engine) as db_session:
        survey = Survey(name=name, slug=slug, issuer_id=issuer_id, category_id=category_id)
        db_session.add(survey)
        db_session.commit()
        return survey.id


def add_category(engine, issuer_id: int, name: str) -> int:
    """Insert a category directly and return its ID."""
    with Session(engine) as db_session:
        category = Category(issuer_id=issuer_id, name=name)
        db_session.add(category)
        db_session.commit()
        return category.id


def add_responses(engine, survey_id: int, rows: list[tuple[int, datetime]]) -> None:
    """Insert (rating, created_at) responses for a survey."""
    with Session(engine) as db_session:
        for rating, created_at in rows:
            db_session.add(Response(survey_id=survey_id, rating=rating, created_at=created_at))
        db_session.commit()


@pytest.fixture
def issuer_id(api_engine):
    """Issuer 'alice' stored in the API database."""
    return add_issuer(api_engine, "alice")


@pytest.fixture
def logged_in(client, issuer_id):
    """Client with an authenticated session for issuer 'alice'."""
    response = client.post(
        "/admin/login",
        data={"username": "alice", "password": TEST_PASSWORD},
        follow_redirects=False,
    )
    assert response.status_code == 303
    return client
