"""Domain models for Surveybot.

Pure Python dataclasses representing domain entities.
These models are independent of SQLAlchemy; timestamps are carried
as ISO-8601 UTC strings (see surveybot.core.timestamps).
"""

from __future__ import annotations

from dataclasses import dataclass

# ============================================================================
# Accounts
# ============================================================================


@dataclass
class IssuerEntity:
    """Domain model for an issuer account."""

    id: int
    username: str
    password_hash: str
    created_at: str


# ============================================================================
# Surveys
# ============================================================================


@dataclass
class CategoryEntity:
    """Domain model for a survey category."""

    id: int
    issuer_id: int
    name: str
    created_at: str


@dataclass
class SurveyEntity:
    """Domain model for a survey."""

    id: int
    name: str
    slug: str
    issuer_id: int
    created_at: str
    category_id: int | None = None
    category_name: str | None = None


# ============================================================================
# Responses
# ============================================================================

RATING_VALUES: tuple[int, ...] = (1, 2, 3, 4)


@dataclass
class ResponseEntity:
    """Domain model for a single survey response."""

    survey_id: int
    rating: int
    created_at: str
    id: int | None = None
    category_id: int | None = None
