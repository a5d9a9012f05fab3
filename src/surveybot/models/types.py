"""Pydantic models for the Surveybot API.

Request models are deliberately lenient (optional fields, loose rating
type) so that missing or malformed values reach the service layer and
come back as 400 responses with a readable error message.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# ============================================================================
# Requests
# ============================================================================


class SurveyCreate(BaseModel):
    """Survey creation payload."""

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = None
    slug: str | None = None
    category_id: int | None = Field(default=None, alias="categoryId")

    @field_validator("category_id", mode="before")
    @classmethod
    def _blank_category_is_none(cls, value: Any) -> Any:
        # Dashboard select sends "" or 0 for "no category"
        if value in ("", 0, None):
            return None
        return value


class CategoryCreate(BaseModel):
    """Category creation payload."""

    name: str | None = None


class ResponseSubmission(BaseModel):
    """Anonymous rating submission.

    rating is validated by surveybot.service.responses.parse_rating.
    """

    rating: Any = None


# ============================================================================
# Responses
# ============================================================================


class OkResponse(BaseModel):
    """Generic acknowledgement."""

    ok: bool = True


class SurveyDetail(BaseModel):
    """Survey as shown to its issuer."""

    id: int
    name: str
    slug: str
    created_at: str
    category_name: str | None


class PublicSurvey(BaseModel):
    """Survey as shown to anonymous respondents."""

    id: int
    name: str
    slug: str
    created_at: str


class SurveyList(BaseModel):
    surveys: list[SurveyDetail]


class PublicSurveyResponse(BaseModel):
    survey: PublicSurvey


class CategoryDetail(BaseModel):
    """Category as shown to its issuer."""

    id: int
    name: str
    created_at: str


class CategoryList(BaseModel):
    categories: list[CategoryDetail]


class FilterInfo(BaseModel):
    """Echo of the filter applied to a stats request."""

    type: str
    value: str


class Bucket(BaseModel):
    """Time bucket for trend charts."""

    label: str  # YYYY-Www or YYYY-MM
    count: int
    average: float


class SurveyStats(BaseModel):
    """Aggregated statistics for one survey."""

    total: int
    average: str  # two decimals, "0.00" when empty
    distribution: dict[int, int]
    latest: str | None
    buckets: list[Bucket]


class SurveyStatsResponse(BaseModel):
    survey: SurveyDetail
    stats: SurveyStats
    filter: FilterInfo


class CategoryRollup(BaseModel):
    """Aggregated statistics for one category."""

    id: int
    name: str
    total: int
    average: str
    distribution: dict[int, int]


class CategoryRollupResponse(BaseModel):
    rollup: list[CategoryRollup]
    filter: FilterInfo
