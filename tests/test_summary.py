"""Tests for survey statistics aggregation."""

from datetime import datetime

import pytest
from sqlalchemy.orm import Session

from surveybot.aggregation.summary import compute_stats, format_average, summarize_survey
from surveybot.db import repo
from surveybot.db.schema import Issuer, Response, Survey
from surveybot.models.domain import ResponseEntity


def _response(rating: int, created_at: str = "2024-01-02T10:00:00.000Z") -> ResponseEntity:
    return ResponseEntity(survey_id=1, rating=rating, created_at=created_at)


class TestFormatAverage:
    """Test average formatting."""

    def test_two_decimals(self):
        assert format_average(10, 4) == "2.50"

    def test_repeating_decimal(self):
        assert format_average(4, 3) == "1.33"

    def test_empty_set_is_zero_string(self):
        assert format_average(0, 0) == "0.00"


class TestComputeStats:
    """Test pure aggregation."""

    def test_empty_set(self):
        stats = compute_stats([])
        assert stats.total == 0
        assert stats.average == "0.00"
        assert stats.distribution == {1: 0, 2: 0, 3: 0, 4: 0}
        assert stats.latest is None

    def test_distribution_counts_each_rating(self):
        stats = compute_stats([_response(1), _response(4), _response(4), _response(3)])
        assert stats.distribution == {1: 1, 2: 0, 3: 1, 4: 2}

    @pytest.mark.parametrize(
        "ratings",
        [[1], [2, 2, 3], [4, 4, 4, 1, 2], [1, 2, 3, 4, 1, 2, 3, 4]],
    )
    def test_distribution_sums_to_total(self, ratings):
        stats = compute_stats([_response(r) for r in ratings])
        assert sum(stats.distribution.values()) == stats.total == len(ratings)

    def test_average(self):
        stats = compute_stats([_response(1), _response(2), _response(4)])
        assert stats.average == "2.33"

    def test_latest_is_max_timestamp(self):
        stats = compute_stats(
            [
                _response(2, "2024-01-05T10:00:00.000Z"),
                _response(2, "2024-02-01T09:00:00.000Z"),
                _response(2, "2024-01-20T10:00:00.000Z"),
            ]
        )
        assert stats.latest == "2024-02-01T09:00:00.000Z"


@pytest.fixture
def survey_with_responses(session: Session):
    """Survey with four responses across two weeks and two months."""
    issuer = Issuer(username="alice", password_hash="x")
    session.add(issuer)
    session.flush()
    survey = Survey(name="Lobby", slug="lobby", issuer_id=issuer.id)
    session.add(survey)
    session.flush()
    for rating, created_at in [
        (4, datetime(2024, 1, 29, 9, 0)),  # Monday, W05, January
        (2, datetime(2024, 1, 31, 9, 0)),  # Wednesday, W05, January
        (3, datetime(2024, 2, 7, 9, 0)),  # Wednesday, W06, February
        (1, datetime(2024, 2, 10, 9, 0)),  # Saturday, W06, February
    ]:
        session.add(Response(survey_id=survey.id, rating=rating, created_at=created_at))
    session.commit()
    return repo.get_survey_for_issuer(session, survey.id, issuer.id)


class TestSummarizeSurvey:
    """Test the stats payload built from the database."""

    def test_all_filter(self, session, survey_with_responses):
        result = summarize_survey(session, survey_with_responses)
        assert result.stats.total == 4
        assert result.stats.average == "2.50"
        assert result.stats.latest == "2024-02-10T09:00:00.000Z"
        assert result.stats.buckets == []
        assert result.filter.type == "all"
        assert result.filter.value == ""

    def test_weekday_filter(self, session, survey_with_responses):
        result = summarize_survey(session, survey_with_responses, "weekday", "3")
        assert result.stats.total == 2
        assert result.stats.distribution == {1: 0, 2: 1, 3: 1, 4: 0}
        assert result.stats.average == "2.50"

    def test_after_filter(self, session, survey_with_responses):
        result = summarize_survey(session, survey_with_responses, "after", "2024-02-01")
        assert result.stats.total == 2
        assert result.stats.average == "2.00"

    def test_after_filter_excluding_everything(self, session, survey_with_responses):
        result = summarize_survey(session, survey_with_responses, "after", "2030-01-01")
        assert result.stats.total == 0
        assert result.stats.average == "0.00"
        assert result.stats.latest is None

    def test_week_filter_builds_buckets(self, session, survey_with_responses):
        result = summarize_survey(session, survey_with_responses, "week", "")
        assert result.stats.total == 4
        assert [(b.label, b.count, b.average) for b in result.stats.buckets] == [
            ("2024-W05", 2, 3.0),
            ("2024-W06", 2, 2.0),
        ]

    def test_month_filter_builds_buckets(self, session, survey_with_responses):
        result = summarize_survey(session, survey_with_responses, "month", None)
        assert [b.label for b in result.stats.buckets] == ["2024-01", "2024-02"]
        assert result.filter.value == ""

    def test_survey_detail(self, session, survey_with_responses):
        result = summarize_survey(session, survey_with_responses)
        assert result.survey.slug == "lobby"
        assert result.survey.category_name is None
