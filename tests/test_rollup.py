"""Tests for the per-category rollup."""

from datetime import datetime

from surveybot.aggregation.rollup import rollup_categories
from surveybot.db.schema import Category, Issuer, Response, Survey


def _seed(session):
    """Two issuers; alice has two categories and an uncategorized survey."""
    alice = Issuer(username="alice", password_hash="x")
    bob = Issuer(username="bob", password_hash="x")
    session.add_all([alice, bob])
    session.flush()

    service = Category(issuer_id=alice.id, name="Service")
    ambience = Category(issuer_id=alice.id, name="Ambience")
    empty = Category(issuer_id=alice.id, name="Zero")
    bob_service = Category(issuer_id=bob.id, name="Service")
    session.add_all([service, ambience, empty, bob_service])
    session.flush()

    waiter = Survey(name="Waiter", slug="waiter", issuer_id=alice.id, category_id=service.id)
    bar = Survey(name="Bar", slug="bar", issuer_id=alice.id, category_id=service.id)
    music = Survey(name="Music", slug="music", issuer_id=alice.id, category_id=ambience.id)
    loose = Survey(name="Loose", slug="loose", issuer_id=alice.id)
    bobs = Survey(name="Bob", slug="bob", issuer_id=bob.id, category_id=bob_service.id)
    session.add_all([waiter, bar, music, loose, bobs])
    session.flush()

    rows = [
        (waiter, 4, datetime(2024, 1, 3, 10)),  # Wednesday
        (waiter, 3, datetime(2024, 1, 4, 10)),
        (bar, 1, datetime(2024, 1, 10, 10)),  # Wednesday
        (music, 2, datetime(2024, 1, 5, 10)),
        (loose, 4, datetime(2024, 1, 3, 10)),
        (bobs, 1, datetime(2024, 1, 3, 10)),
    ]
    for survey, rating, created_at in rows:
        session.add(Response(survey_id=survey.id, rating=rating, created_at=created_at))
    session.commit()
    return alice.id


class TestRollupCategories:
    """Test rollup_categories."""

    def test_categories_sorted_by_name(self, session):
        issuer_id = _seed(session)
        result = rollup_categories(session, issuer_id)
        assert [c.name for c in result.rollup] == ["Ambience", "Service", "Zero"]

    def test_aggregates_across_surveys_in_category(self, session):
        issuer_id = _seed(session)
        result = rollup_categories(session, issuer_id)
        service = next(c for c in result.rollup if c.name == "Service")
        assert service.total == 3
        assert service.average == "2.67"
        assert service.distribution == {1: 1, 2: 0, 3: 1, 4: 1}

    def test_empty_category_reports_zero(self, session):
        issuer_id = _seed(session)
        result = rollup_categories(session, issuer_id)
        zero = next(c for c in result.rollup if c.name == "Zero")
        assert zero.total == 0
        assert zero.average == "0.00"
        assert zero.distribution == {1: 0, 2: 0, 3: 0, 4: 0}

    def test_ignores_uncategorized_and_other_issuers(self, session):
        issuer_id = _seed(session)
        result = rollup_categories(session, issuer_id)
        assert sum(c.total for c in result.rollup) == 4

    def test_weekday_filter(self, session):
        issuer_id = _seed(session)
        result = rollup_categories(session, issuer_id, "weekday", "3")
        totals = {c.name: c.total for c in result.rollup}
        assert totals == {"Ambience": 0, "Service": 2, "Zero": 0}
        assert result.filter.type == "weekday"
        assert result.filter.value == "3"

    def test_after_filter(self, session):
        issuer_id = _seed(session)
        result = rollup_categories(session, issuer_id, "after", "2024-01-05")
        totals = {c.name: c.total for c in result.rollup}
        assert totals == {"Ambience": 1, "Service": 1, "Zero": 0}

    def test_issuer_without_categories(self, session):
        _seed(session)
        result = rollup_categories(session, 999)
        assert result.rollup == []
