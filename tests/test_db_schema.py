"""Tests for database schema invariants.

Invariants:
1. Survey slugs are globally unique
2. Category names are unique per issuer
3. Ratings are constrained to 1-4
4. Issuer usernames are unique
"""

import pytest
from sqlalchemy.exc import IntegrityError

from surveybot.db.schema import Base, Category, Issuer, Response, Survey


def _issuer(session, username: str = "alice") -> Issuer:
    issuer = Issuer(username=username, password_hash="x")
    session.add(issuer)
    session.flush()
    return issuer


class TestSchemaCreation:
    """Test that schema can be created without errors."""

    def test_all_tables_created(self, engine):
        """All required tables should exist after creation."""
        assert {"issuers", "surveys", "categories", "responses"}.issubset(
            Base.metadata.tables.keys()
        )

    def test_created_at_defaults(self, session):
        issuer = _issuer(session)
        session.commit()
        assert issuer.created_at is not None


class TestSlugUniqueness:
    """Invariant: slug unique across all issuers."""

    def test_duplicate_slug_rejected_across_issuers(self, session):
        alice = _issuer(session, "alice")
        bob = _issuer(session, "bob")
        session.add(Survey(name="A", slug="shared", issuer_id=alice.id))
        session.commit()

        session.add(Survey(name="B", slug="shared", issuer_id=bob.id))
        with pytest.raises(IntegrityError):
            session.commit()


class TestCategoryUniqueness:
    """Invariant: category name unique per issuer."""

    def test_duplicate_name_rejected_for_same_issuer(self, session):
        alice = _issuer(session)
        session.add(Category(issuer_id=alice.id, name="Service"))
        session.commit()

        session.add(Category(issuer_id=alice.id, name="Service"))
        with pytest.raises(IntegrityError):
            session.commit()

    def test_same_name_allowed_for_different_issuers(self, session):
        alice = _issuer(session, "alice")
        bob = _issuer(session, "bob")
        session.add_all(
            [
                Category(issuer_id=alice.id, name="Service"),
                Category(issuer_id=bob.id, name="Service"),
            ]
        )
        session.commit()
        assert session.query(Category).count() == 2


class TestRatingConstraint:
    """Invariant: rating in 1-4."""

    @pytest.mark.parametrize("rating", [1, 2, 3, 4])
    def test_valid_ratings_accepted(self, session, rating):
        alice = _issuer(session)
        survey = Survey(name="A", slug="a", issuer_id=alice.id)
        session.add(survey)
        session.flush()
        session.add(Response(survey_id=survey.id, rating=rating))
        session.commit()
        assert session.query(Response).count() == 1

    @pytest.mark.parametrize("rating", [0, 5, -1])
    def test_out_of_range_rejected(self, session, rating):
        alice = _issuer(session)
        survey = Survey(name="A", slug="a", issuer_id=alice.id)
        session.add(survey)
        session.flush()
        session.add(Response(survey_id=survey.id, rating=rating))
        with pytest.raises(IntegrityError):
            session.commit()


class TestIssuerUniqueness:
    def test_duplicate_username_rejected(self, session):
        _issuer(session, "alice")
        session.commit()
        session.add(Issuer(username="alice", password_hash="y"))
        with pytest.raises(IntegrityError):
            session.commit()
