#!/usr/bin/env python3
"""Seed a demo database with an issuer, categories, surveys and responses.

Usage:
    python scripts/seed_demo.py [DB_PATH]

This script:
1. Initializes the database
2. Creates the demo issuer (demo / demo-password)
3. Creates two categories and three surveys
4. Spreads random ratings over the last ten weeks

Log in at /admin with the demo credentials to browse the dashboard.
"""

from __future__ import annotations

import random
import sys
from datetime import timedelta
from pathlib import Path

from surveybot.core.timestamps import utc_now
from surveybot.db.schema import Category, Response, Survey
from surveybot.db.session import get_database
from surveybot.service.accounts import ensure_default_issuer

PROJECT_ROOT = Path(__file__).parent.parent
DEMO_DB_PATH = PROJECT_ROOT / "demo.db"

DEMO_USERNAME = "demo"
DEMO_PASSWORD = "demo-password"

# (category, survey name, slug); None category means uncategorized
DEMO_SURVEYS = [
    ("Front desk", "Check-in experience", "demo-check-in"),
    ("Front desk", "Check-out experience", "demo-check-out"),
    (None, "Breakfast buffet", "demo-breakfast"),
]
DEMO_RESPONSES_PER_SURVEY = 60
DEMO_SPAN_DAYS = 70


def seed_database(db_path: Path, rng: random.Random) -> None:
    """Insert demo rows unless the demo issuer already has surveys."""
    database = get_database(db_path)
    database.create_schema()

    with database.scope() as session:
        issuer_id = ensure_default_issuer(session, DEMO_USERNAME, DEMO_PASSWORD)

        if session.query(Survey).filter(Survey.issuer_id == issuer_id).count():
            print(f"Demo issuer '{DEMO_USERNAME}' already has surveys")
            return

        print("Creating categories...")
        categories: dict[str, Category] = {}
        for category_name, _, _ in DEMO_SURVEYS:
            if category_name and category_name not in categories:
                category = Category(issuer_id=issuer_id, name=category_name)
                session.add(category)
                categories[category_name] = category
        session.flush()

        print("Creating surveys and responses...")
        now = utc_now()
        for category_name, name, slug in DEMO_SURVEYS:
            survey = Survey(
                name=name,
                slug=slug,
                issuer_id=issuer_id,
                category_id=categories[category_name].id if category_name else None,
            )
            session.add(survey)
            session.flush()

            for _ in range(DEMO_RESPONSES_PER_SURVEY):
                offset = timedelta(minutes=rng.randrange(DEMO_SPAN_DAYS * 24 * 60))
                session.add(
                    Response(
                        survey_id=survey.id,
                        rating=rng.choices([1, 2, 3, 4], weights=[1, 2, 4, 3])[0],
                        created_at=now - offset,
                    )
                )
            print(f"  Created survey: {slug} ({DEMO_RESPONSES_PER_SURVEY} responses)")

        print("Database seeded successfully!")


def main() -> int:
    """Main entry point."""
    db_path = Path(sys.argv[1]) if len(sys.argv) > 1 else DEMO_DB_PATH

    print("=" * 60)
    print("Surveybot Demo Seeding Script")
    print("=" * 60)

    seed_database(db_path, random.Random(42))

    print("\n" + "=" * 60)
    print(f"Database: {db_path}")
    print(f"Login: {DEMO_USERNAME} / {DEMO_PASSWORD}")
    print(f"Run with: SURVEYBOT_DB_PATH={db_path} python -m surveybot")
    print("=" * 60)

    return 0


if __name__ == "__main__":
    sys.exit(main())
