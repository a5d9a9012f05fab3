"""SQLite database handles.

One Database per resolved file path holds the engine and session factory,
so the app, its startup hook and the seed script share connections.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from surveybot.db.schema import Base

logger = logging.getLogger(__name__)


class Database:
    """Engine and session factory for one SQLite file."""

    def __init__(self, path: Path):
        self.path = path
        path.parent.mkdir(parents=True, exist_ok=True)
        # StaticPool: one connection shared across FastAPI worker threads
        self.engine = create_engine(
            f"sqlite:///{path}",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        self._sessions = sessionmaker(bind=self.engine)

    def create_schema(self) -> None:
        """Create all tables that do not exist yet."""
        Base.metadata.create_all(self.engine)
        logger.info(f"Database initialized at {self.path}")

    def session(self) -> Session:
        """Open a session; the caller closes it."""
        return self._sessions()

    @contextmanager
    def scope(self) -> Iterator[Session]:
        """Session that commits on success and rolls back on error."""
        session = self.session()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()


_databases: dict[Path, Database] = {}


def get_database(db_path: Path) -> Database:
    """Return the shared Database for a file path."""
    key = Path(db_path).resolve()
    database = _databases.get(key)
    if database is None:
        database = _databases[key] = Database(key)
    return database
