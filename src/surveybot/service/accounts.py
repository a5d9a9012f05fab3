"""Issuer accounts: signup, login and the bootstrap issuer."""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from surveybot.core.security import DEFAULT_ROUNDS, hash_password, verify_password
from surveybot.db import repo
from surveybot.db.repo import DbSession
from surveybot.service.errors import AuthenticationError, DuplicateError, InvalidInputError

logger = logging.getLogger(__name__)

# bcrypt only reads the first 72 bytes
MAX_PASSWORD_BYTES = 72


def _require_credentials(username: str | None, password: str | None) -> None:
    if not username or not password:
        raise InvalidInputError("Missing credentials")


def authenticate(session: DbSession, username: str | None, password: str | None) -> int:
    """Check issuer credentials.

    Returns:
        The issuer ID.

    Raises:
        InvalidInputError: If username or password is empty.
        AuthenticationError: If no issuer matches.
    """
    _require_credentials(username, password)

    issuer = repo.get_issuer_by_username(session, username)
    if issuer is None or not verify_password(password, issuer.password_hash):
        logger.warning(f"Failed login for issuer '{username}'")
        raise AuthenticationError("Invalid credentials")

    return issuer.id


def register_issuer(
    session: DbSession,
    username: str | None,
    password: str | None,
    rounds: int = DEFAULT_ROUNDS,
) -> int:
    """Create a new issuer account.

    Returns:
        The new issuer ID.

    Raises:
        InvalidInputError: If username or password is empty.
        DuplicateError: If the username is taken.
    """
    _require_credentials(username, password)
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise InvalidInputError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")

    if repo.get_issuer_by_username(session, username) is not None:
        raise DuplicateError("Username already exists")

    try:
        issuer_id = repo.create_issuer(session, username, hash_password(password, rounds))
        repo.commit(session)
    except IntegrityError as e:
        repo.rollback(session)
        raise DuplicateError("Username already exists") from e

    logger.info(f"Registered issuer '{username}' (id={issuer_id})")
    return issuer_id


def ensure_default_issuer(
    session: DbSession,
    username: str,
    password: str,
    rounds: int = DEFAULT_ROUNDS,
) -> int:
    """Create the configured bootstrap issuer if it does not exist.

    Returns:
        ID of the existing or newly created issuer.
    """
    existing = repo.get_issuer_by_username(session, username)
    if existing is not None:
        return existing.id

    issuer_id = repo.create_issuer(session, username, hash_password(password, rounds))
    repo.commit(session)
    logger.info(f"Created issuer user '{username}'. Set ISSUER_PASSWORD to change.")
    return issuer_id
