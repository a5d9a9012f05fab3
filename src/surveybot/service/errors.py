"""Service-layer exceptions.

The API layer maps these onto HTTP status codes:
InvalidInputError -> 400, AuthenticationError -> 401,
NotFoundError -> 404, DuplicateError -> 409.
"""


class SurveybotError(ValueError):
    """Base class for expected, per-request failures."""


class InvalidInputError(SurveybotError):
    """Request is missing a field or carries an invalid value."""


class AuthenticationError(SurveybotError):
    """Credentials did not match an issuer."""


class NotFoundError(SurveybotError):
    """Referenced survey or category does not exist for this caller."""


class DuplicateError(SurveybotError):
    """A uniqueness constraint would be violated."""
