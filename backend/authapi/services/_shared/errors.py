"""
Service-level exceptions shared by the authentication and profile services.

These exceptions are **framework-agnostic**: they never import Flask or HTTP
helpers. They are the stable contract between repositories, use cases and the
API layer, which translates them to RFC 7807 responses in
``authapi/core/errors.py``.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError

EMAIL_UNIQUE_CONSTRAINT = "uq_users_email"
USERNAME_UNIQUE_CONSTRAINT = "uq_users_username"


def violates(exc: IntegrityError, constraint_name: str) -> bool:
    """
    Check whether an IntegrityError originates from a specific constraint.

    PostgreSQL reports the constraint name in the driver message; SQLite only
    reports the offending ``table.column`` pair, so that form is accepted too.

    Parameters
    ----------
    exc : IntegrityError
        The exception raised by SQLAlchemy during flush/commit.
    constraint_name : str
        Constraint to match, following the ``uq_<table>_<column>`` convention.

    Returns
    -------
    bool
        True if the IntegrityError matches the given constraint.
    """
    message = str(exc.orig).lower() if exc.orig else ""
    name = constraint_name.lower()
    if name in message:
        return True
    prefix, _, rest = name.partition("_")
    if prefix != "uq" or "_" not in rest:
        return False
    table, _, column = rest.partition("_")
    return f"{table}.{column}" in message


# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - They can be safely raised from repositories or use cases.
    """


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found in the repository.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str | int
    """

    entity: str
    key: str | int

    def __str__(self) -> str:
        return f"{self.entity} not found: {self.key}"


class ConflictError(ServiceError):
    """Raised when a uniqueness rule is violated."""

    entity = "User"

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail

    def __str__(self) -> str:
        return f"Conflict on {self.entity}: {self.detail}"


class EmailAlreadyExistsError(ConflictError):
    """The email is already registered."""

    def __init__(self, email: str) -> None:
        super().__init__(f"email '{email}' is already registered")
        self.email = email


class UsernameAlreadyExistsError(ConflictError):
    """The username is already taken."""

    def __init__(self, username: str) -> None:
        super().__init__(f"username '{username}' is already taken")
        self.username = username


# --------------------------------------------------------------------------- #
# Authentication errors
# --------------------------------------------------------------------------- #


class AuthenticationError(ServiceError):
    """Root of every failure that maps to ``401 Unauthorized``.

    ``public_message`` is what clients see; the subclass stays available to
    logs and tests.
    """

    public_message = "Unauthorized"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.public_message)


class InvalidCredentialsError(AuthenticationError):
    """Unknown identifier or wrong password."""

    public_message = "Invalid credentials"


class AccountNotActiveError(AuthenticationError):
    """Credentials resolve to an unconfirmed or blocked account."""

    # Deliberately indistinguishable from InvalidCredentialsError for clients.
    public_message = "Invalid credentials"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or "Account is not active")


class NoTokenProvidedError(AuthenticationError):
    """No bearer token was found on the request."""

    public_message = "No token provided"


class InvalidTokenError(AuthenticationError):
    """Signature, expiry, claim shape, revocation or subject lookup failed."""

    public_message = "Invalid token"


def conflict_from_integrity(
    exc: IntegrityError, *, email: str | None = None, username: str | None = None
) -> ConflictError | None:
    """
    Translate a unique-constraint violation on ``users`` into a conflict error.

    :param exc: Error raised by flush/commit.
    :param email: Email that was being written, if any.
    :param username: Username that was being written, if any.
    :returns: The matching conflict error, or ``None`` for other integrity errors.
    """
    if email is not None and violates(exc, EMAIL_UNIQUE_CONSTRAINT):
        return EmailAlreadyExistsError(email)
    if username is not None and violates(exc, USERNAME_UNIQUE_CONSTRAINT):
        return UsernameAlreadyExistsError(username)
    return None


__all__ = [
    "EMAIL_UNIQUE_CONSTRAINT",
    "USERNAME_UNIQUE_CONSTRAINT",
    "AccountNotActiveError",
    "AuthenticationError",
    "ConflictError",
    "EmailAlreadyExistsError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "NoTokenProvidedError",
    "NotFoundError",
    "ServiceError",
    "conflict_from_integrity",
    "UsernameAlreadyExistsError",
    "violates",
]
