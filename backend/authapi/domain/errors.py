"""Validation errors raised while constructing domain values.

These are input-validation failures, kept apart from the business-rule errors
in :mod:`authapi.services._shared.errors`. The HTTP layer maps every
:class:`DomainValidationError` to ``400 Bad Request``.
"""

from __future__ import annotations


class DomainValidationError(ValueError):
    """Base class for malformed credentials, claims or identifiers."""


class InvalidEmailError(DomainValidationError):
    """Raised when an email is empty or not shaped like ``local@domain.tld``."""


class InvalidPasswordError(DomainValidationError):
    """Raised when a plaintext password is empty or too short."""


class InvalidPasswordHashError(DomainValidationError):
    """Raised when a stored password hash is empty."""


class InvalidUsernameError(DomainValidationError):
    """Raised when a username is blank."""


class InvalidJwtPayloadError(DomainValidationError):
    """Raised when token claims are missing, mistyped or inconsistent."""


__all__ = [
    "DomainValidationError",
    "InvalidEmailError",
    "InvalidJwtPayloadError",
    "InvalidPasswordError",
    "InvalidPasswordHashError",
    "InvalidUsernameError",
]
