"""Framework-free domain types for the authentication core."""

from __future__ import annotations

from authapi.domain.entities import AuthUser
from authapi.domain.errors import (
    DomainValidationError,
    InvalidEmailError,
    InvalidJwtPayloadError,
    InvalidPasswordError,
    InvalidPasswordHashError,
    InvalidUsernameError,
)
from authapi.domain.value_objects import (
    Email,
    JwtPayload,
    PasswordHash,
    PlaintextPassword,
    looks_like_email,
)

__all__ = [
    "AuthUser",
    "DomainValidationError",
    "Email",
    "InvalidEmailError",
    "InvalidJwtPayloadError",
    "InvalidPasswordError",
    "InvalidPasswordHashError",
    "InvalidUsernameError",
    "JwtPayload",
    "PasswordHash",
    "PlaintextPassword",
    "looks_like_email",
]
