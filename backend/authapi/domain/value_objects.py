"""Immutable credential and claim values validated at construction time.

Plaintext passwords and stored hashes are two separate types: a
:class:`PlaintextPassword` is transient and never persisted, a
:class:`PasswordHash` is opaque and is the only password form an
:class:`~authapi.domain.entities.AuthUser` ever holds.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import InitVar, dataclass
from datetime import datetime, timezone
from typing import Any, Final

from authapi.domain.errors import (
    InvalidEmailError,
    InvalidJwtPayloadError,
    InvalidPasswordError,
    InvalidPasswordHashError,
)

EMAIL_PATTERN: Final = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PASSWORD_MIN_LENGTH: Final[int] = 8
PASSWORD_MASK: Final[str] = "********"

_RX_UPPER = re.compile(r"[A-Z]")
_RX_LOWER = re.compile(r"[a-z]")
_RX_DIGIT = re.compile(r"[0-9]")
_RX_SPECIAL = re.compile(r"[!@#$%^&*(),.?\":{}|<>]")


def looks_like_email(candidate: str) -> bool:
    """Return ``True`` when ``candidate`` has the ``local@domain.tld`` shape."""
    return isinstance(candidate, str) and EMAIL_PATTERN.match(candidate) is not None


@dataclass(frozen=True, slots=True, eq=False)
class Email:
    """Email address.

    ``value`` is kept exactly as given; comparisons and :attr:`normalized` are
    case-insensitive.

    :raises InvalidEmailError: If the value is empty or malformed.
    """

    value: str

    def __post_init__(self) -> None:
        if not self.value or not isinstance(self.value, str):
            raise InvalidEmailError("Email is required")
        if not looks_like_email(self.value):
            raise InvalidEmailError("Invalid email format")

    @property
    def normalized(self) -> str:
        return self.value.lower()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Email):
            return NotImplemented
        return self.normalized == other.normalized

    def __hash__(self) -> int:
        return hash(self.normalized)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class PlaintextPassword:
    """Raw password supplied by a client, validated before hashing.

    The string and repr forms are always masked.

    :param value: Raw password.
    :param min_length: Minimum accepted length (defaults to 8).
    :raises InvalidPasswordError: If empty or shorter than ``min_length``.
    """

    value: str
    min_length: InitVar[int] = PASSWORD_MIN_LENGTH

    def __post_init__(self, min_length: int) -> None:
        if not self.value or not isinstance(self.value, str):
            raise InvalidPasswordError("Password is required")
        if len(self.value) < min_length:
            raise InvalidPasswordError(
                f"Password must be at least {min_length} characters long"
            )

    def is_strong(self) -> bool:
        """Return ``True`` when upper, lower, digit and special characters are all present."""
        return all(
            rx.search(self.value)
            for rx in (_RX_UPPER, _RX_LOWER, _RX_DIGIT, _RX_SPECIAL)
        )

    def __str__(self) -> str:
        return PASSWORD_MASK

    def __repr__(self) -> str:
        return f"PlaintextPassword({PASSWORD_MASK})"


@dataclass(frozen=True, slots=True)
class PasswordHash:
    """Opaque, persisted password hash (e.g. an argon2id PHC string)."""

    value: str

    def __post_init__(self) -> None:
        if not self.value or not isinstance(self.value, str):
            raise InvalidPasswordHashError("Password hash is required")

    def __str__(self) -> str:
        return PASSWORD_MASK

    def __repr__(self) -> str:
        return f"PasswordHash({PASSWORD_MASK})"


def _is_timestamp(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


@dataclass(frozen=True, slots=True)
class JwtPayload:
    """Canonical token claims.

    :param sub: Subject (user id), non-empty.
    :param identifier: Account identifier (email), non-empty.
    :param iat: Issued-at epoch seconds, optional.
    :param exp: Expiry epoch seconds, optional; strictly after ``iat``.
    :raises InvalidJwtPayloadError: On any violated constraint.
    """

    sub: str
    identifier: str
    iat: int | None = None
    exp: int | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.sub, str) or not self.sub.strip():
            raise InvalidJwtPayloadError("JWT payload sub (subject) must be a non-empty string")
        if not isinstance(self.identifier, str) or not self.identifier.strip():
            raise InvalidJwtPayloadError("JWT payload identifier must be a non-empty string")
        if self.iat is not None and not _is_timestamp(self.iat):
            raise InvalidJwtPayloadError("JWT payload iat (issued at) must be a non-negative integer")
        if self.exp is not None and not _is_timestamp(self.exp):
            raise InvalidJwtPayloadError("JWT payload exp (expiration) must be a non-negative integer")
        if self.iat is not None and self.exp is not None and self.exp <= self.iat:
            raise InvalidJwtPayloadError(
                "JWT payload exp (expiration) must be greater than iat (issued at)"
            )

    @property
    def expires_at(self) -> datetime | None:
        if self.exp is None:
            return None
        return datetime.fromtimestamp(self.exp, tz=timezone.utc)

    def to_claims(self) -> dict[str, Any]:
        """Return the claim mapping, omitting unset timestamps."""
        claims: dict[str, Any] = {"sub": self.sub, "identifier": self.identifier}
        if self.iat is not None:
            claims["iat"] = self.iat
        if self.exp is not None:
            claims["exp"] = self.exp
        return claims

    @classmethod
    def from_claims(cls, claims: Mapping[str, Any]) -> JwtPayload:
        """Build a payload from a plain claim mapping; unknown claims are ignored."""
        if not isinstance(claims, Mapping):
            raise InvalidJwtPayloadError("JWT payload must be a mapping")
        return cls(
            sub=claims.get("sub"),  # type: ignore[arg-type]
            identifier=claims.get("identifier"),  # type: ignore[arg-type]
            iat=claims.get("iat"),
            exp=claims.get("exp"),
        )


__all__ = [
    "EMAIL_PATTERN",
    "PASSWORD_MIN_LENGTH",
    "Email",
    "JwtPayload",
    "PasswordHash",
    "PlaintextPassword",
    "looks_like_email",
]
