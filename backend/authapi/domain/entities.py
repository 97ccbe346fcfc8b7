"""Credential-holder aggregate used by the authentication use cases."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime

from authapi.domain.errors import InvalidUsernameError
from authapi.domain.value_objects import Email, PasswordHash


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(slots=True)
class AuthUser:
    """Account identity with its hashed password and activation flags.

    :param id: Opaque identifier.
    :param email: Account email.
    :param username: Unique handle, non-blank.
    :param password: Stored hash; replaced through :meth:`update_password`.
    :param confirmed: Whether the account has been confirmed.
    :param blocked: Whether an administrator has blocked the account.
    :param created_at: Creation timestamp (UTC).
    """

    id: str
    email: Email
    username: str
    password: PasswordHash
    confirmed: bool = False
    blocked: bool = False
    created_at: datetime = field(default_factory=_utcnow)

    def __post_init__(self) -> None:
        if not isinstance(self.username, str) or not self.username.strip():
            raise InvalidUsernameError("Username is required")

    def is_active(self) -> bool:
        return self.confirmed and not self.blocked

    def confirm_account(self) -> None:
        self.confirmed = True

    def block_account(self) -> None:
        self.blocked = True

    def unblock_account(self) -> None:
        self.blocked = False

    def update_password(self, new_hash: PasswordHash) -> None:
        self.password = new_hash

    def to_public_dict(self) -> dict[str, object]:
        """Return the registration projection; the hash is never included."""
        return {
            "id": self.id,
            "email": self.email.value,
            "username": self.username,
            "confirmed": self.confirmed,
        }
