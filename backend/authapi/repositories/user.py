"""User repository for the profile subsystem."""

from __future__ import annotations

from typing import cast

from sqlalchemy import select

from authapi.models.user import User
from authapi.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User` rows.

    It NEVER hashes passwords or issues tokens; callers hand it ready values.
    """

    model = User

    def _sortable_fields(self):
        return {
            "id": User.id,
            "email": User.email,
            "username": User.username,
            "created_at": User.created_at,
        }

    def _updatable_fields(self):
        """Assignable attributes; ``email`` and ``id`` are immutable here."""
        return {"username", "first_name", "last_name", "confirmed", "blocked", "password_hash"}

    def get_by_email(self, email: str) -> User | None:
        """Fetch a user by email (case-insensitive).

        :param email: Email address to normalise and search.
        :type email: str
        :returns: User instance or ``None`` when not found.
        :rtype: User | None
        """
        stmt = select(User).where(User.email == email.lower().strip())
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def get_by_username(self, username: str) -> User | None:
        stmt = select(User).where(User.username == username.strip())
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def username_taken(self, username: str, *, exclude_id: str | None = None) -> bool:
        """Return ``True`` when another row already uses ``username``."""
        stmt = select(User.id).where(User.username == username.strip())
        if exclude_id is not None:
            stmt = stmt.where(User.id != exclude_id)
        return self.session.execute(stmt.limit(1)).first() is not None
