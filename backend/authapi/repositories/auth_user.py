"""SQLAlchemy adapter for the :class:`AuthUserRepository` port."""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from authapi.domain.entities import AuthUser
from authapi.domain.value_objects import Email, PasswordHash
from authapi.models.user import User
from authapi.repositories.user import UserRepository
from authapi.services._shared.errors import NotFoundError, conflict_from_integrity
from authapi.services._shared.ports import AuthUserRepository


def _as_utc(value: datetime | None) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns.
    if value is None:
        return datetime.now(UTC)
    return value if value.tzinfo is not None else value.replace(tzinfo=UTC)


def to_entity(row: User) -> AuthUser:
    """Map a ``users`` row onto the :class:`AuthUser` aggregate."""
    return AuthUser(
        id=row.id,
        email=Email(row.email),
        username=row.username,
        password=PasswordHash(row.password_hash),
        confirmed=bool(row.confirmed),
        blocked=bool(row.blocked),
        created_at=_as_utc(row.created_at),
    )


class SqlAlchemyAuthUserRepository(AuthUserRepository):
    """
    Load and persist :class:`AuthUser` aggregates through :class:`UserRepository`.

    ``save`` flushes immediately so that a unique-constraint violation raised
    by a concurrent registration surfaces as
    :class:`~authapi.services._shared.errors.EmailAlreadyExistsError` or
    :class:`~authapi.services._shared.errors.UsernameAlreadyExistsError`.
    """

    def __init__(self, session: Session | None = None) -> None:
        self.rows = UserRepository(session=session)

    def find_by_id(self, user_id: str) -> AuthUser | None:
        row = self.rows.get(user_id)
        return to_entity(row) if row is not None else None

    def find_by_email(self, email: str) -> AuthUser | None:
        row = self.rows.get_by_email(email)
        return to_entity(row) if row is not None else None

    def find_by_username(self, username: str) -> AuthUser | None:
        row = self.rows.get_by_username(username)
        return to_entity(row) if row is not None else None

    def save(self, user: AuthUser) -> AuthUser:
        row = User(
            id=user.id,
            email=user.email.value,
            username=user.username,
            password_hash=user.password.value,
            confirmed=user.confirmed,
            blocked=user.blocked,
            created_at=user.created_at,
            updated_at=user.created_at,
        )
        try:
            self.rows.add(row)
        except IntegrityError as exc:
            conflict = conflict_from_integrity(
                exc, email=user.email.value, username=user.username
            )
            if conflict is None:
                raise
            raise conflict from exc
        return to_entity(row)

    def update(self, user: AuthUser) -> AuthUser:
        row = self.rows.get(user.id)
        if row is None:
            raise NotFoundError("User", user.id)
        try:
            self.rows.assign_updates(
                row,
                {
                    "username": user.username,
                    "password_hash": user.password.value,
                    "confirmed": user.confirmed,
                    "blocked": user.blocked,
                },
            )
        except IntegrityError as exc:
            conflict = conflict_from_integrity(exc, username=user.username)
            if conflict is None:
                raise
            raise conflict from exc
        return to_entity(row)

    def delete(self, user_id: str) -> None:
        row = self.rows.get(user_id)
        if row is not None:
            self.rows.delete(row)
