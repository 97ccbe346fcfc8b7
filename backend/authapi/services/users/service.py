"""
UsersService
============

Profile subsystem over the ``users`` table: read, partially update and delete
the caller's own profile, plus administrative create/list.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from authapi.models.user import User
from authapi.services._shared.base import BaseService, ServiceContext
from authapi.services._shared.errors import (
    NotFoundError,
    UsernameAlreadyExistsError,
    conflict_from_integrity,
)
from authapi.services._shared.ports import IdGenerator, PasswordHasher, uuid_id_generator
from authapi.services.auth.dto import RegisterIn
from authapi.services.auth.register import RegisterUseCase
from authapi.services.users.dto import UNSET, CreateUserIn, ProfileOut, ProfileUpdateIn

logger = logging.getLogger(__name__)


def to_profile(row: User) -> ProfileOut:
    return ProfileOut(
        id=row.id,
        email=row.email,
        username=row.username,
        first_name=row.first_name,
        last_name=row.last_name,
        confirmed=bool(row.confirmed),
        blocked=bool(row.blocked),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class UsersService(BaseService):
    """
    Application service for user profiles.

    Responsibilities
    ----------------
    - Retrieve the profile of an account.
    - Merge partial updates (omitted fields keep their value).
    - Delete an account; tokens issued for it stop verifying.
    - Create and list accounts for administrators.
    """

    def __init__(
        self,
        *,
        passwords: PasswordHasher,
        new_id: IdGenerator = uuid_id_generator,
        password_min_length: int = 8,
        ctx: ServiceContext | None = None,
    ) -> None:
        super().__init__(ctx=ctx)
        self.passwords = passwords
        self.new_id = new_id
        self.password_min_length = password_min_length

    def get_profile(self, user_id: str) -> ProfileOut:
        """
        :raises NotFoundError: If the account does not exist.
        """
        with self.ro_uow() as uow:
            row = uow.users.get(user_id)
            if row is None:
                raise NotFoundError("User", user_id)
            return to_profile(row)

    def update_profile(self, user_id: str, dto: ProfileUpdateIn) -> ProfileOut:
        """
        Merge ``dto`` into the stored profile.

        :raises NotFoundError: If the account does not exist.
        :raises UsernameAlreadyExistsError: If another account holds the username.
        """
        with self.rw_uow() as uow:
            repo = uow.users
            row = repo.get(user_id)
            if row is None:
                raise NotFoundError("User", user_id)

            changes: dict[str, str | None] = {}
            if dto.username is not UNSET and dto.username:
                if repo.username_taken(dto.username, exclude_id=user_id):
                    raise UsernameAlreadyExistsError(dto.username)
                changes["username"] = dto.username
            if dto.first_name is not UNSET:
                changes["first_name"] = dto.first_name or None
            if dto.last_name is not UNSET:
                changes["last_name"] = dto.last_name or None

            if changes:
                try:
                    repo.assign_updates(row, changes)
                except IntegrityError as exc:
                    conflict = conflict_from_integrity(exc, username=changes.get("username"))
                    if conflict is None:
                        raise
                    raise conflict from exc
            profile = to_profile(row)

        logger.info(
            "Profile updated",
            extra={
                "event": "users.profile.updated",
                "context": self.log_context(user_id=user_id, fields=dto.changed_fields()),
            },
        )
        return profile

    def delete_account(self, user_id: str) -> None:
        """
        :raises NotFoundError: If the account does not exist.
        """
        with self.rw_uow() as uow:
            row = uow.users.get(user_id)
            if row is None:
                raise NotFoundError("User", user_id)
            uow.users.delete(row)
        logger.warning(
            "Account deleted",
            extra={"event": "users.account.deleted", "context": self.log_context(user_id=user_id)},
        )

    def create_user(self, dto: CreateUserIn) -> ProfileOut:
        """
        Create an account with the registration rules (email checked first).

        :raises EmailAlreadyExistsError: Email taken.
        :raises UsernameAlreadyExistsError: Username taken.
        """
        with self.rw_uow() as uow:
            created = RegisterUseCase(
                uow.auth_users,
                self.passwords,
                self.new_id,
                password_min_length=self.password_min_length,
            ).execute(
                RegisterIn(email=dto.email, username=dto.username, password=dto.password)
            )
            row = uow.users.get(created.id)
            if row is None:
                raise NotFoundError("User", created.id)
            uow.users.assign_updates(
                row, {"first_name": dto.first_name or None, "last_name": dto.last_name or None}
            )
            profile = to_profile(row)
        return profile

    def list_users(self) -> list[ProfileOut]:
        with self.ro_uow() as uow:
            return [to_profile(row) for row in uow.users.list(sort=["created_at"])]
