from __future__ import annotations

from dataclasses import replace
from typing import Protocol

from authapi.domain.entities import AuthUser
from authapi.services._shared.errors import (
    EmailAlreadyExistsError,
    UsernameAlreadyExistsError,
)


class AuthUserRepository(Protocol):
    """
    Lookup and persistence of :class:`AuthUser` aggregates.

    Email lookups are case-insensitive. ``save`` raises
    :class:`EmailAlreadyExistsError` / :class:`UsernameAlreadyExistsError` when
    the store rejects a duplicate, even if the caller checked beforehand.
    """

    def find_by_id(self, user_id: str) -> AuthUser | None: ...
    def find_by_email(self, email: str) -> AuthUser | None: ...
    def find_by_username(self, username: str) -> AuthUser | None: ...
    def save(self, user: AuthUser) -> AuthUser: ...
    def update(self, user: AuthUser) -> AuthUser: ...
    def delete(self, user_id: str) -> None: ...


class InMemoryAuthUserRepository(AuthUserRepository):
    """Dict-backed repository used in unit tests.

    ``saved`` records every successful ``save`` call so tests can assert the
    use case never reached persistence.
    """

    def __init__(self, users: list[AuthUser] | None = None) -> None:
        self._users: dict[str, AuthUser] = {}
        self.saved: list[AuthUser] = []
        for user in users or []:
            self._users[user.id] = user

    def find_by_id(self, user_id: str) -> AuthUser | None:
        return self._users.get(user_id)

    def find_by_email(self, email: str) -> AuthUser | None:
        needle = email.lower()
        return next((u for u in self._users.values() if u.email.normalized == needle), None)

    def find_by_username(self, username: str) -> AuthUser | None:
        return next((u for u in self._users.values() if u.username == username), None)

    def save(self, user: AuthUser) -> AuthUser:
        for existing in self._users.values():
            if existing.id == user.id:
                continue
            if existing.email == user.email:
                raise EmailAlreadyExistsError(user.email.value)
            if existing.username == user.username:
                raise UsernameAlreadyExistsError(user.username)
        stored = replace(user)
        self._users[user.id] = stored
        self.saved.append(stored)
        return stored

    def update(self, user: AuthUser) -> AuthUser:
        if user.id not in self._users:
            raise KeyError(user.id)
        self._users[user.id] = user
        return user

    def delete(self, user_id: str) -> None:
        self._users.pop(user_id, None)
