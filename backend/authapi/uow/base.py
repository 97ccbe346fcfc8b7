"""Transaction boundary shared by the auth and profile services."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from authapi.repositories import SqlAlchemyAuthUserRepository, UserRepository


class UnitOfWork(ABC):
    """
    One transaction spanning every repository a use case touches.

    ``auth_users`` serves the login/registration flows with domain entities;
    ``users`` serves profile edits on ORM rows. Leaving the block commits,
    unless it raised, in which case everything is rolled back.
    """

    users: UserRepository
    auth_users: SqlAlchemyAuthUserRepository

    def __enter__(self) -> UnitOfWork:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is not None:
            self.rollback()
            return
        try:
            self.commit()
        except Exception:
            self.rollback()
            raise

    @abstractmethod
    def commit(self) -> None: ...

    @abstractmethod
    def rollback(self) -> None: ...
