"""Tests for the SQLAlchemy ``AuthUser`` repository adapter."""

from __future__ import annotations

import pytest
from sqlalchemy.exc import IntegrityError

from authapi.domain.entities import AuthUser
from authapi.domain.value_objects import Email, PasswordHash
from authapi.models.user import User
from authapi.repositories import SqlAlchemyAuthUserRepository
from authapi.services._shared.errors import (
    EmailAlreadyExistsError,
    NotFoundError,
    UsernameAlreadyExistsError,
    violates,
)
from tests.factories.user import UserFactory


@pytest.fixture()
def repo(session) -> SqlAlchemyAuthUserRepository:
    return SqlAlchemyAuthUserRepository(session=session)


def _entity(**overrides) -> AuthUser:
    fields = {
        "id": "2b0a0d52-3f44-4f0e-9d52-7e1f7c8d7f10",
        "email": Email("New@Example.com"),
        "username": "newbie",
        "password": PasswordHash("$argon2id$fake"),
        "confirmed": True,
    }
    fields.update(overrides)
    return AuthUser(**fields)


def test_find_maps_row_to_entity(repo):
    row = UserFactory(email="ada@example.com", username="ada", blocked=True)

    by_id = repo.find_by_id(row.id)
    assert by_id is not None
    assert by_id.email == Email("ada@example.com")
    assert by_id.password == PasswordHash(row.password_hash)
    assert by_id.blocked is True
    assert by_id.created_at.tzinfo is not None

    assert repo.find_by_email("ADA@example.com").id == row.id
    assert repo.find_by_username("ada").id == row.id
    assert repo.find_by_username("ADA") is None
    assert repo.find_by_id("missing") is None


def test_save_persists_normalized_email(repo, session):
    saved = repo.save(_entity())
    row = session.get(User, saved.id)
    assert row.email == "new@example.com"
    assert row.username == "newbie"
    assert row.confirmed is True


def test_save_translates_email_constraint(repo):
    UserFactory(email="new@example.com")
    with pytest.raises(EmailAlreadyExistsError):
        repo.save(_entity())


def test_save_translates_username_constraint(repo):
    UserFactory(username="newbie")
    with pytest.raises(UsernameAlreadyExistsError):
        repo.save(_entity())


def test_update_writes_state_flags(repo, session):
    row = UserFactory(confirmed=False)
    user = repo.find_by_id(row.id)
    user.confirm_account()
    user.block_account()

    updated = repo.update(user)
    assert updated.confirmed is True
    assert updated.blocked is True
    assert session.get(User, row.id).blocked is True


def test_update_unknown_user(repo):
    with pytest.raises(NotFoundError):
        repo.update(_entity())


def test_delete_is_idempotent(repo, session):
    row = UserFactory()
    repo.delete(row.id)
    repo.delete(row.id)
    assert session.get(User, row.id) is None


def test_violates_matches_sqlite_and_postgres_messages():
    sqlite = IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed: users.email"))
    postgres = IntegrityError(
        "INSERT", {}, Exception('duplicate key value violates unique constraint "uq_users_username"')
    )
    assert violates(sqlite, "uq_users_email") is True
    assert violates(sqlite, "uq_users_username") is False
    assert violates(postgres, "uq_users_username") is True
