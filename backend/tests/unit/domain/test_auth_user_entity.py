"""Unit tests for the ``AuthUser`` aggregate."""

from __future__ import annotations

import pytest

from authapi.domain.entities import AuthUser
from authapi.domain.errors import InvalidUsernameError
from authapi.domain.value_objects import Email, PasswordHash


def _user(**overrides) -> AuthUser:
    fields = {
        "id": "user-1",
        "email": Email("alice@example.com"),
        "username": "alice",
        "password": PasswordHash("hash-1"),
    }
    fields.update(overrides)
    return AuthUser(**fields)


def test_new_user_defaults_to_inactive():
    user = _user()
    assert user.confirmed is False
    assert user.blocked is False
    assert user.is_active() is False
    assert user.created_at.tzinfo is not None


def test_active_requires_confirmed_and_not_blocked():
    user = _user()
    user.confirm_account()
    assert user.is_active() is True

    user.block_account()
    assert user.is_active() is False

    user.unblock_account()
    assert user.is_active() is True


def test_update_password_replaces_hash():
    user = _user()
    user.update_password(PasswordHash("hash-2"))
    assert user.password == PasswordHash("hash-2")


def test_public_dict_never_contains_password():
    data = _user(confirmed=True).to_public_dict()
    assert data == {
        "id": "user-1",
        "email": "alice@example.com",
        "username": "alice",
        "confirmed": True,
    }


@pytest.mark.parametrize("username", ["", "   "])
def test_blank_username_is_rejected(username):
    with pytest.raises(InvalidUsernameError):
        _user(username=username)
