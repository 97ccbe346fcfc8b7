"""Unit tests for the request authorization guard."""

from __future__ import annotations

import pytest

from authapi.api.guard import AuthGuard
from authapi.domain.value_objects import JwtPayload
from authapi.services._shared.errors import InvalidTokenError, NoTokenProvidedError
from authapi.services._shared.ports import StubTokenService


@pytest.fixture()
def tokens() -> StubTokenService:
    return StubTokenService()


@pytest.fixture()
def guard(tokens) -> AuthGuard:
    return AuthGuard(tokens.verify_token)


@pytest.fixture()
def token(tokens) -> str:
    return tokens.generate_token(JwtPayload(sub="user-1", identifier="a@example.com"))


def test_cookie_token_is_accepted(guard, token):
    ctx = guard.authorize({"auth_token": token}, {})
    assert ctx.token == token
    assert ctx.user_id == "user-1"
    assert ctx.payload.identifier == "a@example.com"


def test_bearer_header_is_accepted(guard, token):
    ctx = guard.authorize({}, {"Authorization": f"Bearer {token}"})
    assert ctx.token == token


def test_cookie_wins_over_header(guard, tokens, token):
    other = tokens.generate_token(JwtPayload(sub="user-2", identifier="b@example.com"))
    ctx = guard.authorize({"auth_token": token}, {"Authorization": f"Bearer {other}"})
    assert ctx.user_id == "user-1"


@pytest.mark.parametrize(
    "headers",
    [
        {},
        {"Authorization": "Basic dXNlcjpwYXNz"},
        {"Authorization": "Bearer "},
        {"Authorization": "bearer token-1"},
        {"Authorization": 42},
    ],
)
def test_missing_or_malformed_header_means_no_token(guard, headers):
    with pytest.raises(NoTokenProvidedError):
        guard.authorize({}, headers)


def test_invalid_token_is_rejected(guard, tokens, token):
    tokens.revoked.add(token)
    with pytest.raises(InvalidTokenError):
        guard.authorize({"auth_token": token}, {})


def test_unexpected_verifier_error_fails_closed(caplog):
    def explode(_token: str) -> JwtPayload:
        raise RuntimeError("database went away")

    guard = AuthGuard(explode)
    with pytest.raises(InvalidTokenError):
        guard.authorize({}, {"Authorization": "Bearer something"})
    assert any(getattr(r, "event", None) == "auth.token.rejected" for r in caplog.records)


def test_custom_cookie_name(tokens, token):
    guard = AuthGuard(tokens.verify_token, cookie_name="session")
    assert guard.authorize({"session": token}, {}).token == token
    with pytest.raises(NoTokenProvidedError):
        guard.authorize({"auth_token": token}, {})
