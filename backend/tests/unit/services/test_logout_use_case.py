"""Unit tests for ``LogoutUseCase``."""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from authapi.domain.value_objects import JwtPayload
from authapi.services._shared.ports import InMemoryTokenBlacklist, StubTokenService
from authapi.services.auth import LogoutIn, LogoutUseCase


class RecordingBlacklist(InMemoryTokenBlacklist):
    def __init__(self) -> None:
        super().__init__()
        self.calls: list[tuple[str, datetime]] = []

    def add(self, token: str, expires_at: datetime) -> None:
        self.calls.append((token, expires_at))
        super().add(token, expires_at)


class BrokenBlacklist(InMemoryTokenBlacklist):
    def add(self, token: str, expires_at: datetime) -> None:
        raise ConnectionError("blacklist down")


def test_logout_revokes_token_until_its_expiry():
    tokens = StubTokenService()
    token = tokens.generate_token(JwtPayload(sub="u1", identifier="a@b.co"))
    blacklist = RecordingBlacklist()

    out = LogoutUseCase(blacklist, tokens).execute(LogoutIn(token=token))

    assert out.success is True
    assert blacklist.calls == [(token, tokens.issued[token].expires_at)]
    assert blacklist.contains(token) is True


def test_logout_without_token_never_touches_blacklist():
    blacklist = RecordingBlacklist()
    out = LogoutUseCase(blacklist, StubTokenService()).execute(LogoutIn())
    assert out.success is True
    assert blacklist.calls == []


def test_logout_swallows_blacklist_failures(caplog):
    caplog.set_level(logging.WARNING, logger="authapi.services.auth.logout")
    tokens = StubTokenService()
    token = tokens.generate_token(JwtPayload(sub="u1", identifier="a@b.co"))

    out = LogoutUseCase(BrokenBlacklist(), tokens).execute(LogoutIn(token=token))

    assert out.success is True
    events = [getattr(r, "event", None) for r in caplog.records]
    assert "auth.blacklist.failed" in events
    assert all(token not in r.getMessage() for r in caplog.records)


def test_unknown_token_is_revoked_for_default_lifetime():
    blacklist = RecordingBlacklist()
    before = datetime.now(UTC)
    LogoutUseCase(blacklist, StubTokenService()).execute(LogoutIn(token="never-issued"))
    (token, expires_at), = blacklist.calls
    assert token == "never-issued"
    assert expires_at > before
