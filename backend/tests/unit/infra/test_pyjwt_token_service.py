"""Unit tests for the PyJWT session token service."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import jwt
import pytest
from freezegun import freeze_time

from authapi.domain.entities import AuthUser
from authapi.domain.value_objects import Email, JwtPayload, PasswordHash
from authapi.infra.jwt.pyjwt_token_service import CLAIMS_VERSION, PyJwtTokenService, TokenSettings
from authapi.services._shared.errors import InvalidTokenError
from authapi.services._shared.ports import InMemoryAuthUserRepository, InMemoryTokenBlacklist

SECRET = "unit-test-secret-that-is-long-enough-for-hs256"


@pytest.fixture()
def alice() -> AuthUser:
    return AuthUser(
        id="user-1",
        email=Email("alice@example.com"),
        username="alice",
        password=PasswordHash("hash"),
        confirmed=True,
    )


@pytest.fixture()
def users(alice) -> InMemoryAuthUserRepository:
    return InMemoryAuthUserRepository([alice])


@pytest.fixture()
def blacklist() -> InMemoryTokenBlacklist:
    return InMemoryTokenBlacklist()


@pytest.fixture()
def service(users, blacklist) -> PyJwtTokenService:
    return PyJwtTokenService(TokenSettings(secret=SECRET), users, blacklist)


def _payload() -> JwtPayload:
    return JwtPayload(sub="user-1", identifier="alice@example.com")


class TestTokenSettings:
    def test_from_mapping_parses_duration(self):
        settings = TokenSettings.from_mapping(
            {"JWT_SECRET_KEY": SECRET, "JWT_EXPIRES_IN": "15m"}
        )
        assert settings.algorithm == "HS256"
        assert settings.expires_in == timedelta(minutes=15)

    def test_rejects_empty_secret(self):
        with pytest.raises(ValueError, match="secret"):
            TokenSettings(secret="")

    def test_rejects_non_positive_lifetime(self):
        with pytest.raises(ValueError, match="lifetime"):
            TokenSettings(secret=SECRET, expires_in=timedelta(0))


class TestGenerate:
    @freeze_time("2026-03-01 12:00:00")
    def test_writes_canonical_claims(self, service):
        token = service.generate_token(_payload())
        claims = jwt.decode(token, SECRET, algorithms=["HS256"])
        now = int(datetime(2026, 3, 1, 12, tzinfo=UTC).timestamp())
        assert claims == {
            "sub": "user-1",
            "identifier": "alice@example.com",
            "iat": now,
            "exp": now + 24 * 60 * 60,
            "ver": CLAIMS_VERSION,
        }

    def test_explicit_lifetime_overrides_default(self, service):
        token = service.generate_token(_payload(), expires_in=timedelta(minutes=5))
        claims = jwt.decode(token, SECRET, algorithms=["HS256"])
        assert claims["exp"] - claims["iat"] == 300


class TestVerify:
    def test_returns_payload_for_valid_token(self, service):
        payload = service.verify_token(service.generate_token(_payload()))
        assert payload.sub == "user-1"
        assert payload.identifier == "alice@example.com"
        assert payload.exp is not None and payload.iat is not None

    def test_rejects_expired_token(self, service):
        with freeze_time("2026-03-01 12:00:00") as frozen:
            token = service.generate_token(_payload(), expires_in=timedelta(minutes=1))
            frozen.tick(timedelta(minutes=2))
            with pytest.raises(InvalidTokenError):
                service.verify_token(token)

    def test_rejects_foreign_signature(self, service):
        forged = jwt.encode(
            {"sub": "user-1", "identifier": "alice@example.com", "iat": 1, "exp": 4_000_000_000, "ver": 1},
            "another-secret-that-is-long-enough-for-hs256",
            algorithm="HS256",
        )
        with pytest.raises(InvalidTokenError):
            service.verify_token(forged)

    @pytest.mark.parametrize("token", ["", "not.a.jwt", "garbage"])
    def test_rejects_malformed_tokens(self, service, token):
        with pytest.raises(InvalidTokenError):
            service.verify_token(token)

    def test_rejects_other_claims_version(self, service):
        now = int(datetime.now(UTC).timestamp())
        token = jwt.encode(
            {"sub": "user-1", "identifier": "alice@example.com", "iat": now, "exp": now + 60, "ver": 2},
            SECRET,
            algorithm="HS256",
        )
        with pytest.raises(InvalidTokenError):
            service.verify_token(token)

    def test_rejects_token_without_identifier(self, service):
        now = int(datetime.now(UTC).timestamp())
        token = jwt.encode(
            {"sub": "user-1", "iat": now, "exp": now + 60, "ver": 1}, SECRET, algorithm="HS256"
        )
        with pytest.raises(InvalidTokenError):
            service.verify_token(token)

    def test_rejects_blacklisted_token(self, service, blacklist):
        token = service.generate_token(_payload())
        blacklist.add(token, datetime.now(UTC) + timedelta(hours=1))
        with pytest.raises(InvalidTokenError):
            service.verify_token(token)

    def test_rejects_token_of_deleted_user(self, service, users):
        token = service.generate_token(_payload())
        users.delete("user-1")
        with pytest.raises(InvalidTokenError):
            service.verify_token(token)

    def test_store_failure_fails_closed(self, users):
        class BrokenBlacklist(InMemoryTokenBlacklist):
            def contains(self, token: str) -> bool:
                raise ConnectionError("store down")

        service = PyJwtTokenService(TokenSettings(secret=SECRET), users, BrokenBlacklist())
        token = service.generate_token(_payload())
        with pytest.raises(InvalidTokenError):
            service.verify_token(token)

    def test_rejection_is_logged_without_token(self, service, caplog):
        caplog.set_level("INFO", logger="authapi.infra.jwt.pyjwt_token_service")
        with pytest.raises(InvalidTokenError):
            service.verify_token("garbage")
        record = next(r for r in caplog.records if getattr(r, "event", None) == "auth.token.rejected")
        assert record.context == {"reason": "malformed"}
        assert "garbage" not in record.getMessage()


class TestReadExpiry:
    def test_reads_exp_of_expired_token(self, service):
        with freeze_time("2026-03-01 12:00:00") as frozen:
            token = service.generate_token(_payload(), expires_in=timedelta(minutes=1))
            frozen.tick(timedelta(hours=1))
            assert service.read_expiry(token) == datetime(2026, 3, 1, 12, 1, tzinfo=UTC)

    def test_falls_back_to_default_lifetime(self):
        clock_now = datetime(2026, 3, 1, tzinfo=UTC)
        service = PyJwtTokenService(
            TokenSettings(secret=SECRET),
            InMemoryAuthUserRepository(),
            clock=lambda: clock_now,
        )
        assert service.read_expiry("garbage") == clock_now + timedelta(days=1)
