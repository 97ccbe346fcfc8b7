from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Protocol

from authapi.domain.value_objects import JwtPayload
from authapi.services._shared.errors import InvalidTokenError


class TokenService(Protocol):
    """Port for issuing and verifying session tokens."""

    def generate_token(self, payload: JwtPayload, *, expires_in: timedelta | None = None) -> str: ...

    def verify_token(self, token: str) -> JwtPayload: ...

    def read_expiry(self, token: str) -> datetime: ...


class StubTokenService(TokenService):
    """Deterministic token service used in unit tests.

    Tokens are ``token-N`` strings mapped to the payload they were issued for.
    Unknown and ``revoked`` tokens fail verification.
    """

    def __init__(self, *, lifetime: timedelta = timedelta(days=1)) -> None:
        self._lifetime = lifetime
        self._seq = 0
        self.issued: dict[str, JwtPayload] = {}
        self.revoked: set[str] = set()

    def generate_token(self, payload: JwtPayload, *, expires_in: timedelta | None = None) -> str:
        self._seq += 1
        now = int(datetime.now(UTC).timestamp())
        stamped = JwtPayload(
            sub=payload.sub,
            identifier=payload.identifier,
            iat=payload.iat if payload.iat is not None else now,
            exp=payload.exp
            if payload.exp is not None
            else now + int((expires_in or self._lifetime).total_seconds()),
        )
        token = f"token-{self._seq}"
        self.issued[token] = stamped
        return token

    def verify_token(self, token: str) -> JwtPayload:
        payload = self.issued.get(token)
        if payload is None or token in self.revoked:
            raise InvalidTokenError()
        return payload

    def read_expiry(self, token: str) -> datetime:
        payload = self.issued.get(token)
        if payload is not None and payload.expires_at is not None:
            return payload.expires_at
        return datetime.now(UTC) + self._lifetime
