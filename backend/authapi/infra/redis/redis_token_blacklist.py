from __future__ import annotations

import hashlib
from datetime import UTC, datetime
from typing import cast

import redis  # type: ignore[import-untyped]

from authapi.services._shared.ports import TokenBlacklist


class RedisTokenBlacklist(TokenBlacklist):
    """
    Revoked session tokens stored as TTL-bound Redis markers.

    Keys hold the SHA-256 digest of the token, never the token itself, and
    expire when the token would have.
    """

    def __init__(self, r: redis.Redis, *, prefix: str = "auth:blacklist:"):
        self.r = r
        self.prefix = prefix

    def _k(self, token: str) -> str:
        digest = hashlib.sha256(token.encode("utf-8")).hexdigest()
        return f"{self.prefix}{digest}"

    def contains(self, token: str) -> bool:
        return cast(int, self.r.exists(self._k(token))) == 1

    def add(self, token: str, expires_at: datetime) -> None:
        now = datetime.now(UTC).timestamp()
        ttl = max(1, int(expires_at.timestamp() - now))
        # idempotent: re-adding only refreshes the TTL
        self.r.set(self._k(token), "1", ex=ttl)
