from __future__ import annotations

from datetime import UTC, datetime
from typing import Protocol


class TokenBlacklist(Protocol):
    """
    Revocation store for issued session tokens.

    Entries only need to live until the token would have expired anyway.
    Methods are expected to be idempotent.
    """

    def contains(self, token: str) -> bool: ...
    def add(self, token: str, expires_at: datetime) -> None: ...


class InMemoryTokenBlacklist(TokenBlacklist):
    """Process-local blacklist; expired entries are dropped when read."""

    def __init__(self) -> None:
        self._revoked: dict[str, datetime] = {}

    def contains(self, token: str) -> bool:
        self._prune()
        return token in self._revoked

    def add(self, token: str, expires_at: datetime) -> None:
        self._revoked[token] = expires_at

    def __len__(self) -> int:
        self._prune()
        return len(self._revoked)

    def _prune(self) -> None:
        now = datetime.now(UTC)
        for token in [t for t, exp in self._revoked.items() if exp <= now]:
            del self._revoked[token]
