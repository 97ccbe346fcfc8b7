"""
authapi.services._shared.ports
==============================

*Ports* (hexagonal interfaces) the authentication use cases depend on.

Modules
-------
- :mod:`auth_user_repository`:
    :class:`~.AuthUserRepository` for loading and persisting :class:`AuthUser`.
- :mod:`password_hasher`:
    :class:`~.PasswordHasher` for one-way hashing and fail-closed comparison.
- :mod:`token_service`:
    :class:`~.TokenService` for signing and verifying session tokens.
- :mod:`token_blacklist`:
    :class:`~.TokenBlacklist` for revoking tokens until they expire.
- :mod:`id_generator`:
    :class:`~.IdGenerator` for new account identifiers.

Each port ships an in-memory or stub implementation for unit tests; the
production adapters live under ``authapi.infra`` and ``authapi.repositories``.
"""

from __future__ import annotations

from .auth_user_repository import AuthUserRepository, InMemoryAuthUserRepository
from .id_generator import IdGenerator, SequentialIdGenerator, uuid_id_generator
from .password_hasher import PasswordHasher, StubPasswordHasher
from .token_blacklist import InMemoryTokenBlacklist, TokenBlacklist
from .token_service import StubTokenService, TokenService

__all__ = [
    "AuthUserRepository",
    "IdGenerator",
    "InMemoryAuthUserRepository",
    "InMemoryTokenBlacklist",
    "PasswordHasher",
    "SequentialIdGenerator",
    "StubPasswordHasher",
    "StubTokenService",
    "TokenBlacklist",
    "TokenService",
    "uuid_id_generator",
]
