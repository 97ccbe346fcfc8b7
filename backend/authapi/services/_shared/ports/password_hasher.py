from __future__ import annotations

from typing import Protocol

from authapi.domain.value_objects import PasswordHash, PlaintextPassword


class PasswordHasher(Protocol):
    """Port for one-way password hashing.

    ``compare`` returns ``False`` instead of raising, including when the
    stored hash is malformed.
    """

    def hash(self, password: PlaintextPassword) -> PasswordHash: ...
    def compare(self, password: PlaintextPassword | str, hashed: PasswordHash | str) -> bool: ...


class StubPasswordHasher(PasswordHasher):
    """Reversible, instant hasher for unit tests."""

    PREFIX = "stub$"

    def hash(self, password: PlaintextPassword) -> PasswordHash:
        return PasswordHash(f"{self.PREFIX}{password.value}")

    def compare(self, password: PlaintextPassword | str, hashed: PasswordHash | str) -> bool:
        raw = password.value if isinstance(password, PlaintextPassword) else password
        stored = hashed.value if isinstance(hashed, PasswordHash) else hashed
        return stored == f"{self.PREFIX}{raw}"
