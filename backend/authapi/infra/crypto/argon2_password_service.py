from __future__ import annotations

from argon2 import PasswordHasher as _Argon2Hasher
from argon2.exceptions import Argon2Error, InvalidHashError

from authapi.domain.value_objects import PasswordHash, PlaintextPassword
from authapi.services._shared.ports import PasswordHasher


class Argon2PasswordService(PasswordHasher):
    """
    Argon2id password hashing with the library's recommended parameters.

    ``compare`` is fail-closed: a mismatch, a malformed stored hash or any
    verifier error all yield ``False``.
    """

    def __init__(self, hasher: _Argon2Hasher | None = None) -> None:
        self._hasher = hasher or _Argon2Hasher()

    def hash(self, password: PlaintextPassword) -> PasswordHash:
        return PasswordHash(self._hasher.hash(password.value))

    def compare(self, password: PlaintextPassword | str, hashed: PasswordHash | str) -> bool:
        raw = password.value if isinstance(password, PlaintextPassword) else password
        stored = hashed.value if isinstance(hashed, PasswordHash) else hashed
        if not isinstance(raw, str) or not isinstance(stored, str) or not stored:
            return False
        try:
            return self._hasher.verify(stored, raw)
        except (Argon2Error, InvalidHashError, ValueError, TypeError):
            return False
