from __future__ import annotations

from typing import Protocol
from uuid import uuid4


class IdGenerator(Protocol):
    """Port producing new opaque identifiers."""

    def __call__(self) -> str: ...


def uuid_id_generator() -> str:
    """Return a random UUID4 string."""
    return str(uuid4())


class SequentialIdGenerator:
    """Deterministic ``prefix-N`` ids for unit tests."""

    def __init__(self, prefix: str = "user") -> None:
        self._prefix = prefix
        self._seq = 0

    def __call__(self) -> str:
        self._seq += 1
        return f"{self._prefix}-{self._seq}"
