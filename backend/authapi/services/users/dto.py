from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Final


class _Unset:
    """Marker for a field the client did not send."""

    _instance: _Unset | None = None

    def __new__(cls) -> _Unset:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Final = _Unset()


@dataclass(frozen=True, slots=True)
class ProfileUpdateIn:
    """
    Partial profile update.

    :param username: New handle; ``UNSET`` or empty keeps the current one.
    :param first_name: New first name; ``UNSET`` keeps it, ``None``/``""`` clears it.
    :param last_name: New last name; ``UNSET`` keeps it, ``None``/``""`` clears it.
    """

    username: str | None | _Unset = UNSET
    first_name: str | None | _Unset = UNSET
    last_name: str | None | _Unset = UNSET

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> ProfileUpdateIn:
        return cls(**{k: data[k] for k in ("username", "first_name", "last_name") if k in data})

    def changed_fields(self) -> list[str]:
        return [
            name
            for name in ("username", "first_name", "last_name")
            if getattr(self, name) is not UNSET
        ]


@dataclass(frozen=True, slots=True)
class CreateUserIn:
    """Administrative account creation; same rules as self-registration."""

    email: str
    username: str
    password: str
    first_name: str | None = None
    last_name: str | None = None

    def __repr__(self) -> str:
        return f"CreateUserIn(email={self.email!r}, username={self.username!r}, password='********')"


@dataclass(frozen=True, slots=True)
class ProfileOut:
    """Public profile projection; the password hash is never part of it."""

    id: str
    email: str
    username: str
    first_name: str | None
    last_name: str | None
    confirmed: bool
    blocked: bool
    created_at: datetime
    updated_at: datetime
