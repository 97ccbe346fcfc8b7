"""Repository package exposing persistence-layer access."""

from __future__ import annotations

from authapi.repositories.auth_user import SqlAlchemyAuthUserRepository, to_entity
from authapi.repositories.base import BaseRepository, apply_sorting, parse_sort_tokens
from authapi.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "SqlAlchemyAuthUserRepository",
    "UserRepository",
    "apply_sorting",
    "parse_sort_tokens",
    "to_entity",
]
