"""Marshmallow schemas for request validation and response serialization."""

from __future__ import annotations

from .auth import (
    ClaimsSchema,
    LoginSchema,
    RegisteredUserSchema,
    RegisterSchema,
    SessionUserSchema,
)
from .user import ProfileSchema, ProfileUpdateSchema, UserCreateSchema

__all__ = [
    "ClaimsSchema",
    "LoginSchema",
    "ProfileSchema",
    "ProfileUpdateSchema",
    "RegisterSchema",
    "RegisteredUserSchema",
    "SessionUserSchema",
    "UserCreateSchema",
]
