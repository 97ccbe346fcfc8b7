"""Authentication components built once per application.

The factory turns Flask config into explicit settings here; nothing below
this module reads configuration or the environment.
"""

from __future__ import annotations

from dataclasses import dataclass

from flask import Flask, current_app

from authapi.core.config import PLACEHOLDER_SECRET
from authapi.infra.crypto.argon2_password_service import Argon2PasswordService
from authapi.infra.jwt.pyjwt_token_service import PyJwtTokenService, TokenSettings
from authapi.infra.redis.redis_token_blacklist import RedisTokenBlacklist
from authapi.repositories import SqlAlchemyAuthUserRepository
from authapi.services._shared.ports import (
    InMemoryTokenBlacklist,
    PasswordHasher,
    TokenBlacklist,
    TokenService,
)

EXTENSION_KEY = "authapi.auth"


@dataclass(frozen=True, slots=True)
class CookieSettings:
    """Attributes of the session cookie."""

    name: str = "auth_token"
    max_age: int = 24 * 60 * 60
    secure: bool = False
    samesite: str = "Strict"
    path: str = "/"


@dataclass(frozen=True, slots=True)
class AuthComponents:
    """Process-wide authentication collaborators."""

    settings: TokenSettings
    cookie: CookieSettings
    passwords: PasswordHasher
    tokens: TokenService
    blacklist: TokenBlacklist
    password_min_length: int = 8


def build_components(app: Flask) -> AuthComponents:
    """
    Assemble the authentication collaborators from ``app.config``.

    :raises RuntimeError: In production, when the JWT secret is missing or
        still the placeholder.
    """
    secret = app.config.get("JWT_SECRET_KEY") or ""
    if not app.debug and not app.testing and secret in ("", PLACEHOLDER_SECRET):
        raise RuntimeError("JWT_SECRET_KEY must be set to a real secret outside development.")

    settings = TokenSettings.from_mapping(app.config)

    redis_client = app.extensions.get("redis_client")
    blacklist: TokenBlacklist = (
        RedisTokenBlacklist(redis_client) if redis_client is not None else InMemoryTokenBlacklist()
    )
    if redis_client is None:
        app.logger.info("REDIS_URL not set; token blacklist is process-local.")

    return AuthComponents(
        settings=settings,
        cookie=CookieSettings(
            name=app.config.get("AUTH_COOKIE_NAME", "auth_token"),
            max_age=int(app.config.get("AUTH_COOKIE_MAX_AGE", 24 * 60 * 60)),
            secure=bool(app.config.get("AUTH_COOKIE_SECURE", False)),
            samesite=app.config.get("AUTH_COOKIE_SAMESITE", "Strict"),
        ),
        passwords=Argon2PasswordService(),
        # The repository reads the Flask-scoped session, the same one every
        # unit of work uses.
        tokens=PyJwtTokenService(settings, SqlAlchemyAuthUserRepository(), blacklist),
        blacklist=blacklist,
        password_min_length=int(app.config.get("PASSWORD_MIN_LENGTH", 8)),
    )


def init_app(app: Flask) -> None:
    app.extensions[EXTENSION_KEY] = build_components(app)


def get_components() -> AuthComponents:
    """Return the components of the current application."""
    components = current_app.extensions.get(EXTENSION_KEY)
    if components is None:
        raise RuntimeError("Auth components are not initialized. Call security.init_app().")
    return components
