from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any, NoReturn

import jwt

from authapi.core.config import parse_duration
from authapi.domain.errors import InvalidJwtPayloadError
from authapi.domain.value_objects import JwtPayload
from authapi.services._shared.errors import InvalidTokenError
from authapi.services._shared.ports import AuthUserRepository, TokenBlacklist, TokenService

logger = logging.getLogger(__name__)

#: Version of the claim set written by :meth:`PyJwtTokenService.generate_token`.
CLAIMS_VERSION = 1


@dataclass(frozen=True, slots=True)
class TokenSettings:
    """
    Explicit signing configuration.

    :param secret: Symmetric signing key.
    :param algorithm: JWS algorithm, ``HS256`` by default.
    :param expires_in: Default token lifetime.
    """

    secret: str
    algorithm: str = "HS256"
    expires_in: timedelta = timedelta(days=1)

    def __post_init__(self) -> None:
        if not self.secret:
            raise ValueError("Token secret must not be empty")
        if self.expires_in.total_seconds() <= 0:
            raise ValueError("Token lifetime must be positive")

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> TokenSettings:
        """Build settings from a Flask-style config mapping."""
        return cls(
            secret=config["JWT_SECRET_KEY"],
            algorithm=config.get("JWT_ALGORITHM", "HS256"),
            expires_in=parse_duration(config.get("JWT_EXPIRES_IN", "1d")),
        )


class PyJwtTokenService(TokenService):
    """
    HS256 session tokens signed with PyJWT.

    Verification is fail-closed and is not purely cryptographic: after the
    signature, expiry and claim shape are checked, the token must not be
    blacklisted and its subject must still resolve to a stored user. Every
    failure, including an unavailable store, raises :class:`InvalidTokenError`.

    Parameters
    ----------
    settings: TokenSettings
        Secret, algorithm and default lifetime.
    users: AuthUserRepository
        Repository used to re-resolve the subject on verification.
    blacklist: TokenBlacklist | None
        Revocation store consulted on verification; skipped when ``None``.
    clock: Callable[[], datetime], optional
        Time source, UTC-aware.
    """

    def __init__(
        self,
        settings: TokenSettings,
        users: AuthUserRepository,
        blacklist: TokenBlacklist | None = None,
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.settings = settings
        self._users = users
        self._blacklist = blacklist
        self._clock = clock or (lambda: datetime.now(UTC))

    # ------------------------------ Signing ---------------------------------

    def generate_token(self, payload: JwtPayload, *, expires_in: timedelta | None = None) -> str:
        """
        Sign ``payload`` with the canonical claim set.

        Missing ``iat``/``exp`` are filled from the clock and the configured
        (or given) lifetime.
        """
        now = int(self._clock().timestamp())
        iat = payload.iat if payload.iat is not None else now
        lifetime = expires_in or self.settings.expires_in
        exp = payload.exp if payload.exp is not None else iat + int(lifetime.total_seconds())
        stamped = JwtPayload(sub=payload.sub, identifier=payload.identifier, iat=iat, exp=exp)

        claims = stamped.to_claims()
        claims["ver"] = CLAIMS_VERSION
        return jwt.encode(claims, self.settings.secret, algorithm=self.settings.algorithm)

    # ----------------------------- Verification -----------------------------

    def verify_token(self, token: str) -> JwtPayload:
        payload = self._decode(token)

        try:
            revoked = self._blacklist is not None and self._blacklist.contains(token)
            user = None if revoked else self._users.find_by_id(payload.sub)
        except Exception as exc:
            logger.warning(
                "Token verification store lookup failed",
                extra={"event": "auth.token.rejected", "context": {"reason": "store_error"}},
            )
            raise InvalidTokenError() from exc

        if revoked:
            self._reject("revoked")
        if user is None:
            self._reject("unknown_subject")
        return payload

    def read_expiry(self, token: str) -> datetime:
        """
        Return the signed ``exp`` of ``token``, ignoring whether it has passed.

        Falls back to now + default lifetime when the token cannot be decoded.
        """
        try:
            claims = jwt.decode(
                token,
                self.settings.secret,
                algorithms=[self.settings.algorithm],
                options={"verify_exp": False},
            )
            return datetime.fromtimestamp(int(claims["exp"]), tz=UTC)
        except (jwt.InvalidTokenError, KeyError, TypeError, ValueError):
            return self._clock() + self.settings.expires_in

    # ------------------------------ Internals -------------------------------

    def _decode(self, token: str) -> JwtPayload:
        if not isinstance(token, str) or not token:
            self._reject("empty")
        try:
            claims = jwt.decode(
                token,
                self.settings.secret,
                algorithms=[self.settings.algorithm],
                options={"require": ["sub", "exp", "iat"]},
            )
        except jwt.ExpiredSignatureError as exc:
            self._reject("expired", exc)
        except jwt.InvalidTokenError as exc:
            self._reject("malformed", exc)

        if claims.get("ver") != CLAIMS_VERSION:
            self._reject("claims_version")
        try:
            return JwtPayload.from_claims(claims)
        except InvalidJwtPayloadError as exc:
            self._reject("claims_shape", exc)

    @staticmethod
    def _reject(reason: str, cause: Exception | None = None) -> NoReturn:
        logger.info(
            "Token rejected",
            extra={"event": "auth.token.rejected", "context": {"reason": reason}},
        )
        raise InvalidTokenError() from cause
