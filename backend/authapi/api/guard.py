"""Request authorization gate for cookie or bearer session tokens."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from authapi.domain.value_objects import JwtPayload
from authapi.services._shared.errors import InvalidTokenError, NoTokenProvidedError

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


@dataclass(frozen=True, slots=True)
class AuthContext:
    """Identity attached to an authorized request."""

    payload: JwtPayload
    token: str

    @property
    def user_id(self) -> str:
        return self.payload.sub


class AuthGuard:
    """
    Extract and verify the session token of a request.

    The ``auth_token`` cookie wins over an ``Authorization: Bearer`` header.
    A missing, non-string or non-Bearer header counts as no token at all.
    Every verification failure surfaces as :class:`InvalidTokenError`, with
    no further detail for the caller.

    :param verify: Callable returning the verified payload or raising.
    :param cookie_name: Name of the session cookie.
    """

    def __init__(self, verify: Callable[[str], JwtPayload], *, cookie_name: str = "auth_token") -> None:
        self.verify = verify
        self.cookie_name = cookie_name

    def extract_token(self, cookies: Mapping[str, Any], headers: Mapping[str, Any]) -> str | None:
        cookie_token = cookies.get(self.cookie_name)
        if isinstance(cookie_token, str) and cookie_token:
            return cookie_token
        return self._from_header(headers.get("Authorization"))

    @staticmethod
    def _from_header(value: Any) -> str | None:
        if not isinstance(value, str) or not value.startswith(BEARER_PREFIX):
            return None
        token = value[len(BEARER_PREFIX):].strip()
        return token or None

    def authorize(self, cookies: Mapping[str, Any], headers: Mapping[str, Any]) -> AuthContext:
        """
        Return the request identity or raise.

        :raises NoTokenProvidedError: When no token could be extracted.
        :raises InvalidTokenError: When verification fails for any reason.
        """
        token = self.extract_token(cookies, headers)
        if token is None:
            raise NoTokenProvidedError()
        try:
            payload = self.verify(token)
        except InvalidTokenError:
            raise
        except Exception as exc:
            # Fail closed whatever the verifier raised.
            logger.warning(
                "Token verification raised unexpectedly",
                extra={"event": "auth.token.rejected", "context": {"reason": type(exc).__name__}},
            )
            raise InvalidTokenError() from exc
        return AuthContext(payload=payload, token=token)
