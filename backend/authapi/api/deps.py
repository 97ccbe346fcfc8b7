"""Shared API helpers for request parsing and cross-cutting concerns."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import Any, TypeVar

from flask import Response, current_app, g, jsonify, request
from marshmallow import Schema

from authapi.api.guard import AuthContext, AuthGuard
from authapi.core.errors import APIError
from authapi.core.logger import ensure_request_id
from authapi.core.security import AuthComponents, get_components
from authapi.services._shared.base import ServiceContext
from authapi.services.auth.service import AuthService
from authapi.services.users.service import UsersService

F = TypeVar("F", bound=Callable[..., Any])


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def load_json(schema: Schema) -> dict[str, Any]:
    """Validate the JSON object body of the request with ``schema``.

    :raises APIError: If the body is not a JSON object (400).
    :raises marshmallow.ValidationError: If validation fails (422).
    """

    body = request.get_json(silent=True)
    if body is None:
        body = {}
    if not isinstance(body, dict):
        raise APIError("Request body must be a JSON object", status_code=400, code="bad_request")
    return schema.load(body)


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request.endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]


# ------------------------------ Services -----------------------------------


def service_context() -> ServiceContext:
    auth: AuthContext | None = getattr(g, "auth", None)
    return ServiceContext(
        actor_id=auth.user_id if auth is not None else None,
        request_id=ensure_request_id(),
    )


def auth_service(components: AuthComponents | None = None) -> AuthService:
    c = components or get_components()
    return AuthService(
        passwords=c.passwords,
        tokens=c.tokens,
        blacklist=c.blacklist,
        password_min_length=c.password_min_length,
        ctx=service_context(),
    )


def users_service(components: AuthComponents | None = None) -> UsersService:
    c = components or get_components()
    return UsersService(
        passwords=c.passwords,
        password_min_length=c.password_min_length,
        ctx=service_context(),
    )


# ------------------------------- Auth --------------------------------------


def current_auth() -> AuthContext:
    """Return the identity attached by :func:`require_auth`."""

    auth: AuthContext | None = getattr(g, "auth", None)
    if auth is None:
        raise RuntimeError("current_auth() called outside a @require_auth endpoint.")
    return auth


def require_auth(func: F) -> F:
    """Reject the request unless it carries a valid session token.

    On success the :class:`AuthContext` is stored in ``g.auth``.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        components = get_components()
        guard = AuthGuard(auth_service(components).verify, cookie_name=components.cookie.name)
        g.auth = guard.authorize(request.cookies, request.headers)
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def set_session_cookie(response: Response, token: str) -> None:
    cookie = get_components().cookie
    response.set_cookie(
        cookie.name,
        token,
        max_age=cookie.max_age,
        secure=cookie.secure,
        httponly=True,
        samesite=cookie.samesite,
        path=cookie.path,
    )


def clear_session_cookie(response: Response) -> None:
    cookie = get_components().cookie
    response.delete_cookie(
        cookie.name,
        path=cookie.path,
        secure=cookie.secure,
        httponly=True,
        samesite=cookie.samesite,
    )
