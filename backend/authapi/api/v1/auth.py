"""Authentication endpoints: register, login, logout and session claims."""

from __future__ import annotations

from flask import Blueprint

from authapi.api.deps import (
    auth_service,
    clear_session_cookie,
    current_auth,
    json_response,
    load_json,
    require_auth,
    set_session_cookie,
    timing,
)
from authapi.schemas import (
    ClaimsSchema,
    LoginSchema,
    RegisteredUserSchema,
    RegisterSchema,
    SessionUserSchema,
)
from authapi.services.auth import LoginIn, LogoutIn, RegisterIn

bp = Blueprint("auth", __name__)

register_schema = RegisterSchema()
login_schema = LoginSchema()
registered_user_schema = RegisteredUserSchema()
session_user_schema = SessionUserSchema()
claims_schema = ClaimsSchema()


@bp.post("/register")
@timing
def register():
    """Create an account and return its public projection."""

    data = load_json(register_schema)
    user = auth_service().register(RegisterIn(**data))
    return json_response({"user": registered_user_schema.dump(user)}, status=201)


@bp.post("/login")
@timing
def login():
    """Authenticate credentials and set the session cookie."""

    data = load_json(login_schema)
    result = auth_service().login(LoginIn(**data))
    response = json_response({"user": session_user_schema.dump(result.user)})
    set_session_cookie(response, result.token)
    return response


@bp.post("/logout")
@require_auth
@timing
def logout():
    """Revoke the presented token and clear the session cookie."""

    result = auth_service().logout(LogoutIn(token=current_auth().token))
    response = json_response({"success": result.success})
    clear_session_cookie(response)
    return response


@bp.get("/me")
@require_auth
@timing
def me():
    """Return the verified claims of the current session."""

    return json_response({"claims": claims_schema.dump(current_auth().payload)})
