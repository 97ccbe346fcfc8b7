"""User profile endpoints."""

from __future__ import annotations

from flask import Blueprint, current_app

from authapi.api.deps import (
    clear_session_cookie,
    current_auth,
    json_response,
    load_json,
    require_auth,
    timing,
    users_service,
)
from authapi.schemas import ProfileSchema, ProfileUpdateSchema, UserCreateSchema
from authapi.services.users import CreateUserIn, ProfileUpdateIn

bp = Blueprint("users", __name__)

profile_schema = ProfileSchema()
profiles_schema = ProfileSchema(many=True)
profile_update_schema = ProfileUpdateSchema()
user_create_schema = UserCreateSchema()


@bp.get("")
@require_auth
@timing
def list_users():
    """List every profile, oldest first."""

    profiles = users_service().list_users()
    return json_response({"users": profiles_schema.dump(profiles)})


@bp.post("")
@require_auth
@timing
def create_user():
    """Create an account on behalf of an administrator."""

    data = load_json(user_create_schema)
    profile = users_service().create_user(CreateUserIn(**data))
    return json_response({"user": profile_schema.dump(profile)}, status=201)


@bp.get("/me")
@require_auth
@timing
def get_me():
    profile = users_service().get_profile(current_auth().user_id)
    return json_response({"user": profile_schema.dump(profile)})


@bp.patch("/me")
@require_auth
@timing
def update_me():
    """Apply a partial update to the caller's profile."""

    data = load_json(profile_update_schema)
    profile = users_service().update_profile(
        current_auth().user_id, ProfileUpdateIn.from_mapping(data)
    )
    return json_response({"user": profile_schema.dump(profile)})


@bp.delete("/me")
@require_auth
@timing
def delete_me():
    """Delete the caller's account and drop the session cookie."""

    users_service().delete_account(current_auth().user_id)
    response = current_app.response_class(status=204)
    clear_session_cookie(response)
    return response
