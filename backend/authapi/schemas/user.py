"""User profile schemas."""

from __future__ import annotations

from marshmallow import Schema, fields, validate

from authapi.schemas.auth import RegisterSchema, username_field_validators


class UserCreateSchema(RegisterSchema):
    """Payload for creating a user from the admin surface."""


class ProfileUpdateSchema(Schema):
    """Partial profile update; omitted keys keep their stored value."""

    username = fields.String(allow_none=True, validate=username_field_validators)
    first_name = fields.String(data_key="firstName", allow_none=True, validate=validate.Length(max=50))
    last_name = fields.String(data_key="lastName", allow_none=True, validate=validate.Length(max=50))


class ProfileSchema(Schema):
    """Public representation of a user profile."""

    id = fields.String(required=True)
    email = fields.String(required=True)
    username = fields.String(required=True)
    first_name = fields.String(data_key="firstName", allow_none=True)
    last_name = fields.String(data_key="lastName", allow_none=True)
    confirmed = fields.Boolean(required=True)
    blocked = fields.Boolean(required=True)
    created_at = fields.DateTime(data_key="createdAt", required=True)
    updated_at = fields.DateTime(data_key="updatedAt", required=True)
