"""Authentication-related Marshmallow schemas."""

from __future__ import annotations

from marshmallow import Schema, fields, validate

USERNAME_PATTERN = r"^[A-Za-z0-9_-]+$"

username_field_validators = [
    validate.Length(min=3, max=50),
    validate.Regexp(
        USERNAME_PATTERN,
        error="Username may only contain letters, digits, underscores and hyphens.",
    ),
]


class RegisterSchema(Schema):
    """Input payload for account registration.

    ``email`` is only length-checked here; its format is enforced by the
    ``Email`` value object and reported as a 400.
    """

    email = fields.String(required=True, validate=validate.Length(min=1, max=254))
    username = fields.String(required=True, validate=username_field_validators)
    password = fields.String(required=True, load_only=True, validate=validate.Length(min=8, max=128))
    first_name = fields.String(
        data_key="firstName", load_default=None, allow_none=True, validate=validate.Length(max=50)
    )
    last_name = fields.String(
        data_key="lastName", load_default=None, allow_none=True, validate=validate.Length(max=50)
    )


class LoginSchema(Schema):
    """Input payload for authenticating with an email or a username."""

    identifier = fields.String(
        data_key="emailOrUsername", required=True, validate=validate.Length(min=1, max=254)
    )
    password = fields.String(required=True, load_only=True, validate=validate.Length(min=1, max=128))


class RegisteredUserSchema(Schema):
    """Projection returned by registration."""

    id = fields.String(required=True)
    email = fields.String(required=True)
    username = fields.String(required=True)
    confirmed = fields.Boolean(required=True)


class SessionUserSchema(Schema):
    """Projection returned by login."""

    id = fields.String(required=True)
    email = fields.String(required=True)
    username = fields.String(required=True)


class ClaimsSchema(Schema):
    """Verified claims of the current session."""

    sub = fields.String(required=True)
    identifier = fields.String(required=True)
    iat = fields.Integer(allow_none=True)
    exp = fields.Integer(allow_none=True)
