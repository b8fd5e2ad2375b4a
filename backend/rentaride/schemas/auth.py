"""Authentication-related Marshmallow schemas."""

from __future__ import annotations

from marshmallow import Schema, fields, validate

from rentaride.models.user import ACCOUNT_TYPE_ROLES
from rentaride.schemas.user import ProfileFieldsSchema, password_field, username_field


class RegisterSchema(ProfileFieldsSchema):
    """Input payload for self-service registration."""

    username = username_field()
    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = password_field()
    account_type = fields.String(
        load_default="individual", validate=validate.OneOf(sorted(ACCOUNT_TYPE_ROLES))
    )


class LoginSchema(Schema):
    """Input payload for authenticating a user by username or email."""

    username = fields.String(required=True, validate=validate.Length(min=1, max=254))
    password = fields.String(required=True, validate=validate.Length(min=1, max=128))


class PasswordResetRequestSchema(Schema):
    email = fields.Email(required=True, validate=validate.Length(max=254))


class PasswordResetConfirmSchema(Schema):
    password = password_field()


class TokenResponseSchema(Schema):
    """Response payload containing an access token."""

    accessToken = fields.String(required=True, attribute="access_token")


class ProfileSchema(Schema):
    """Response payload exposing the authenticated user's own profile."""

    id = fields.Integer(required=True)
    username = fields.String(required=True)
    email = fields.Email(required=True)
    roles = fields.List(fields.String())
    first_name = fields.String(allow_none=True)
    other_names = fields.String(allow_none=True)
    last_name = fields.String(allow_none=True)
    enterprise_name = fields.String(allow_none=True)
    phone = fields.String(allow_none=True)
    address = fields.String(allow_none=True)
    id_type = fields.String(allow_none=True)
    id_number = fields.String(allow_none=True)
    date_of_birth = fields.Date(allow_none=True)
    verified = fields.Boolean()
