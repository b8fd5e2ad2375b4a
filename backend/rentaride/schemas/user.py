"""User resource schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate

from rentaride.models.user import ROLES

USERNAME_PATTERN = r"^[A-Za-z0-9_.-]+$"


def username_field(**kwargs) -> fields.String:
    """Usernames appear in mailed URLs, so only URL-safe characters are accepted."""
    kwargs.setdefault("required", True)
    return fields.String(
        validate=[
            validate.Length(min=3, max=50),
            validate.Regexp(
                USERNAME_PATTERN,
                error="Username may only contain letters, digits, '_', '.' and '-'.",
            ),
        ],
        **kwargs,
    )


def password_field(**kwargs) -> fields.String:
    kwargs.setdefault("required", True)
    return fields.String(load_only=True, validate=validate.Length(min=8, max=128), **kwargs)


class ProfileFieldsSchema(Schema):
    """Optional profile fields shared by registration and profile updates."""

    first_name = fields.String(validate=validate.Length(max=50), allow_none=True)
    other_names = fields.String(validate=validate.Length(max=50), allow_none=True)
    last_name = fields.String(validate=validate.Length(max=50), allow_none=True)
    enterprise_name = fields.String(validate=validate.Length(max=100), allow_none=True)
    phone = fields.String(validate=validate.Length(max=20), allow_none=True)
    address = fields.String(validate=validate.Length(max=255), allow_none=True)
    id_type = fields.String(validate=validate.Length(max=30), allow_none=True)
    id_number = fields.String(validate=validate.Length(max=30), allow_none=True)
    date_of_birth = fields.Date(allow_none=True)


class UserCreateSchema(ProfileFieldsSchema):
    """Payload for creating a new user from the admin surface."""

    email = fields.Email(required=True, validate=validate.Length(max=254))
    username = username_field()
    password = password_field()
    roles = fields.List(
        fields.String(validate=validate.OneOf(ROLES)),
        load_default=lambda: ["standard"],
        validate=validate.Length(min=1),
    )


class UserUpdateSchema(ProfileFieldsSchema):
    """Profile fields a user may edit on their own record."""


class UserAdminUpdateSchema(Schema):
    """Account flags only an admin may change."""

    roles = fields.List(
        fields.String(validate=validate.OneOf(ROLES)), validate=validate.Length(min=1)
    )
    verified = fields.Boolean()
    active = fields.Boolean()


class UserFilterSchema(Schema):
    """Supported query parameters for listing users."""

    class Meta:
        unknown = EXCLUDE

    search = fields.String(load_default=None, validate=validate.Length(min=1, max=254))
    active = fields.Boolean(load_default=None)


class UserSchema(Schema):
    """Public representation of a user entity."""

    id = fields.Integer(required=True)
    email = fields.Email(required=True)
    username = fields.String(required=True)
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
    email_verified = fields.Boolean(attribute="is_email_verified")
    verified = fields.Boolean()
    active = fields.Boolean()
    last_active_at = fields.DateTime(allow_none=True)
    created_at = fields.DateTime(required=True)
    updated_at = fields.DateTime(required=True)
