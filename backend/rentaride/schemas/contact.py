"""Contact-us schemas."""

from __future__ import annotations

from marshmallow import Schema, fields, validate


class ContactMessageCreateSchema(Schema):
    name = fields.String(required=True, validate=validate.Length(min=1, max=100))
    email = fields.Email(required=True, validate=validate.Length(max=254))
    title = fields.String(required=True, validate=validate.Length(min=1, max=30))
    body = fields.String(required=True, validate=validate.Length(min=1, max=100))


class ContactMessageSchema(ContactMessageCreateSchema):
    id = fields.Integer(required=True)
    created_at = fields.DateTime(required=True)
