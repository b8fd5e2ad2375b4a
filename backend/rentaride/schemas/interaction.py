"""Interaction (message) schemas."""

from __future__ import annotations

from marshmallow import Schema, fields, validate

from rentaride.models.interaction import MESSAGE_MAX_LENGTH


class InteractionInSchema(Schema):
    message = fields.String(
        required=True, validate=validate.Length(min=1, max=MESSAGE_MAX_LENGTH)
    )


class InteractionSchema(Schema):
    id = fields.Integer(required=True)
    message = fields.String(required=True)
    author_id = fields.Integer(required=True)
    vehicle_id = fields.Integer(allow_none=True)
    vehicle_hire_id = fields.Integer(allow_none=True)
    active = fields.Boolean()
    created_at = fields.DateTime(required=True)
