"""Payment schemas."""

from __future__ import annotations

from marshmallow import Schema, fields, validate

from rentaride.models.payment import PAYMENT_METHODS, PAYMENT_STATUSES


class PaymentCreateSchema(Schema):
    vehicle_hire_id = fields.Integer(required=True, strict=True)
    method = fields.String(required=True, validate=validate.OneOf(PAYMENT_METHODS))


class PaymentUpdateSchema(Schema):
    """Admin settlement of a payment."""

    status = fields.String(validate=validate.OneOf(PAYMENT_STATUSES))
    method = fields.String(validate=validate.OneOf(PAYMENT_METHODS))


class PaymentSchema(Schema):
    id = fields.Integer(required=True)
    vehicle_hire_id = fields.Integer(required=True)
    vehicle_id = fields.Integer(required=True)
    hirer_id = fields.Integer(required=True)
    owner_id = fields.Integer(required=True)
    method = fields.String(required=True)
    status = fields.String(required=True)
    initiated_at = fields.DateTime(required=True)
    active = fields.Boolean()
