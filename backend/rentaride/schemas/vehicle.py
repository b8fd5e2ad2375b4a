"""Vehicle resource schemas."""

from __future__ import annotations

from datetime import UTC

from marshmallow import EXCLUDE, Schema, fields, validate

from rentaride.models.vehicle import VEHICLE_STATUSES


class VehicleCreateSchema(Schema):
    """Payload for listing a new vehicle."""

    brand = fields.String(required=True, validate=validate.Length(min=1, max=50))
    model = fields.String(required=True, validate=validate.Length(min=1, max=50))
    engine_number = fields.String(validate=validate.Length(max=50), allow_none=True)
    vin = fields.String(validate=validate.Length(max=50), allow_none=True)
    plate_number = fields.String(required=True, validate=validate.Length(min=1, max=20))


class VehicleUpdateSchema(VehicleCreateSchema):
    """Owner edits; loaded with ``partial=True``."""


class VehicleAdminUpdateSchema(Schema):
    status = fields.String(validate=validate.OneOf(VEHICLE_STATUSES))
    verified = fields.Boolean()
    active = fields.Boolean()
    company_owned = fields.Boolean()
    due_back_at = fields.AwareDateTime(default_timezone=UTC, allow_none=True)


class VehicleFilterSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    status = fields.String(load_default=None, validate=validate.OneOf(VEHICLE_STATUSES))


class VehicleSchema(Schema):
    """Public representation of a vehicle."""

    id = fields.Integer(required=True)
    brand = fields.String(required=True)
    model = fields.String(required=True)
    engine_number = fields.String(allow_none=True)
    vin = fields.String(allow_none=True)
    plate_number = fields.String(required=True)
    status = fields.String(required=True)
    verified = fields.Boolean()
    company_owned = fields.Boolean()
    active = fields.Boolean()
    due_back_at = fields.DateTime(allow_none=True)
    added_by_id = fields.Integer(required=True)
    created_at = fields.DateTime(required=True)
    updated_at = fields.DateTime(required=True)
