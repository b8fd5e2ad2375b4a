"""Location schemas shared by user and vehicle locations."""

from __future__ import annotations

from marshmallow import Schema, fields, validate


class LocationInSchema(Schema):
    """A location report; latitude and longitude are mandatory."""

    address = fields.String(validate=validate.Length(max=255), allow_none=True)
    latitude = fields.Float(required=True, validate=validate.Range(min=-90, max=90))
    longitude = fields.Float(required=True, validate=validate.Range(min=-180, max=180))
    plus_code = fields.String(validate=validate.Length(max=20), allow_none=True)


class LocationSchema(Schema):
    id = fields.Integer(required=True)
    address = fields.String(allow_none=True)
    latitude = fields.Float(required=True)
    longitude = fields.Float(required=True)
    plus_code = fields.String(allow_none=True)
    updated_at = fields.DateTime(required=True)


class UserLocationSchema(LocationSchema):
    user_id = fields.Integer(required=True)


class VehicleLocationSchema(LocationSchema):
    vehicle_id = fields.Integer(required=True)
