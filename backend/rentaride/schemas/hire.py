"""Vehicle hire schemas."""

from __future__ import annotations

from datetime import UTC
from typing import Any

from marshmallow import Schema, ValidationError, fields, post_load, validates_schema


class VehicleHireCreateSchema(Schema):
    """Booking request; the hirer is the caller and the owner comes from the vehicle."""

    vehicle_id = fields.Integer(required=True, strict=True)
    release_at = fields.AwareDateTime(required=True, default_timezone=UTC)
    due_back_at = fields.AwareDateTime(required=True, default_timezone=UTC)

    @validates_schema
    def check_window(self, data: dict[str, Any], **_: Any) -> None:
        release_at, due_back_at = data.get("release_at"), data.get("due_back_at")
        if release_at and due_back_at and due_back_at <= release_at:
            raise ValidationError("due_back_at must be later than release_at.", "due_back_at")

    @post_load
    def to_utc(self, data: dict[str, Any], **_: Any) -> dict[str, Any]:
        for key in ("release_at", "due_back_at"):
            data[key] = data[key].astimezone(UTC)
        return data


class VehicleHireSchema(Schema):
    id = fields.Integer(required=True)
    vehicle_id = fields.Integer(required=True)
    hirer_id = fields.Integer(required=True)
    owner_id = fields.Integer(required=True)
    release_at = fields.DateTime(required=True)
    due_back_at = fields.DateTime(required=True)
    returned_at = fields.DateTime(allow_none=True)
    paid = fields.Boolean()
    active = fields.Boolean()
    created_at = fields.DateTime(required=True)


class VehicleHireUpdateSchema(Schema):
    """Admin correction of a booking; the window is re-checked by the service."""

    release_at = fields.AwareDateTime(default_timezone=UTC)
    due_back_at = fields.AwareDateTime(default_timezone=UTC)
    paid = fields.Boolean()

    @validates_schema
    def not_empty(self, data: dict[str, Any], **_: Any) -> None:
        if not data:
            raise ValidationError("Provide at least one field to update.")

    @post_load
    def to_utc(self, data: dict[str, Any], **_: Any) -> dict[str, Any]:
        for key in ("release_at", "due_back_at"):
            if key in data:
                data[key] = data[key].astimezone(UTC)
        return data
