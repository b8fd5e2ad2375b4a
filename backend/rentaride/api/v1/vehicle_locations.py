"""Vehicle location endpoints."""

from __future__ import annotations

from flask import Blueprint, request

from rentaride.api.deps import (
    json_response,
    page_response,
    parse_pagination,
    require_auth,
    require_roles,
    service_context,
    timing,
)
from rentaride.models.user import ROLE_ADMIN
from rentaride.schemas import LocationInSchema, VehicleLocationSchema
from rentaride.services.locations.service import LocationService

bp = Blueprint("vehicle_locations", __name__)

location_in_schema = LocationInSchema()
location_schema = VehicleLocationSchema()
location_list_schema = VehicleLocationSchema(many=True)


def _service() -> LocationService:
    return LocationService(ctx=service_context())


@bp.get("")
@require_roles(ROLE_ADMIN)
@timing
def list_vehicle_locations():
    page = _service().list_vehicle_locations(parse_pagination())
    return page_response(page, location_list_schema)


@bp.put("/vehicles/<int:vehicle_id>")
@require_auth
@timing
def report_vehicle_location(vehicle_id: int):
    """Owner (or admin) reports where the vehicle currently is."""

    payload = location_in_schema.load(request.get_json(silent=True) or {})
    location = _service().report_vehicle_location(vehicle_id, payload)
    return json_response({"data": location_schema.dump(location)})


@bp.get("/vehicles/<int:vehicle_id>")
@require_auth
@timing
def get_vehicle_location(vehicle_id: int):
    location = _service().get_vehicle_location(vehicle_id)
    return json_response({"data": location_schema.dump(location)})
