"""User location endpoints."""

from __future__ import annotations

from flask import Blueprint, Response, request

from rentaride.api.deps import (
    current_identity,
    json_response,
    page_response,
    parse_pagination,
    require_auth,
    require_roles,
    service_context,
    timing,
)
from rentaride.models.user import ROLE_ADMIN
from rentaride.schemas import LocationInSchema, UserLocationSchema
from rentaride.services.locations.service import LocationService

bp = Blueprint("user_locations", __name__)

location_in_schema = LocationInSchema()
location_schema = UserLocationSchema()
location_list_schema = UserLocationSchema(many=True)


def _service() -> LocationService:
    return LocationService(ctx=service_context())


@bp.get("")
@require_roles(ROLE_ADMIN)
@timing
def list_user_locations():
    page = _service().list_user_locations(parse_pagination())
    return page_response(page, location_list_schema)


@bp.put("/me")
@require_auth
@timing
def report_my_location():
    """Create or replace the caller's last known location."""

    payload = location_in_schema.load(request.get_json(silent=True) or {})
    location = _service().report_my_location(payload)
    return json_response({"data": location_schema.dump(location)})


@bp.get("/me")
@require_auth
@timing
def get_my_location():
    location = _service().get_user_location(current_identity().user_id)
    return json_response({"data": location_schema.dump(location)})


@bp.get("/users/<int:user_id>")
@require_auth
@timing
def get_user_location(user_id: int):
    return json_response({"data": location_schema.dump(_service().get_user_location(user_id))})


@bp.delete("/<int:location_id>")
@require_roles(ROLE_ADMIN)
@timing
def delete_user_location(location_id: int):
    _service().delete_user_location(location_id)
    return Response(status=204)
