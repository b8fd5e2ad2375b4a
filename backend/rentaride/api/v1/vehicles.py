"""Vehicle endpoints."""

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
from rentaride.schemas import (
    VehicleAdminUpdateSchema,
    VehicleCreateSchema,
    VehicleFilterSchema,
    VehicleSchema,
    VehicleUpdateSchema,
)
from rentaride.services.vehicles.service import VehicleService

bp = Blueprint("vehicles", __name__)

vehicle_schema = VehicleSchema()
vehicle_list_schema = VehicleSchema(many=True)
vehicle_create_schema = VehicleCreateSchema()
vehicle_update_schema = VehicleUpdateSchema(partial=True)
vehicle_admin_update_schema = VehicleAdminUpdateSchema()
vehicle_filter_schema = VehicleFilterSchema()


def _service() -> VehicleService:
    return VehicleService(ctx=service_context())


@bp.get("/search/<term>")
@timing
def search_vehicles(term: str):
    """Public search over verified, active vehicles."""

    page = _service().search(term, parse_pagination())
    return page_response(page, vehicle_list_schema)


@bp.get("")
@require_roles(ROLE_ADMIN)
@timing
def list_vehicles():
    filters = vehicle_filter_schema.load(request.args)
    page = _service().list_vehicles(filters, parse_pagination())
    return page_response(page, vehicle_list_schema)


@bp.post("")
@require_auth
@timing
def create_vehicle():
    payload = vehicle_create_schema.load(request.get_json(silent=True) or {})
    vehicle = _service().create_vehicle(payload)
    return json_response({"data": vehicle_schema.dump(vehicle)}, status=201)


@bp.get("/mine")
@require_auth
@timing
def list_my_vehicles():
    page = _service().list_for_owner(current_identity().user_id, parse_pagination())
    return page_response(page, vehicle_list_schema)


@bp.get("/users/<int:user_id>")
@require_auth
@timing
def list_user_vehicles(user_id: int):
    page = _service().list_for_owner(user_id, parse_pagination())
    return page_response(page, vehicle_list_schema)


@bp.get("/<int:vehicle_id>")
@require_auth
@timing
def get_vehicle(vehicle_id: int):
    return json_response({"data": vehicle_schema.dump(_service().get_vehicle(vehicle_id))})


@bp.put("/<int:vehicle_id>")
@require_auth
@timing
def update_vehicle(vehicle_id: int):
    payload = vehicle_update_schema.load(request.get_json(silent=True) or {})
    vehicle = _service().update_vehicle(vehicle_id, payload)
    return json_response({"data": vehicle_schema.dump(vehicle)})


@bp.patch("/<int:vehicle_id>")
@require_roles(ROLE_ADMIN)
@timing
def admin_update_vehicle(vehicle_id: int):
    """Moderate a vehicle: status, verification and ownership flags."""

    payload = vehicle_admin_update_schema.load(request.get_json(silent=True) or {})
    vehicle = _service().admin_update(vehicle_id, payload)
    return json_response({"data": vehicle_schema.dump(vehicle)})


@bp.patch("/<int:vehicle_id>/deactivate")
@require_auth
@timing
def deactivate_vehicle(vehicle_id: int):
    vehicle = _service().deactivate(vehicle_id)
    return json_response({"data": vehicle_schema.dump(vehicle)})


@bp.patch("/<int:vehicle_id>/reactivate")
@require_roles(ROLE_ADMIN)
@timing
def reactivate_vehicle(vehicle_id: int):
    vehicle = _service().reactivate(vehicle_id)
    return json_response({"data": vehicle_schema.dump(vehicle)})


@bp.delete("/<int:vehicle_id>")
@require_roles(ROLE_ADMIN)
@timing
def delete_vehicle(vehicle_id: int):
    _service().delete_vehicle(vehicle_id)
    return Response(status=204)
