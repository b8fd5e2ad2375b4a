"""Vehicle hire endpoints."""

from __future__ import annotations

from flask import Blueprint, Response, request

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
from rentaride.schemas import VehicleHireCreateSchema, VehicleHireSchema, VehicleHireUpdateSchema
from rentaride.services.hires.service import VehicleHireService

bp = Blueprint("vehicle_hires", __name__)

hire_schema = VehicleHireSchema()
hire_list_schema = VehicleHireSchema(many=True)
hire_create_schema = VehicleHireCreateSchema()
hire_update_schema = VehicleHireUpdateSchema()


def _service() -> VehicleHireService:
    return VehicleHireService(ctx=service_context())


@bp.get("")
@require_roles(ROLE_ADMIN)
@timing
def list_hires():
    return page_response(_service().list_hires(parse_pagination()), hire_list_schema)


@bp.post("")
@require_auth
@timing
def create_hire():
    """Book an available vehicle for the caller."""

    payload = hire_create_schema.load(request.get_json(silent=True) or {})
    hire = _service().create_hire(payload)
    return json_response({"data": hire_schema.dump(hire)}, status=201)


@bp.get("/mine")
@require_auth
@timing
def list_my_hires():
    return page_response(_service().list_mine(parse_pagination()), hire_list_schema)


@bp.get("/<int:hire_id>")
@require_auth
@timing
def get_hire(hire_id: int):
    return json_response({"data": hire_schema.dump(_service().get_hire(hire_id))})


@bp.patch("/<int:hire_id>")
@require_roles(ROLE_ADMIN)
@timing
def update_hire(hire_id: int):
    payload = hire_update_schema.load(request.get_json(silent=True) or {})
    return json_response({"data": hire_schema.dump(_service().update_hire(hire_id, payload))})


@bp.put("/<int:hire_id>/return")
@require_auth
@timing
def return_hire(hire_id: int):
    """Mark the hire returned; the vehicle becomes available again."""

    return json_response({"data": hire_schema.dump(_service().return_hire(hire_id))})


@bp.patch("/<int:hire_id>/deactivate")
@require_roles(ROLE_ADMIN)
@timing
def deactivate_hire(hire_id: int):
    return json_response({"data": hire_schema.dump(_service().deactivate(hire_id))})


@bp.patch("/<int:hire_id>/reactivate")
@require_roles(ROLE_ADMIN)
@timing
def reactivate_hire(hire_id: int):
    return json_response({"data": hire_schema.dump(_service().reactivate(hire_id))})


@bp.delete("/<int:hire_id>")
@require_roles(ROLE_ADMIN)
@timing
def delete_hire(hire_id: int):
    _service().delete_hire(hire_id)
    return Response(status=204)
