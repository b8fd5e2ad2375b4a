"""Interaction endpoints: messages on vehicles and hires."""

from __future__ import annotations

from flask import Blueprint, Response, request

from rentaride.api.deps import json_response, require_auth, require_roles, service_context, timing
from rentaride.models.user import ROLE_ADMIN
from rentaride.schemas import InteractionInSchema, InteractionSchema
from rentaride.services.interactions.service import InteractionService

bp = Blueprint("interactions", __name__)

interaction_in_schema = InteractionInSchema()
interaction_schema = InteractionSchema()
interaction_list_schema = InteractionSchema(many=True)


def _service() -> InteractionService:
    return InteractionService(ctx=service_context())


def _message() -> str:
    return interaction_in_schema.load(request.get_json(silent=True) or {})["message"]


@bp.post("/vehicles/<int:vehicle_id>")
@require_auth
@timing
def post_on_vehicle(vehicle_id: int):
    interaction = _service().post_on_vehicle(vehicle_id, _message())
    return json_response({"data": interaction_schema.dump(interaction)}, status=201)


@bp.get("/vehicles/<int:vehicle_id>")
@require_auth
@timing
def list_for_vehicle(vehicle_id: int):
    """Owners and admins see the whole thread; others only their own messages."""

    items = _service().list_for_vehicle(vehicle_id)
    return json_response({"data": interaction_list_schema.dump(items)})


@bp.post("/vehicle-hires/<int:hire_id>")
@require_auth
@timing
def post_on_hire(hire_id: int):
    interaction = _service().post_on_hire(hire_id, _message())
    return json_response({"data": interaction_schema.dump(interaction)}, status=201)


@bp.get("/vehicle-hires/<int:hire_id>")
@require_auth
@timing
def list_for_hire(hire_id: int):
    items = _service().list_for_hire(hire_id)
    return json_response({"data": interaction_list_schema.dump(items)})


@bp.put("/<int:interaction_id>")
@require_auth
@timing
def update_interaction(interaction_id: int):
    interaction = _service().update_message(interaction_id, _message())
    return json_response({"data": interaction_schema.dump(interaction)})


@bp.patch("/<int:interaction_id>/deactivate")
@require_auth
@timing
def deactivate_interaction(interaction_id: int):
    interaction = _service().deactivate(interaction_id)
    return json_response({"data": interaction_schema.dump(interaction)})


@bp.patch("/<int:interaction_id>/reactivate")
@require_roles(ROLE_ADMIN)
@timing
def reactivate_interaction(interaction_id: int):
    interaction = _service().reactivate(interaction_id)
    return json_response({"data": interaction_schema.dump(interaction)})


@bp.delete("/<int:interaction_id>")
@require_roles(ROLE_ADMIN)
@timing
def delete_interaction(interaction_id: int):
    _service().delete_interaction(interaction_id)
    return Response(status=204)
