"""Contact-us endpoints."""

from __future__ import annotations

from flask import Blueprint, Response, request

from rentaride.api.deps import (
    json_response,
    page_response,
    parse_pagination,
    require_roles,
    service_context,
    timing,
)
from rentaride.models.user import ROLE_ADMIN
from rentaride.schemas import ContactMessageCreateSchema, ContactMessageSchema
from rentaride.services.contact.service import ContactService

bp = Blueprint("contact_us", __name__)

contact_create_schema = ContactMessageCreateSchema()
contact_schema = ContactMessageSchema()
contact_list_schema = ContactMessageSchema(many=True)


def _service() -> ContactService:
    return ContactService(ctx=service_context())


@bp.post("")
@timing
def submit_message():
    """Public: anyone may leave a message."""

    payload = contact_create_schema.load(request.get_json(silent=True) or {})
    message = _service().submit(payload)
    return json_response({"data": contact_schema.dump(message)}, status=201)


@bp.get("")
@require_roles(ROLE_ADMIN)
@timing
def list_messages():
    return page_response(_service().list_messages(parse_pagination()), contact_list_schema)


@bp.delete("/<int:message_id>")
@require_roles(ROLE_ADMIN)
@timing
def delete_message(message_id: int):
    _service().delete_message(message_id)
    return Response(status=204)
