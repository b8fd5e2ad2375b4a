"""Payment endpoints."""

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
from rentaride.schemas import PaymentCreateSchema, PaymentSchema, PaymentUpdateSchema
from rentaride.services.payments.service import PaymentService

bp = Blueprint("payments", __name__)

payment_schema = PaymentSchema()
payment_list_schema = PaymentSchema(many=True)
payment_create_schema = PaymentCreateSchema()
payment_update_schema = PaymentUpdateSchema()


def _service() -> PaymentService:
    return PaymentService(ctx=service_context())


@bp.get("")
@require_roles(ROLE_ADMIN)
@timing
def list_payments():
    return page_response(_service().list_payments(parse_pagination()), payment_list_schema)


@bp.post("")
@require_auth
@timing
def create_payment():
    payload = payment_create_schema.load(request.get_json(silent=True) or {})
    payment = _service().create_payment(payload)
    return json_response({"data": payment_schema.dump(payment)}, status=201)


@bp.get("/<int:payment_id>")
@require_auth
@timing
def get_payment(payment_id: int):
    return json_response({"data": payment_schema.dump(_service().get_payment(payment_id))})


@bp.patch("/<int:payment_id>")
@require_roles(ROLE_ADMIN)
@timing
def update_payment(payment_id: int):
    """Settle a payment; ``successful`` marks its hire as paid."""

    payload = payment_update_schema.load(request.get_json(silent=True) or {})
    payment = _service().update_payment(payment_id, payload)
    return json_response({"data": payment_schema.dump(payment)})


@bp.patch("/<int:payment_id>/deactivate")
@require_roles(ROLE_ADMIN)
@timing
def deactivate_payment(payment_id: int):
    return json_response({"data": payment_schema.dump(_service().deactivate(payment_id))})


@bp.delete("/<int:payment_id>")
@require_roles(ROLE_ADMIN)
@timing
def delete_payment(payment_id: int):
    _service().delete_payment(payment_id)
    return Response(status=204)
