"""User endpoints."""

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
from rentaride.schemas import (
    UserAdminUpdateSchema,
    UserCreateSchema,
    UserFilterSchema,
    UserSchema,
    UserUpdateSchema,
)
from rentaride.services.users.service import UserService

bp = Blueprint("users", __name__)

user_schema = UserSchema()
user_list_schema = UserSchema(many=True)
user_create_schema = UserCreateSchema()
user_update_schema = UserUpdateSchema()
user_admin_update_schema = UserAdminUpdateSchema()
user_filter_schema = UserFilterSchema()


def _service() -> UserService:
    return UserService(ctx=service_context())


@bp.get("")
@require_roles(ROLE_ADMIN)
@timing
def list_users():
    """Return paginated users, optionally filtered by ``search``."""

    filters = user_filter_schema.load(request.args)
    page = _service().list_users(filters, parse_pagination())
    return page_response(page, user_list_schema)


@bp.post("")
@require_roles(ROLE_ADMIN)
@timing
def create_user():
    payload = user_create_schema.load(request.get_json(silent=True) or {})
    user = _service().create_user(payload)
    return json_response({"data": user_schema.dump(user)}, status=201)


@bp.get("/<int:user_id>")
@require_auth
@timing
def get_user(user_id: int):
    return json_response({"data": user_schema.dump(_service().get_user(user_id))})


@bp.put("/<int:user_id>")
@require_auth
@timing
def update_user(user_id: int):
    """Update profile fields on one's own record (admins: any record)."""

    payload = user_update_schema.load(request.get_json(silent=True) or {})
    user = _service().update_profile(user_id, payload)
    return json_response({"data": user_schema.dump(user)})


@bp.patch("/<int:user_id>")
@require_roles(ROLE_ADMIN)
@timing
def admin_update_user(user_id: int):
    payload = user_admin_update_schema.load(request.get_json(silent=True) or {})
    user = _service().admin_update(user_id, payload)
    return json_response({"data": user_schema.dump(user)})


@bp.patch("/<int:user_id>/deactivate")
@require_auth
@timing
def deactivate_user(user_id: int):
    user = _service().deactivate(user_id)
    return json_response({"data": user_schema.dump(user)})


@bp.patch("/<int:user_id>/reactivate")
@require_roles(ROLE_ADMIN)
@timing
def reactivate_user(user_id: int):
    user = _service().reactivate(user_id)
    return json_response({"data": user_schema.dump(user)})


@bp.delete("/<int:user_id>")
@require_roles(ROLE_ADMIN)
@timing
def delete_user(user_id: int):
    _service().delete_user(user_id)
    return Response(status=204)
