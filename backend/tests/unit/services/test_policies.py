"""Unit tests for authorization policies and error translation."""

from __future__ import annotations

import pytest
from rentaride.core import errors as api_errors
from rentaride.services._shared.base import BaseService, ServiceContext
from rentaride.services._shared.errors import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    PersistenceError,
    SignatureError,
    TokenReuseError,
    ValidationError,
)
from rentaride.services._shared.policies.common import authorize, is_owner


@pytest.mark.parametrize(
    "roles,allowed,expected",
    [
        (["admin"], ["admin"], True),
        (["standard", "business"], ["business", "admin"], True),
        (["standard"], ["admin"], False),
        ([], ["admin"], False),
        (None, ["admin"], False),
    ],
)
def test_authorize_is_a_role_intersection(roles, allowed, expected):
    assert authorize(roles, allowed) is expected


def test_is_owner():
    assert is_owner(actor_id=3, owner_id=3)
    assert not is_owner(actor_id=4, owner_id=3)
    assert not is_owner(actor_id=None, owner_id=3)


def test_ensure_owner_or_admin():
    BaseService(ctx=ServiceContext(actor_id=1, roles=["admin"])).ensure_owner_or_admin(99)
    BaseService(ctx=ServiceContext(actor_id=5, roles=["standard"])).ensure_owner_or_admin(5)
    with pytest.raises(AuthorizationError):
        BaseService(ctx=ServiceContext(actor_id=5, roles=["standard"])).ensure_owner_or_admin(6)


@pytest.mark.parametrize(
    "exc,status,code",
    [
        (NotFoundError("User", 1), 404, "not_found"),
        (ConflictError("User", "Username x already exists"), 409, "conflict"),
        (AuthenticationError(), 401, "unauthorized"),
        (SignatureError(), 403, "forbidden"),
        (TokenReuseError(), 403, "forbidden"),
        (PersistenceError(), 400, "persistence_error"),
        (ValidationError("bad"), 400, "bad_request"),
    ],
)
def test_translate_exceptions(exc, status, code):
    translated = BaseService.translate_exceptions(exc)
    assert isinstance(translated, api_errors.APIError)
    assert (translated.status_code, translated.code) == (status, code)


def test_authorization_status_follows_config(app):
    with app.app_context():
        app.config["AUTHZ_FAILURE_STATUS"] = 403
        try:
            translated = BaseService.translate_exceptions(AuthorizationError())
        finally:
            app.config["AUTHZ_FAILURE_STATUS"] = 401
    assert (translated.status_code, translated.code) == (403, "forbidden")

    translated = BaseService.translate_exceptions(AuthorizationError())
    assert translated.status_code == 401
