"""Shared API helpers for request parsing and cross-cutting concerns."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, TypeVar, cast

from flask import Response, current_app, g, jsonify, request
from flask_jwt_extended import get_jwt, verify_jwt_in_request

from rentaride.core.errors import Forbidden
from rentaride.core.logger import ensure_request_id
from rentaride.repositories.base import Page, Pagination
from rentaride.schemas.common import PaginationQuerySchema, build_meta
from rentaride.services._shared.base import ServiceContext
from rentaride.services._shared.errors import AuthorizationError
from rentaride.services._shared.policies.common import authorize
from rentaride.services.auth.service import AuthService

F = TypeVar("F", bound=Callable[..., Any])


@dataclass(frozen=True, slots=True)
class AuthIdentity:
    """Caller identity decoded from a verified access token."""

    user_id: int
    username: str
    roles: list[str] = field(default_factory=list)


def parse_pagination(default_limit: int = 20, max_limit: int = 200) -> Pagination:
    """Parse pagination parameters from ``request.args`` using Marshmallow."""

    schema = PaginationQuerySchema(default_limit=default_limit, max_limit=max_limit)
    data = schema.load(request.args)
    return Pagination(page=data["page"], limit=data["limit"], sort=data["sort"])


# ------------------------------ Auth gateway ------------------------------


def _authenticate() -> AuthIdentity:
    """Verify the bearer access token and publish the caller on ``g.identity``.

    Header problems (missing, not ``Bearer``) surface as 401; signature,
    expiry, malformed and wrong-type tokens surface as 403, through the
    handlers registered in :mod:`rentaride.core.errors`.
    """
    verify_jwt_in_request(optional=False)
    claims = get_jwt() or {}
    try:
        user_id = int(claims["sub"])
    except (KeyError, TypeError, ValueError) as exc:
        raise Forbidden("Invalid token") from exc
    identity = AuthIdentity(
        user_id=user_id,
        username=str(claims.get("username", "")),
        roles=list(claims.get("roles") or []),
    )
    g.identity = identity
    return identity


def require_auth(func: F) -> F:
    """Ensure the request carries a valid JWT access token."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        _authenticate()
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def require_roles(*allowed: str) -> Callable[[F], F]:
    """Authenticate, then require at least one of ``allowed`` roles."""

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any):
            identity = _authenticate()
            if not authorize(identity.roles, allowed):
                raise AuthorizationError()
            return func(*args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator


def current_identity() -> AuthIdentity | None:
    return cast(AuthIdentity | None, g.get("identity"))


def service_context() -> ServiceContext:
    """Build the request-scoped service context from the verified identity."""

    identity = current_identity()
    return ServiceContext(
        actor_id=identity.user_id if identity else None,
        roles=list(identity.roles) if identity else [],
        request_id=ensure_request_id(),
    )


def get_auth_service() -> AuthService:
    """Wire :class:`AuthService` with the adapters built at startup."""

    return AuthService(
        token_provider=current_app.extensions["token_provider"],
        mailer=current_app.extensions["mailer"],
        frontend_url=str(current_app.config.get("FRONTEND_URL", "")),
        ctx=service_context(),
    )


# ------------------------------ Refresh cookie ------------------------------


def refresh_cookie_name() -> str:
    return str(current_app.config.get("REFRESH_COOKIE_NAME", "jwt"))


def read_refresh_cookie() -> str | None:
    return request.cookies.get(refresh_cookie_name()) or None


def set_refresh_cookie(response: Response, token: str, *, max_age: int) -> Response:
    """Attach the refresh token as an HTTP-only, cross-site cookie."""

    response.set_cookie(
        refresh_cookie_name(),
        token,
        max_age=max_age,
        httponly=True,
        secure=bool(current_app.config.get("REFRESH_COOKIE_SECURE", False)),
        samesite="None",
        path="/",
    )
    return response


def clear_refresh_cookie(response: Response) -> Response:
    response.delete_cookie(
        refresh_cookie_name(),
        path="/",
        httponly=True,
        secure=bool(current_app.config.get("REFRESH_COOKIE_SECURE", False)),
        samesite="None",
    )
    return response


# ------------------------------ Responses ------------------------------


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def page_response(page: Page[Any], schema: Any) -> Response:
    """Render a repository page as ``{"data": [...], "meta": {...}}``."""

    meta = build_meta(total=page.total, page=page.page, limit=page.limit)
    return json_response({"data": schema.dump(page.items), "meta": meta})


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
