"""Problem Details (RFC 7807) responses for every failure the API reports.

Each body carries ``message`` next to ``detail`` plus a stable ``code`` and
the correlation ``request_id``. Raw database errors never reach clients.
"""

from __future__ import annotations

import logging
import traceback
from http import HTTPStatus
from typing import Any

from flask import Flask, Response, current_app, jsonify, request
from flask_jwt_extended.exceptions import InvalidHeaderError
from marshmallow import ValidationError as MarshmallowValidationError
from sqlalchemy.exc import IntegrityError, OperationalError
from werkzeug.exceptions import HTTPException

from rentaride.core.logger import ensure_request_id

log = logging.getLogger(__name__)

PROBLEM_MIMETYPE = "application/problem+json"

# Names that differ between Python releases are pinned
_PINNED_CODES = {413: "payload_too_large", 422: "unprocessable_entity"}


def status_code_name(status: int) -> str:
    """``404`` -> ``"not_found"``; unknown statuses map to ``"error"``."""
    if status in _PINNED_CODES:
        return _PINNED_CODES[status]
    try:
        return HTTPStatus(status).name.lower()
    except ValueError:
        return "error"


def build_problem(
    status: int, code: str, message: str, details: dict[str, Any] | None = None
) -> dict[str, Any]:
    problem: dict[str, Any] = {
        "type": "about:blank",
        "title": HTTPStatus(status).phrase,
        "status": int(status),
        "detail": message,
        "message": message,
        "instance": request.path if request else None,
        "code": code,
        "request_id": ensure_request_id(),
    }
    if details:
        problem["details"] = details
    return problem


def _respond(problem: dict[str, Any], *, exc_info: bool = False) -> tuple[Response, int]:
    status = problem["status"]
    log.log(
        logging.ERROR if status >= 500 else logging.WARNING,
        "%s (%s): %s",
        problem["code"],
        status,
        problem["message"],
        exc_info=exc_info,
        extra={"status": status},
    )
    response = jsonify(problem)
    response.mimetype = PROBLEM_MIMETYPE
    return response, status


class APIError(Exception):
    """
    An error the API reports to clients as-is.

    Subclasses pin ``status_code`` and ``code``; instances may override both.
    ``details`` must be safe to show to the caller.
    """

    status_code: int = HTTPStatus.BAD_REQUEST
    code: str = "bad_request"

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = int(status_code or type(self).status_code)
        self.code = code or type(self).code
        self.details = details or {}

    def to_problem(self) -> dict[str, Any]:
        return build_problem(self.status_code, self.code, self.message, self.details)


class NotFound(APIError):
    status_code = HTTPStatus.NOT_FOUND
    code = "not_found"

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message)


class Conflict(APIError):
    status_code = HTTPStatus.CONFLICT
    code = "conflict"

    def __init__(self, message: str = "Conflict") -> None:
        super().__init__(message)


class Unauthorized(APIError):
    """No usable credentials, or credentials that do not grant the action."""

    status_code = HTTPStatus.UNAUTHORIZED
    code = "unauthorized"

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class Forbidden(APIError):
    """A token was presented but rejected."""

    status_code = HTTPStatus.FORBIDDEN
    code = "forbidden"

    def __init__(self, message: str = "Forbidden") -> None:
        super().__init__(message)


def problem_response(err: APIError) -> tuple[Response, int]:
    """Render ``err`` as a logged ``application/problem+json`` response."""
    return _respond(err.to_problem())


def _bearer_challenge(err: APIError, error: str | None = None) -> tuple[Response, int]:
    """Render ``err`` with an RFC 6750 ``WWW-Authenticate`` challenge."""
    response, status = problem_response(err)
    challenge = 'Bearer realm="api"'
    if error:
        challenge += f', error="{error}"'
    response.headers["WWW-Authenticate"] = challenge
    return response, status


def _register_jwt_handlers(app: Flask) -> None:
    """401 for a missing or malformed header, 403 for a token that fails verification."""
    from rentaride.core.extensions import jwt

    @jwt.unauthorized_loader
    def _missing_token(reason: str):
        return _bearer_challenge(Unauthorized(reason))

    @jwt.invalid_token_loader
    def _invalid_token(reason: str):
        return _bearer_challenge(Forbidden("Invalid token"), "invalid_token")

    @jwt.expired_token_loader
    def _expired_token(jwt_header: dict, jwt_payload: dict):
        return _bearer_challenge(Forbidden("Token has expired"), "invalid_token")

    # A bare ``Bearer`` header is malformed, not a bad signature
    @app.errorhandler(InvalidHeaderError)
    def _invalid_header(err: InvalidHeaderError):
        return _bearer_challenge(Unauthorized(str(err)), "invalid_request")


def init_app(app: Flask) -> None:
    """
    Install the problem+json handlers.

    Service errors are translated through
    :meth:`~rentaride.services._shared.base.BaseService.translate_exceptions`.
    A 500 body includes ``stack`` only when ``EXPOSE_STACKTRACE`` is enabled.
    """
    from rentaride.services._shared.base import BaseService
    from rentaride.services._shared.errors import ServiceError

    _register_jwt_handlers(app)

    @app.errorhandler(APIError)
    def _api_error(err: APIError):
        return problem_response(err)

    @app.errorhandler(ServiceError)
    def _service_error(err: ServiceError):
        translated = BaseService.translate_exceptions(err)
        if isinstance(translated, APIError):
            return problem_response(translated)
        raise err

    @app.errorhandler(HTTPException)
    def _http_error(err: HTTPException):
        status = int(err.code or HTTPStatus.INTERNAL_SERVER_ERROR)
        code = status_code_name(status)
        if status == HTTPStatus.NOT_FOUND:
            message = f"Route '{request.path}' not found"
        else:
            message = (err.description or code.replace("_", " ").capitalize()).strip()
        return _respond(build_problem(status, code, message))

    @app.errorhandler(MarshmallowValidationError)
    def _validation_error(err: MarshmallowValidationError):
        problem = build_problem(
            HTTPStatus.BAD_REQUEST,
            "validation_error",
            "Validation failed",
            {"errors": err.messages},
        )
        return _respond(problem)

    @app.errorhandler(IntegrityError)
    def _integrity_error(err: IntegrityError):
        problem = build_problem(HTTPStatus.CONFLICT, "conflict", "Resource conflict")
        return _respond(problem, exc_info=True)

    @app.errorhandler(OperationalError)
    def _database_unavailable(err: OperationalError):
        problem = build_problem(
            HTTPStatus.SERVICE_UNAVAILABLE,
            "service_unavailable",
            "Service temporarily unavailable",
        )
        return _respond(problem, exc_info=True)

    @app.errorhandler(Exception)
    def _unexpected_error(err: Exception):
        problem = build_problem(
            HTTPStatus.INTERNAL_SERVER_ERROR, "internal_server_error", "Unexpected error"
        )
        if current_app.config.get("EXPOSE_STACKTRACE"):
            problem["stack"] = "".join(traceback.format_exception(err))
        return _respond(problem, exc_info=True)
