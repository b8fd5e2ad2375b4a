"""Health check for load balancers and the container runtime."""

from __future__ import annotations

import logging

from flask import Blueprint, current_app
from sqlalchemy.exc import SQLAlchemyError

from rentaride.api.deps import json_response, timing
from rentaride.models.base import utcnow
from rentaride.repositories.refresh_session import RefreshSessionRepository

log = logging.getLogger(__name__)

bp = Blueprint("health", __name__)


@bp.get("/health")
@timing
def healthcheck():
    """
    Report whether the database answers, plus the number of live refresh sessions.

    Responds 503 when the database cannot be queried.
    """
    payload = {
        "status": "ok",
        "db": "ok",
        "live_sessions": None,
        "version": current_app.config.get("APP_VERSION", "dev"),
        "commit": current_app.config.get("APP_COMMIT", "unknown"),
    }
    repo = RefreshSessionRepository()
    try:
        payload["live_sessions"] = repo.count_live(utcnow())
    except SQLAlchemyError:
        repo.session.rollback()
        log.exception("Health check query failed", extra={"event": "health.db_error"})
        payload.update(status="degraded", db="fail")
        return json_response(payload, status=503)
    return json_response(payload)
