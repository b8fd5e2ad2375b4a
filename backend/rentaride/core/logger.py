"""Structured logging configuration with request correlation.

Records are rendered as one JSON object per line on stdout. Auth code logs
through ``extra`` (``event``, ``user_id``...); anything that looks like a
credential is masked before it reaches a handler.
"""

from __future__ import annotations

import json
import logging
import re
import sys
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from flask import Flask, g, has_request_context, request

REQUEST_ID_HEADER = "X-Request-ID"
CORRELATION_HEADERS = ("X-Request-ID", "X-Correlation-ID")

# Promoted to top-level JSON keys when present on the record
EXTRA_KEYS = ("event", "user_id", "endpoint", "elapsed_ms", "status", "count", "to")

SENSITIVE_MARKERS = ("token", "password", "secret", "cookie", "authorization")
MASK = "***"

# Client supplied ids are echoed back, so keep them short and header-safe
_REQUEST_ID_RE = re.compile(r"^[A-Za-z0-9._:-]{1,128}$")


def _is_sensitive(key: str) -> bool:
    lowered = key.lower()
    return any(marker in lowered for marker in SENSITIVE_MARKERS)


class JSONFormatter(logging.Formatter):
    """Render log records as JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "time": datetime.now(timezone.utc).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", None),
        }
        method = getattr(record, "method", None)
        if method:
            payload["method"] = method
            payload["path"] = getattr(record, "path", None)
        for key in EXTRA_KEYS:
            if hasattr(record, key):
                payload[key] = getattr(record, key)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class RequestIdFilter(logging.Filter):
    """Stamp records with the request id, method and path of the current request."""

    def filter(self, record: logging.LogRecord) -> bool:
        if has_request_context():
            record.request_id = ensure_request_id()
            record.method = request.method
            record.path = request.path
        else:
            record.request_id = None
        return True


class SensitiveDataFilter(logging.Filter):
    """Mask credential-looking ``extra`` attributes on a record."""

    def filter(self, record: logging.LogRecord) -> bool:
        for key in list(vars(record)):
            if _is_sensitive(key):
                setattr(record, key, MASK)
        return True


def _incoming_request_id() -> str | None:
    for header in CORRELATION_HEADERS:
        value = (request.headers.get(header) or "").strip()
        if value and _REQUEST_ID_RE.match(value):
            return value
    return None


def ensure_request_id() -> str:
    """Return the current request identifier, generating one when necessary."""

    if not has_request_context():
        return str(uuid4())
    request_id = g.get("request_id")
    if request_id is None:
        request_id = _incoming_request_id() or str(uuid4())
        g.request_id = request_id
    return request_id


def _resolve_level(level: str | int) -> int | str:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    return resolved if isinstance(resolved, int) else level.upper()


def configure_logging(level: str | int = "INFO") -> None:
    """Configure the root logger with JSON-formatted stdout output."""

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter())
    handler.addFilter(SensitiveDataFilter())
    handler.addFilter(RequestIdFilter())
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(_resolve_level(level))


def init_app(app: Flask) -> None:
    """Reset the request id per request and echo it on every response."""

    app.logger.addFilter(RequestIdFilter())

    @app.before_request
    def _start_request() -> None:
        # ``g`` outlives a request when an app context is already pushed
        g.pop("request_id", None)
        ensure_request_id()

    @app.after_request
    def _echo_request_id(response):
        response.headers.setdefault(REQUEST_ID_HEADER, ensure_request_id())
        return response


__all__ = [
    "JSONFormatter",
    "RequestIdFilter",
    "SensitiveDataFilter",
    "configure_logging",
    "ensure_request_id",
    "init_app",
]
