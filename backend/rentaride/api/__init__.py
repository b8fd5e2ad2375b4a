"""HTTP API: versioned blueprint registration."""

from __future__ import annotations

from collections.abc import Iterable

from flask import Blueprint, Flask, g


def _join_prefix(*segments: str) -> str:
    parts = [segment.strip("/") for segment in segments if segment.strip("/")]
    return "/" + "/".join(parts)


def register_blueprint_group(
    app: Flask,
    *,
    base_prefix: str,
    entries: Iterable[tuple[Blueprint, str]],
) -> None:
    """Mount each ``(blueprint, relative_prefix)`` under ``base_prefix``.

    An empty relative prefix mounts the blueprint at the version root
    (``/api/v1/health``).
    """
    for bp, rel_prefix in entries:
        app.register_blueprint(bp, url_prefix=_join_prefix(base_prefix, rel_prefix))


def init_app(app: Flask) -> None:
    """Register ``/api/v1`` and clear the caller identity before each request."""

    @app.before_request
    def _reset_identity() -> None:
        # Identity is per request even when an app context is reused
        g.pop("identity", None)

    from rentaride.api.v1 import API_VERSION, REGISTRY

    base = _join_prefix(app.config.get("API_BASE_PREFIX", "/api"), API_VERSION)
    register_blueprint_group(app, base_prefix=base, entries=REGISTRY)


__all__ = ["init_app", "register_blueprint_group"]
