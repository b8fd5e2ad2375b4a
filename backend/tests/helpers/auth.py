"""Helpers for authenticating test requests."""

from __future__ import annotations

from flask import current_app

from tests.factories.user import DEFAULT_PASSWORD

API = "/api/v1"


def bearer(user) -> dict[str, str]:
    """Return an ``Authorization`` header carrying a fresh access token for ``user``."""
    token = current_app.extensions["token_provider"].issue_access_token(
        user_id=user.id, username=user.username, roles=list(user.roles)
    )
    return {"Authorization": f"Bearer {token}"}


def login(client, username: str, password: str = DEFAULT_PASSWORD):
    """POST the login form; the refresh cookie lands in ``client``'s jar."""
    return client.post(f"{API}/auth/login", json={"username": username, "password": password})


def refresh_cookie(client) -> str | None:
    cookie = client.get_cookie(current_app.config["REFRESH_COOKIE_NAME"])
    return cookie.value if cookie is not None else None


def set_refresh_cookie(client, value: str) -> None:
    client.set_cookie(current_app.config["REFRESH_COOKIE_NAME"], value)
