"""Auth Gateway behaviour: header parsing, token validation and role checks."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import jwt
import pytest
from freezegun import freeze_time
from rentaride.repositories.refresh_session import RefreshSessionRepository
from sqlalchemy.exc import OperationalError
from tests.factories.user import UserFactory
from tests.helpers.auth import API, bearer, login

ME = f"{API}/auth/me"
T0 = datetime(2026, 3, 1, 9, 0, 0, tzinfo=UTC)


def _flip_signature_byte(token: str) -> str:
    header, payload, signature = token.split(".")
    i = len(signature) // 2
    swapped = "A" if signature[i] != "A" else "B"
    return ".".join([header, payload, signature[:i] + swapped + signature[i + 1 :]])


def test_valid_token_reaches_handler(client):
    user = UserFactory()
    resp = client.get(ME, headers=bearer(user))
    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert data["username"] == user.username
    assert "password" not in data


@pytest.mark.parametrize(
    "headers",
    [{}, {"Authorization": "Bearer"}, {"Authorization": "Basic dXNlcjpwYXNz"}],
    ids=["missing", "bare-bearer", "wrong-scheme"],
)
def test_missing_or_malformed_header_is_unauthorized(client, headers):
    resp = client.get(ME, headers=headers)
    assert resp.status_code == 401
    assert resp.get_json()["code"] == "unauthorized"
    assert resp.headers["WWW-Authenticate"].startswith("Bearer")


def test_garbage_token_is_forbidden(client):
    assert client.get(ME, headers={"Authorization": "Bearer abc.def"}).status_code == 403


def test_tampered_signature_is_forbidden(client):
    user = UserFactory()
    token = bearer(user)["Authorization"].split()[1]
    resp = client.get(ME, headers={"Authorization": f"Bearer {_flip_signature_byte(token)}"})
    assert resp.status_code == 403


def test_token_signed_with_other_secret_is_forbidden(client):
    user = UserFactory()
    now = int(datetime.now(UTC).timestamp())
    forged = jwt.encode(
        {"sub": str(user.id), "type": "access", "jti": "x", "iat": now, "exp": now + 60,
         "roles": ["admin"]},
        "not-the-access-secret",
        algorithm="HS256",
    )
    assert client.get(ME, headers={"Authorization": f"Bearer {forged}"}).status_code == 403


def test_refresh_token_is_not_an_access_token(client, token_provider):
    user = UserFactory()
    refresh = token_provider.issue_refresh_token(user_id=user.id).token
    assert client.get(ME, headers={"Authorization": f"Bearer {refresh}"}).status_code == 403


def test_expiry_boundary(client, app):
    user = UserFactory()
    lifetime = app.config["ACCESS_TOKEN_EXPIRES"]
    with freeze_time(T0) as frozen:
        headers = bearer(user)
        frozen.move_to(T0 + timedelta(seconds=lifetime - 1))
        assert client.get(ME, headers=headers).status_code == 200
        frozen.move_to(T0 + timedelta(seconds=lifetime))
        resp = client.get(ME, headers=headers)
    assert resp.status_code == 403
    assert resp.get_json()["message"] == "Token has expired"
    assert 'error="invalid_token"' in resp.headers["WWW-Authenticate"]


def test_missing_role_is_unauthorized_by_default(client):
    user = UserFactory()
    resp = client.get(f"{API}/users", headers=bearer(user))
    assert resp.status_code == 401
    assert resp.get_json()["code"] == "unauthorized"


def test_admin_role_is_allowed(client):
    admin = UserFactory(admin=True)
    assert client.get(f"{API}/users", headers=bearer(admin)).status_code == 200


def test_health_is_public(client):
    resp = client.get(f"{API}/health")
    assert resp.status_code == 200
    assert resp.get_json()["db"] == "ok"
    assert resp.get_json()["live_sessions"] == 0


def test_health_counts_live_refresh_sessions(client):
    login(client, UserFactory().username)
    assert client.get(f"{API}/health").get_json()["live_sessions"] == 1


def test_health_reports_database_failure(client, monkeypatch):
    def _down(self, now):
        raise OperationalError("SELECT count(*)", {}, Exception("connection refused"))

    monkeypatch.setattr(RefreshSessionRepository, "count_live", _down)
    resp = client.get(f"{API}/health")

    assert resp.status_code == 503
    assert resp.get_json()["db"] == "fail"
    assert resp.get_json()["status"] == "degraded"
