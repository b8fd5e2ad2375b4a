"""Unit tests for the PyJWT token provider."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import jwt
import pytest
from freezegun import freeze_time
from rentaride.infra.jwt.pyjwt_token_provider import JWTTokenProvider, TokenSettings
from rentaride.services._shared.errors import SignatureError

CONFIG = {
    "ACCESS_TOKEN_SECRET": "access-secret",
    "REFRESH_TOKEN_SECRET": "refresh-secret",
    "EMAIL_VERIFY_TOKEN_SECRET": "verify-secret",
    "PASSWORD_RESET_TOKEN_SECRET": "reset-secret",
    "ACCESS_TOKEN_EXPIRES": 300,
    "REFRESH_TOKEN_EXPIRES": 3600,
}

T0 = datetime(2026, 1, 1, 12, 0, 0, tzinfo=UTC)


@pytest.fixture()
def provider() -> JWTTokenProvider:
    return JWTTokenProvider(TokenSettings.from_config(CONFIG))


class TestTokenSettings:
    def test_reads_lifetimes(self):
        settings = TokenSettings.from_config(CONFIG)
        assert settings.access_expires == timedelta(seconds=300)
        assert settings.refresh_expires == timedelta(hours=1)
        assert settings.email_verify_expires == timedelta(minutes=20)

    @pytest.mark.parametrize("key", ["ACCESS_TOKEN_SECRET", "PASSWORD_RESET_TOKEN_SECRET"])
    def test_missing_secret_aborts(self, key):
        with pytest.raises(RuntimeError):
            TokenSettings.from_config({**CONFIG, key: "  "})

    def test_shared_secret_aborts(self):
        with pytest.raises(RuntimeError, match="distinct"):
            TokenSettings.from_config({**CONFIG, "REFRESH_TOKEN_SECRET": "access-secret"})


class TestAccessAndRefresh:
    def test_access_token_claims(self, provider):
        with freeze_time(T0):
            token = provider.issue_access_token(user_id=7, username="alice", roles=["standard"])
        claims = jwt.decode(
            token, "access-secret", algorithms=["HS256"], options={"verify_exp": False}
        )
        assert claims["sub"] == "7"
        assert claims["type"] == "access"
        assert claims["username"] == "alice"
        assert claims["roles"] == ["standard"]
        assert claims["exp"] - claims["iat"] == 300
        assert len(claims["jti"]) == 32

    def test_refresh_tokens_are_unique_within_a_second(self, provider):
        with freeze_time(T0):
            first = provider.issue_refresh_token(user_id=1)
            second = provider.issue_refresh_token(user_id=1)
        assert first.token != second.token
        assert first.jti != second.jti
        assert first.expires_at == T0 + timedelta(hours=1)

    def test_decode_refresh_round_trip(self, provider):
        issued = provider.issue_refresh_token(user_id=42)
        assert provider.decode_refresh_token(issued.token) == 42

    def test_refresh_expires_exactly_at_exp(self, provider):
        with freeze_time(T0) as frozen:
            issued = provider.issue_refresh_token(user_id=1)
            frozen.move_to(T0 + timedelta(seconds=3599))
            assert provider.decode_refresh_token(issued.token) == 1
            frozen.move_to(T0 + timedelta(seconds=3600))
            with pytest.raises(SignatureError, match="expired"):
                provider.decode_refresh_token(issued.token)

    def test_access_token_is_not_a_refresh_token(self, provider):
        token = provider.issue_access_token(user_id=1, username="a", roles=[])
        with pytest.raises(SignatureError):
            provider.decode_refresh_token(token)

    def test_wrong_type_with_right_secret_rejected(self, provider):
        forged = jwt.encode(
            {"sub": "1", "type": "access", "jti": "x", "iat": 1, "exp": 4102444800},
            "refresh-secret",
            algorithm="HS256",
        )
        with pytest.raises(SignatureError):
            provider.decode_refresh_token(forged)

    def test_missing_claims_rejected(self, provider):
        forged = jwt.encode({"sub": "1", "type": "refresh"}, "refresh-secret", algorithm="HS256")
        with pytest.raises(SignatureError):
            provider.decode_refresh_token(forged)

    def test_garbage_rejected(self, provider):
        with pytest.raises(SignatureError):
            provider.decode_refresh_token("not-a-jwt")


class TestMailLinks:
    def test_email_verify_round_trip(self, provider):
        token = provider.issue_email_verify_token(username="alice")
        assert provider.decode_email_verify_token(token) == "alice"

    def test_password_reset_round_trip(self, provider):
        token = provider.issue_password_reset_token(email="a@example.com")
        assert provider.decode_password_reset_token(token) == "a@example.com"

    def test_link_kinds_are_not_interchangeable(self, provider):
        token = provider.issue_email_verify_token(username="alice")
        with pytest.raises(SignatureError):
            provider.decode_password_reset_token(token)

    def test_verify_link_expires(self, provider):
        with freeze_time(T0) as frozen:
            token = provider.issue_email_verify_token(username="alice")
            frozen.move_to(T0 + timedelta(minutes=20))
            with pytest.raises(SignatureError):
                provider.decode_email_verify_token(token)
