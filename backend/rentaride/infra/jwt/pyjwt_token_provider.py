# rentaride/infra/jwt/pyjwt_token_provider.py
from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import uuid4

import jwt

from rentaride.services._shared.errors import SignatureError
from rentaride.services._shared.ports import IssuedToken, TokenProvider

log = logging.getLogger(__name__)

ACCESS = "access"
REFRESH = "refresh"
EMAIL_VERIFY = "email_verify"
PASSWORD_RESET = "password_reset"

_SECRET_KEYS = (
    "ACCESS_TOKEN_SECRET",
    "REFRESH_TOKEN_SECRET",
    "EMAIL_VERIFY_TOKEN_SECRET",
    "PASSWORD_RESET_TOKEN_SECRET",
)


@dataclass(frozen=True, slots=True)
class TokenSettings:
    """
    Signing keys and lifetimes for every token kind.

    Built once at startup by :meth:`from_config`; handlers never read secrets
    from the environment.
    """

    access_secret: str
    refresh_secret: str
    email_verify_secret: str
    password_reset_secret: str
    access_expires: timedelta
    refresh_expires: timedelta
    email_verify_expires: timedelta
    password_reset_expires: timedelta
    algorithm: str = "HS256"

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> TokenSettings:
        """
        Build settings from a Flask config mapping.

        :raises RuntimeError: If a secret is missing, empty, or shared by two
            token kinds (a token of one kind would then verify as another).
        """
        secrets: dict[str, str] = {}
        for key in _SECRET_KEYS:
            value = str(config.get(key) or "").strip()
            if not value:
                raise RuntimeError(f"{key} is not configured")
            secrets[key] = value
        if len(set(secrets.values())) != len(secrets):
            raise RuntimeError("Token secrets must be distinct per token kind")

        def seconds(key: str, default: int) -> timedelta:
            return timedelta(seconds=int(config.get(key, default)))

        return cls(
            access_secret=secrets["ACCESS_TOKEN_SECRET"],
            refresh_secret=secrets["REFRESH_TOKEN_SECRET"],
            email_verify_secret=secrets["EMAIL_VERIFY_TOKEN_SECRET"],
            password_reset_secret=secrets["PASSWORD_RESET_TOKEN_SECRET"],
            access_expires=seconds("ACCESS_TOKEN_EXPIRES", 5 * 60),
            refresh_expires=seconds("REFRESH_TOKEN_EXPIRES", 24 * 60 * 60),
            email_verify_expires=seconds("EMAIL_VERIFY_TOKEN_EXPIRES", 20 * 60),
            password_reset_expires=seconds("PASSWORD_RESET_TOKEN_EXPIRES", 10 * 60),
            algorithm=str(config.get("JWT_ALGORITHM", "HS256")),
        )


class JWTTokenProvider(TokenProvider):
    """
    PyJWT adapter minting HS256 tokens, one secret per token kind.

    Every token carries ``sub``, ``type``, a random ``jti``, ``iat`` and
    ``exp``. Access tokens are verified by flask-jwt-extended, so their claims
    follow its conventions (string ``sub``, ``type="access"``).
    """

    def __init__(self, settings: TokenSettings) -> None:
        self.settings = settings

    @property
    def refresh_expires(self) -> timedelta:
        return self.settings.refresh_expires

    # ----------------------------- internals -----------------------------

    def _encode(
        self,
        *,
        subject: str,
        token_type: str,
        secret: str,
        lifetime: timedelta,
        extra: Mapping[str, Any] | None = None,
    ) -> IssuedToken:
        # Whole seconds, so ``exp - iat`` is exactly the configured lifetime
        issued_at = datetime.now(UTC).replace(microsecond=0)
        expires_at = issued_at + lifetime
        jti = uuid4().hex
        payload: dict[str, Any] = dict(extra or {})
        payload.update(
            {
                "sub": subject,
                "type": token_type,
                "jti": jti,
                "iat": int(issued_at.timestamp()),
                "exp": int(expires_at.timestamp()),
            }
        )
        token = jwt.encode(payload, secret, algorithm=self.settings.algorithm)
        return IssuedToken(token=token, jti=jti, issued_at=issued_at, expires_at=expires_at)

    def _decode(self, token: str, *, token_type: str, secret: str) -> dict[str, Any]:
        try:
            claims = jwt.decode(
                token,
                secret,
                algorithms=[self.settings.algorithm],
                options={"require": ["sub", "type", "jti", "iat", "exp"]},
                leeway=0,
            )
        except jwt.ExpiredSignatureError as exc:
            raise SignatureError("Token has expired") from exc
        except jwt.PyJWTError as exc:
            log.debug("Token rejected: %s", exc)
            raise SignatureError() from exc
        if claims.get("type") != token_type:
            raise SignatureError()
        return claims

    # ----------------------------- access / refresh -----------------------------

    def issue_access_token(self, *, user_id: int, username: str, roles: list[str]) -> str:
        return self._encode(
            subject=str(user_id),
            token_type=ACCESS,
            secret=self.settings.access_secret,
            lifetime=self.settings.access_expires,
            extra={"username": username, "roles": list(roles)},
        ).token

    def issue_refresh_token(self, *, user_id: int) -> IssuedToken:
        return self._encode(
            subject=str(user_id),
            token_type=REFRESH,
            secret=self.settings.refresh_secret,
            lifetime=self.settings.refresh_expires,
        )

    def decode_refresh_token(self, token: str) -> int:
        """
        Verify a refresh token and return its user id.

        :raises SignatureError: Bad signature, expired, wrong type or malformed.
        """
        claims = self._decode(token, token_type=REFRESH, secret=self.settings.refresh_secret)
        try:
            return int(claims["sub"])
        except (TypeError, ValueError) as exc:
            raise SignatureError() from exc

    # ----------------------------- mail links -----------------------------

    def issue_email_verify_token(self, *, username: str) -> str:
        return self._encode(
            subject=username,
            token_type=EMAIL_VERIFY,
            secret=self.settings.email_verify_secret,
            lifetime=self.settings.email_verify_expires,
        ).token

    def decode_email_verify_token(self, token: str) -> str:
        claims = self._decode(
            token, token_type=EMAIL_VERIFY, secret=self.settings.email_verify_secret
        )
        return str(claims["sub"])

    def issue_password_reset_token(self, *, email: str) -> str:
        return self._encode(
            subject=email,
            token_type=PASSWORD_RESET,
            secret=self.settings.password_reset_secret,
            lifetime=self.settings.password_reset_expires,
        ).token

    def decode_password_reset_token(self, token: str) -> str:
        claims = self._decode(
            token, token_type=PASSWORD_RESET, secret=self.settings.password_reset_secret
        )
        return str(claims["sub"])
