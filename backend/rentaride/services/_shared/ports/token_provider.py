from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Protocol


@dataclass(frozen=True, slots=True)
class IssuedToken:
    """
    An encoded token together with its registered claims.

    :ivar token: Encoded JWT handed to the client.
    :ivar jti: Random token identifier.
    :ivar issued_at: ``iat`` as an aware UTC datetime.
    :ivar expires_at: ``exp`` as an aware UTC datetime.
    """

    token: str
    jti: str
    issued_at: datetime
    expires_at: datetime


class TokenProvider(Protocol):
    """Port for minting and checking every token the API hands out.

    Access tokens are only *issued* here; verifying them on protected routes
    is the job of the auth gateway. All ``decode_*`` methods raise
    :class:`~rentaride.services._shared.errors.SignatureError` for a bad
    signature, an expired or malformed token, or a token of the wrong kind.
    """

    @property
    def refresh_expires(self) -> timedelta: ...

    def issue_access_token(self, *, user_id: int, username: str, roles: list[str]) -> str: ...

    def issue_refresh_token(self, *, user_id: int) -> IssuedToken: ...

    def decode_refresh_token(self, token: str) -> int: ...

    def issue_email_verify_token(self, *, username: str) -> str: ...

    def decode_email_verify_token(self, token: str) -> str: ...

    def issue_password_reset_token(self, *, email: str) -> str: ...

    def decode_password_reset_token(self, token: str) -> str: ...
