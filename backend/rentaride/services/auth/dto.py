# rentaride/services/auth/dto.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for login.

    :param username: Username *or* email of the account.
    :type username: str
    :param password: Raw password (to be verified).
    :type password: str
    :param current_refresh_token: Refresh cookie already held by the client, if any.
    :type current_refresh_token: str | None
    :param user_agent: Client ``User-Agent`` recorded on the session.
    :type user_agent: str | None
    """

    username: str
    password: str
    current_refresh_token: str | None = None
    user_agent: str | None = None


@dataclass(frozen=True, slots=True)
class RefreshIn:
    """
    Input DTO for token refresh.

    :param refresh_token: Encoded refresh JWT read from the cookie.
    :type refresh_token: str | None
    """

    refresh_token: str | None
    user_agent: str | None = None


@dataclass(frozen=True, slots=True)
class LogoutIn:
    refresh_token: str | None


@dataclass(frozen=True, slots=True)
class RegisterIn:
    """
    Input DTO for self-service registration.

    :param account_type: ``individual`` or ``business``; selects the initial roles.
    :param profile: Optional profile fields (names, phone, address, id, birth date).
    """

    username: str
    email: str
    password: str
    account_type: str = "individual"
    profile: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class VerifyEmailIn:
    username: str
    token: str


@dataclass(frozen=True, slots=True)
class PasswordResetRequestIn:
    email: str


@dataclass(frozen=True, slots=True)
class PasswordResetConfirmIn:
    username: str
    token: str
    password: str


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class AuthTokensOut:
    """
    Output DTO with the access token and the refresh cookie value.

    :param access_token: Encoded access JWT, returned in the body.
    :type access_token: str
    :param refresh_token: Encoded refresh JWT, set as the HTTP-only cookie.
    :type refresh_token: str
    :param refresh_max_age: Cookie ``Max-Age`` in seconds.
    :type refresh_max_age: int
    """

    access_token: str
    refresh_token: str
    refresh_max_age: int


@dataclass(frozen=True, slots=True)
class ProfileOut:
    id: int
    username: str
    email: str
    roles: list[str]
    first_name: str | None
    other_names: str | None
    last_name: str | None
    enterprise_name: str | None
    phone: str | None
    address: str | None
    id_type: str | None
    id_number: str | None
    date_of_birth: date | None
    verified: bool
