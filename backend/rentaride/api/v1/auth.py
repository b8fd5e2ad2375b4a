"""Authentication endpoints using the service layer."""

from __future__ import annotations

from flask import Blueprint, Response, request

from rentaride.api.deps import (
    clear_refresh_cookie,
    current_identity,
    get_auth_service,
    json_response,
    read_refresh_cookie,
    require_auth,
    set_refresh_cookie,
    timing,
)
from rentaride.core.errors import Forbidden, problem_response
from rentaride.schemas import (
    LoginSchema,
    PasswordResetConfirmSchema,
    PasswordResetRequestSchema,
    ProfileSchema,
    RegisterSchema,
    TokenResponseSchema,
)
from rentaride.services._shared.errors import TokenReuseError
from rentaride.services.auth.dto import (
    LoginIn,
    LogoutIn,
    PasswordResetConfirmIn,
    PasswordResetRequestIn,
    RefreshIn,
    RegisterIn,
    VerifyEmailIn,
)

bp = Blueprint("auth", __name__)

register_schema = RegisterSchema()
login_schema = LoginSchema()
token_schema = TokenResponseSchema()
profile_schema = ProfileSchema()
reset_request_schema = PasswordResetRequestSchema()
reset_confirm_schema = PasswordResetConfirmSchema()

_ACCOUNT_KEYS = ("username", "email", "password", "account_type")


def _user_agent() -> str | None:
    return request.user_agent.string or None


@bp.post("/login")
@timing
def login():
    """Authenticate credentials, return an access token and set the refresh cookie."""

    data = login_schema.load(request.get_json(silent=True) or {})
    out = get_auth_service().login(
        LoginIn(
            username=data["username"],
            password=data["password"],
            current_refresh_token=read_refresh_cookie(),
            user_agent=_user_agent(),
        )
    )
    response = json_response(token_schema.dump(out))
    return set_refresh_cookie(response, out.refresh_token, max_age=out.refresh_max_age)


@bp.get("/refresh-token")
@timing
def refresh_token():
    """Rotate the refresh cookie and return a new access token."""

    service = get_auth_service()
    try:
        out = service.refresh(
            RefreshIn(refresh_token=read_refresh_cookie(), user_agent=_user_agent())
        )
    except TokenReuseError as err:
        # Every session is gone; drop the stale cookie as well
        response, status = problem_response(Forbidden(str(err)))
        return clear_refresh_cookie(response), status
    response = json_response(token_schema.dump(out))
    return set_refresh_cookie(response, out.refresh_token, max_age=out.refresh_max_age)


@bp.get("/logout")
@timing
def logout():
    """Drop the refresh session and clear the cookie. Safe to repeat."""

    if not get_auth_service().logout(LogoutIn(refresh_token=read_refresh_cookie())):
        return Response(status=204)
    return clear_refresh_cookie(json_response({"message": "Cookie cleared"}))


@bp.post("/register")
@timing
def register():
    """Register an unverified account and mail its confirmation link."""

    data = register_schema.load(request.get_json(silent=True) or {})
    profile = {k: v for k, v in data.items() if k not in _ACCOUNT_KEYS}
    username = get_auth_service().register(
        RegisterIn(
            username=data["username"],
            email=data["email"],
            password=data["password"],
            account_type=data["account_type"],
            profile=profile,
        )
    )
    return json_response({"message": f"User {username} created"}, status=201)


@bp.post("/verify-email/<username>/<token>")
@timing
def verify_email(username: str, token: str):
    get_auth_service().verify_email(VerifyEmailIn(username=username, token=token))
    return json_response({"message": "Email verified successfully"})


@bp.post("/password-reset")
@timing
def request_password_reset():
    """Mail a reset link; the reply never reveals whether the account exists."""

    data = reset_request_schema.load(request.get_json(silent=True) or {})
    message = get_auth_service().request_password_reset(
        PasswordResetRequestIn(email=data["email"])
    )
    return json_response({"message": message})


@bp.post("/password-reset/<username>/<token>")
@timing
def confirm_password_reset(username: str, token: str):
    """Set a new password from a mailed link; every session is revoked."""

    data = reset_confirm_schema.load(request.get_json(silent=True) or {})
    get_auth_service().confirm_password_reset(
        PasswordResetConfirmIn(username=username, token=token, password=data["password"])
    )
    return clear_refresh_cookie(json_response({"message": "Password reset successfully"}))


@bp.get("/me")
@require_auth
@timing
def me():
    """Return the authenticated user's profile."""

    identity = current_identity()
    profile = get_auth_service().profile(identity.user_id)
    return json_response({"data": profile_schema.dump(profile)})
