# rentaride/services/auth/service.py
from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from rentaride.models.base import utcnow
from rentaride.models.user import ACCOUNT_TYPE_ROLES, User
from rentaride.repositories.refresh_session import RotationResult, hash_token
from rentaride.services._shared.base import BaseService, ServiceContext
from rentaride.services._shared.errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    PersistenceError,
    SignatureError,
    TokenReuseError,
    ValidationError,
    violates,
)
from rentaride.services._shared.ports import Mailer, TokenProvider
from rentaride.services.auth.dto import (
    AuthTokensOut,
    LoginIn,
    LogoutIn,
    PasswordResetConfirmIn,
    PasswordResetRequestIn,
    ProfileOut,
    RefreshIn,
    RegisterIn,
    VerifyEmailIn,
)

log = logging.getLogger(__name__)

T = TypeVar("T")

UNVERIFIED_MESSAGE = "You must verify your email before you can login."
INVALID_LINK_MESSAGE = "Invalid/expired link"
RESET_REQUESTED_MESSAGE = (
    "Password reset link has been sent to your email if you have an account with us"
)


class AuthService(BaseService):
    """
    Authentication lifecycle service.

    Covers login, refresh-token rotation with reuse detection, logout,
    registration with email verification, and password reset.

    Refresh tokens are tracked server-side by hash in ``refresh_sessions``:
    a token is live only while its row exists. Rotation consumes the old row
    with a conditional delete and inserts the new one in the same transaction,
    so of two concurrent refreshes with the same token exactly one wins.
    """

    def __init__(
        self,
        *,
        token_provider: TokenProvider,
        mailer: Mailer,
        frontend_url: str = "",
        ctx: ServiceContext | None = None,
    ) -> None:
        """
        Initialize the service with its dependencies.

        :param token_provider: Adapter minting and decoding every token kind.
        :param mailer: Adapter for verification and reset mail.
        :param frontend_url: Base URL of the web client, used in mail links.
        """
        super().__init__(ctx=ctx)
        self.tokens = token_provider
        self.mailer = mailer
        self.frontend_url = frontend_url.rstrip("/")

    # ------------------------------------------------------------------ #
    # Login
    # ------------------------------------------------------------------ #

    def login(self, dto: LoginIn) -> AuthTokensOut:
        """
        Authenticate credentials and open a new refresh session.

        :param dto: Login input.
        :returns: Access token plus the refresh cookie value.
        :raises AuthenticationError: Unknown, inactive or unverified account,
            or wrong password.
        """
        with self.ro_uow() as uow:
            user = uow.users.authenticate(dto.username, dto.password)
            if user is None or not user.active:
                log.info("Login rejected", extra={"event": "auth.login.failed"})
                raise AuthenticationError()
            if not user.is_email_verified:
                log.info(
                    "Login rejected: email not verified",
                    extra={"event": "auth.login.unverified", "user_id": user.id},
                )
                raise AuthenticationError(UNVERIFIED_MESSAGE)
            user_id, username, roles = user.id, user.username, list(user.roles or [])

        issued = self.tokens.issue_refresh_token(user_id=user_id)

        def persist(uow) -> None:
            if dto.current_refresh_token:
                uow.refresh_sessions.discard(
                    hash_token(dto.current_refresh_token), user_id=user_id
                )
            uow.refresh_sessions.register(
                user_id=user_id,
                token_hash=hash_token(issued.token),
                issued_at=issued.issued_at,
                expires_at=issued.expires_at,
                user_agent=dto.user_agent,
            )
            self._touch(uow, user_id)

        self._write(persist)
        log.info("Login succeeded", extra={"event": "auth.login", "user_id": user_id})
        return self._tokens_out(user_id, username, roles, issued.token)

    # ------------------------------------------------------------------ #
    # Refresh with rotation
    # ------------------------------------------------------------------ #

    def refresh(self, dto: RefreshIn) -> AuthTokensOut:
        """
        Rotate a refresh token and emit a new access token.

        Security
        --------
        - Signature, expiry and token type are checked before any state is read.
        - The user must still exist and be active.
        - A validly signed token with no live session is treated as stolen:
          every session of the user is revoked (**reuse detection**).

        :raises AuthenticationError: No token, or unknown/inactive user.
        :raises SignatureError: Invalid, expired or wrong-type token.
        :raises TokenReuseError: Token already rotated away or logged out.
        :raises PersistenceError: The rotation could not be saved.
        """
        if not dto.refresh_token:
            raise AuthenticationError()

        user_id = self.tokens.decode_refresh_token(dto.refresh_token)

        with self.ro_uow() as uow:
            user = uow.users.get(user_id)
            if user is None or not user.active:
                raise AuthenticationError()
            username, roles = user.username, list(user.roles or [])

        issued = self.tokens.issue_refresh_token(user_id=user_id)

        def rotate(uow) -> RotationResult:
            outcome = uow.refresh_sessions.rotate(
                old_hash=hash_token(dto.refresh_token),
                new_hash=hash_token(issued.token),
                user_id=user_id,
                issued_at=issued.issued_at,
                expires_at=issued.expires_at,
                user_agent=dto.user_agent,
            )
            if outcome is RotationResult.OK:
                self._touch(uow, user_id)
            return outcome

        if self._write(rotate) is RotationResult.REUSED:
            revoked = self._write(lambda uow: uow.refresh_sessions.revoke_all_for_user(user_id))
            log.warning(
                "Refresh token reuse detected; revoked %s session(s)",
                revoked,
                extra={"event": "auth.refresh.reuse", "user_id": user_id},
            )
            raise TokenReuseError()

        log.info("Refresh token rotated", extra={"event": "auth.refresh", "user_id": user_id})
        return self._tokens_out(user_id, username, roles, issued.token)

    # ------------------------------------------------------------------ #
    # Logout
    # ------------------------------------------------------------------ #

    def logout(self, dto: LogoutIn) -> bool:
        """
        Drop the session of the presented refresh token.

        Idempotent: an unknown, expired or already discarded token is a no-op.
        The token is looked up by hash only, so no signature check is needed.

        :returns: ``False`` when no token was presented at all.
        """
        if not dto.refresh_token:
            return False
        removed = self._write(
            lambda uow: uow.refresh_sessions.discard(hash_token(dto.refresh_token))
        )
        status = "removed" if removed else "noop"
        log.info("Logout", extra={"event": "auth.logout", "status": status})
        return True

    # ------------------------------------------------------------------ #
    # Registration & email verification
    # ------------------------------------------------------------------ #

    def register(self, dto: RegisterIn) -> str:
        """
        Create an unverified account and mail its confirmation link.

        The mail is sent only after the commit; a delivery failure is logged
        and does not undo the registration.

        :returns: The new username.
        :raises ValidationError: Unknown ``account_type``.
        :raises ConflictError: Username or email already taken.
        """
        roles = ACCOUNT_TYPE_ROLES.get(dto.account_type)
        if roles is None:
            raise ValidationError(f"Unknown account type: {dto.account_type}")

        with self.rw_uow() as uow:
            repo = uow.users
            if repo.exists_by_username(dto.username):
                raise ConflictError("User", f"Username {dto.username.strip()} already exists")
            if repo.exists_by_email(dto.email):
                raise ConflictError("User", f"User email {dto.email.strip()} already exists")

            token = self.tokens.issue_email_verify_token(username=dto.username.strip())
            try:
                user = User(
                    username=dto.username, email=dto.email, roles=list(roles), **dto.profile
                )
                user.password = dto.password
            except ValueError as exc:
                raise ValidationError(str(exc)) from exc
            user.email_verify_token_hash = hash_token(token)
            try:
                repo.add(user)
            except IntegrityError as exc:
                if violates(exc, "uq_users_email"):
                    raise ConflictError("User", f"User email {user.email} already exists") from exc
                raise ConflictError("User", f"Username {user.username} already exists") from exc

            username, email = user.username, user.email
            link = f"{self.frontend_url}/verify-email/{username}/{token}"
            uow.on_committed(
                lambda: self._send_mail(
                    to=email,
                    subject="New Account Registration",
                    body=f"Welcome {username}! Confirm your email address: {link}",
                    event="auth.register.mail_failed",
                )
            )

        log.info("User registered", extra={"event": "auth.register", "user_id": user.id})
        return username

    def verify_email(self, dto: VerifyEmailIn) -> None:
        """
        Confirm the emailed registration link.

        :raises ValidationError: ``Invalid/expired link`` for a bad, expired,
            foreign or already used token.
        """
        try:
            username = self.tokens.decode_email_verify_token(dto.token)
        except SignatureError as exc:
            raise ValidationError(INVALID_LINK_MESSAGE) from exc
        if username != dto.username:
            raise ValidationError(INVALID_LINK_MESSAGE)

        with self.rw_uow() as uow:
            user = uow.users.get_by_username(dto.username)
            if user is None or user.email_verify_token_hash != hash_token(dto.token):
                raise ValidationError(INVALID_LINK_MESSAGE)
            user.email_verified_at = utcnow()
            user.email_verify_token_hash = None
            uow.users.flush()
            user_id = user.id

        log.info("Email verified", extra={"event": "auth.verify_email", "user_id": user_id})

    # ------------------------------------------------------------------ #
    # Password reset
    # ------------------------------------------------------------------ #

    def request_password_reset(self, dto: PasswordResetRequestIn) -> str:
        """
        Mail a reset link when an active account uses ``dto.email``.

        :returns: The same generic message whether or not the account exists.
        """
        with self.rw_uow() as uow:
            user = uow.users.get_by_email(dto.email)
            if user is not None and user.active:
                token = self.tokens.issue_password_reset_token(email=user.email)
                user.password_reset_token_hash = hash_token(token)
                uow.users.flush()
                username, email = user.username, user.email
                link = f"{self.frontend_url}/password-reset/{username}/{token}"
                uow.on_committed(
                    lambda: self._send_mail(
                        to=email,
                        subject="Password Reset Request Link",
                        body=f"Hello {username}, reset your password here: {link}",
                        event="auth.password_reset.mail_failed",
                    )
                )
        return RESET_REQUESTED_MESSAGE

    def confirm_password_reset(self, dto: PasswordResetConfirmIn) -> None:
        """
        Set a new password from a reset link and revoke every session.

        :raises ValidationError: ``Invalid/expired link``.
        """
        try:
            email = self.tokens.decode_password_reset_token(dto.token)
        except SignatureError as exc:
            raise ValidationError(INVALID_LINK_MESSAGE) from exc

        with self.rw_uow() as uow:
            user = uow.users.get_by_username(dto.username)
            if (
                user is None
                or user.email != email
                or user.password_reset_token_hash != hash_token(dto.token)
            ):
                raise ValidationError(INVALID_LINK_MESSAGE)
            uow.users.update_password(user, dto.password)
            user.password_reset_token_hash = None
            uow.refresh_sessions.revoke_all_for_user(user.id)
            uow.users.flush()
            user_id = user.id

        log.info("Password reset", extra={"event": "auth.password_reset", "user_id": user_id})

    # ------------------------------------------------------------------ #
    # Profile
    # ------------------------------------------------------------------ #

    def profile(self, user_id: int) -> ProfileOut:
        with self.ro_uow() as uow:
            user = uow.users.get(user_id)
            if user is None or not user.active:
                raise NotFoundError("User", user_id)
            return ProfileOut(
                id=user.id,
                username=user.username,
                email=user.email,
                roles=list(user.roles or []),
                first_name=user.first_name,
                other_names=user.other_names,
                last_name=user.last_name,
                enterprise_name=user.enterprise_name,
                phone=user.phone,
                address=user.address,
                id_type=user.id_type,
                id_number=user.id_number,
                date_of_birth=user.date_of_birth,
                verified=user.verified,
            )

    # ------------------------------------------------------------------ #
    # Utilities
    # ------------------------------------------------------------------ #

    def _write(self, work: Callable[..., T]) -> T:
        """Run ``work(uow)`` in a read-write UoW; storage failures become ``PersistenceError``."""
        try:
            with self.rw_uow() as uow:
                return work(uow)
        except SQLAlchemyError as exc:
            log.error("Unable to persist auth state", exc_info=True)
            raise PersistenceError() from exc

    @staticmethod
    def _touch(uow, user_id: int) -> None:
        user = uow.users.get(user_id)
        if user is not None:
            user.last_active_at = utcnow()
            uow.users.flush()

    def _tokens_out(
        self, user_id: int, username: str, roles: list[str], refresh_token: str
    ) -> AuthTokensOut:
        access = self.tokens.issue_access_token(user_id=user_id, username=username, roles=roles)
        return AuthTokensOut(
            access_token=access,
            refresh_token=refresh_token,
            refresh_max_age=int(self.tokens.refresh_expires.total_seconds()),
        )

    def _send_mail(self, *, to: str, subject: str, body: str, event: str) -> None:
        try:
            self.mailer.send(to=to, subject=subject, body=body)
        except Exception:
            log.exception("Mail delivery failed", extra={"event": event})
