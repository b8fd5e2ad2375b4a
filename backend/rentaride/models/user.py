"""User credential record for the rental marketplace."""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy import JSON, Boolean, Date, DateTime, ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates
from werkzeug.security import check_password_hash, generate_password_hash

from rentaride.core.extensions import db

from .base import PKMixin, ReprMixin, SoftDeleteMixin, TimestampMixin

if TYPE_CHECKING:
    from .refresh_session import RefreshSession

# --- Roles ---
ROLE_STANDARD = "standard"
ROLE_BUSINESS = "business"
ROLE_ADMIN = "admin"
ROLES = (ROLE_STANDARD, ROLE_BUSINESS, ROLE_ADMIN)

_EMAIL_SHAPE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

# Self-service account types and the role set each one starts with
ACCOUNT_TYPE_ROLES = {
    "individual": [ROLE_STANDARD],
    "business": [ROLE_BUSINESS],
}


class User(PKMixin, ReprMixin, TimestampMixin, SoftDeleteMixin, db.Model):
    """
    Authentication identity and marketplace profile.

    Fields
    ------
    username, email : str
        Unique, case-sensitive login keys (trimmed, never case-folded).
    password_hash : str
        One-way digest (write-only setter via ``password``).
    roles : list[str]
        Capability tags drawn from :data:`ROLES`.
    email_verified_at : datetime | None
        Set once the emailed link is confirmed; unverified users cannot log in.
    email_verify_token_hash, password_reset_token_hash : str | None
        SHA-256 of the outstanding link token; cleared once used.
    verified : bool
        Admin-level identity check, independent from email verification.
    last_active_at : datetime | None
        Touched on login and on every refresh.
    refresh_sessions : list[RefreshSession]
        Currently valid refresh tokens (by hash), oldest first.
    """

    __tablename__ = "users"

    # Identity
    username: Mapped[str] = mapped_column(String(50), nullable=False)
    email: Mapped[str] = mapped_column(String(254), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(254), nullable=False)
    roles: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    # Verification state
    email_verified_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    email_verify_token_hash: Mapped[str | None] = mapped_column(String(64))
    password_reset_token_hash: Mapped[str | None] = mapped_column(String(64))
    verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    last_active_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    # Profile
    first_name: Mapped[str | None] = mapped_column(String(50))
    other_names: Mapped[str | None] = mapped_column(String(50))
    last_name: Mapped[str | None] = mapped_column(String(50))
    enterprise_name: Mapped[str | None] = mapped_column(String(100))
    phone: Mapped[str | None] = mapped_column(String(20))
    address: Mapped[str | None] = mapped_column(String(255))
    id_type: Mapped[str | None] = mapped_column(String(30))
    id_number: Mapped[str | None] = mapped_column(String(30))
    date_of_birth: Mapped[date | None] = mapped_column(Date)

    created_by_id: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL")
    )

    __table_args__ = (
        UniqueConstraint("email", name="uq_users_email"),
        UniqueConstraint("username", name="uq_users_username"),
        Index("ix_users_last_name", "last_name"),
    )

    refresh_sessions: Mapped[list[RefreshSession]] = relationship(
        "RefreshSession",
        back_populates="user",
        order_by="RefreshSession.issued_at",
        cascade="all, delete-orphan",
    )

    # Credentials
    @property
    def password(self) -> Any:  # pragma: no cover
        """Plain passwords are never stored, so there is nothing to read back."""
        raise AttributeError("User.password can only be assigned")

    @password.setter
    def password(self, raw: str) -> None:
        if not isinstance(raw, str) or not raw:
            raise ValueError("A password cannot be empty.")
        self.password_hash = generate_password_hash(raw)

    def verify_password(self, raw: str) -> bool:
        """Compare ``raw`` with the stored digest; users without one never match."""
        return bool(self.password_hash) and check_password_hash(self.password_hash, raw)

    # State
    @property
    def is_email_verified(self) -> bool:
        return self.email_verified_at is not None

    # Column validators, applied on construction and on every assignment
    @validates("username")
    def _clean_username(self, key: str, value: str) -> str:
        return _trimmed(value, "username")

    @validates("email")
    def _clean_email(self, key: str, value: str) -> str:
        # Shape check only; schemas do the thorough validation
        email = _trimmed(value, "email")
        if not _EMAIL_SHAPE.match(email):
            raise ValueError(f"Not an email address: {email!r}")
        return email

    @validates("roles")
    def _validate_roles(self, key: str, value: list[str]) -> list[str]:
        """
        Keep roles as a de-duplicated list of known tags.

        :raises ValueError: On unknown role names.
        """
        unknown = [r for r in value or [] if r not in ROLES]
        if unknown:
            raise ValueError(f"Unknown roles: {unknown}")
        return list(dict.fromkeys(value or []))


def _trimmed(value: Any, field: str) -> str:
    cleaned = value.strip() if isinstance(value, str) else ""
    if not cleaned:
        raise ValueError(f"User.{field} must not be blank.")
    return cleaned
