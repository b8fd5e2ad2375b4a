"""Refresh session model: one row per currently valid refresh token."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rentaride.core.extensions import db

from .base import PKMixin, ReprMixin, utcnow

if TYPE_CHECKING:
    from .user import User


class RefreshSession(PKMixin, ReprMixin, db.Model):
    """
    Server-side record of an issued refresh token.

    Only the SHA-256 hex digest of the token is stored. Rotation deletes the
    consumed row and inserts its replacement in the same transaction, so a
    token whose row is gone has either been rotated away or logged out.
    """

    __tablename__ = "refresh_sessions"

    token_hash: Mapped[str] = mapped_column(String(64), nullable=False)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    issued_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    user_agent: Mapped[str | None] = mapped_column(String(255))

    __table_args__ = (
        UniqueConstraint("token_hash", name="uq_refresh_sessions_token_hash"),
        Index("ix_refresh_sessions_user_id", "user_id"),
        Index("ix_refresh_sessions_expires_at", "expires_at"),
    )

    user: Mapped[User] = relationship("User", back_populates="refresh_sessions")
