"""Vehicle hire (booking) model."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, CheckConstraint, DateTime, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rentaride.core.extensions import db

from .base import PKMixin, ReprMixin, SoftDeleteMixin, TimestampMixin

if TYPE_CHECKING:
    from .user import User
    from .vehicle import Vehicle


class VehicleHire(PKMixin, ReprMixin, TimestampMixin, SoftDeleteMixin, db.Model):
    """
    A booking of ``vehicle`` by ``hirer`` from ``owner``.

    ``returned_at`` stays empty while the vehicle is out.
    """

    __tablename__ = "vehicle_hires"

    vehicle_id: Mapped[int] = mapped_column(
        ForeignKey("vehicles.id", ondelete="CASCADE"), nullable=False
    )
    hirer_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    owner_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    release_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    due_back_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    returned_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    paid: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    __table_args__ = (
        CheckConstraint("due_back_at > release_at", name="due_after_release"),
        Index("ix_vehicle_hires_vehicle_id", "vehicle_id"),
        Index("ix_vehicle_hires_hirer_id", "hirer_id"),
        Index("ix_vehicle_hires_owner_id", "owner_id"),
    )

    vehicle: Mapped[Vehicle] = relationship("Vehicle")
    hirer: Mapped[User] = relationship("User", foreign_keys=[hirer_id])
    owner: Mapped[User] = relationship("User", foreign_keys=[owner_id])

    @property
    def is_returned(self) -> bool:
        return self.returned_at is not None

    def involves(self, user_id: int) -> bool:
        """Return True when ``user_id`` is the hirer or the owner."""
        return user_id in (self.hirer_id, self.owner_id)
