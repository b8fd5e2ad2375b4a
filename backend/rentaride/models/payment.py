"""Payment records attached to vehicle hires."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Enum, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rentaride.core.extensions import db

from .base import PKMixin, ReprMixin, SoftDeleteMixin, TimestampMixin, utcnow

if TYPE_CHECKING:
    from .vehicle_hire import VehicleHire

# --- Domain Enums ---
PAYMENT_METHODS = ("debit_card", "credit_card", "paypal", "bitcoin", "ethereum")
PAYMENT_STATUSES = ("pending", "successful", "declined")
PaymentMethod = Enum(*PAYMENT_METHODS, name="payment_method", native_enum=False)
PaymentStatus = Enum(*PAYMENT_STATUSES, name="payment_status", native_enum=False)


class Payment(PKMixin, ReprMixin, TimestampMixin, SoftDeleteMixin, db.Model):
    """
    A payment initiated by the hirer for a hire.

    Parties and vehicle are copied from the hire at creation time so the record
    survives later edits to the booking.
    """

    __tablename__ = "payments"

    vehicle_hire_id: Mapped[int] = mapped_column(
        ForeignKey("vehicle_hires.id", ondelete="CASCADE"), nullable=False
    )
    vehicle_id: Mapped[int] = mapped_column(
        ForeignKey("vehicles.id", ondelete="CASCADE"), nullable=False
    )
    hirer_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    owner_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    method: Mapped[str] = mapped_column(PaymentMethod, nullable=False)
    status: Mapped[str] = mapped_column(
        PaymentStatus, nullable=False, default="pending", server_default="pending"
    )
    initiated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    __table_args__ = (
        Index("ix_payments_vehicle_hire_id", "vehicle_hire_id"),
        Index("ix_payments_hirer_id", "hirer_id"),
    )

    vehicle_hire: Mapped[VehicleHire] = relationship("VehicleHire")

    def involves(self, user_id: int) -> bool:
        return user_id in (self.hirer_id, self.owner_id)
