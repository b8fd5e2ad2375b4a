"""Messages exchanged about a vehicle or a hire."""

from __future__ import annotations

from sqlalchemy import CheckConstraint, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from rentaride.core.extensions import db

from .base import PKMixin, ReprMixin, SoftDeleteMixin, TimestampMixin

MESSAGE_MAX_LENGTH = 100


class Interaction(PKMixin, ReprMixin, TimestampMixin, SoftDeleteMixin, db.Model):
    """
    Short message attached to exactly one vehicle or one vehicle hire.
    """

    __tablename__ = "interactions"

    message: Mapped[str] = mapped_column(String(MESSAGE_MAX_LENGTH), nullable=False)
    author_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    vehicle_id: Mapped[int | None] = mapped_column(
        ForeignKey("vehicles.id", ondelete="CASCADE")
    )
    vehicle_hire_id: Mapped[int | None] = mapped_column(
        ForeignKey("vehicle_hires.id", ondelete="CASCADE")
    )

    __table_args__ = (
        CheckConstraint(
            "(vehicle_id IS NULL) <> (vehicle_hire_id IS NULL)",
            name="exactly_one_target",
        ),
        Index("ix_interactions_vehicle_id", "vehicle_id"),
        Index("ix_interactions_vehicle_hire_id", "vehicle_hire_id"),
    )
