"""Vehicle listing model."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, Enum, ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from rentaride.core.extensions import db

from .base import PKMixin, ReprMixin, SoftDeleteMixin, TimestampMixin

if TYPE_CHECKING:
    from .user import User

# --- Domain Enum ---
VEHICLE_STATUSES = ("available", "maintenance", "rented", "reserved")
VehicleStatus = Enum(*VEHICLE_STATUSES, name="vehicle_status", native_enum=False)


class Vehicle(PKMixin, ReprMixin, TimestampMixin, SoftDeleteMixin, db.Model):
    """
    A vehicle offered for hire by its owner (``added_by``).

    ``verified`` is granted by an admin; only active, verified vehicles show up
    in public search.
    """

    __tablename__ = "vehicles"

    brand: Mapped[str] = mapped_column(String(50), nullable=False)
    model: Mapped[str] = mapped_column(String(50), nullable=False)
    engine_number: Mapped[str | None] = mapped_column(String(50))
    vin: Mapped[str | None] = mapped_column(String(50))
    plate_number: Mapped[str] = mapped_column(String(20), nullable=False)
    status: Mapped[str] = mapped_column(
        VehicleStatus, nullable=False, default="available", server_default="available"
    )
    verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    company_owned: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    due_back_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    added_by_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    __table_args__ = (
        UniqueConstraint("plate_number", name="uq_vehicles_plate_number"),
        Index("ix_vehicles_added_by_id", "added_by_id"),
        Index("ix_vehicles_brand_model", "brand", "model"),
    )

    added_by: Mapped[User] = relationship("User")

    @property
    def is_hireable(self) -> bool:
        return bool(self.active) and self.status == "available"

    @validates("brand", "model", "plate_number")
    def _strip(self, key: str, value: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError(f"{key} is required.")
        return value.strip()
