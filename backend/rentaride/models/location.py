"""Live location models for users and vehicles.

Each user or vehicle has at most one current location row, updated in place
by periodic client reports.
"""

from __future__ import annotations

from sqlalchemy import CheckConstraint, Float, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from rentaride.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin


class LocationMixin:
    """Shared geographic columns."""

    address: Mapped[str | None] = mapped_column(String(255))
    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)
    plus_code: Mapped[str | None] = mapped_column(String(20))


class UserLocation(PKMixin, ReprMixin, TimestampMixin, LocationMixin, db.Model):
    __tablename__ = "user_locations"

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    __table_args__ = (
        UniqueConstraint("user_id", name="uq_user_locations_user_id"),
        CheckConstraint("latitude BETWEEN -90 AND 90", name="latitude_range"),
        CheckConstraint("longitude BETWEEN -180 AND 180", name="longitude_range"),
    )


class VehicleLocation(PKMixin, ReprMixin, TimestampMixin, LocationMixin, db.Model):
    __tablename__ = "vehicle_locations"

    vehicle_id: Mapped[int] = mapped_column(
        ForeignKey("vehicles.id", ondelete="CASCADE"), nullable=False
    )

    __table_args__ = (
        UniqueConstraint("vehicle_id", name="uq_vehicle_locations_vehicle_id"),
        CheckConstraint("latitude BETWEEN -90 AND 90", name="latitude_range"),
        CheckConstraint("longitude BETWEEN -180 AND 180", name="longitude_range"),
    )
