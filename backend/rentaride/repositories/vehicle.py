"""Vehicle repository."""

from __future__ import annotations

from sqlalchemy import ColumnElement, or_

from rentaride.models.vehicle import Vehicle
from rentaride.repositories.base import BaseRepository


class VehicleRepository(BaseRepository[Vehicle]):
    model = Vehicle

    def _sortable_fields(self):
        return {
            "id": Vehicle.id,
            "brand": Vehicle.brand,
            "model": Vehicle.model,
            "status": Vehicle.status,
            "created_at": Vehicle.created_at,
        }

    def _filterable_fields(self):
        return {
            "added_by_id": Vehicle.added_by_id,
            "plate_number": Vehicle.plate_number,
            "status": Vehicle.status,
            "active": Vehicle.active,
            "verified": Vehicle.verified,
        }

    def _updatable_fields(self):
        """Owner-editable fields; admin-level flags go through ``assign_admin_updates``."""
        return {"brand", "model", "engine_number", "vin", "plate_number"}

    def _soft_delete(self, instance: Vehicle) -> bool:
        instance.soft_delete()
        return True

    def assign_admin_updates(self, instance: Vehicle, fields) -> Vehicle:
        allowed = {"status", "verified", "active", "company_owned", "due_back_at"}
        for key, value in fields.items():
            if key in allowed:
                setattr(instance, key, value)
        self.flush()
        return instance

    def search_clause(self, term: str) -> list[ColumnElement[bool]]:
        """Case-insensitive brand/model match restricted to listable vehicles."""
        like = f"%{term.strip()}%"
        return [
            or_(Vehicle.brand.ilike(like), Vehicle.model.ilike(like)),
            Vehicle.active.is_(True),
            Vehicle.verified.is_(True),
        ]
