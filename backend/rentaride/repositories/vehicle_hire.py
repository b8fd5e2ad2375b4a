"""Vehicle hire repository."""

from __future__ import annotations

from sqlalchemy import ColumnElement, or_

from rentaride.models.vehicle_hire import VehicleHire
from rentaride.repositories.base import BaseRepository


class VehicleHireRepository(BaseRepository[VehicleHire]):
    model = VehicleHire

    def _sortable_fields(self):
        return {
            "id": VehicleHire.id,
            "release_at": VehicleHire.release_at,
            "due_back_at": VehicleHire.due_back_at,
            "created_at": VehicleHire.created_at,
        }

    def _filterable_fields(self):
        return {
            "vehicle_id": VehicleHire.vehicle_id,
            "hirer_id": VehicleHire.hirer_id,
            "owner_id": VehicleHire.owner_id,
            "active": VehicleHire.active,
            "paid": VehicleHire.paid,
        }

    def _updatable_fields(self):
        return {"release_at", "due_back_at", "paid"}

    def _soft_delete(self, instance: VehicleHire) -> bool:
        instance.soft_delete()
        return True

    def involving_clause(self, user_id: int) -> list[ColumnElement[bool]]:
        return [or_(VehicleHire.hirer_id == user_id, VehicleHire.owner_id == user_id)]

    def current_for_vehicle(self, vehicle_id: int) -> VehicleHire | None:
        """Return the active, not yet returned hire of a vehicle, if any."""
        hires = self.list(
            filters={"vehicle_id": vehicle_id, "active": True},
            where=[VehicleHire.returned_at.is_(None)],
            sort=["-release_at"],
        )
        return hires[0] if hires else None
