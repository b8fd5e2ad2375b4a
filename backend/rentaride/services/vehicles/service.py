"""
VehicleService
==============

Vehicle listings: public search, owner management and admin moderation.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.exc import IntegrityError

from rentaride.models.vehicle import Vehicle
from rentaride.repositories.base import Page, Pagination
from rentaride.services._shared.base import BaseService
from rentaride.services._shared.errors import ConflictError


class VehicleService(BaseService):
    """Application service for the ``Vehicle`` aggregate."""

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #

    def search(self, term: str, pagination: Pagination) -> Page[Vehicle]:
        """Public search over active, verified vehicles by brand or model."""
        with self.ro_uow() as uow:
            return uow.vehicles.paginate(pagination, where=uow.vehicles.search_clause(term))

    def list_vehicles(self, filters: dict[str, Any], pagination: Pagination) -> Page[Vehicle]:
        with self.ro_uow() as uow:
            return uow.vehicles.paginate(pagination, filters=filters)

    def list_for_owner(self, owner_id: int, pagination: Pagination) -> Page[Vehicle]:
        """Vehicles added by ``owner_id``; owners never see their deactivated ones."""
        self.ensure_owner_or_admin(owner_id)
        filters: dict[str, Any] = {"added_by_id": owner_id}
        if not self.ctx.is_admin:
            filters["active"] = True
        with self.ro_uow() as uow:
            return uow.vehicles.paginate(pagination, filters=filters)

    def get_vehicle(self, vehicle_id: int) -> Vehicle:
        with self.ro_uow() as uow:
            vehicle = self.get_or_404(uow.vehicles, vehicle_id, "Vehicle")
        self.ensure_owner_or_admin(vehicle.added_by_id)
        return vehicle

    # ------------------------------------------------------------------ #
    # Commands
    # ------------------------------------------------------------------ #

    def create_vehicle(self, data: dict[str, Any]) -> Vehicle:
        """
        List a new vehicle owned by the caller.

        New vehicles start ``available`` and unverified.

        :raises ConflictError: If the plate number is already registered.
        """
        with self.rw_uow() as uow:
            repo = uow.vehicles
            if repo.exists(plate_number=data["plate_number"].strip()):
                raise ConflictError(
                    "Vehicle", f"Plate number {data['plate_number']} already exists"
                )
            try:
                return repo.add(Vehicle(added_by_id=self.ctx.actor_id, **data))
            except IntegrityError as exc:
                raise ConflictError(
                    "Vehicle", f"Plate number {data['plate_number']} already exists"
                ) from exc

    def update_vehicle(self, vehicle_id: int, data: dict[str, Any]) -> Vehicle:
        with self.rw_uow() as uow:
            vehicle = self.get_or_404(uow.vehicles, vehicle_id, "Vehicle")
            self.ensure_owner_or_admin(vehicle.added_by_id)
            plate = data.get("plate_number")
            if plate and plate.strip() != vehicle.plate_number and uow.vehicles.exists(
                plate_number=plate.strip()
            ):
                raise ConflictError("Vehicle", f"Plate number {plate} already exists")
            return uow.vehicles.assign_updates(vehicle, data)

    def admin_update(self, vehicle_id: int, data: dict[str, Any]) -> Vehicle:
        with self.rw_uow() as uow:
            vehicle = self.get_or_404(uow.vehicles, vehicle_id, "Vehicle")
            return uow.vehicles.assign_admin_updates(vehicle, data)

    def deactivate(self, vehicle_id: int) -> Vehicle:
        with self.rw_uow() as uow:
            vehicle = self.get_or_404(uow.vehicles, vehicle_id, "Vehicle")
            self.ensure_owner_or_admin(vehicle.added_by_id)
            uow.vehicles.delete(vehicle)
            return vehicle

    def reactivate(self, vehicle_id: int) -> Vehicle:
        with self.rw_uow() as uow:
            vehicle = self.get_or_404(uow.vehicles, vehicle_id, "Vehicle")
            vehicle.reactivate()
            uow.vehicles.flush()
            return vehicle

    def delete_vehicle(self, vehicle_id: int) -> None:
        with self.rw_uow() as uow:
            vehicle = self.get_or_404(uow.vehicles, vehicle_id, "Vehicle")
            uow.session.delete(vehicle)
            uow.session.flush()
