"""
LocationService
===============

Current positions of users and vehicles. Each report replaces the previous
one (add-or-update).
"""

from __future__ import annotations

from typing import Any

from rentaride.models.location import UserLocation, VehicleLocation
from rentaride.repositories.base import Page, Pagination
from rentaride.services._shared.base import BaseService
from rentaride.services._shared.errors import AuthorizationError, NotFoundError


class LocationService(BaseService):
    # ---------------------------- users ----------------------------

    def list_user_locations(self, pagination: Pagination) -> Page[UserLocation]:
        with self.ro_uow() as uow:
            return uow.user_locations.paginate(pagination)

    def report_my_location(self, data: dict[str, Any]) -> UserLocation:
        with self.rw_uow() as uow:
            return uow.user_locations.upsert(self.ctx.actor_id, data)

    def get_user_location(self, user_id: int) -> UserLocation:
        self.ensure_owner_or_admin(user_id)
        with self.ro_uow() as uow:
            location = uow.user_locations.get_for_user(user_id)
        if location is None:
            raise NotFoundError("UserLocation", user_id)
        return location

    def delete_user_location(self, location_id: int) -> None:
        with self.rw_uow() as uow:
            location = self.get_or_404(uow.user_locations, location_id, "UserLocation")
            uow.user_locations.delete(location)

    # ---------------------------- vehicles ----------------------------

    def list_vehicle_locations(self, pagination: Pagination) -> Page[VehicleLocation]:
        with self.ro_uow() as uow:
            return uow.vehicle_locations.paginate(pagination)

    def report_vehicle_location(self, vehicle_id: int, data: dict[str, Any]) -> VehicleLocation:
        """Record the vehicle's position; only its owner (or an admin) reports it."""
        with self.rw_uow() as uow:
            vehicle = self.get_or_404(uow.vehicles, vehicle_id, "Vehicle")
            self.ensure_owner_or_admin(vehicle.added_by_id)
            return uow.vehicle_locations.upsert(vehicle_id, data)

    def get_vehicle_location(self, vehicle_id: int) -> VehicleLocation:
        """
        Return the vehicle's current position.

        Visible to the owner, to the hirer of the current (unreturned) hire, and
        to admins.
        """
        with self.ro_uow() as uow:
            vehicle = self.get_or_404(uow.vehicles, vehicle_id, "Vehicle")
            allowed = self.ctx.is_admin or vehicle.added_by_id == self.ctx.actor_id
            if not allowed:
                hire = uow.vehicle_hires.current_for_vehicle(vehicle_id)
                allowed = hire is not None and hire.hirer_id == self.ctx.actor_id
            if not allowed:
                raise AuthorizationError()
            location = uow.vehicle_locations.get_for_vehicle(vehicle_id)
        if location is None:
            raise NotFoundError("VehicleLocation", vehicle_id)
        return location
