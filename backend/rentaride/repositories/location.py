"""Repositories for user and vehicle live locations (one current row each)."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, cast

from sqlalchemy import select

from rentaride.models.location import UserLocation, VehicleLocation
from rentaride.repositories.base import BaseRepository

LOCATION_FIELDS = {"address", "latitude", "longitude", "plus_code"}


class UserLocationRepository(BaseRepository[UserLocation]):
    model = UserLocation

    def _sortable_fields(self):
        return {"id": UserLocation.id, "updated_at": UserLocation.updated_at}

    def _updatable_fields(self):
        return LOCATION_FIELDS

    def get_for_user(self, user_id: int) -> UserLocation | None:
        stmt = select(UserLocation).where(UserLocation.user_id == user_id)
        return cast(UserLocation | None, self.session.execute(stmt).scalars().first())

    def upsert(self, user_id: int, fields: Mapping[str, Any]) -> UserLocation:
        """Update the user's current location in place, creating it on first report."""
        location = self.get_for_user(user_id)
        if location is None:
            return self.add(UserLocation(user_id=user_id, **self._whitelisted_updates(fields)))
        return self.assign_updates(location, fields)


class VehicleLocationRepository(BaseRepository[VehicleLocation]):
    model = VehicleLocation

    def _sortable_fields(self):
        return {"id": VehicleLocation.id, "updated_at": VehicleLocation.updated_at}

    def _updatable_fields(self):
        return LOCATION_FIELDS

    def get_for_vehicle(self, vehicle_id: int) -> VehicleLocation | None:
        stmt = select(VehicleLocation).where(VehicleLocation.vehicle_id == vehicle_id)
        return cast(VehicleLocation | None, self.session.execute(stmt).scalars().first())

    def upsert(self, vehicle_id: int, fields: Mapping[str, Any]) -> VehicleLocation:
        location = self.get_for_vehicle(vehicle_id)
        if location is None:
            return self.add(
                VehicleLocation(vehicle_id=vehicle_id, **self._whitelisted_updates(fields))
            )
        return self.assign_updates(location, fields)
