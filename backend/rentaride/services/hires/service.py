"""
VehicleHireService
==================

Booking lifecycle: a hirer books an available vehicle, the vehicle goes
``rented``, and returning the hire puts it back to ``available``.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any

from rentaride.models.base import utcnow
from rentaride.models.vehicle_hire import VehicleHire
from rentaride.repositories.base import Page, Pagination
from rentaride.services._shared.base import BaseService
from rentaride.services._shared.errors import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)

log = logging.getLogger(__name__)


class VehicleHireService(BaseService):
    """Application service for the ``VehicleHire`` aggregate."""

    def list_hires(self, pagination: Pagination) -> Page[VehicleHire]:
        with self.ro_uow() as uow:
            return uow.vehicle_hires.paginate(pagination)

    def list_mine(self, pagination: Pagination) -> Page[VehicleHire]:
        """Active hires where the caller is the hirer or the owner."""
        with self.ro_uow() as uow:
            repo = uow.vehicle_hires
            return repo.paginate(
                pagination,
                filters={"active": True},
                where=repo.involving_clause(self.ctx.actor_id),
            )

    def get_hire(self, hire_id: int) -> VehicleHire:
        with self.ro_uow() as uow:
            hire = self.get_or_404(uow.vehicle_hires, hire_id, "VehicleHire")
        self._ensure_party(hire)
        return hire

    def create_hire(self, data: dict[str, Any]) -> VehicleHire:
        """
        Book a vehicle for the caller.

        :raises NotFoundError: Unknown or deactivated vehicle.
        :raises ValidationError: The caller owns the vehicle.
        :raises ConflictError: The vehicle is not ``available``.
        """
        with self.rw_uow() as uow:
            vehicle = uow.vehicles.get_for_update(data["vehicle_id"])
            if vehicle is None or not vehicle.active:
                raise NotFoundError("Vehicle", data["vehicle_id"])
            if vehicle.added_by_id == self.ctx.actor_id:
                raise ValidationError("You cannot hire your own vehicle")
            if not vehicle.is_hireable:
                raise ConflictError("Vehicle", "Vehicle is not available for hire")

            hire = uow.vehicle_hires.add(
                VehicleHire(
                    vehicle_id=vehicle.id,
                    hirer_id=self.ctx.actor_id,
                    owner_id=vehicle.added_by_id,
                    release_at=data["release_at"],
                    due_back_at=data["due_back_at"],
                )
            )
            vehicle.status = "rented"
            vehicle.due_back_at = data["due_back_at"]
            uow.vehicles.flush()
        log.info("Vehicle hired", extra={"event": "hires.create", "user_id": self.ctx.actor_id})
        return hire

    def return_hire(self, hire_id: int) -> VehicleHire:
        """
        Mark the hire returned and release the vehicle.

        :raises ConflictError: If the hire was already returned.
        """
        with self.rw_uow() as uow:
            hire = self.get_or_404(uow.vehicle_hires, hire_id, "VehicleHire")
            self._ensure_party(hire)
            if hire.is_returned:
                raise ConflictError("VehicleHire", "Vehicle hire already returned")
            hire.returned_at = utcnow()
            self._release_vehicle(uow, hire)
            uow.vehicle_hires.flush()
            return hire

    def deactivate(self, hire_id: int) -> VehicleHire:
        with self.rw_uow() as uow:
            hire = self.get_or_404(uow.vehicle_hires, hire_id, "VehicleHire")
            if not hire.is_returned:
                self._release_vehicle(uow, hire)
            uow.vehicle_hires.delete(hire)
            return hire

    def update_hire(self, hire_id: int, data: dict[str, Any]) -> VehicleHire:
        """
        Admin correction of the booking window or the paid flag.

        An outstanding hire keeps its vehicle's ``due_back_at`` in step.

        :raises ValidationError: The resulting window ends before it starts.
        """
        with self.rw_uow() as uow:
            hire = self.get_or_404(uow.vehicle_hires, hire_id, "VehicleHire")
            release_at = _as_utc(data.get("release_at", hire.release_at))
            due_back_at = _as_utc(data.get("due_back_at", hire.due_back_at))
            if due_back_at <= release_at:
                raise ValidationError("due_back_at must be later than release_at")
            uow.vehicle_hires.assign_updates(hire, data)
            if "due_back_at" in data and hire.active and not hire.is_returned:
                vehicle = uow.vehicles.get(hire.vehicle_id)
                if vehicle is not None and vehicle.status == "rented":
                    vehicle.due_back_at = due_back_at
                    uow.vehicles.flush()
            return hire

    def reactivate(self, hire_id: int) -> VehicleHire:
        """
        Undo a deactivation.

        A hire that was never returned takes its vehicle back.

        :raises ConflictError: The vehicle has been hired out or withdrawn since.
        """
        with self.rw_uow() as uow:
            hire = self.get_or_404(uow.vehicle_hires, hire_id, "VehicleHire")
            if not hire.active and not hire.is_returned:
                vehicle = uow.vehicles.get_for_update(hire.vehicle_id)
                if vehicle is None or not vehicle.is_hireable:
                    raise ConflictError("Vehicle", "Vehicle is not available for hire")
                vehicle.status = "rented"
                vehicle.due_back_at = hire.due_back_at
                uow.vehicles.flush()
            hire.reactivate()
            uow.vehicle_hires.flush()
            return hire

    def delete_hire(self, hire_id: int) -> None:
        with self.rw_uow() as uow:
            hire = self.get_or_404(uow.vehicle_hires, hire_id, "VehicleHire")
            if not hire.is_returned and hire.active:
                self._release_vehicle(uow, hire)
            uow.session.delete(hire)
            uow.session.flush()

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    def _ensure_party(self, hire: VehicleHire) -> None:
        actor = self.ctx.actor_id
        if self.ctx.is_admin or (actor is not None and hire.involves(actor)):
            return
        raise AuthorizationError()

    @staticmethod
    def _release_vehicle(uow, hire: VehicleHire) -> None:
        vehicle = uow.vehicles.get(hire.vehicle_id)
        if vehicle is not None and vehicle.status == "rented":
            vehicle.status = "available"
            vehicle.due_back_at = None


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes for timezone-aware columns
    return value.replace(tzinfo=UTC) if value.tzinfo is None else value
