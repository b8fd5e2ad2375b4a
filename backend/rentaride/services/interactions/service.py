"""
InteractionService
==================

Short messages about a vehicle (questions to its owner) or about a hire
(between hirer and owner).
"""

from __future__ import annotations

from rentaride.models.interaction import Interaction
from rentaride.services._shared.base import BaseService
from rentaride.services._shared.errors import AuthorizationError


class InteractionService(BaseService):
    """Application service for ``Interaction`` messages."""

    def post_on_vehicle(self, vehicle_id: int, message: str) -> Interaction:
        with self.rw_uow() as uow:
            self.get_or_404(uow.vehicles, vehicle_id, "Vehicle", include_inactive=False)
            return uow.interactions.add(
                Interaction(message=message, author_id=self.ctx.actor_id, vehicle_id=vehicle_id)
            )

    def post_on_hire(self, hire_id: int, message: str) -> Interaction:
        with self.rw_uow() as uow:
            hire = self.get_or_404(uow.vehicle_hires, hire_id, "VehicleHire")
            self._ensure_hire_party(hire)
            return uow.interactions.add(
                Interaction(message=message, author_id=self.ctx.actor_id, vehicle_hire_id=hire_id)
            )

    def list_for_vehicle(self, vehicle_id: int) -> list[Interaction]:
        """Active messages on a vehicle; only the owner and admins see everyone's."""
        with self.ro_uow() as uow:
            vehicle = self.get_or_404(uow.vehicles, vehicle_id, "Vehicle")
            filters = {"vehicle_id": vehicle_id, "active": True}
            if not (self.ctx.is_admin or vehicle.added_by_id == self.ctx.actor_id):
                filters["author_id"] = self.ctx.actor_id
            return uow.interactions.list(filters=filters, sort=["created_at"])

    def list_for_hire(self, hire_id: int) -> list[Interaction]:
        with self.ro_uow() as uow:
            hire = self.get_or_404(uow.vehicle_hires, hire_id, "VehicleHire")
            self._ensure_hire_party(hire)
            return uow.interactions.list(
                filters={"vehicle_hire_id": hire_id, "active": True}, sort=["created_at"]
            )

    def update_message(self, interaction_id: int, message: str) -> Interaction:
        with self.rw_uow() as uow:
            interaction = self.get_or_404(
                uow.interactions, interaction_id, "Interaction", include_inactive=False
            )
            self.ensure_owner(self.ctx.actor_id, interaction.author_id)
            return uow.interactions.assign_updates(interaction, {"message": message})

    def deactivate(self, interaction_id: int) -> Interaction:
        with self.rw_uow() as uow:
            interaction = self.get_or_404(uow.interactions, interaction_id, "Interaction")
            self.ensure_owner_or_admin(interaction.author_id)
            uow.interactions.delete(interaction)
            return interaction

    def reactivate(self, interaction_id: int) -> Interaction:
        with self.rw_uow() as uow:
            interaction = self.get_or_404(uow.interactions, interaction_id, "Interaction")
            interaction.reactivate()
            uow.interactions.flush()
            return interaction

    def delete_interaction(self, interaction_id: int) -> None:
        with self.rw_uow() as uow:
            interaction = self.get_or_404(uow.interactions, interaction_id, "Interaction")
            uow.session.delete(interaction)
            uow.session.flush()

    def _ensure_hire_party(self, hire) -> None:
        if not (self.ctx.is_admin or hire.involves(self.ctx.actor_id or 0)):
            raise AuthorizationError()
