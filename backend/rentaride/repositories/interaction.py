"""Interaction (message) repository."""

from __future__ import annotations

from rentaride.models.interaction import Interaction
from rentaride.repositories.base import BaseRepository


class InteractionRepository(BaseRepository[Interaction]):
    model = Interaction

    def _sortable_fields(self):
        return {"id": Interaction.id, "created_at": Interaction.created_at}

    def _filterable_fields(self):
        return {
            "vehicle_id": Interaction.vehicle_id,
            "vehicle_hire_id": Interaction.vehicle_hire_id,
            "author_id": Interaction.author_id,
            "active": Interaction.active,
        }

    def _updatable_fields(self):
        return {"message"}

    def _soft_delete(self, instance: Interaction) -> bool:
        instance.soft_delete()
        return True
