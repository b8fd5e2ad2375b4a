"""Payment repository."""

from __future__ import annotations

from sqlalchemy import ColumnElement, or_

from rentaride.models.payment import Payment
from rentaride.repositories.base import BaseRepository


class PaymentRepository(BaseRepository[Payment]):
    model = Payment

    def _sortable_fields(self):
        return {
            "id": Payment.id,
            "initiated_at": Payment.initiated_at,
            "status": Payment.status,
        }

    def _filterable_fields(self):
        return {
            "vehicle_hire_id": Payment.vehicle_hire_id,
            "status": Payment.status,
            "method": Payment.method,
            "active": Payment.active,
        }

    def _updatable_fields(self):
        return {"status", "method"}

    def _soft_delete(self, instance: Payment) -> bool:
        instance.soft_delete()
        return True

    def involving_clause(self, user_id: int) -> list[ColumnElement[bool]]:
        return [or_(Payment.hirer_id == user_id, Payment.owner_id == user_id)]
