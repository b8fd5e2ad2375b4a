"""
PaymentService
==============

Payments are initiated by the hirer as ``pending`` and settled by an admin.
A hire counts as paid while one of its active payments is ``successful``;
the flag is recomputed whenever a payment changes or goes away.
"""

from __future__ import annotations

import logging
from typing import Any

from rentaride.models.payment import Payment
from rentaride.repositories.base import Page, Pagination
from rentaride.services._shared.base import BaseService
from rentaride.services._shared.errors import AuthorizationError, ConflictError

log = logging.getLogger(__name__)


class PaymentService(BaseService):
    """Application service for ``Payment`` records."""

    def list_payments(self, pagination: Pagination) -> Page[Payment]:
        with self.ro_uow() as uow:
            return uow.payments.paginate(pagination)

    def get_payment(self, payment_id: int) -> Payment:
        with self.ro_uow() as uow:
            payment = self.get_or_404(uow.payments, payment_id, "Payment")
        if not (self.ctx.is_admin or payment.involves(self.ctx.actor_id or 0)):
            raise AuthorizationError()
        return payment

    def create_payment(self, data: dict[str, Any]) -> Payment:
        """
        Initiate a payment for a hire.

        :raises NotFoundError: Unknown or deactivated hire.
        :raises AuthorizationError: The caller is not the hirer.
        :raises ConflictError: The hire is already paid.
        """
        with self.rw_uow() as uow:
            hire = self.get_or_404(
                uow.vehicle_hires, data["vehicle_hire_id"], "VehicleHire", include_inactive=False
            )
            self.ensure_owner(
                self.ctx.actor_id, hire.hirer_id, msg="Only the hirer can pay for a hire"
            )
            if hire.paid:
                raise ConflictError("Payment", "Vehicle hire already paid")
            payment = uow.payments.add(
                Payment(
                    vehicle_hire_id=hire.id,
                    vehicle_id=hire.vehicle_id,
                    hirer_id=hire.hirer_id,
                    owner_id=hire.owner_id,
                    method=data["method"],
                )
            )
        log.info(
            "Payment initiated",
            extra={"event": "payments.create", "user_id": self.ctx.actor_id},
        )
        return payment

    def update_payment(self, payment_id: int, data: dict[str, Any]) -> Payment:
        with self.rw_uow() as uow:
            payment = self.get_or_404(uow.payments, payment_id, "Payment")
            uow.payments.assign_updates(payment, data)
            self._sync_hire_paid(uow, payment.vehicle_hire_id)
            return payment

    def deactivate(self, payment_id: int) -> Payment:
        with self.rw_uow() as uow:
            payment = self.get_or_404(uow.payments, payment_id, "Payment")
            uow.payments.delete(payment)
            self._sync_hire_paid(uow, payment.vehicle_hire_id)
            return payment

    def delete_payment(self, payment_id: int) -> None:
        with self.rw_uow() as uow:
            payment = self.get_or_404(uow.payments, payment_id, "Payment")
            hire_id = payment.vehicle_hire_id
            uow.session.delete(payment)
            uow.session.flush()
            self._sync_hire_paid(uow, hire_id)

    @staticmethod
    def _sync_hire_paid(uow, hire_id: int) -> None:
        # A hire is paid while one of its active payments is successful
        hire = uow.vehicle_hires.get(hire_id)
        if hire is None:
            return
        hire.paid = uow.payments.exists(
            vehicle_hire_id=hire_id, status="successful", active=True
        )
        uow.vehicle_hires.flush()
