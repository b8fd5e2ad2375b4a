"""Contact-us submissions: public create, admin review."""

from __future__ import annotations

import logging
from typing import Any

from rentaride.models.contact_message import ContactMessage
from rentaride.repositories.base import Page, Pagination
from rentaride.services._shared.base import BaseService

log = logging.getLogger(__name__)


class ContactService(BaseService):
    def submit(self, data: dict[str, Any]) -> ContactMessage:
        with self.rw_uow() as uow:
            message = uow.contact_messages.add(ContactMessage(**data))
        log.info("Contact message received", extra={"event": "contact.create"})
        return message

    def list_messages(self, pagination: Pagination) -> Page[ContactMessage]:
        with self.ro_uow() as uow:
            return uow.contact_messages.paginate(pagination)

    def delete_message(self, message_id: int) -> None:
        with self.rw_uow() as uow:
            message = self.get_or_404(uow.contact_messages, message_id, "ContactMessage")
            uow.contact_messages.delete(message)
