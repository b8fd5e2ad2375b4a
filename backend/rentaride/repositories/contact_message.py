"""Contact-us message repository."""

from __future__ import annotations

from rentaride.models.contact_message import ContactMessage
from rentaride.repositories.base import BaseRepository


class ContactMessageRepository(BaseRepository[ContactMessage]):
    model = ContactMessage

    def _sortable_fields(self):
        return {"id": ContactMessage.id, "created_at": ContactMessage.created_at}
