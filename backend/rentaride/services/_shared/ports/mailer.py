from __future__ import annotations

from typing import Protocol


class Mailer(Protocol):
    """Port for outgoing transactional mail (verification and reset links)."""

    def send(self, *, to: str, subject: str, body: str) -> None:
        """Deliver one message; raise on failure."""
