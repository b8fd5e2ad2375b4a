from __future__ import annotations

import logging
from dataclasses import dataclass

log = logging.getLogger(__name__)


@dataclass(slots=True)
class LoggingMailer:
    """
    Mailer adapter that records outgoing messages in the application log.

    Used until a real delivery backend is wired; the body is logged because
    it only carries one-off links, never passwords.
    """

    sender: str

    def send(self, *, to: str, subject: str, body: str) -> None:
        log.info(
            "Outgoing mail from=%s to=%s subject=%s\n%s",
            self.sender,
            to,
            subject,
            body,
            extra={"event": "mail.sent"},
        )
