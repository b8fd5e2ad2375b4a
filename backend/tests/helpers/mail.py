"""In-memory mail adapter capturing outgoing messages."""

from __future__ import annotations

import re
from dataclasses import dataclass, field


@dataclass
class SentMail:
    to: str
    subject: str
    body: str

    def link_token(self) -> str:
        """Return the trailing ``/<username>/<token>`` token of the mailed link."""
        match = re.search(r"/([^/\s]+)/([^/\s]+)$", self.body)
        if match is None:
            raise AssertionError(f"No link found in mail body: {self.body!r}")
        return match.group(2)


@dataclass
class RecordingMailer:
    outbox: list[SentMail] = field(default_factory=list)
    fail: bool = False

    def send(self, *, to: str, subject: str, body: str) -> None:
        if self.fail:
            raise ConnectionError("SMTP unavailable")
        self.outbox.append(SentMail(to=to, subject=subject, body=body))
