"""
rentaride.services._shared.ports
================================

Collection of *ports* (hexagonal interfaces) that the service layer depends on.

Modules
-------
- :mod:`token_provider`:
    Defines :class:`~.TokenProvider`, the abstraction for minting and decoding
    access, refresh, email-verification and password-reset tokens, and the
    :class:`~.IssuedToken` value object.

- :mod:`mailer`:
    Defines :class:`~.Mailer`, the abstraction for outgoing mail.

Concrete adapters live under ``rentaride.infra``.
"""

from __future__ import annotations

from .mailer import Mailer
from .token_provider import IssuedToken, TokenProvider

__all__ = ["IssuedToken", "Mailer", "TokenProvider"]
