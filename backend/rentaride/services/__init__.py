"""Service layer public API.

This package exposes the essential building blocks for the service layer so that
callers can import from :mod:`rentaride.services` without knowing internal
structure.

Re-exports
----------
- Base primitives (from ``rentaride.services._shared.base``)
    * :class:`BaseService`
    * :class:`ServiceContext`

- Authentication (from ``rentaride.services.auth``)
    * :class:`AuthService`

- Marketplace services
    * :class:`UserService`, :class:`VehicleService`, :class:`VehicleHireService`,
      :class:`PaymentService`, :class:`LocationService`,
      :class:`InteractionService`, :class:`ContactService`
"""

from __future__ import annotations

# Base primitives (service base + request-scoped context)
from ._shared.base import BaseService, ServiceContext

# Authentication and token lifecycle
from .auth.service import AuthService

# Marketplace
from .contact.service import ContactService
from .hires.service import VehicleHireService
from .interactions.service import InteractionService
from .locations.service import LocationService
from .payments.service import PaymentService
from .users.service import UserService
from .vehicles.service import VehicleService

__all__ = [
    # Base
    "BaseService",
    "ServiceContext",
    # Auth
    "AuthService",
    # Marketplace
    "ContactService",
    "InteractionService",
    "LocationService",
    "PaymentService",
    "UserService",
    "VehicleHireService",
    "VehicleService",
]
