"""Repository package exports."""

from .base import BaseRepository, Page, Pagination
from .contact_message import ContactMessageRepository
from .interaction import InteractionRepository
from .location import UserLocationRepository, VehicleLocationRepository
from .payment import PaymentRepository
from .refresh_session import RefreshSessionRepository, RotationResult, hash_token
from .user import UserRepository
from .vehicle import VehicleRepository
from .vehicle_hire import VehicleHireRepository

__all__ = [
    "BaseRepository",
    "ContactMessageRepository",
    "InteractionRepository",
    "Page",
    "Pagination",
    "PaymentRepository",
    "RefreshSessionRepository",
    "RotationResult",
    "UserLocationRepository",
    "UserRepository",
    "VehicleHireRepository",
    "VehicleLocationRepository",
    "VehicleRepository",
    "hash_token",
]
