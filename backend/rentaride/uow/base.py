"""The transaction boundary every service operation runs in."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rentaride.repositories import (
        ContactMessageRepository,
        InteractionRepository,
        PaymentRepository,
        RefreshSessionRepository,
        UserLocationRepository,
        UserRepository,
        VehicleHireRepository,
        VehicleLocationRepository,
        VehicleRepository,
    )


class UnitOfWork(ABC):
    """
    One use-case, one transaction.

    All repositories below share a session, so a refresh rotation (or a hire
    plus its vehicle status change) is written completely or not at all.
    """

    users: UserRepository
    refresh_sessions: RefreshSessionRepository
    vehicles: VehicleRepository
    vehicle_hires: VehicleHireRepository
    payments: PaymentRepository
    user_locations: UserLocationRepository
    vehicle_locations: VehicleLocationRepository
    interactions: InteractionRepository
    contact_messages: ContactMessageRepository

    @abstractmethod
    def __enter__(self) -> UnitOfWork: ...

    @abstractmethod
    def __exit__(self, exc_type, exc, tb) -> None: ...

    @abstractmethod
    def commit(self) -> None: ...

    @abstractmethod
    def rollback(self) -> None: ...
