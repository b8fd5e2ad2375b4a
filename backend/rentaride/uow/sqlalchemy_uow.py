"""
SQLAlchemy implementation of UnitOfWork for Flask.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from sqlalchemy import event
from sqlalchemy.orm import Session

from rentaride.core.extensions import db
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
from rentaride.uow.base import UnitOfWork


class SQLAlchemyRepositoryContainer:
    """Provide repository instances that share a SQLAlchemy session."""

    def __init__(self, *, session: Session) -> None:
        self.session = session
        self.users = UserRepository(session=self.session)
        self.refresh_sessions = RefreshSessionRepository(session=self.session)
        self.vehicles = VehicleRepository(session=self.session)
        self.vehicle_hires = VehicleHireRepository(session=self.session)
        self.payments = PaymentRepository(session=self.session)
        self.user_locations = UserLocationRepository(session=self.session)
        self.vehicle_locations = VehicleLocationRepository(session=self.session)
        self.interactions = InteractionRepository(session=self.session)
        self.contact_messages = ContactMessageRepository(session=self.session)


class SQLAlchemyUnitOfWork(SQLAlchemyRepositoryContainer, UnitOfWork):
    """
    SQLAlchemy-backed UoW using the Flask-scoped session.

    The same session is shared across all repositories for a consistent
    transaction. Callbacks registered with :meth:`on_committed` run only after
    a successful commit (e.g. sending mail about the new state).
    """

    def __init__(self) -> None:
        super().__init__(session=db.session)
        self._after_commit: list[Callable[[], Any]] = []

    def __enter__(self) -> SQLAlchemyUnitOfWork:
        # No-op: the session is lazily started on the first statement.
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            try:
                self.commit()
            except Exception:
                self.rollback()
                raise
            callbacks, self._after_commit = self._after_commit, []
            for callback in callbacks:
                callback()
        else:
            self.rollback()

    def on_committed(self, callback: Callable[[], Any]) -> None:
        self._after_commit.append(callback)

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self._after_commit = []
        self.session.rollback()


class SQLAlchemyReadOnlyUnitOfWork(SQLAlchemyRepositoryContainer, UnitOfWork):
    """
    Read-only Unit of Work backed by the Flask-scoped SQLAlchemy session.

    This UoW:
    - Installs a ``before_flush`` guard on the current session so any pending
      ORM write fails loudly instead of being persisted.
    - Never commits; leaving the block does not end the transaction, so objects
      loaded inside stay usable by the caller.
    """

    def __init__(self) -> None:
        super().__init__(session=db.session)
        self._guarded: Session | None = None

    # ----------------------------- Context Manager -----------------------------

    def __enter__(self) -> SQLAlchemyReadOnlyUnitOfWork:
        # Listen on the concrete Session, not the scoped registry, so the guard
        # never leaks to sessions of other threads.
        self._guarded = db.session()
        event.listen(self._guarded, "before_flush", self._before_flush)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._guarded is not None:
            event.remove(self._guarded, "before_flush", self._before_flush)
            self._guarded = None
        if exc_type is not None:
            self.rollback()

    # ----------------------------- Public API ---------------------------------

    def commit(self) -> None:
        """
        Disallow commit in read-only Unit of Work.

        :raises RuntimeError: always, to prevent accidental writes.
        """
        raise RuntimeError("Read-only UnitOfWork does not allow commit().")

    def rollback(self) -> None:
        self.session.rollback()

    # ----------------------------- Guards --------------------------------------

    @staticmethod
    def _before_flush(session, flush_context, instances) -> None:
        if session.new or session.dirty or session.deleted:
            raise RuntimeError(
                "Read-only UnitOfWork: ORM flush blocked (new/dirty/deleted objects present)."
            )
