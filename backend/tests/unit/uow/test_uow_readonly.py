"""
Unit tests for SQLAlchemyReadOnlyUnitOfWork.
"""

from __future__ import annotations

import pytest
from rentaride.uow import SQLAlchemyReadOnlyUnitOfWork
from tests.factories.user import UserFactory


class TestSQLAlchemyReadOnlyUnitOfWork:
    def test_reads_are_allowed(self, db):
        user = UserFactory(username="reader")

        with SQLAlchemyReadOnlyUnitOfWork() as uow:
            found = uow.users.get_by_username("reader")

        assert found.id == user.id

    def test_flush_of_pending_writes_is_blocked(self, db):
        with pytest.raises(RuntimeError, match="Read-only"), SQLAlchemyReadOnlyUnitOfWork() as uow:
            uow.users.add(UserFactory.build())

    def test_commit_is_refused(self, db):
        with SQLAlchemyReadOnlyUnitOfWork() as uow, pytest.raises(RuntimeError):
            uow.commit()

    def test_guard_is_removed_on_exit(self, db):
        with SQLAlchemyReadOnlyUnitOfWork():
            pass

        db.session.add(UserFactory.build())
        db.session.flush()
        db.session.rollback()
