"""
Unit tests for SQLAlchemyUnitOfWork (writer), using factories.
"""

from __future__ import annotations

import pytest
from rentaride.models import User
from rentaride.uow import SQLAlchemyUnitOfWork
from tests.factories.user import UserFactory


class TestSQLAlchemyUnitOfWorkWriter:
    def test_writer_uow_commits_on_success(self, db):
        """
        GIVEN a writer UoW
        WHEN we create a user via repo inside the context and leave without exception
        THEN the transaction is committed and the row is visible afterwards.
        """
        initial = db.session.query(User).count()

        with SQLAlchemyUnitOfWork() as uow:
            uow.users.add(UserFactory.build())

        db.session.rollback()
        assert db.session.query(User).count() == initial + 1

    def test_writer_uow_rolls_back_on_exception(self, db):
        """
        GIVEN a writer UoW
        WHEN an exception is raised inside the context
        THEN the transaction is rolled back and no rows are persisted.
        """
        initial = db.session.query(User).count()

        with pytest.raises(RuntimeError), SQLAlchemyUnitOfWork() as uow:
            uow.users.add(UserFactory.build())
            raise RuntimeError("boom")

        assert db.session.query(User).count() == initial

    def test_on_committed_runs_after_commit_only(self, db):
        calls: list[str] = []

        with SQLAlchemyUnitOfWork() as uow:
            uow.users.add(UserFactory.build())
            uow.on_committed(lambda: calls.append("sent"))
            assert calls == []
        assert calls == ["sent"]

        with pytest.raises(RuntimeError), SQLAlchemyUnitOfWork() as uow:
            uow.on_committed(lambda: calls.append("never"))
            raise RuntimeError("boom")
        assert calls == ["sent"]
