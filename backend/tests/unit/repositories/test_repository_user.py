"""Unit tests for UserRepository."""

import pytest
from rentaride.models.base import utcnow
from rentaride.repositories.base import Pagination
from rentaride.repositories.user import UserRepository
from tests.factories.user import UserFactory


class TestUserRepository:
    """Ensure ``UserRepository`` performs core persistence operations."""

    @pytest.fixture()
    def repo(self, db):
        return UserRepository()

    def test_get_by_login_matches_username_or_email(self, repo):
        u = UserFactory(username="alice", email="alice@example.com")

        assert repo.get_by_login("alice").id == u.id
        assert repo.get_by_login(" alice@example.com ").id == u.id
        assert repo.get_by_login("nobody") is None

    def test_lookups_are_case_sensitive(self, repo):
        UserFactory(username="Alice", email="Alice@example.com")

        assert repo.get_by_username("alice") is None
        assert repo.get_by_email("alice@example.com") is None
        assert repo.exists_by_username("Alice")

    def test_authenticate_valid_and_invalid(self, repo):
        """Authenticate with correct credentials and reject invalid attempts."""
        UserFactory(username="authuser", password="strongpass")

        assert repo.authenticate("authuser", "strongpass") is not None
        assert repo.authenticate("authuser", "wrongpass") is None
        assert repo.authenticate("nope", "strongpass") is None

    def test_update_password(self, repo, session):
        u = UserFactory()
        old_hash = u.password_hash

        repo.update_password(u, "newpass123")
        session.commit()

        refreshed = repo.get(u.id)
        assert refreshed.password_hash != old_hash
        assert refreshed.verify_password("newpass123")

    def test_safe_update_fields(self, repo):
        """Assign whitelisted fields and reject disallowed keys."""
        u = UserFactory()

        updated = repo.assign_updates(u, {"phone": "+15550000"})
        assert updated.phone == "+15550000"

        with pytest.raises(ValueError):
            repo.assign_updates(u, {"roles": ["admin"]})

    def test_paginate_with_search_clause(self, repo):
        UserFactory(username="driver_one", last_name="Smith")
        UserFactory(username="driver_two", last_name="Jones")
        UserFactory(username="rider", last_name="Brown")

        page = repo.paginate(
            Pagination(page=1, limit=10, sort=["username"]),
            where=repo.search_clause("driver"),
        )
        assert page.total == 2
        assert [u.username for u in page.items] == ["driver_one", "driver_two"]

    def test_soft_delete_keeps_row(self, repo, session):
        u = UserFactory(last_active_at=utcnow())
        repo.delete(u)
        session.commit()

        kept = repo.get(u.id)
        assert kept is not None
        assert kept.active is False
