"""User repository for persistence and credential lookups."""

from __future__ import annotations

from typing import cast

from sqlalchemy import ColumnElement, or_, select

from rentaride.models.user import User
from rentaride.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    Lookups are exact: usernames and emails are case-sensitive keys. This
    repository never deals with tokens; see
    :class:`~rentaride.repositories.refresh_session.RefreshSessionRepository`.
    """

    model = User

    # ---------------------------- Whitelists ----------------------------

    def _sortable_fields(self):
        return {
            "id": User.id,
            "email": User.email,
            "username": User.username,
            "last_name": User.last_name,
            "created_at": User.created_at,
            "last_active_at": User.last_active_at,
        }

    def _filterable_fields(self):
        return {
            "email": User.email,
            "username": User.username,
            "active": User.active,
            "verified": User.verified,
        }

    def _updatable_fields(self):
        """Profile fields a user may edit on their own record."""
        return {
            "first_name",
            "other_names",
            "last_name",
            "enterprise_name",
            "phone",
            "address",
            "id_type",
            "id_number",
            "date_of_birth",
        }

    def _soft_delete(self, instance: User) -> bool:
        instance.soft_delete()
        return True

    # ---------------------------- Lookup helpers ----------------------------

    def get_by_username(self, username: str) -> User | None:
        stmt = select(User).where(User.username == username.strip())
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def get_by_email(self, email: str) -> User | None:
        """Fetch a user by exact (trimmed) email.

        :param email: Email address to search.
        :type email: str
        :returns: User instance or ``None`` when not found.
        :rtype: User | None
        """
        stmt = select(User).where(User.email == email.strip())
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def get_by_login(self, login: str) -> User | None:
        """Fetch a user whose username *or* email equals ``login``."""
        value = login.strip()
        stmt = select(User).where(or_(User.username == value, User.email == value))
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def exists_by_username(self, username: str) -> bool:
        return self.exists(username=username.strip())

    def exists_by_email(self, email: str) -> bool:
        return self.exists(email=email.strip())

    def search_clause(self, term: str | None) -> list[ColumnElement[bool]]:
        """Return a case-insensitive match on username, email and names."""
        if not term:
            return []
        like = f"%{term.strip()}%"
        return [
            or_(
                User.username.ilike(like),
                User.email.ilike(like),
                User.first_name.ilike(like),
                User.last_name.ilike(like),
                User.enterprise_name.ilike(like),
            )
        ]

    # ---------------------------- Password ops ----------------------------

    def update_password(self, user: User, new_password: str) -> None:
        """Hash and assign a new password, then flush.

        :param user: Loaded user entity.
        :type user: User
        :param new_password: Raw password; the model setter hashes it.
        :type new_password: str
        """
        user.password = new_password
        self.flush()

    def authenticate(self, login: str, password: str) -> User | None:
        """Return the user matching ``login`` when ``password`` verifies.

        Activity and verification checks are left to the auth service.
        """
        user = self.get_by_login(login)
        if not user or not user.verify_password(password):
            return None
        return user
