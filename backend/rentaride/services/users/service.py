"""
UserService
===========

Account management for admins and for users on their own record:

- List/search and create users (admin).
- Read and edit profile fields (self or admin).
- Change roles and flags, reactivate and hard-delete (admin).
- Deactivate an account (self or admin); this also revokes its sessions.

Notes
-----
- Route decorators enforce role requirements; this service re-checks
  ownership because it depends on the loaded record.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.exc import IntegrityError

from rentaride.models.base import utcnow
from rentaride.models.user import User
from rentaride.repositories.base import Page, Pagination
from rentaride.services._shared.base import BaseService
from rentaride.services._shared.errors import ConflictError, ValidationError, violates

log = logging.getLogger(__name__)


class UserService(BaseService):
    """Application service for the ``User`` aggregate."""

    def list_users(self, filters: dict[str, Any], pagination: Pagination) -> Page[User]:
        with self.ro_uow() as uow:
            where = uow.users.search_clause(filters.get("search"))
            return uow.users.paginate(
                pagination, filters={"active": filters.get("active")}, where=where
            )

    def create_user(self, data: dict[str, Any]) -> User:
        """
        Create an account on behalf of an admin.

        The account is created email-verified, so it can log in immediately.

        :raises ConflictError: Username or email already taken.
        """
        payload = dict(data)
        password = payload.pop("password")
        with self.rw_uow() as uow:
            repo = uow.users
            if repo.exists_by_username(payload["username"]):
                raise ConflictError("User", f"Username {payload['username']} already exists")
            if repo.exists_by_email(payload["email"]):
                raise ConflictError("User", f"User email {payload['email']} already exists")
            try:
                user = User(**payload)
                user.password = password
            except ValueError as exc:
                raise ValidationError(str(exc)) from exc
            user.email_verified_at = utcnow()
            user.created_by_id = self.ctx.actor_id
            try:
                repo.add(user)
            except IntegrityError as exc:
                detail = "email" if violates(exc, "uq_users_email") else "username"
                raise ConflictError("User", f"User {detail} already exists") from exc
        log.info("User created by admin", extra={"event": "users.create", "user_id": user.id})
        return user

    def get_user(self, user_id: int) -> User:
        self.ensure_owner_or_admin(user_id)
        with self.ro_uow() as uow:
            return self.get_or_404(uow.users, user_id, "User")

    def update_profile(self, user_id: int, data: dict[str, Any]) -> User:
        self.ensure_owner_or_admin(user_id)
        with self.rw_uow() as uow:
            user = self.get_or_404(uow.users, user_id, "User")
            return uow.users.assign_updates(user, data)

    def admin_update(self, user_id: int, data: dict[str, Any]) -> User:
        """Change roles and the ``verified``/``active`` flags."""
        with self.rw_uow() as uow:
            user = self.get_or_404(uow.users, user_id, "User")
            if "roles" in data:
                try:
                    user.roles = data["roles"]
                except ValueError as exc:
                    raise ValidationError(str(exc)) from exc
            if "verified" in data:
                user.verified = data["verified"]
            if "active" in data:
                if data["active"]:
                    user.reactivate()
                else:
                    user.soft_delete()
                    uow.refresh_sessions.revoke_all_for_user(user.id)
            uow.users.flush()
            return user

    def deactivate(self, user_id: int) -> User:
        """Soft-delete the account and revoke every refresh session."""
        self.ensure_owner_or_admin(user_id)
        with self.rw_uow() as uow:
            user = self.get_or_404(uow.users, user_id, "User")
            uow.users.delete(user)
            revoked = uow.refresh_sessions.revoke_all_for_user(user.id)
        log.info(
            "User deactivated; revoked %s session(s)",
            revoked,
            extra={"event": "users.deactivate", "user_id": user_id},
        )
        return user

    def reactivate(self, user_id: int) -> User:
        with self.rw_uow() as uow:
            user = self.get_or_404(uow.users, user_id, "User")
            user.reactivate()
            uow.users.flush()
            return user

    def delete_user(self, user_id: int) -> None:
        """Hard-delete; refresh sessions go with the row."""
        with self.rw_uow() as uow:
            user = self.get_or_404(uow.users, user_id, "User")
            uow.session.delete(user)
            uow.session.flush()
        log.info("User deleted", extra={"event": "users.delete", "user_id": user_id})
