"""Refresh-session repository: the server-side half of refresh-token rotation."""

from __future__ import annotations

import hashlib
from datetime import datetime
from enum import Enum, auto
from typing import cast

from sqlalchemy import delete, func, select

from rentaride.models.refresh_session import RefreshSession
from rentaride.repositories.base import BaseRepository


def hash_token(token: str) -> str:
    """Return the SHA-256 hex digest under which a token is stored."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


class RotationResult(Enum):
    """Outcome of an atomic refresh rotation attempt."""

    OK = auto()
    REUSED = auto()


class RefreshSessionRepository(BaseRepository[RefreshSession]):
    """
    Store refresh sessions keyed by token hash.

    Writes are flushed but never committed: rotation, reuse revocation and the
    ``last_active_at`` touch are committed together by the Unit of Work.
    """

    model = RefreshSession

    def _sortable_fields(self):
        return {"issued_at": RefreshSession.issued_at, "expires_at": RefreshSession.expires_at}

    def _filterable_fields(self):
        return {"user_id": RefreshSession.user_id, "token_hash": RefreshSession.token_hash}

    def get_by_hash(self, token_hash: str) -> RefreshSession | None:
        stmt = select(RefreshSession).where(RefreshSession.token_hash == token_hash)
        return cast(RefreshSession | None, self.session.execute(stmt).scalars().first())

    def register(
        self,
        *,
        user_id: int,
        token_hash: str,
        issued_at: datetime,
        expires_at: datetime,
        user_agent: str | None = None,
    ) -> RefreshSession:
        """Insert a brand-new session row."""
        return self.add(
            RefreshSession(
                user_id=user_id,
                token_hash=token_hash,
                issued_at=issued_at,
                expires_at=expires_at,
                user_agent=user_agent[:255] if user_agent else None,
            )
        )

    def discard(self, token_hash: str, *, user_id: int | None = None) -> bool:
        """Delete one session by hash; return ``True`` if a row was removed.

        The delete is conditional, so of two requests consuming the same
        token only one sees ``True``.
        """
        stmt = delete(RefreshSession).where(RefreshSession.token_hash == token_hash)
        if user_id is not None:
            stmt = stmt.where(RefreshSession.user_id == user_id)
        result = self.session.execute(stmt.execution_options(synchronize_session="fetch"))
        return bool(result.rowcount)

    def rotate(
        self,
        *,
        old_hash: str,
        new_hash: str,
        user_id: int,
        issued_at: datetime,
        expires_at: datetime,
        user_agent: str | None = None,
    ) -> RotationResult:
        """Consume ``old_hash`` and register ``new_hash`` in the same transaction.

        :returns: ``REUSED`` when ``old_hash`` was no longer a live session
            (rotated away, logged out, or consumed by a concurrent request);
            nothing is written in that case.
        """
        if not self.discard(old_hash, user_id=user_id):
            return RotationResult.REUSED
        self.register(
            user_id=user_id,
            token_hash=new_hash,
            issued_at=issued_at,
            expires_at=expires_at,
            user_agent=user_agent,
        )
        return RotationResult.OK

    def revoke_all_for_user(self, user_id: int) -> int:
        """Delete every session of ``user_id``; return how many were removed."""
        stmt = delete(RefreshSession).where(RefreshSession.user_id == user_id)
        result = self.session.execute(stmt.execution_options(synchronize_session="fetch"))
        return int(result.rowcount or 0)

    def purge_expired(self, now: datetime) -> int:
        """Delete sessions whose refresh token has already expired."""
        stmt = delete(RefreshSession).where(RefreshSession.expires_at <= now)
        result = self.session.execute(stmt.execution_options(synchronize_session="fetch"))
        return int(result.rowcount or 0)

    def list_for_user(self, user_id: int) -> list[RefreshSession]:
        return self.list(filters={"user_id": user_id}, sort=["issued_at"])

    def count_live(self, now: datetime) -> int:
        """Number of refresh sessions that have not expired yet."""
        stmt = (
            select(func.count())
            .select_from(RefreshSession)
            .where(RefreshSession.expires_at > now)
        )
        return int(self.session.execute(stmt).scalar_one())
