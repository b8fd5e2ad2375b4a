"""Unit tests for RefreshSessionRepository rotation and revocation."""

from __future__ import annotations

from datetime import timedelta

import pytest
from rentaride.models.base import utcnow
from rentaride.repositories.refresh_session import (
    RefreshSessionRepository,
    RotationResult,
    hash_token,
)
from tests.factories.user import UserFactory


@pytest.fixture()
def repo(db):
    return RefreshSessionRepository()


def _register(repo, user_id: int, token: str, *, ttl: int = 3600):
    now = utcnow()
    return repo.register(
        user_id=user_id,
        token_hash=hash_token(token),
        issued_at=now,
        expires_at=now + timedelta(seconds=ttl),
    )


def test_hash_token_is_stable_sha256():
    digest = hash_token("abc")
    assert digest == hash_token("abc")
    assert len(digest) == 64
    assert digest != "abc"


def test_rotate_consumes_old_and_registers_new(repo, session):
    user = UserFactory()
    _register(repo, user.id, "old")
    session.commit()

    now = utcnow()
    outcome = repo.rotate(
        old_hash=hash_token("old"),
        new_hash=hash_token("new"),
        user_id=user.id,
        issued_at=now,
        expires_at=now + timedelta(hours=1),
    )
    session.commit()

    assert outcome is RotationResult.OK
    assert repo.get_by_hash(hash_token("old")) is None
    assert repo.get_by_hash(hash_token("new")) is not None


def test_rotate_unknown_token_reports_reuse_and_writes_nothing(repo, session):
    user = UserFactory()
    _register(repo, user.id, "live")
    session.commit()

    now = utcnow()
    outcome = repo.rotate(
        old_hash=hash_token("gone"),
        new_hash=hash_token("next"),
        user_id=user.id,
        issued_at=now,
        expires_at=now + timedelta(hours=1),
    )

    assert outcome is RotationResult.REUSED
    assert repo.get_by_hash(hash_token("next")) is None
    assert len(repo.list_for_user(user.id)) == 1


def test_second_rotation_of_same_token_is_reuse(repo, session):
    user = UserFactory()
    _register(repo, user.id, "t1")
    session.commit()
    now = utcnow()
    kwargs = dict(user_id=user.id, issued_at=now, expires_at=now + timedelta(hours=1))

    first = repo.rotate(old_hash=hash_token("t1"), new_hash=hash_token("t2"), **kwargs)
    second = repo.rotate(old_hash=hash_token("t1"), new_hash=hash_token("t3"), **kwargs)

    assert (first, second) == (RotationResult.OK, RotationResult.REUSED)


def test_discard_is_scoped_to_user(repo, session):
    owner, other = UserFactory(), UserFactory()
    _register(repo, owner.id, "mine")
    session.commit()

    assert repo.discard(hash_token("mine"), user_id=other.id) is False
    assert repo.discard(hash_token("mine"), user_id=owner.id) is True
    assert repo.discard(hash_token("mine")) is False


def test_revoke_all_for_user(repo, session):
    user, bystander = UserFactory(), UserFactory()
    for token in ("a", "b", "c"):
        _register(repo, user.id, token)
    _register(repo, bystander.id, "d")
    session.commit()

    assert repo.revoke_all_for_user(user.id) == 3
    assert repo.list_for_user(user.id) == []
    assert len(repo.list_for_user(bystander.id)) == 1


def test_purge_expired(repo, session):
    user = UserFactory()
    _register(repo, user.id, "stale", ttl=-60)
    _register(repo, user.id, "fresh")
    session.commit()

    assert repo.purge_expired(utcnow()) == 1
    assert [s.token_hash for s in repo.list_for_user(user.id)] == [hash_token("fresh")]
