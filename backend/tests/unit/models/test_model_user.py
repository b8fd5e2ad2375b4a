"""Unit tests for the ``User`` model."""

from __future__ import annotations

import pytest
from rentaride.models.user import ROLE_ADMIN, ROLE_STANDARD, User


def test_password_is_write_only_and_hashed():
    user = User(username="alice", email="alice@example.com", roles=[ROLE_STANDARD])
    user.password = "s3cret-pass"

    assert user.password_hash != "s3cret-pass"
    assert user.verify_password("s3cret-pass")
    assert not user.verify_password("wrong")
    with pytest.raises(AttributeError):
        _ = user.password


def test_empty_password_rejected():
    user = User(username="bob", email="bob@example.com")
    with pytest.raises(ValueError):
        user.password = ""


def test_username_and_email_are_trimmed_not_case_folded():
    user = User(username="  MixedCase ", email=" Mixed@Example.com ")
    assert user.username == "MixedCase"
    assert user.email == "Mixed@Example.com"


@pytest.mark.parametrize("email", ["", "no-at-sign", "a@b"])
def test_invalid_email_rejected(email):
    with pytest.raises(ValueError):
        User(username="carol", email=email)


def test_roles_are_validated_and_deduplicated():
    user = User(username="dave", email="dave@example.com", roles=[ROLE_ADMIN, ROLE_ADMIN])
    assert user.roles == [ROLE_ADMIN]
    with pytest.raises(ValueError):
        user.roles = ["root"]


def test_email_verification_flag():
    user = User(username="erin", email="erin@example.com")
    assert not user.is_email_verified


def test_soft_delete_and_reactivate():
    user = User(username="frank", email="frank@example.com", active=True)
    user.soft_delete()
    assert user.active is False
    assert user.deleted_at is not None
    user.reactivate()
    assert user.active is True
    assert user.deleted_at is None
