"""Unit tests for configuration helpers and the production secret guard."""

from __future__ import annotations

import pytest
from rentaride import create_app
from rentaride.core.config import (
    DevelopmentConfig,
    ProductionConfig,
    TestingConfig,
    env_bool,
    env_int,
    get_config,
    placeholder_secrets,
)


class _ProductionWithPlaceholders(ProductionConfig):
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    ACCESS_TOKEN_SECRET = "CHANGE_ME_ACCESS"
    REFRESH_TOKEN_SECRET = "prod-refresh"
    EMAIL_VERIFY_TOKEN_SECRET = "prod-verify"
    PASSWORD_RESET_TOKEN_SECRET = "prod-reset"


class _ProductionConfigured(_ProductionWithPlaceholders):
    ACCESS_TOKEN_SECRET = "prod-access"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("1", True), ("Yes", True), (" on ", True), ("0", False), ("nope", False)],
)
def test_env_bool(monkeypatch, raw, expected):
    monkeypatch.setenv("SOME_FLAG", raw)
    assert env_bool("SOME_FLAG") is expected


def test_env_helpers_fall_back_to_default(monkeypatch):
    monkeypatch.delenv("SOME_FLAG", raising=False)
    monkeypatch.setenv("SOME_INT", " ")
    assert env_bool("SOME_FLAG", True) is True
    assert env_int("SOME_INT", 42) == 42


@pytest.mark.parametrize(
    ("name", "expected"),
    [("production", ProductionConfig), ("TESTING", TestingConfig), ("bogus", DevelopmentConfig)],
)
def test_get_config_selects_by_env(monkeypatch, name, expected):
    monkeypatch.setenv("APP_ENV", name)
    assert get_config() is expected


def test_placeholder_secrets_lists_unset_keys():
    config = {"ACCESS_TOKEN_SECRET": "CHANGE_ME_ACCESS", "REFRESH_TOKEN_SECRET": "real"}
    assert placeholder_secrets(config) == ["ACCESS_TOKEN_SECRET"]


def test_production_refuses_placeholder_secrets():
    with pytest.raises(RuntimeError, match="ACCESS_TOKEN_SECRET"):
        create_app(_ProductionWithPlaceholders)


def test_production_starts_with_real_secrets():
    app = create_app(_ProductionConfigured)
    assert app.config["REFRESH_COOKIE_SECURE"] is True
    assert app.extensions["token_provider"] is not None
