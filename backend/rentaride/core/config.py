"""Environment-driven configuration classes selected by ``APP_ENV``."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any, Final

from dotenv import load_dotenv

ENV_VAR: Final[str] = "APP_ENV"  # 'development' | 'testing' | 'production'

TRUTHY: Final[frozenset[str]] = frozenset({"1", "true", "yes", "y", "on"})

# Signing keys that must be overridden outside development and tests
TOKEN_SECRET_KEYS: Final[tuple[str, ...]] = (
    "ACCESS_TOKEN_SECRET",
    "REFRESH_TOKEN_SECRET",
    "EMAIL_VERIFY_TOKEN_SECRET",
    "PASSWORD_RESET_TOKEN_SECRET",
)
PLACEHOLDER_PREFIX: Final[str] = "CHANGE_ME"

# No-op when no .env file is present
load_dotenv()


def env_bool(name: str, default: bool = False) -> bool:
    """Read a flag; ``1/true/yes/y/on`` (any case) count as true."""
    val = os.getenv(name)
    if val is None:
        return default
    return val.strip().lower() in TRUTHY


def env_int(name: str, default: int) -> int:
    """Read an integer (seconds, status codes) from the environment."""
    val = os.getenv(name)
    if val is None or not val.strip():
        return default
    return int(val)


def placeholder_secrets(config: Mapping[str, Any]) -> list[str]:
    """Return the token secret keys still set to a ``CHANGE_ME`` placeholder."""
    return [
        key for key in TOKEN_SECRET_KEYS
        if str(config.get(key) or "").startswith(PLACEHOLDER_PREFIX)
    ]


class BaseConfig:
    """Base configuration shared across environments.

    Attributes
    ----------
    API_BASE_PREFIX: str
        Root path for registering API blueprints.
    SECRET_KEY: str
        Flask secret used for session signing.
    ACCESS_TOKEN_SECRET / REFRESH_TOKEN_SECRET: str
        Distinct signing keys for access and refresh tokens. Rotating either
        invalidates every outstanding token of that kind.
    EMAIL_VERIFY_TOKEN_SECRET / PASSWORD_RESET_TOKEN_SECRET: str
        Signing keys for the one-off links sent by mail.
    ACCESS_TOKEN_EXPIRES / REFRESH_TOKEN_EXPIRES: int
        Token lifetimes in seconds.
    REFRESH_COOKIE_NAME: str
        Name of the HTTP-only cookie carrying the refresh token.
    REFRESH_COOKIE_SECURE: bool
        Whether the refresh cookie is flagged ``Secure`` (TLS only).
    AUTHZ_FAILURE_STATUS: int
        Status code emitted when an authenticated caller lacks a role.
    EXPOSE_STACKTRACE: bool
        Attach tracebacks to 5xx problem responses. Never enable in production.
    SQLALCHEMY_DATABASE_URI: str
        Database connection string consumed by SQLAlchemy.
    LOG_LEVEL: str
        Root logging verbosity (``INFO`` by default).
    CORS_ORIGINS: str
        Comma-separated list of allowed origins for CORS.

    ALLOW_PLACEHOLDER_SECRETS: bool
        Accept the ``CHANGE_ME`` signing keys. Disabled in production.
    """

    ALLOW_PLACEHOLDER_SECRETS = True

    API_BASE_PREFIX = "/api"

    # Secrets
    SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_ME")
    ACCESS_TOKEN_SECRET = os.getenv("ACCESS_TOKEN_SECRET", "CHANGE_ME_ACCESS")
    REFRESH_TOKEN_SECRET = os.getenv("REFRESH_TOKEN_SECRET", "CHANGE_ME_REFRESH")
    EMAIL_VERIFY_TOKEN_SECRET = os.getenv("EMAIL_VERIFY_TOKEN_SECRET", "CHANGE_ME_VERIFY")
    PASSWORD_RESET_TOKEN_SECRET = os.getenv("PASSWORD_RESET_TOKEN_SECRET", "CHANGE_ME_RESET")

    # Token lifetimes (seconds)
    ACCESS_TOKEN_EXPIRES = env_int("ACCESS_TOKEN_EXPIRES", 5 * 60)
    REFRESH_TOKEN_EXPIRES = env_int("REFRESH_TOKEN_EXPIRES", 24 * 60 * 60)
    EMAIL_VERIFY_TOKEN_EXPIRES = env_int("EMAIL_VERIFY_TOKEN_EXPIRES", 20 * 60)
    PASSWORD_RESET_TOKEN_EXPIRES = env_int("PASSWORD_RESET_TOKEN_EXPIRES", 10 * 60)

    # Refresh cookie
    REFRESH_COOKIE_NAME = os.getenv("REFRESH_COOKIE_NAME", "jwt")
    REFRESH_COOKIE_SECURE = env_bool("REFRESH_COOKIE_SECURE", False)

    # flask-jwt-extended only verifies access tokens from the Authorization header
    JWT_TOKEN_LOCATION = ["headers"]
    JWT_ALGORITHM = "HS256"

    AUTHZ_FAILURE_STATUS = env_int("AUTHZ_FAILURE_STATUS", 401)
    EXPOSE_STACKTRACE = False

    # Mail links
    FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:5173")
    MAIL_SENDER = os.getenv("MAIL_SENDER", "no-reply@rentaride.local")

    # DB
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///./dev.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)

    # Flask & JSON
    JSON_SORT_KEYS = False
    PROPAGATE_EXCEPTIONS = False

    # Logging & CORS
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173")

    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    """Configuration tailored for local development.

    Notes
    -----
    Enables debug mode and stack traces on unexpected errors.
    """

    DEBUG = env_bool("FLASK_DEBUG", True)
    EXPOSE_STACKTRACE = env_bool("EXPOSE_STACKTRACE", True)
    CORS_MAX_AGE = 600  # 10 minutes


class TestingConfig(BaseConfig):
    """Configuration for automated test runs.

    Notes
    -----
    - Forces ``TESTING`` mode and disables debug logs.
    - Uses an in-memory SQLite database unless ``TEST_DATABASE_URL`` is set.
    - Uses fixed secrets so tokens are reproducible across runs.
    """

    TESTING = True
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    ACCESS_TOKEN_SECRET = "test-access-secret"
    REFRESH_TOKEN_SECRET = "test-refresh-secret"
    EMAIL_VERIFY_TOKEN_SECRET = "test-verify-secret"
    PASSWORD_RESET_TOKEN_SECRET = "test-reset-secret"
    ACCESS_TOKEN_EXPIRES = 5 * 60
    REFRESH_TOKEN_EXPIRES = 60 * 60
    REFRESH_COOKIE_SECURE = False
    AUTHZ_FAILURE_STATUS = 401
    EXPOSE_STACKTRACE = True
    LOG_LEVEL = "WARNING"


class ProductionConfig(BaseConfig):
    """Configuration defaults for production deployments.

    Notes
    -----
    The refresh cookie is ``Secure`` unless explicitly disabled.
    Placeholder signing keys abort startup.
    """

    DEBUG = False
    SQLALCHEMY_ECHO = False
    PROPAGATE_EXCEPTIONS = False
    REFRESH_COOKIE_SECURE = env_bool("REFRESH_COOKIE_SECURE", True)
    EXPOSE_STACKTRACE = False
    ALLOW_PLACEHOLDER_SECRETS = False


CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Return the class named by ``APP_ENV``, falling back to development."""
    name = os.getenv(ENV_VAR, "development").strip().lower()
    return CONFIG_MAP.get(name, DevelopmentConfig)
