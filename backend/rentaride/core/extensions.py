"""Global Flask extension instances and initialization helpers."""

from __future__ import annotations

from datetime import timedelta

from flask import Flask
from flask_jwt_extended import JWTManager
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import MetaData

# Global naming convention for all constraints
convention = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=convention)

# Global singletons (import-safe)
db: SQLAlchemy = SQLAlchemy(session_options={"autoflush": False}, metadata=metadata)
migrate = Migrate(render_as_batch=True)
jwt = JWTManager()


def init_app(app: Flask) -> None:
    """Initialize SQLAlchemy, migrations, JWT verification and auth adapters.

    Parameters
    ----------
    app: flask.Flask
        Application used to bind extension instances. This call imports the
        :mod:`rentaride.models` package to ensure SQLAlchemy metadata is ready
        for migrations.

    Notes
    -----
    ``flask-jwt-extended`` only *verifies* access tokens (Auth Gateway), so its
    signing key is the access-token secret. Every token is minted by the
    :class:`~rentaride.infra.jwt.pyjwt_token_provider.JWTTokenProvider`, built
    here once from the loaded configuration.
    """
    db.init_app(app)

    # Ensure models are imported so Alembic sees metadata
    from rentaride import models as _models  # noqa: F401

    migrate.init_app(app, db)

    app.config["JWT_SECRET_KEY"] = app.config.get("ACCESS_TOKEN_SECRET")
    app.config.setdefault(
        "JWT_ACCESS_TOKEN_EXPIRES",
        timedelta(seconds=int(app.config.get("ACCESS_TOKEN_EXPIRES", 300))),
    )
    app.config.setdefault("JWT_DECODE_LEEWAY", 0)
    jwt.init_app(app)

    from rentaride.core.config import placeholder_secrets
    from rentaride.infra.jwt.pyjwt_token_provider import JWTTokenProvider, TokenSettings
    from rentaride.infra.mail.logging_mailer import LoggingMailer

    # Misconfigured secrets abort startup here, never per request
    if not app.config.get("ALLOW_PLACEHOLDER_SECRETS", True):
        unset = placeholder_secrets(app.config)
        if unset:
            raise RuntimeError(f"Placeholder token secrets in use: {', '.join(unset)}")
    app.extensions["token_provider"] = JWTTokenProvider(TokenSettings.from_config(app.config))
    app.extensions.setdefault(
        "mailer", LoggingMailer(sender=str(app.config.get("MAIL_SENDER", "")))
    )
