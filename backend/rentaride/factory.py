"""Build the RentARide Flask application.

Run it with ``gunicorn -c gunicorn.conf.py "rentaride.factory:create_app()"``
or ``flask --app rentaride.factory:create_app run``.
"""

from __future__ import annotations

import logging
from importlib import import_module

from flask import Flask

from rentaride.core.config import BaseConfig, get_config
from rentaride.core.logger import configure_logging

log = logging.getLogger(__name__)

# Each module exposes ``init_app(app)``. Extensions come first because the
# token provider and the JWT manager are used by everything after them, and
# the error handlers come last so they also cover the JWT loaders.
COMPONENTS = (
    "rentaride.core.proxy",
    "rentaride.core.extensions",
    "rentaride.core.logger",
    "rentaride.core.cors",
    "rentaride.api",
    "rentaride.core.errors",
    "rentaride.cli",
)


def create_app(
    config: str | type[BaseConfig] | object | None = None,
    *,
    instance_relative_config: bool = True,
    instance_config_filename: str = "config.py",
) -> Flask:
    """
    Create a configured application.

    :param config: Config class, object or import path; ``APP_ENV`` picks one
        when omitted.
    :param instance_config_filename: Optional ``instance/`` overrides, loaded
        after ``config``.
    :raises RuntimeError: When the token secrets are missing, shared or left
        as placeholders where that is not allowed.
    """
    app = Flask(__name__, instance_relative_config=instance_relative_config)
    app.config.from_object(config if config is not None else get_config())
    if instance_relative_config and instance_config_filename:
        app.config.from_pyfile(instance_config_filename, silent=True)

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    for name in COMPONENTS:
        import_module(name).init_app(app)

    log.info("RentARide app ready", extra={"event": "app.start"})
    return app
