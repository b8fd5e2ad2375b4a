"""Pytest fixtures wiring the app, a per-test schema and test doubles.

Each test gets freshly created tables on an in-memory SQLite database, so
services can commit through their Unit of Work exactly as in production.
"""

from __future__ import annotations

import os

import pytest
from rentaride.core.config import TestingConfig
from rentaride.core.extensions import db as _db
from rentaride.factory import create_app
from tests.helpers.mail import RecordingMailer


@pytest.fixture(scope="session")
def app():
    """Create a Flask application configured for testing.

    Returns
    -------
    flask.Flask
        Application instance with :class:`TestingConfig` applied and logging
        noise reduced.
    """
    # Ensure env-based config does not leak into tests
    os.environ.pop("DATABASE_URL", None)
    app = create_app(TestingConfig)
    app.logger.setLevel("WARNING")
    return app


@pytest.fixture()
def db(app):
    """Create every table before the test and drop them afterwards.

    Yields
    ------
    flask_sqlalchemy.SQLAlchemy
        Database extension bound to the testing application.
    """
    with app.app_context():
        _db.create_all()
        yield _db
        _db.session.remove()
        _db.drop_all()


@pytest.fixture()
def session(db):
    """Expose the Flask-scoped session used by repositories and services."""
    return db.session


@pytest.fixture()
def client(app, db):
    """Return a Flask test client sharing the test's app context."""
    return app.test_client()


@pytest.fixture()
def mailer(app):
    """Replace the outgoing mail adapter with an in-memory recorder."""
    original = app.extensions["mailer"]
    recorder = RecordingMailer()
    app.extensions["mailer"] = recorder
    yield recorder
    app.extensions["mailer"] = original


@pytest.fixture()
def token_provider(app):
    return app.extensions["token_provider"]


@pytest.fixture(scope="session")
def faker():
    """Provide a :class:`faker.Faker` instance seeded for deterministic tests."""
    from faker import Faker

    fk = Faker()
    Faker.seed(1337)
    return fk


# -- Hook up Factory Boy to the per-test session -------------------------------
@pytest.fixture(autouse=True)
def _factories_session(request):
    """Wire Factory Boy's session helper when the test uses the database."""
    if "db" not in request.fixturenames:
        yield
        return
    from tests.factories import SQLAlchemySession

    SQLAlchemySession.set(request.getfixturevalue("session"))
    yield
    SQLAlchemySession.set(None)
