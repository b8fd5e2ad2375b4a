"""Flask CLI commands for session housekeeping and admin bootstrap."""

from __future__ import annotations

import logging

import click
from flask.cli import with_appcontext
from sqlalchemy.exc import SQLAlchemyError

from rentaride.core.extensions import db
from rentaride.models.base import utcnow
from rentaride.models.user import ROLE_ADMIN, User
from rentaride.repositories import RefreshSessionRepository, UserRepository

LOGGER = logging.getLogger(__name__)


@click.group("auth")
def auth_cli() -> None:
    """Authentication maintenance commands."""


@auth_cli.command("purge-sessions")
@with_appcontext
def purge_sessions_command() -> None:
    """Delete refresh sessions whose token has already expired."""
    repo = RefreshSessionRepository(db.session)
    try:
        removed = repo.purge_expired(utcnow())
        db.session.commit()
    except SQLAlchemyError as exc:  # pragma: no cover - CLI safeguard
        db.session.rollback()
        raise click.ClickException(f"Purge failed: {exc}") from exc
    LOGGER.info("Purged expired refresh sessions", extra={"event": "auth.purge", "count": removed})
    click.echo(f"Purged {removed} expired refresh session(s).")


@auth_cli.command("create-admin")
@click.argument("username")
@click.argument("email")
@click.option("--password", prompt=True, hide_input=True, confirmation_prompt=True)
@with_appcontext
def create_admin_command(username: str, email: str, password: str) -> None:
    """Create an email-verified administrator account."""
    repo = UserRepository(db.session)
    if repo.exists_by_username(username):
        raise click.UsageError(f"Username {username} already exists")
    if repo.exists_by_email(email):
        raise click.UsageError(f"User email {email} already exists")
    try:
        user = User(username=username, email=email, roles=[ROLE_ADMIN], verified=True)
        user.password = password
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc
    user.email_verified_at = utcnow()
    try:
        repo.add(user)
        db.session.commit()
    except SQLAlchemyError as exc:  # pragma: no cover - CLI safeguard
        db.session.rollback()
        raise click.ClickException(f"Could not create admin: {exc}") from exc
    click.echo(f"Admin {username} created (id={user.id}).")
