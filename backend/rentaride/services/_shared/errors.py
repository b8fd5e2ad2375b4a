"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and never depend on Flask or HTTP.
They are the stable contract between repositories, models and services; the
translation to RFC 7807 responses lives in ``BaseService.translate_exceptions``
and is wired by ``rentaride/core/errors.py``.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError


def violates(exc: IntegrityError, constraint_name: str) -> bool:
    """
    Check whether an IntegrityError originates from a specific constraint.

    Parameters
    ----------
    exc : IntegrityError
        The exception raised by SQLAlchemy during flush/commit.
    constraint_name : str
        The database constraint to match (e.g., ``'uq_users_email'``).

    Returns
    -------
    bool
        True if the IntegrityError mentions the given constraint.

    Notes
    -----
    SQLite reports the offending columns instead of the constraint name, so
    ``uq_users_email`` also matches ``users.email``.
    """
    message = str(exc.orig).lower() if exc.orig else ""
    if constraint_name.lower() in message:
        return True
    parts = constraint_name.lower().split("_", 2)
    if len(parts) == 3 and parts[0] == "uq":
        return f"{parts[1]}.{parts[2]}" in message
    return False


# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - They can be safely raised from repositories or domain logic.
    """

    default_message = "Bad request"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


# --------------------------------------------------------------------------- #
# Specific domain-level errors
# --------------------------------------------------------------------------- #


class ValidationError(ServiceError):
    """Malformed or inconsistent input detected past schema validation."""

    default_message = "Validation failed"


class AuthenticationError(ServiceError):
    """Bad credentials, unverified or inactive account, missing token."""

    default_message = "Unauthorized"


class AuthorizationError(ServiceError):
    """Authenticated caller lacks the role or ownership required."""

    default_message = "You are not allowed to perform this action"


class SignatureError(ServiceError):
    """Token signature invalid, expired, malformed or of the wrong type."""

    default_message = "Forbidden"


class PersistenceError(ServiceError):
    """Storage failure while saving a state transition."""

    default_message = "Unable to save changes"


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found in the repository.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str | int
    """

    entity: str
    key: str | int

    def __str__(self) -> str:
        return f"{self.entity} not found: {self.key}"


@dataclass(slots=True)
class ConflictError(ServiceError):
    """
    Raised when a unique constraint or business rule conflict occurs.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param detail: Short human-readable explanation.
    :type detail: str
    """

    entity: str
    detail: str

    def __str__(self) -> str:
        return self.detail


class TokenReuseError(SignatureError):
    """A validly signed refresh token that is no longer a live session."""
