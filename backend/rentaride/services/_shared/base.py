"""Service base class and the request-scoped context services run under."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from flask import current_app, has_app_context

from rentaride.core import errors as api_errors
from rentaride.models.user import ROLE_ADMIN
from rentaride.services._shared.errors import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    PersistenceError,
    ServiceError,
    SignatureError,
)
from rentaride.services._shared.policies.common import is_owner
from rentaride.uow.sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyUnitOfWork,
)


@dataclass(slots=True)
class ServiceContext:
    """
    Who is calling, as established by the Auth Gateway.

    :param actor_id: Id of the authenticated user, ``None`` on public routes.
    :param roles: Role tags carried by the access token.
    :param request_id: Correlation id, repeated in service log records.
    """

    actor_id: int | None = None
    roles: list[str] = field(default_factory=list)
    request_id: str | None = None

    @property
    def is_admin(self) -> bool:
        return ROLE_ADMIN in self.roles


def _authorization_failure(exc: Exception) -> api_errors.APIError:
    # Deployment policy: 401 unless AUTHZ_FAILURE_STATUS says otherwise
    status = 401
    if has_app_context():
        status = int(current_app.config.get("AUTHZ_FAILURE_STATUS", 401))
    return api_errors.APIError(
        str(exc), status_code=status, code="unauthorized" if status == 401 else "forbidden"
    )


# Most specific first; ``TokenReuseError`` is caught by ``SignatureError``
_TRANSLATIONS: tuple[tuple[type[ServiceError], Callable[[Exception], api_errors.APIError]], ...] = (
    (NotFoundError, lambda exc: api_errors.NotFound(str(exc))),
    (ConflictError, lambda exc: api_errors.Conflict(str(exc))),
    (AuthenticationError, lambda exc: api_errors.Unauthorized(str(exc))),
    (SignatureError, lambda exc: api_errors.Forbidden(str(exc))),
    (AuthorizationError, _authorization_failure),
    (
        PersistenceError,
        lambda exc: api_errors.APIError(str(exc), status_code=400, code="persistence_error"),
    ),
    (ServiceError, lambda exc: api_errors.APIError(str(exc), status_code=400, code="bad_request")),
)


class BaseService:
    """
    Base class for application services.

    Services open a Unit of Work per operation (``rw_uow`` for commands,
    ``ro_uow`` for queries) and never touch ``db.session`` directly. They raise
    :class:`ServiceError` subclasses; the HTTP layer turns those into problem
    responses through :meth:`translate_exceptions`.
    """

    def __init__(self, *, ctx: ServiceContext | None = None) -> None:
        self.ctx = ctx or ServiceContext()

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork()

    def ro_uow(self) -> SQLAlchemyReadOnlyUnitOfWork:
        return SQLAlchemyReadOnlyUnitOfWork()

    # ---------------------------- Errors ----------------------------

    @staticmethod
    def translate_exceptions(exc: Exception) -> Exception:
        """
        Return the :class:`~rentaride.core.errors.APIError` for a service error.

        Non-service exceptions come back unchanged for the generic handlers.
        """
        for error_type, translate in _TRANSLATIONS:
            if isinstance(exc, error_type):
                return translate(exc)
        return exc

    # ---------------------------- Access ----------------------------

    def ensure_owner(self, actor_id: int | None, owner_id: int, *, msg: str | None = None) -> None:
        """:raises AuthorizationError: When ``actor_id`` is not ``owner_id``."""
        if not is_owner(actor_id=actor_id, owner_id=owner_id):
            raise AuthorizationError(msg)

    def ensure_owner_or_admin(self, owner_id: int, *, msg: str | None = None) -> None:
        """Pass for admins and for the owner; raise :class:`AuthorizationError` otherwise."""
        if self.ctx.is_admin:
            return
        self.ensure_owner(self.ctx.actor_id, owner_id, msg=msg)

    @staticmethod
    def get_or_404(repo, entity_id: int, entity: str, *, include_inactive: bool = True):
        """
        Load ``entity_id`` from ``repo`` or raise :class:`NotFoundError`.

        :param include_inactive: When ``False``, soft-deleted rows count as missing.
        """
        instance = repo.get(entity_id)
        if instance is None or (not include_inactive and not getattr(instance, "active", True)):
            raise NotFoundError(entity, entity_id)
        return instance
