# fitlog/services/_shared/base.py
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from fitlog.core import errors as api_errors
from fitlog.repositories.base import Page, Pagination
from fitlog.services._shared.dto import PageMeta
from fitlog.services._shared.errors import (
    AuthorizationError,
    ConflictError,
    InvalidOperationError,
    NotFoundError,
    PreconditionFailedError,
    ServiceError,
)
from fitlog.services._shared.policies.common import can_manage
from fitlog.uow.sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyRepositoryContainer,
    SQLAlchemyUnitOfWork,
)


@dataclass(slots=True)
class ServiceContext:
    """
    Request-scoped data carried into services.

    :param actor_id: Authenticated user identifier (the JWT ``sub``).
    :param request_id: Correlation id for logging/tracing.
    """

    actor_id: int | None = None
    request_id: str | None = None


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Provide read-only and read-write units of work.
    * Centralize error translation.
    * Offer shared helpers for pagination, ownership and ETags.

    Notes
    -----
    Services never touch the global session directly; they always go
    through a Unit of Work. The actor's role is read from the ``users`` table
    inside that unit of work, never trusted from token claims.
    """

    DEFAULT_READ_ISOLATION = "READ COMMITTED"

    def __init__(self, *, ctx: ServiceContext | None = None) -> None:
        """
        :param ctx: Optional request-scoped context.
        :type ctx: ServiceContext | None
        """
        self.ctx = ctx or ServiceContext()

    # -------------------------- UoW helpers ---------------------------------

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork()

    def ro_uow(
        self, *, isolation: str | None = None, enforce_db_readonly: bool = True
    ) -> SQLAlchemyReadOnlyUnitOfWork:
        """
        Create a read-only Unit of Work.

        :param isolation: Transaction isolation level (e.g. "REPEATABLE READ").
        :type isolation: str | None
        :param enforce_db_readonly: Apply ``SET TRANSACTION READ ONLY`` when supported.
        :type enforce_db_readonly: bool
        :rtype: SQLAlchemyReadOnlyUnitOfWork
        """
        return SQLAlchemyReadOnlyUnitOfWork(
            isolation_level=isolation or self.DEFAULT_READ_ISOLATION,
            enforce_db_readonly=enforce_db_readonly,
        )

    # ----------------------- Validation utilities ---------------------------

    def ensure_pagination(
        self, *, page: int, limit: int, sort: Iterable[str] | None = None
    ) -> Pagination:
        """
        Build a Pagination value object with basic clamping.

        :param page: 1-based page number.
        :param limit: Page size.
        :param sort: Sort tokens like ``["-created_at", "name"]``.
        :rtype: Pagination
        """
        return Pagination(page=max(1, int(page)), limit=max(1, int(limit)), sort=list(sort or []))

    @staticmethod
    def page_meta(page: Page[Any]) -> PageMeta:
        return PageMeta(
            page=page.page,
            limit=page.limit,
            total=page.total,
            has_prev=page.page > 1,
            has_next=(page.page * page.limit) < page.total,
        )

    # -------------------------- Error handling ------------------------------

    def translate_exceptions(self, exc: Exception) -> Exception:
        """
        Map service-level errors to API-level (HTTP) errors.

        :param exc: Exception raised within the service.
        :type exc: Exception
        :returns: Translated exception ready to be re-raised; anything that is
            not a :class:`ServiceError` comes back untouched.
        :rtype: Exception
        """
        if isinstance(exc, NotFoundError):
            return api_errors.NotFound(str(exc))

        if isinstance(exc, ConflictError):
            return api_errors.Conflict(str(exc))

        if isinstance(exc, AuthorizationError):
            return api_errors.Forbidden(str(exc))

        if isinstance(exc, InvalidOperationError):
            return api_errors.UnprocessableEntity(str(exc), code=exc.code)

        if isinstance(exc, PreconditionFailedError):
            return api_errors.PreconditionFailed(str(exc))

        if isinstance(exc, ServiceError):
            return api_errors.APIError(message=str(exc), status_code=400, code="bad_request")

        return exc

    # --------------------------- ETag helpers -------------------------------

    def ensure_if_match(self, provided_etag: str | None, current_etag: str | None) -> None:
        """
        Validate an ``If-Match`` precondition. A missing header passes.

        :raises PreconditionFailedError: When the ETags differ.
        """
        if provided_etag is None:
            return
        if provided_etag.strip('"') != (current_etag or "").strip('"'):
            raise PreconditionFailedError()

    # --------------------------- AuthZ --------------------------------

    def actor_is_admin(self, uow: SQLAlchemyRepositoryContainer) -> bool:
        return uow.users.is_admin(self.ctx.actor_id)

    def can_read_routine(self, uow: SQLAlchemyRepositoryContainer, routine: Any) -> bool:
        """Owners, admins and members the routine is assigned to may read it."""
        actor_id = self.ctx.actor_id
        if actor_id is None:
            return False
        return (
            routine.owner_user_id == actor_id
            or uow.assignments.is_assigned(routine.id, actor_id)
            or self.actor_is_admin(uow)
        )

    def require_actor(self, uow: SQLAlchemyRepositoryContainer) -> int:
        """Return the actor id, ensuring it maps to a provisioned user.

        :raises AuthorizationError: When the context has no actor or the
            actor is unknown.
        """
        actor_id = self.ctx.actor_id
        if actor_id is None or uow.users.get(actor_id) is None:
            raise AuthorizationError("Unknown or missing user.")
        return actor_id

    def ensure_owner(
        self,
        actor_id: int | None,
        owner_id: int,
        *,
        is_admin: bool = False,
        msg: str | None = None,
    ) -> None:
        """
        Ensure the actor owns the resource (admins pass when ``is_admin``).

        :param actor_id: Authenticated user id.
        :param owner_id: Owner of the resource.
        :param is_admin: Whether the actor may manage other users' resources.
        :param msg: Optional custom error message.
        :raises AuthorizationError: If the actor may not act on the resource.
        """
        if not can_manage(actor_id=actor_id, owner_id=owner_id, is_admin=is_admin):
            raise AuthorizationError(msg or "You can only access your own resources.")
