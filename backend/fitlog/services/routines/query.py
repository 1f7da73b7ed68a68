from __future__ import annotations

import logging
from collections.abc import Iterable

from fitlog.repositories.routine import RoutineRepository
from fitlog.services._shared.base import BaseService
from fitlog.services._shared.errors import NotFoundError

from ._converters import routine_to_out
from .dto import RoutineListIn, RoutineListOut, RoutineOut, RoutineOwnerListOut

logger = logging.getLogger(__name__)


class RoutineQueryService(BaseService):
    """Read-only routines service exposing aggregate projections.

    Owners read their own routines and admins read everyone's; a member
    also reads the routines assigned to them. A routine the actor may not
    read is reported as missing.
    """

    def get(self, routine_id: int) -> RoutineOut:
        """Retrieve one routine with its entries sorted by order.

        :raises NotFoundError: When absent or not readable by the actor.
        """
        with self.ro_uow() as uow:
            repo: RoutineRepository = uow.routines
            routine = repo.get(routine_id)
            if routine is None or not self.can_read_routine(uow, routine):
                raise NotFoundError("Routine", routine_id)

            logger.debug("Routine fetched", extra={"routine_id": routine.id})
            return routine_to_out(routine)

    def list_by_owner(
        self, owner_user_id: int, *, sort: Iterable[str] | None = None
    ) -> RoutineOwnerListOut:
        """List every routine of ``owner_user_id`` (self or admin only)."""
        with self.ro_uow() as uow:
            self.ensure_owner(
                self.ctx.actor_id,
                owner_user_id,
                is_admin=self.actor_is_admin(uow),
                msg="Cannot list routines for another user.",
            )
            rows = uow.routines.list_by_owner(owner_user_id, sort=sort)
            logger.info(
                "Listed routines for owner",
                extra={"owner_user_id": owner_user_id, "count": len(rows)},
            )
            return RoutineOwnerListOut(items=[routine_to_out(row) for row in rows])

    def paginate(self, dto: RoutineListIn) -> RoutineListOut:
        """Paginate routines visible to the actor (all of them for admins)."""
        pagination = self.ensure_pagination(
            page=dto.pagination.page, limit=dto.pagination.limit, sort=dto.pagination.sort
        )
        filters = {"category": dto.category} if dto.category else {}

        with self.ro_uow() as uow:
            actor_id = self.require_actor(uow)
            owner_scope = dto.owner_user_id if self.actor_is_admin(uow) else actor_id
            page = uow.routines.paginate_for(owner_scope, pagination, filters=filters)
            items = list(page.items)
            logger.info(
                "Paginated routines",
                extra={"page": page.page, "limit": page.limit, "returned": len(items)},
            )
            return RoutineListOut(
                items=[routine_to_out(row) for row in items], meta=self.page_meta(page)
            )
