from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from fitlog.models.routine import Routine
from fitlog.repositories.routine import RoutineRepository
from fitlog.services._shared.base import BaseService
from fitlog.services._shared.errors import ConflictError, NotFoundError, violates

from ._converters import routine_to_out
from .dto import RoutineCompositionIn, RoutineOut, RoutineUpdateIn

logger = logging.getLogger(__name__)

_NAME_TAKEN = "name already exists for owner"


def _is_name_collision(exc: IntegrityError) -> bool:
    return violates(exc, "uq_routines_owner_name") or violates(exc, "routines.owner_user_id")


class RoutineCommandService(BaseService):
    """Orchestrate routine mutations enforcing ownership and consistency.

    Owners manage their routines; admins manage any routine.
    """

    def _load_managed(self, uow, routine_id: int, *, action: str) -> Routine:
        repo: RoutineRepository = uow.routines
        routine = repo.get_for_update(routine_id)
        if routine is None:
            raise NotFoundError("Routine", routine_id)
        self.ensure_owner(
            self.ctx.actor_id,
            routine.owner_user_id,
            is_admin=self.actor_is_admin(uow),
            msg=f"Cannot {action} another user's routine.",
        )
        return routine

    def update(self, dto: RoutineUpdateIn) -> RoutineOut:
        """Update name, description or category after locking the routine.

        :raises PreconditionFailedError: When ``if_match`` is stale.
        :raises ConflictError: When the owner already has a routine with the new name.
        """
        try:
            with self.rw_uow() as uow:
                routine = self._load_managed(uow, dto.routine_id, action="modify")
                self.ensure_if_match(dto.if_match, routine_to_out(routine).etag)

                updates: dict[str, object] = {}
                if dto.name is not None:
                    updates["name"] = dto.name.strip()
                if dto.description is not None:
                    updates["description"] = dto.description
                if dto.category is not None:
                    updates["category"] = dto.category

                if "name" in updates and updates["name"] != routine.name:
                    clash = uow.routines.get_by_owner_and_name(routine.owner_user_id, updates["name"])
                    if clash is not None:
                        raise ConflictError("Routine", _NAME_TAKEN)

                if updates:
                    uow.routines.assign_updates(routine, updates)

                logger.info(
                    "Routine updated", extra={"routine_id": routine.id, "fields": sorted(updates)}
                )
                return routine_to_out(routine)
        except IntegrityError as exc:
            if _is_name_collision(exc):
                raise ConflictError("Routine", _NAME_TAKEN) from exc
            raise

    def delete(self, routine_id: int) -> None:
        """Delete a routine and its entries; logged workouts keep their data."""
        with self.rw_uow() as uow:
            routine = self._load_managed(uow, routine_id, action="delete")
            uow.routines.delete(routine)
            logger.info("Routine deleted", extra={"routine_id": routine_id})

    def save_composition(self, dto: RoutineCompositionIn) -> tuple[RoutineOut, bool]:
        """
        Create a routine, or overwrite one, from serialized composer entries.

        Everything happens in one unit of work: in edit mode the descriptive
        fields are updated and every entry row is replaced.

        :param dto: Routine fields plus the records to store.
        :type dto: RoutineCompositionIn
        :returns: ``(routine, created)``.
        :rtype: tuple[RoutineOut, bool]
        :raises NotFoundError: When the routine or a referenced exercise is missing.
        :raises AuthorizationError: When the actor may not edit the routine.
        :raises ConflictError: When the owner already has a routine with ``name``.
        """
        name = dto.name.strip()
        try:
            with self.rw_uow() as uow:
                repo: RoutineRepository = uow.routines
                self.require_actor(uow)

                known = uow.exercises.names_by_id(r.exercise_ref for r in dto.records)
                for record in dto.records:
                    if record.exercise_ref not in known:
                        raise NotFoundError("Exercise", record.exercise_ref)

                if dto.routine_id is not None:
                    routine = self._load_managed(uow, dto.routine_id, action="edit")
                    if name != routine.name and repo.get_by_owner_and_name(
                        routine.owner_user_id, name
                    ):
                        raise ConflictError("Routine", _NAME_TAKEN)
                    repo.assign_updates(
                        routine,
                        {"name": name, "description": dto.description, "category": dto.category},
                    )
                    created = False
                else:
                    self.ensure_owner(self.ctx.actor_id, dto.owner_user_id)
                    if repo.get_by_owner_and_name(dto.owner_user_id, name) is not None:
                        raise ConflictError("Routine", _NAME_TAKEN)
                    routine = repo.add(
                        Routine(
                            owner_user_id=dto.owner_user_id,
                            name=name,
                            description=dto.description,
                            category=dto.category,
                        )
                    )
                    created = True

                repo.replace_entries(routine, dto.records)
                logger.info(
                    "Routine composition saved",
                    extra={
                        "routine_id": routine.id,
                        "routine_created": created,
                        "entries": len(dto.records),
                    },
                )
                return routine_to_out(routine), created
        except IntegrityError as exc:
            if _is_name_collision(exc):
                raise ConflictError("Routine", _NAME_TAKEN) from exc
            raise
