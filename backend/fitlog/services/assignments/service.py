"""Coaches hand routines to members; members read what they were given."""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from fitlog.models.assignment import RoutineAssignment
from fitlog.services._shared.base import BaseService
from fitlog.services._shared.errors import (
    AuthorizationError,
    ConflictError,
    InvalidOperationError,
    NotFoundError,
    violates,
)

from .dto import AssignmentCreateIn, AssignmentListIn, AssignmentOut

logger = logging.getLogger(__name__)

_ALREADY_ASSIGNED = "routine already assigned to this member"


def _to_out(row: RoutineAssignment) -> AssignmentOut:
    coach = row.coach
    return AssignmentOut(
        id=row.id,
        routine_id=row.routine_id,
        routine_name=row.routine.name,
        routine_category=row.routine.category,
        student_id=row.student_id,
        assigned_by=row.assigned_by,
        coach_name=coach.full_name or coach.username,
        notes=row.notes,
        created_at=row.created_at,
    )


class RoutineAssignmentService(BaseService):
    """
    Routine assignments.

    Coaches assign their own routines; admins assign any routine. The member
    gains read access to the routine (and may start workouts from it) for as
    long as the assignment exists.
    """

    def _require_coach(self, uow) -> int:
        actor_id = self.require_actor(uow)
        if not uow.users.get(actor_id).can_coach:
            raise AuthorizationError("Only coaches can assign routines.")
        return actor_id

    def assign(self, dto: AssignmentCreateIn) -> AssignmentOut:
        """
        Assign ``dto.routine_id`` to ``dto.student_id``.

        :raises AuthorizationError: The actor is not a coach or an admin.
        :raises NotFoundError: Unknown member, or a routine the actor may not
            assign.
        :raises InvalidOperationError: ``self_assignment`` when the member owns
            the routine.
        :raises ConflictError: The routine is already assigned to the member.
        """
        try:
            with self.rw_uow() as uow:
                actor_id = self._require_coach(uow)
                routine = uow.routines.get(dto.routine_id)
                if routine is None or not (
                    routine.owner_user_id == actor_id or self.actor_is_admin(uow)
                ):
                    raise NotFoundError("Routine", dto.routine_id)
                if uow.users.get(dto.student_id) is None:
                    raise NotFoundError("User", dto.student_id)
                if dto.student_id == routine.owner_user_id:
                    raise InvalidOperationError(
                        "a routine cannot be assigned to its owner", code="self_assignment"
                    )
                if uow.assignments.is_assigned(routine.id, dto.student_id):
                    raise ConflictError("RoutineAssignment", _ALREADY_ASSIGNED)

                row = uow.assignments.add(
                    RoutineAssignment(
                        routine_id=routine.id,
                        student_id=dto.student_id,
                        assigned_by=actor_id,
                        notes=dto.notes,
                    )
                )
                logger.info(
                    "Routine assigned",
                    extra={
                        "assignment_id": row.id,
                        "routine_id": routine.id,
                        "student_id": dto.student_id,
                    },
                )
                return _to_out(row)
        except IntegrityError as exc:
            if violates(exc, "uq_routine_assignments_routine_student") or violates(
                exc, "routine_assignments.routine_id"
            ):
                raise ConflictError("RoutineAssignment", _ALREADY_ASSIGNED) from exc
            raise

    def unassign(self, assignment_id: int) -> None:
        """
        Remove an assignment. The coach who made it and admins may do so.

        :raises NotFoundError: Unknown assignment.
        :raises AuthorizationError: The actor neither made it nor is an admin.
        """
        with self.rw_uow() as uow:
            actor_id = self.require_actor(uow)
            row = uow.assignments.get(assignment_id)
            if row is None:
                raise NotFoundError("RoutineAssignment", assignment_id)
            self.ensure_owner(
                actor_id,
                row.assigned_by,
                is_admin=self.actor_is_admin(uow),
                msg="Only the coach who assigned the routine can remove it.",
            )
            uow.assignments.delete(row)
            logger.info("Routine unassigned", extra={"assignment_id": assignment_id})

    def list(self, dto: AssignmentListIn) -> list[AssignmentOut]:
        """
        List assignments of a member, newest first.

        Members list their own. Coaches list what they assigned to another
        member; admins list everything that member received.

        :raises AuthorizationError: A member asks for someone else's list.
        """
        with self.ro_uow() as uow:
            actor_id = self.require_actor(uow)
            student_id = dto.student_id if dto.student_id is not None else actor_id
            if student_id == actor_id:
                rows = uow.assignments.list_for_student(actor_id)
            elif self.actor_is_admin(uow):
                rows = uow.assignments.list_for_student(student_id)
            elif uow.users.get(actor_id).can_coach:
                rows = uow.assignments.list_for_student(student_id, assigned_by=actor_id)
            else:
                raise AuthorizationError("Cannot list assignments of another user.")
            return [_to_out(row) for row in rows]

    def list_for_routine(self, routine_id: int) -> list[AssignmentOut]:
        """Members a routine is assigned to (owner or admin only).

        :raises NotFoundError: When the routine is absent or not managed by
            the actor.
        """
        with self.ro_uow() as uow:
            actor_id = self.require_actor(uow)
            routine = uow.routines.get(routine_id)
            if routine is None or not (
                routine.owner_user_id == actor_id or self.actor_is_admin(uow)
            ):
                raise NotFoundError("Routine", routine_id)
            return [_to_out(row) for row in uow.assignments.list_for_routine(routine_id)]
