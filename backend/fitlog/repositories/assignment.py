"""Routine assignment repository."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from sqlalchemy import Select, select
from sqlalchemy.orm import InstrumentedAttribute

from fitlog.models.assignment import RoutineAssignment
from fitlog.repositories.base import BaseRepository


class RoutineAssignmentRepository(BaseRepository[RoutineAssignment]):
    """Persistence-only repository for :class:`RoutineAssignment`."""

    model = RoutineAssignment

    def _sortable_fields(self) -> Mapping[str, InstrumentedAttribute[Any]]:
        return {
            "id": self.model.id,
            "created_at": self.model.created_at,
            "routine_id": self.model.routine_id,
        }

    def _filterable_fields(self) -> Mapping[str, InstrumentedAttribute[Any]]:
        return {
            "routine_id": self.model.routine_id,
            "student_id": self.model.student_id,
            "assigned_by": self.model.assigned_by,
        }

    def _updatable_fields(self) -> set[str]:
        return {"notes"}

    def is_assigned(self, routine_id: int, student_id: int | None) -> bool:
        """Return ``True`` when ``routine_id`` is assigned to ``student_id``."""
        if student_id is None:
            return False
        return self.exists(routine_id=routine_id, student_id=student_id)

    def list_for_student(
        self,
        student_id: int,
        *,
        assigned_by: int | None = None,
        sort: Iterable[str] | None = None,
    ) -> list[RoutineAssignment]:
        """List the assignments of a member, newest first unless ``sort`` says otherwise.

        :param student_id: Member the routines were assigned to.
        :param assigned_by: Keep only the assignments made by this coach.
        :param sort: Public sort tokens.
        """
        stmt: Select[Any] = select(self.model).where(self.model.student_id == student_id)
        if assigned_by is not None:
            stmt = stmt.where(self.model.assigned_by == assigned_by)
        stmt = self._ordered(self._default_eagerload(stmt), sort or ["-created_at", "-id"])
        return list(self.session.execute(stmt).scalars().all())

    def list_for_routine(self, routine_id: int) -> list[RoutineAssignment]:
        return self.list(filters={"routine_id": routine_id}, sort=["-created_at", "-id"])
