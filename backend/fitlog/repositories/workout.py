"""Workout log repository."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from sqlalchemy import Select, select
from sqlalchemy.orm import InstrumentedAttribute, selectinload

from fitlog.models.workout import WorkoutExercise, WorkoutLog
from fitlog.repositories.base import BaseRepository, Page, Pagination


class WorkoutLogRepository(BaseRepository[WorkoutLog]):
    """
    Persistence-only repository for :class:`WorkoutLog`.

    Logs are written once, with their exercises and sets, and only read
    afterwards.
    """

    model = WorkoutLog

    def _sortable_fields(self) -> Mapping[str, InstrumentedAttribute[Any]]:
        return {
            "id": self.model.id,
            "name": self.model.name,
            "started_at": self.model.started_at,
            "completed_at": self.model.completed_at,
            "duration_minutes": self.model.duration_minutes,
        }

    def _filterable_fields(self) -> Mapping[str, InstrumentedAttribute[Any]]:
        return {
            "user_id": self.model.user_id,
            "routine_id": self.model.routine_id,
        }

    def _default_eagerload(self, stmt: Select[Any]) -> Select[Any]:
        return stmt.options(
            selectinload(self.model.exercises).selectinload(WorkoutExercise.sets),
            selectinload(self.model.exercises).selectinload(WorkoutExercise.exercise),
        )

    def paginate_for_user(
        self,
        user_id: int,
        pagination: Pagination,
        *,
        routine_id: int | None = None,
        completed_from: datetime | None = None,
        completed_to: datetime | None = None,
    ) -> Page[WorkoutLog]:
        """Page through a user's logs, newest first unless ``sort`` says otherwise.

        :param user_id: Owner of the logs.
        :param pagination: Page, limit and sort tokens.
        :param routine_id: Keep only logs started from this routine.
        :param completed_from: Inclusive lower bound on ``completed_at``.
        :param completed_to: Exclusive upper bound on ``completed_at``.
        :rtype: Page[WorkoutLog]
        """
        if not pagination.sort:
            pagination = Pagination(
                page=pagination.page, limit=pagination.limit, sort=["-completed_at"]
            )
        stmt: Select[Any] = select(self.model).where(self.model.user_id == user_id)
        if routine_id is not None:
            stmt = stmt.where(self.model.routine_id == routine_id)
        if completed_from is not None:
            stmt = stmt.where(self.model.completed_at >= completed_from)
        if completed_to is not None:
            stmt = stmt.where(self.model.completed_at < completed_to)
        return self.paginate_stmt(stmt, pagination)
