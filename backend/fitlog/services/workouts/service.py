"""Start workouts from routines and record finished ones."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fitlog.domain.workout_log import LoggedExercise, LoggedSet, WorkoutLogDraft
from fitlog.models.routine import Routine
from fitlog.services._shared.base import BaseService
from fitlog.services._shared.errors import InvalidOperationError, NotFoundError
from fitlog.services.routines._converters import routine_to_out
from fitlog.services.routines.dto import entry_records

from ._converters import finished_to_rows, logged_exercises_to_out, workout_log_to_out
from .dto import (
    WorkoutExerciseIn,
    WorkoutListIn,
    WorkoutListOut,
    WorkoutLogIn,
    WorkoutLogOut,
    WorkoutTemplateOut,
)

logger = logging.getLogger(__name__)


def _logged(ex: WorkoutExerciseIn, display_name: str) -> LoggedExercise:
    return LoggedExercise(
        exercise_ref=ex.exercise_id,
        display_name=display_name,
        notes=ex.notes or "",
        superset_group=ex.superset_group,
        sets=[
            LoggedSet(set_number=number, reps=s.reps, weight=s.weight, completed=s.completed)
            for number, s in enumerate(ex.sets, start=1)
        ],
    )


class WorkoutService(BaseService):
    """Workout logging for the acting user.

    Workouts may be started from owned or assigned routines. Routines and
    logs the actor may not read are reported as missing; admins read
    everything.
    """

    def _readable_routine(self, uow, routine_id: int) -> Routine:
        routine = uow.routines.get(routine_id)
        if routine is None or not self.can_read_routine(uow, routine):
            raise NotFoundError("Routine", routine_id)
        return routine

    def start(self, routine_id: int) -> WorkoutTemplateOut:
        """Expand a routine into prefilled sets. Nothing is persisted."""
        with self.ro_uow() as uow:
            self.require_actor(uow)
            routine = self._readable_routine(uow, routine_id)
            out = routine_to_out(routine)
            names = {e.exercise_id: e.exercise_name for e in out.entries}
            draft = WorkoutLogDraft.from_routine(
                out.name, entry_records(out.entries), names=names
            )
            logger.info(
                "Workout template built",
                extra={"routine_id": routine.id, "exercises": len(out.entries)},
            )
            return WorkoutTemplateOut(
                routine_id=routine.id,
                name=draft.name,
                exercises=logged_exercises_to_out(draft.exercises),
            )

    def log(self, dto: WorkoutLogIn) -> WorkoutLogOut:
        """
        Finish a workout and store it with its completed sets.

        The submitted state is rebuilt into a draft, closed at ``completed_at``
        (server time when omitted) and written in one unit of work.

        :raises NotFoundError: Unknown routine or exercise.
        :raises InvalidOperationError: No name and no routine to take it from.
        """
        completed_at = dto.completed_at or datetime.now(timezone.utc)

        with self.rw_uow() as uow:
            actor_id = self.require_actor(uow)

            name = (dto.name or "").strip()
            if dto.routine_id is not None:
                routine = self._readable_routine(uow, dto.routine_id)
                name = name or routine.name
            if not name:
                raise InvalidOperationError("workout name is required", code="name_required")

            ids = [ex.exercise_id for ex in dto.exercises]
            names = uow.exercises.names_by_id(ids)
            missing = sorted(set(ids) - set(names))
            if missing:
                raise NotFoundError("Exercise", missing[0])

            draft = WorkoutLogDraft(
                name,
                [_logged(ex, names[ex.exercise_id]) for ex in dto.exercises],
                elapsed_seconds=dto.elapsed_seconds,
            )
            finished = draft.finish(completed_at)

            row = finished_to_rows(actor_id, dto.routine_id, finished)
            uow.workout_logs.add(row)
            uow.workout_logs.flush()

            logger.info(
                "Workout logged",
                extra={
                    "workout_log_id": row.id,
                    "routine_id": dto.routine_id,
                    "duration_minutes": finished.duration_minutes,
                    "sets": sum(len(ex.sets) for ex in finished.exercises),
                },
            )
            return workout_log_to_out(row)

    def get(self, workout_log_id: int) -> WorkoutLogOut:
        with self.ro_uow() as uow:
            row = uow.workout_logs.get(workout_log_id)
            if row is None or not (row.user_id == self.ctx.actor_id or self.actor_is_admin(uow)):
                raise NotFoundError("WorkoutLog", workout_log_id)
            return workout_log_to_out(row)

    def list(self, dto: WorkoutListIn) -> WorkoutListOut:
        """Page through the actor's own logs, newest first by default."""
        pagination = self.ensure_pagination(
            page=dto.pagination.page, limit=dto.pagination.limit, sort=dto.pagination.sort
        )
        with self.ro_uow() as uow:
            actor_id = self.require_actor(uow)
            page = uow.workout_logs.paginate_for_user(
                actor_id, pagination, routine_id=dto.routine_id
            )
            items = list(page.items)
            return WorkoutListOut(
                items=[workout_log_to_out(row) for row in items], meta=self.page_meta(page)
            )
