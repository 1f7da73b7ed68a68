from __future__ import annotations

from collections.abc import Iterable

from fitlog.domain.workout_log import FinishedWorkout, LoggedExercise
from fitlog.models.workout import WorkoutExercise, WorkoutLog, WorkoutSet

from .dto import WorkoutExerciseOut, WorkoutLogOut, WorkoutSetOut


def logged_exercises_to_out(exercises: Iterable[LoggedExercise]) -> list[WorkoutExerciseOut]:
    return [
        WorkoutExerciseOut(
            order=position,
            exercise_id=ex.exercise_ref,
            exercise_name=ex.display_name,
            notes=ex.notes,
            superset_group=ex.superset_group,
            sets=[
                WorkoutSetOut(
                    set_number=s.set_number, reps=s.reps, weight=s.weight, completed=s.completed
                )
                for s in ex.sets
            ],
        )
        for position, ex in enumerate(exercises)
    ]


def finished_to_rows(user_id: int, routine_id: int | None, finished: FinishedWorkout) -> WorkoutLog:
    """Build the log aggregate (exercises and completed sets) ready to add."""
    return WorkoutLog(
        user_id=user_id,
        routine_id=routine_id,
        name=finished.name,
        started_at=finished.started_at,
        completed_at=finished.completed_at,
        duration_minutes=finished.duration_minutes,
        exercises=[
            WorkoutExercise(
                exercise_id=ex.exercise_ref,
                order_index=ex.order,
                notes=ex.notes or None,
                superset_id=ex.superset_group,
                sets=[
                    WorkoutSet(
                        set_number=s.set_number,
                        reps=s.reps,
                        weight=s.weight,
                        completed=True,
                    )
                    for s in ex.sets
                ],
            )
            for ex in finished.exercises
        ],
    )


def workout_log_to_out(row: WorkoutLog) -> WorkoutLogOut:
    exercises = sorted(row.exercises, key=lambda e: (e.order_index, e.id))
    return WorkoutLogOut(
        id=row.id,
        user_id=row.user_id,
        routine_id=row.routine_id,
        name=row.name,
        started_at=row.started_at,
        completed_at=row.completed_at,
        duration_minutes=row.duration_minutes,
        exercises=[
            WorkoutExerciseOut(
                order=ex.order_index,
                exercise_id=ex.exercise_id,
                exercise_name=ex.exercise.name if ex.exercise is not None else "",
                notes=ex.notes or "",
                superset_group=ex.superset_id,
                sets=[
                    WorkoutSetOut(
                        set_number=s.set_number,
                        reps=s.reps,
                        weight=float(s.weight or 0.0),
                        completed=bool(s.completed),
                    )
                    for s in sorted(ex.sets, key=lambda s: s.set_number)
                ],
            )
            for ex in exercises
        ],
    )
