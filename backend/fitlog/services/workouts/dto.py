# comments in English; reST docstrings
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from fitlog.services._shared.dto import PageMeta, PaginationIn


# ------------------------------- Inputs ------------------------------------- #


@dataclass(frozen=True, slots=True)
class WorkoutSetIn:
    reps: int
    weight: float
    completed: bool = False


@dataclass(frozen=True, slots=True)
class WorkoutExerciseIn:
    """Submitted state of one exercise; sets are numbered by position."""

    exercise_id: int
    notes: str = ""
    superset_group: int | None = None
    sets: list[WorkoutSetIn] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class WorkoutLogIn:
    """
    Finish a workout.

    :param routine_id: Routine the workout was started from, if any.
    :param name: Workout name; defaults to the routine name.
    :param elapsed_seconds: Stopwatch value when the user pressed finish.
    :param exercises: Exercises in execution order.
    :param completed_at: Finish instant; the server clock when omitted.
    """

    elapsed_seconds: int
    exercises: list[WorkoutExerciseIn]
    routine_id: int | None = None
    name: str | None = None
    completed_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class WorkoutListIn:
    pagination: PaginationIn = PaginationIn()
    routine_id: int | None = None


# ------------------------------- Outputs ------------------------------------ #


@dataclass(frozen=True, slots=True)
class WorkoutSetOut:
    set_number: int
    reps: int
    weight: float
    completed: bool


@dataclass(frozen=True, slots=True)
class WorkoutExerciseOut:
    order: int
    exercise_id: int
    exercise_name: str
    notes: str
    superset_group: int | None
    sets: list[WorkoutSetOut]


@dataclass(frozen=True, slots=True)
class WorkoutTemplateOut:
    """Prefilled, uncompleted sets for every entry of a routine."""

    routine_id: int
    name: str
    exercises: list[WorkoutExerciseOut]


@dataclass(frozen=True, slots=True)
class WorkoutLogOut:
    id: int
    user_id: int
    routine_id: int | None
    name: str
    started_at: datetime
    completed_at: datetime
    duration_minutes: int
    exercises: list[WorkoutExerciseOut]


@dataclass(frozen=True, slots=True)
class WorkoutListOut:
    items: list[WorkoutLogOut]
    meta: PageMeta
