"""Pure, framework-free domain logic (routine composition and workout logging)."""

from __future__ import annotations

from .composer import EntryRecord, RoutineComposer, RoutineEntry
from .errors import DomainError, InvalidFieldError, InvalidValueError, OutOfRangeError
from .workout_log import (
    FinishedExercise,
    FinishedWorkout,
    LoggedExercise,
    LoggedSet,
    WorkoutLogDraft,
    format_elapsed,
)

__all__ = [
    "DomainError",
    "EntryRecord",
    "FinishedExercise",
    "FinishedWorkout",
    "InvalidFieldError",
    "InvalidValueError",
    "LoggedExercise",
    "LoggedSet",
    "OutOfRangeError",
    "RoutineComposer",
    "RoutineEntry",
    "WorkoutLogDraft",
    "format_elapsed",
]
