"""Repository package exposing persistence-layer access for all domain models."""

from __future__ import annotations

from fitlog.repositories.base import (
    BaseRepository,
    Page,
    Pagination,
    apply_sorting,
    paginate_select,
    parse_sort_tokens,
)
from fitlog.repositories.assignment import RoutineAssignmentRepository
from fitlog.repositories.body_metrics import BodyMetricRepository
from fitlog.repositories.exercise import ExerciseRepository
from fitlog.repositories.routine import RoutineRepository
from fitlog.repositories.user import UserRepository
from fitlog.repositories.workout import WorkoutLogRepository

__all__ = [
    # Base
    "BaseRepository",
    "Page",
    "Pagination",
    "apply_sorting",
    "paginate_select",
    "parse_sort_tokens",
    # Domain
    "BodyMetricRepository",
    "ExerciseRepository",
    "RoutineAssignmentRepository",
    "RoutineRepository",
    "UserRepository",
    "WorkoutLogRepository",
]
