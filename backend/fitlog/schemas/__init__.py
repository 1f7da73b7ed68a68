"""Convenience exports for application schemas."""

from __future__ import annotations

from .assignment import AssignmentCreateSchema, AssignmentFilterSchema, AssignmentSchema
from .body_metrics import BodyMetricFilterSchema, BodyMetricRecordSchema, BodyMetricSchema
from .common import MetaSchema, PaginationQuerySchema, SortQuerySchema
from .draft import (
    DraftEntryAddSchema,
    DraftEntryPatchSchema,
    DraftOpenSchema,
    DraftReorderSchema,
    DraftSaveSchema,
    DraftSchema,
)
from .exercise import ExerciseCreateSchema, ExerciseFilterSchema, ExerciseSchema
from .routine import RoutineFilterSchema, RoutineSchema, RoutineUpdateSchema
from .workout import (
    WorkoutCreateSchema,
    WorkoutFilterSchema,
    WorkoutSchema,
    WorkoutTemplateSchema,
)

__all__ = [
    "PaginationQuerySchema",
    "SortQuerySchema",
    "MetaSchema",
    "AssignmentSchema",
    "AssignmentCreateSchema",
    "AssignmentFilterSchema",
    "BodyMetricSchema",
    "BodyMetricRecordSchema",
    "BodyMetricFilterSchema",
    "DraftSchema",
    "DraftOpenSchema",
    "DraftEntryAddSchema",
    "DraftEntryPatchSchema",
    "DraftReorderSchema",
    "DraftSaveSchema",
    "ExerciseSchema",
    "ExerciseCreateSchema",
    "ExerciseFilterSchema",
    "RoutineSchema",
    "RoutineUpdateSchema",
    "RoutineFilterSchema",
    "WorkoutSchema",
    "WorkoutCreateSchema",
    "WorkoutFilterSchema",
    "WorkoutTemplateSchema",
]
