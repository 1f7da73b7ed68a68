"""Exercise catalog service and DTOs."""

from __future__ import annotations

from .dto import ExerciseCreateIn, ExerciseListIn, ExerciseListOut, ExerciseRowOut
from .service import ExerciseCatalogService, slugify

__all__ = [
    "ExerciseCatalogService",
    "ExerciseCreateIn",
    "ExerciseListIn",
    "ExerciseListOut",
    "ExerciseRowOut",
    "slugify",
]
