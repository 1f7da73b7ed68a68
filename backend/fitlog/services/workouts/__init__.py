from .dto import (
    WorkoutExerciseIn,
    WorkoutExerciseOut,
    WorkoutListIn,
    WorkoutListOut,
    WorkoutLogIn,
    WorkoutLogOut,
    WorkoutSetIn,
    WorkoutSetOut,
    WorkoutTemplateOut,
)
from .service import WorkoutService

__all__ = [
    "WorkoutExerciseIn",
    "WorkoutExerciseOut",
    "WorkoutListIn",
    "WorkoutListOut",
    "WorkoutLogIn",
    "WorkoutLogOut",
    "WorkoutService",
    "WorkoutSetIn",
    "WorkoutSetOut",
    "WorkoutTemplateOut",
]
