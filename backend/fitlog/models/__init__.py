from fitlog.models.assignment import RoutineAssignment
from fitlog.models.body_metrics import BodyMetric
from fitlog.models.exercise import Exercise
from fitlog.models.routine import Routine, RoutineExercise
from fitlog.models.user import User
from fitlog.models.workout import WorkoutExercise, WorkoutLog, WorkoutSet

__all__ = [
    "BodyMetric",
    "Exercise",
    "Routine",
    "RoutineAssignment",
    "RoutineExercise",
    "User",
    "WorkoutExercise",
    "WorkoutLog",
    "WorkoutSet",
]
