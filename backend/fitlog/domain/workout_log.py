"""Set bookkeeping for a workout performed from a routine."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta

from .composer import DEFAULT_TARGET_SETS, EntryRecord
from .errors import OutOfRangeError

@dataclass(slots=True)
class LoggedSet:
    set_number: int
    reps: int
    weight: float
    completed: bool = False


@dataclass(slots=True)
class LoggedExercise:
    exercise_ref: int
    display_name: str
    notes: str = ""
    superset_group: int | None = None
    sets: list[LoggedSet] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class FinishedExercise:
    """Exercise as written to the log: its position plus completed sets only."""

    exercise_ref: int
    order: int
    notes: str
    superset_group: int | None
    sets: list[LoggedSet]


@dataclass(frozen=True, slots=True)
class FinishedWorkout:
    name: str
    started_at: datetime
    completed_at: datetime
    duration_minutes: int
    exercises: list[FinishedExercise]


def format_elapsed(seconds: int) -> str:
    """Render a stopwatch value as ``MM:SS`` or ``H:MM:SS`` past one hour.

    >>> format_elapsed(75)
    '01:15'
    >>> format_elapsed(3725)
    '1:02:05'
    """
    seconds = max(int(seconds), 0)
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    clock = f"{minutes:02d}:{secs:02d}"
    return f"{hours}:{clock}" if hours > 0 else clock


class WorkoutLogDraft:
    """In-progress workout: exercises with their sets and a running clock.

    :param name: Workout name, usually the routine name.
    :type name: str
    :param exercises: Exercises in execution order.
    :type exercises: Iterable[LoggedExercise]
    :param elapsed_seconds: Seconds already spent.
    :type elapsed_seconds: int
    """

    def __init__(
        self,
        name: str,
        exercises: Iterable[LoggedExercise] = (),
        *,
        elapsed_seconds: int = 0,
    ) -> None:
        self.name = name
        self._exercises: list[LoggedExercise] = list(exercises)
        self.elapsed_seconds = max(int(elapsed_seconds), 0)

    @classmethod
    def from_routine(
        cls,
        name: str,
        records: Iterable[EntryRecord],
        *,
        names: dict[int, str] | None = None,
    ) -> WorkoutLogDraft:
        """Expand routine entries into prefilled, uncompleted sets.

        Each entry yields ``target_sets`` sets (3 when unset or zero) carrying
        the target reps and weight.
        """
        names = names or {}
        exercises: list[LoggedExercise] = []
        for record in sorted(records, key=lambda r: r.order):
            count = record.target_sets or DEFAULT_TARGET_SETS
            sets = [
                LoggedSet(
                    set_number=number,
                    reps=record.target_reps or 0,
                    weight=record.target_weight or 0.0,
                )
                for number in range(1, count + 1)
            ]
            exercises.append(
                LoggedExercise(
                    exercise_ref=record.exercise_ref,
                    display_name=names.get(record.exercise_ref, ""),
                    notes=record.notes or "",
                    superset_group=record.superset_group,
                    sets=sets,
                )
            )
        return cls(name, exercises)

    @property
    def exercises(self) -> tuple[LoggedExercise, ...]:
        return tuple(
            replace(ex, sets=[replace(s) for s in ex.sets]) for ex in self._exercises
        )

    def _exercise(self, index: int) -> LoggedExercise:
        if not 0 <= index < len(self._exercises):
            raise OutOfRangeError(index, len(self._exercises), "exercise")
        return self._exercises[index]

    def _set(self, exercise_index: int, set_index: int) -> LoggedSet:
        exercise = self._exercise(exercise_index)
        if not 0 <= set_index < len(exercise.sets):
            raise OutOfRangeError(set_index, len(exercise.sets), "set")
        return exercise.sets[set_index]

    def tick(self, seconds: int = 1) -> int:
        self.elapsed_seconds += max(int(seconds), 0)
        return self.elapsed_seconds

    def toggle_set_complete(self, exercise_index: int, set_index: int) -> bool:
        target = self._set(exercise_index, set_index)
        target.completed = not target.completed
        return target.completed

    def finish(self, now: datetime) -> FinishedWorkout:
        """Close the workout at ``now``.

        Duration is rounded up to whole minutes; the start is back-dated by the
        elapsed time. Every exercise is kept but only completed sets survive.
        """
        exercises = [
            FinishedExercise(
                exercise_ref=ex.exercise_ref,
                order=position,
                notes=ex.notes,
                superset_group=ex.superset_group,
                sets=[replace(s) for s in ex.sets if s.completed],
            )
            for position, ex in enumerate(self._exercises)
        ]
        return FinishedWorkout(
            name=self.name,
            started_at=now - timedelta(seconds=self.elapsed_seconds),
            completed_at=now,
            duration_minutes=math.ceil(self.elapsed_seconds / 60),
            exercises=exercises,
        )
