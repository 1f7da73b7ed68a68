"""Idempotent database seed helpers for local development environments."""

from __future__ import annotations

import logging
from datetime import UTC, date, datetime, timedelta
from typing import Any, TypeVar, cast

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import select
from sqlalchemy.orm import Session

from fitlog.domain.composer import RoutineComposer
from fitlog.domain.workout_log import WorkoutLogDraft
from fitlog.models.assignment import RoutineAssignment
from fitlog.models.body_metrics import BodyMetric
from fitlog.models.exercise import Exercise
from fitlog.models.routine import Routine, RoutineExercise
from fitlog.models.user import ROLE_ADMIN, ROLE_COACH, ROLE_MEMBER, User
from fitlog.models.workout import WorkoutExercise, WorkoutLog, WorkoutSet

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

USER_FIXTURES: list[dict[str, str]] = [
    {
        "email": "alex.martinez@example.com",
        "username": "alexm",
        "full_name": "Alex Martinez",
        "role": ROLE_MEMBER,
    },
    {
        "email": "jamie.lee@example.com",
        "username": "jamielee",
        "full_name": "Jamie Lee",
        "role": ROLE_COACH,
    },
    {
        "email": "admin@example.com",
        "username": "admin",
        "full_name": "Catalog Admin",
        "role": ROLE_ADMIN,
    },
]

# (slug, name, muscle_group, equipment, category)
EXERCISE_FIXTURES: list[tuple[str, str, str, str, str]] = [
    ("barbell-bench-press", "Barbell Bench Press", "CHEST", "BARBELL", "PUSH"),
    ("incline-dumbbell-press", "Incline Dumbbell Press", "CHEST", "DUMBBELL", "PUSH"),
    ("cable-fly", "Cable Fly", "CHEST", "CABLE", "PUSH"),
    ("push-up", "Push-Up", "CHEST", "BODYWEIGHT", "PUSH"),
    ("overhead-press", "Overhead Press", "SHOULDERS", "BARBELL", "PUSH"),
    ("lateral-raise", "Lateral Raise", "SHOULDERS", "DUMBBELL", "PUSH"),
    ("triceps-pushdown", "Triceps Pushdown", "ARMS", "CABLE", "PUSH"),
    ("deadlift", "Deadlift", "BACK", "BARBELL", "PULL"),
    ("pull-up", "Pull-Up", "BACK", "BODYWEIGHT", "PULL"),
    ("barbell-row", "Barbell Row", "BACK", "BARBELL", "PULL"),
    ("lat-pulldown", "Lat Pulldown", "BACK", "MACHINE", "PULL"),
    ("face-pull", "Face Pull", "SHOULDERS", "CABLE", "PULL"),
    ("barbell-curl", "Barbell Curl", "ARMS", "BARBELL", "PULL"),
    ("hammer-curl", "Hammer Curl", "ARMS", "DUMBBELL", "PULL"),
    ("back-squat", "Back Squat", "LEGS", "BARBELL", "LEGS"),
    ("romanian-deadlift", "Romanian Deadlift", "LEGS", "BARBELL", "LEGS"),
    ("leg-press", "Leg Press", "LEGS", "MACHINE", "LEGS"),
    ("walking-lunge", "Walking Lunge", "LEGS", "DUMBBELL", "LEGS"),
    ("leg-curl", "Leg Curl", "LEGS", "MACHINE", "LEGS"),
    ("standing-calf-raise", "Standing Calf Raise", "LEGS", "MACHINE", "LEGS"),
    ("plank", "Plank", "CORE", "BODYWEIGHT", "CORE"),
    ("hanging-leg-raise", "Hanging Leg Raise", "CORE", "BODYWEIGHT", "CORE"),
    ("cable-crunch", "Cable Crunch", "CORE", "CABLE", "CORE"),
    ("rowing-machine", "Rowing Machine", "FULL_BODY", "MACHINE", "CARDIO"),
    ("kettlebell-swing", "Kettlebell Swing", "FULL_BODY", "OTHER", "LEGS"),
]

# Entries are (slug, sets, reps, weight, rest); ``supersets`` lists the
# indexes linked to the entry above them.
ROUTINE_FIXTURES: list[dict[str, Any]] = [
    {
        "owner_email": "alex.martinez@example.com",
        "name": "Push Day",
        "category": "PUSH",
        "description": "Chest first, shoulders and triceps to finish.",
        "entries": [
            ("barbell-bench-press", 4, 6, 80.0, 150),
            ("incline-dumbbell-press", 3, 10, 26.0, 90),
            ("cable-fly", 3, 12, 15.0, 60),
            ("lateral-raise", 3, 15, 8.0, 45),
            ("triceps-pushdown", 3, 12, 25.0, 45),
        ],
        "supersets": [2, 4],
    },
    {
        "owner_email": "alex.martinez@example.com",
        "name": "Leg Day",
        "category": "LEGS",
        "description": None,
        "entries": [
            ("back-squat", 5, 5, 100.0, 180),
            ("romanian-deadlift", 3, 8, 80.0, 120),
            ("walking-lunge", 3, 12, 16.0, 90),
            ("standing-calf-raise", 4, 15, 60.0, 45),
        ],
        "supersets": [],
    },
]

# Owned by the coach and assigned to ``student_email``; no workout is logged.
COACHING_FIXTURE: dict[str, Any] = {
    "owner_email": "jamie.lee@example.com",
    "student_email": "alex.martinez@example.com",
    "name": "Full Body Foundations",
    "category": "FULLBODY",
    "description": "Three days a week, add weight when every set feels easy.",
    "notes": "Start light and log every session.",
    "entries": [
        ("back-squat", 3, 8, 60.0, 120),
        ("barbell-bench-press", 3, 8, 50.0, 120),
        ("barbell-row", 3, 10, 40.0, 90),
        ("plank", 3, 1, 0.0, 60),
    ],
    "supersets": [],
}

# (email, measured_on, weight_kg, body_fat_pct)
BODY_METRIC_FIXTURES: list[tuple[str, date, float, float | None]] = [
    ("alex.martinez@example.com", date(2024, 1, 7), 84.2, 21.5),
    ("alex.martinez@example.com", date(2024, 1, 14), 83.6, None),
    ("alex.martinez@example.com", date(2024, 1, 21), 83.1, 20.9),
    ("alex.martinez@example.com", date(2024, 1, 28), 82.7, 20.4),
]


def _session(database: SQLAlchemy) -> Session:
    """Return the current SQLAlchemy session."""
    return cast(Session, database.session)


def _touch(summary: dict[str, dict[str, int]], table: str, created: bool) -> None:
    """Update summary counters for the given table."""
    entry = summary.setdefault(table, {"created": 0, "existing": 0})
    if created:
        entry["created"] += 1
    else:
        entry["existing"] += 1


def _get_or_create(
    session: Session,
    model: type[T],
    *,
    defaults: dict[str, Any] | None = None,
    **filters: Any,
) -> tuple[T, bool]:
    """Fetch ``model`` by ``filters`` or create it using ``defaults``."""
    instance = session.execute(select(model).filter_by(**filters)).scalar_one_or_none()
    if instance is not None:
        return instance, False
    params = dict(defaults or {})
    params.update(filters)
    instance = cast(T, model(**params))
    session.add(instance)
    return instance, True


def seed_users(database: SQLAlchemy, *, verbose: bool = False) -> dict[str, dict[str, int]]:
    """Create the demo users mirrored from the identity provider."""
    if verbose:
        LOGGER.info("Seeding users...")
    session = _session(database)
    summary: dict[str, dict[str, int]] = {}

    with session.begin():
        for fixture in USER_FIXTURES:
            user, created = _get_or_create(
                session,
                User,
                defaults={"username": fixture["username"]},
                email=fixture["email"],
            )
            user.full_name = fixture["full_name"]
            user.role = fixture["role"]
            session.flush()
            _touch(summary, "users", created)

    return summary


def seed_exercise_catalog(
    database: SQLAlchemy, *, verbose: bool = False
) -> dict[str, dict[str, int]]:
    """Create the global exercise catalog keyed by slug."""
    if verbose:
        LOGGER.info("Seeding exercise catalog...")
    session = _session(database)
    summary: dict[str, dict[str, int]] = {}

    with session.begin():
        for slug, name, muscle_group, equipment, category in EXERCISE_FIXTURES:
            _, created = _get_or_create(
                session,
                Exercise,
                defaults={
                    "name": name,
                    "muscle_group": muscle_group,
                    "equipment": equipment,
                    "category": category,
                    "is_custom": False,
                },
                slug=slug,
            )
            _touch(summary, "exercises", created)

    return summary


def _compose(fixture: dict[str, Any], ids: dict[str, int]) -> RoutineComposer:
    composer = RoutineComposer()
    for index, (slug, sets, reps, weight, rest) in enumerate(fixture["entries"]):
        composer.add_entry(ids[slug], slug)
        composer.update_entry(index, "target_sets", sets)
        composer.update_entry(index, "target_reps", reps)
        composer.update_entry(index, "target_weight", weight)
        composer.update_entry(index, "rest_seconds", rest)
    for index in fixture["supersets"]:
        composer.toggle_superset(index)
    return composer


def _entry_rows(records) -> list[RoutineExercise]:
    return [
        RoutineExercise(
            exercise_id=r.exercise_ref,
            order_index=r.order,
            target_sets=r.target_sets,
            target_reps=r.target_reps,
            target_weight=r.target_weight,
            rest_seconds=r.rest_seconds,
            superset_id=r.superset_group,
        )
        for r in records
    ]


def seed_routines_and_workouts(
    database: SQLAlchemy, *, verbose: bool = False
) -> dict[str, dict[str, int]]:
    """Create demo routines and one finished workout per new routine."""
    if verbose:
        LOGGER.info("Seeding routines and workouts...")
    session = _session(database)
    summary: dict[str, dict[str, int]] = {}

    with session.begin():
        ids = {row.slug: row.id for row in session.execute(select(Exercise.id, Exercise.slug))}
        names = {
            row.id: row.name for row in session.execute(select(Exercise.id, Exercise.name))
        }
        for fixture in ROUTINE_FIXTURES:
            owner = session.execute(
                select(User).filter_by(email=fixture["owner_email"])
            ).scalar_one_or_none()
            if owner is None:
                raise RuntimeError(f"User {fixture['owner_email']} missing while seeding routines")

            routine, created = _get_or_create(
                session,
                Routine,
                defaults={"category": fixture["category"], "description": fixture["description"]},
                owner_user_id=owner.id,
                name=fixture["name"],
            )
            _touch(summary, "routines", created)
            if not created:
                continue

            records = _compose(fixture, ids).serialize()
            routine.entries = _entry_rows(records)
            for _ in records:
                _touch(summary, "routine_exercises", True)
            session.flush()

            draft = WorkoutLogDraft.from_routine(routine.name, records, names=names)
            for ex_index, exercise in enumerate(draft.exercises):
                for set_index in range(len(exercise.sets)):
                    draft.toggle_set_complete(ex_index, set_index)
            draft.tick(52 * 60 + 17)
            finished = draft.finish(datetime.now(UTC) - timedelta(days=1))
            session.add(
                WorkoutLog(
                    user_id=owner.id,
                    routine_id=routine.id,
                    name=finished.name,
                    started_at=finished.started_at,
                    completed_at=finished.completed_at,
                    duration_minutes=finished.duration_minutes,
                    exercises=[
                        WorkoutExercise(
                            exercise_id=ex.exercise_ref,
                            order_index=ex.order,
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
            )
            session.flush()
            _touch(summary, "workout_logs", True)

    return summary


def seed_coaching_and_metrics(
    database: SQLAlchemy, *, verbose: bool = False
) -> dict[str, dict[str, int]]:
    """Create the coach routine, assign it, and record a month of body metrics."""
    if verbose:
        LOGGER.info("Seeding coaching demo and body metrics...")
    session = _session(database)
    summary: dict[str, dict[str, int]] = {}
    fixture = COACHING_FIXTURE

    with session.begin():
        users = {
            row.email: row.id
            for row in session.execute(
                select(User.id, User.email).where(
                    User.email.in_([fixture["owner_email"], fixture["student_email"]])
                )
            )
        }
        if len(users) != 2:
            raise RuntimeError("Demo coach or member missing while seeding assignments")
        coach_id, student_id = users[fixture["owner_email"]], users[fixture["student_email"]]

        routine, created = _get_or_create(
            session,
            Routine,
            defaults={"category": fixture["category"], "description": fixture["description"]},
            owner_user_id=coach_id,
            name=fixture["name"],
        )
        _touch(summary, "routines", created)
        if created:
            ids = {row.slug: row.id for row in session.execute(select(Exercise.id, Exercise.slug))}
            routine.entries = _entry_rows(_compose(fixture, ids).serialize())
            session.flush()

        _, created = _get_or_create(
            session,
            RoutineAssignment,
            defaults={"assigned_by": coach_id, "notes": fixture["notes"]},
            routine_id=routine.id,
            student_id=student_id,
        )
        _touch(summary, "routine_assignments", created)

        for email, measured_on, weight_kg, body_fat_pct in BODY_METRIC_FIXTURES:
            user_id = users.get(email)
            if user_id is None:
                raise RuntimeError(f"User {email} missing while seeding body metrics")
            _, created = _get_or_create(
                session,
                BodyMetric,
                defaults={"weight_kg": weight_kg, "body_fat_pct": body_fat_pct},
                user_id=user_id,
                measured_on=measured_on,
            )
            _touch(summary, "body_metrics", created)

    return summary


def run_all(database: SQLAlchemy, *, verbose: bool = False) -> dict[str, dict[str, int]]:
    """Run all seeders in the correct foreign-key order."""
    if verbose:
        LOGGER.info("Running full seed pipeline...")
    combined: dict[str, dict[str, int]] = {}
    for func in (
        seed_users,
        seed_exercise_catalog,
        seed_routines_and_workouts,
        seed_coaching_and_metrics,
    ):
        result = func(database, verbose=verbose)
        for table, counters in result.items():
            entry = combined.setdefault(table, {"created": 0, "existing": 0})
            entry["created"] += counters.get("created", 0)
            entry["existing"] += counters.get("existing", 0)
    return combined


__all__ = [
    "seed_users",
    "seed_exercise_catalog",
    "seed_routines_and_workouts",
    "seed_coaching_and_metrics",
    "run_all",
]
