from __future__ import annotations

from fitlog.domain.composer import RoutineComposer
from fitlog.models.routine import Routine, RoutineExercise
from fitlog.services._shared.ports import DraftRecord

from .dto import DraftEntryOut, DraftOut, RoutineEntryOut, RoutineOut


def routine_entry_to_out(row: RoutineExercise) -> RoutineEntryOut:
    return RoutineEntryOut(
        id=row.id,
        order=row.order_index,
        exercise_id=row.exercise_id,
        exercise_name=row.exercise.name if row.exercise is not None else "",
        target_sets=row.target_sets,
        target_reps=row.target_reps,
        target_weight=float(row.target_weight or 0.0),
        rest_seconds=row.rest_seconds,
        notes=row.notes,
        superset_group=row.superset_id,
    )


def routine_to_out(row: Routine) -> RoutineOut:
    entries = sorted(row.entries, key=lambda e: (e.order_index, e.id))
    return RoutineOut(
        id=row.id,
        owner_user_id=row.owner_user_id,
        name=row.name,
        description=row.description,
        category=row.category,
        created_at=row.created_at,
        updated_at=row.updated_at,
        entries=[routine_entry_to_out(e) for e in entries],
    )


def draft_to_out(record: DraftRecord, composer: RoutineComposer) -> DraftOut:
    entries = [
        DraftEntryOut(
            order=position,
            exercise_id=e.exercise_ref,
            display_name=e.display_name,
            target_sets=e.target_sets,
            target_reps=e.target_reps,
            target_weight=e.target_weight,
            rest_seconds=e.rest_seconds,
            notes=e.notes,
            superset_group=e.superset_group,
        )
        for position, e in enumerate(composer.entries)
    ]
    return DraftOut(
        id=record.draft_id,
        owner_user_id=record.owner_id,
        routine_id=record.routine_id,
        entries=entries,
        next_group_id=composer.next_group_id,
        violations=composer.superset_violations(),
    )
