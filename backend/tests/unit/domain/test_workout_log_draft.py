"""Tests for the workout set bookkeeping."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from fitlog.domain.composer import EntryRecord
from fitlog.domain.errors import OutOfRangeError
from fitlog.domain.workout_log import WorkoutLogDraft, format_elapsed


@pytest.fixture()
def draft() -> WorkoutLogDraft:
    records = [
        EntryRecord(5, 1, 0, 8, 40.0, 60, "", 1),
        EntryRecord(4, 0, 2, 12, 20.0, 60, "tempo", 1),
        EntryRecord(6, 2, 3, 0, 0.0, 60, "", None),
    ]
    return WorkoutLogDraft.from_routine("Push", records, names={4: "Press", 5: "Dips"})


def test_from_routine_expands_sets(draft):
    first, second, third = draft.exercises

    assert (first.exercise_ref, first.display_name, first.notes) == (4, "Press", "tempo")
    assert [(s.set_number, s.reps, s.weight, s.completed) for s in first.sets] == [
        (1, 12, 20.0, False),
        (2, 12, 20.0, False),
    ]
    # zero target sets falls back to three
    assert len(second.sets) == 3
    assert second.superset_group == 1
    assert all(s.reps == 0 for s in third.sets)


def test_toggle_set_complete_flips(draft):
    assert draft.toggle_set_complete(0, 1) is True
    assert draft.exercises[0].sets[1].completed is True
    assert draft.toggle_set_complete(0, 1) is False


@pytest.mark.parametrize(("exercise", "set_index"), [(3, 0), (0, 2), (-1, 0)])
def test_out_of_range(draft, exercise, set_index):
    with pytest.raises(OutOfRangeError):
        draft.toggle_set_complete(exercise, set_index)


def test_finish_keeps_completed_sets_only(draft):
    draft.toggle_set_complete(0, 0)
    draft.toggle_set_complete(1, 2)
    draft.tick(61)
    now = datetime(2024, 5, 1, 18, 0, tzinfo=UTC)

    finished = draft.finish(now)

    assert finished.name == "Push"
    assert finished.duration_minutes == 2
    assert finished.completed_at == now
    assert finished.started_at == now - timedelta(seconds=61)
    assert [e.order for e in finished.exercises] == [0, 1, 2]
    assert [len(e.sets) for e in finished.exercises] == [1, 1, 0]
    assert finished.exercises[1].sets[0].set_number == 3
    assert finished.exercises[0].notes == "tempo"


def test_finish_zero_duration(draft):
    assert draft.finish(datetime.now(UTC)).duration_minutes == 0


@pytest.mark.parametrize(
    ("seconds", "expected"),
    [(0, "00:00"), (59, "00:59"), (754, "12:34"), (3600, "1:00:00"), (36061, "10:01:01")],
)
def test_format_elapsed(seconds, expected):
    assert format_elapsed(seconds) == expected
