"""Behaviour of the routine composer (ordering, supersets, serialization)."""

from __future__ import annotations

import pytest

from fitlog.domain.composer import EntryRecord, RoutineComposer, RoutineEntry
from fitlog.domain.errors import InvalidFieldError, InvalidValueError, OutOfRangeError


def _composer(*names: str) -> RoutineComposer:
    composer = RoutineComposer()
    for ref, name in enumerate(names, start=1):
        composer.add_entry(ref, name)
    return composer


def _groups(composer: RoutineComposer) -> list[int | None]:
    return [e.superset_group for e in composer.entries]


def _partition(records) -> list[tuple[int, ...]]:
    """Index groups sharing a superset id, independent of the raw id values."""
    buckets: dict[int, list[int]] = {}
    for r in records:
        if r.superset_group is not None:
            buckets.setdefault(r.superset_group, []).append(r.order)
    return sorted(tuple(v) for v in buckets.values())


class TestEntries:
    def test_add_entry_uses_defaults(self):
        composer = RoutineComposer()
        entry = composer.add_entry(7, "Bench")

        assert entry == RoutineEntry(exercise_ref=7, display_name="Bench")
        assert (entry.target_sets, entry.target_reps) == (3, 10)
        assert (entry.target_weight, entry.rest_seconds, entry.notes) == (0.0, 60, "")
        assert entry.superset_group is None
        assert len(composer) == 1

    def test_entries_are_copies(self):
        composer = _composer("A")
        composer.entries[0].target_sets = 99
        assert composer.entries[0].target_sets == 3

    def test_remove_entry_shifts_order(self):
        composer = _composer("A", "B", "C")
        composer.remove_entry(1)

        records = composer.serialize()
        assert [r.exercise_ref for r in records] == [1, 3]
        assert [r.order for r in records] == [0, 1]

    @pytest.mark.parametrize("index", [3, 10, -1])
    def test_remove_out_of_range_leaves_state_untouched(self, index):
        composer = _composer("A", "B", "C")
        composer.toggle_superset(1)
        before = composer.serialize()

        with pytest.raises(OutOfRangeError):
            composer.remove_entry(index)

        assert composer.serialize() == before
        assert composer.next_group_id == 2

    def test_remove_does_not_repair_groups(self):
        composer = _composer("A", "B", "C")
        composer.toggle_superset(1)
        composer.toggle_superset(2)
        composer.remove_entry(1)

        assert _groups(composer) == [1, 1]
        composer.remove_entry(1)
        assert _groups(composer) == [1]
        assert composer.superset_violations() == [1]


class TestUpdateEntry:
    def test_integers_truncate(self):
        composer = _composer("A")
        composer.update_entry(0, "target_reps", 12.9)
        composer.update_entry(0, "target_sets", "5")
        composer.update_entry(0, "rest_seconds", "90.4")

        entry = composer.entries[0]
        assert (entry.target_reps, entry.target_sets, entry.rest_seconds) == (12, 5, 90)

    def test_weight_and_notes_coerce(self):
        composer = _composer("A")
        composer.update_entry(0, "target_weight", "62.5")
        composer.update_entry(0, "notes", 42)

        assert composer.entries[0].target_weight == 62.5
        assert composer.entries[0].notes == "42"

        composer.update_entry(0, "notes", None)
        assert composer.entries[0].notes == ""

    def test_weight_keeps_two_decimals(self):
        composer = _composer("A")
        composer.update_entry(0, "target_weight", "62.556")

        assert composer.entries[0].target_weight == 62.56
        rebuilt = RoutineComposer.hydrate(composer.serialize(), names={1: "A"})
        assert rebuilt.entries[0].target_weight == 62.56

    def test_negative_values_are_not_rejected(self):
        composer = _composer("A")
        composer.update_entry(0, "target_sets", -2)
        assert composer.entries[0].target_sets == -2

    @pytest.mark.parametrize("field", ["superset_group", "order", "exercise_ref", "display_name"])
    def test_non_editable_fields(self, field):
        composer = _composer("A")
        with pytest.raises(InvalidFieldError):
            composer.update_entry(0, field, 1)

    def test_bad_value_keeps_previous(self):
        composer = _composer("A")
        with pytest.raises(InvalidValueError):
            composer.update_entry(0, "target_reps", "lots")
        assert composer.entries[0].target_reps == 10

    def test_out_of_range(self):
        with pytest.raises(OutOfRangeError):
            _composer("A").update_entry(1, "notes", "x")


class TestToggleSuperset:
    def test_index_zero_is_noop(self):
        composer = _composer("A", "B")
        before = composer.snapshot()
        composer.toggle_superset(0)
        assert composer.snapshot() == before

    def test_index_zero_on_empty_list_is_noop(self):
        composer = RoutineComposer()
        composer.toggle_superset(0)
        assert len(composer) == 0

    def test_join_mints_group_for_predecessor(self):
        composer = _composer("A", "B", "C")
        composer.toggle_superset(1)

        assert _groups(composer) == [1, 1, None]
        assert composer.next_group_id == 2

    def test_chain_of_three(self):
        composer = _composer("A", "B", "C")
        composer.toggle_superset(1)
        composer.toggle_superset(2)

        assert _groups(composer) == [1, 1, 1]
        assert composer.next_group_id == 2

    def test_dissolve_pair_keeps_predecessor(self):
        composer = _composer("A", "B")
        composer.toggle_superset(1)
        composer.toggle_superset(1)

        assert _groups(composer) == [1, None]

    def test_dissolve_scans_forward_only(self):
        composer = _composer("A", "B", "C")
        composer.toggle_superset(1)
        composer.toggle_superset(2)

        composer.toggle_superset(1)

        assert _groups(composer) == [1, None, None]

    def test_dissolve_stops_at_different_group(self):
        composer = _composer("A", "B", "C", "D")
        composer.toggle_superset(1)  # A,B -> 1
        composer.toggle_superset(3)  # C,D -> 2

        composer.toggle_superset(1)

        assert _groups(composer) == [1, None, 2, 2]

    def test_ids_are_not_reused_after_dissolve(self):
        composer = _composer("A", "B", "C")
        composer.toggle_superset(1)
        composer.toggle_superset(1)
        composer.toggle_superset(2)

        assert _groups(composer) == [1, 2, 2]

    @pytest.mark.parametrize("index", [3, -1])
    def test_out_of_range(self, index):
        composer = _composer("A", "B", "C")
        with pytest.raises(OutOfRangeError):
            composer.toggle_superset(index)


class TestReorder:
    def test_reorder_moves_and_clears_groups(self):
        composer = _composer("A", "B", "C")
        composer.toggle_superset(1)

        composer.reorder(0, 2)

        assert [e.display_name for e in composer.entries] == ["B", "C", "A"]
        assert _groups(composer) == [None, None, None]

    def test_reorder_backwards(self):
        composer = _composer("A", "B", "C", "D")
        composer.reorder(3, 1)
        assert [e.display_name for e in composer.entries] == ["A", "D", "B", "C"]

    def test_reorder_out_of_range_is_atomic(self):
        composer = _composer("A", "B")
        composer.toggle_superset(1)
        with pytest.raises(OutOfRangeError):
            composer.reorder(0, 2)
        assert _groups(composer) == [1, 1]

    def test_order_matches_position_after_mixed_edits(self):
        composer = _composer("A", "B", "C", "D", "E")
        composer.remove_entry(0)
        composer.reorder(3, 0)
        composer.add_entry(9, "F")
        composer.remove_entry(2)
        composer.reorder(1, 3)

        assert [r.order for r in composer.serialize()] == list(range(len(composer)))


class TestSerializeAndHydrate:
    def test_end_to_end_superset_of_three(self):
        composer = RoutineComposer()
        composer.add_entry(11, "Bench")
        composer.add_entry(12, "Incline")
        composer.add_entry(13, "Fly")
        composer.toggle_superset(1)
        composer.toggle_superset(2)

        records = composer.serialize()

        assert [r.order for r in records] == [0, 1, 2]
        assert [r.exercise_ref for r in records] == [11, 12, 13]
        assert {r.superset_group for r in records} == {1}

    def test_serialize_is_pure(self):
        composer = _composer("A", "B")
        first = composer.serialize()
        second = composer.serialize()
        assert first == second
        assert composer.next_group_id == 1

    def test_round_trip_preserves_entries_and_partition(self):
        composer = _composer("A", "B", "C", "D", "E")
        composer.toggle_superset(1)
        composer.toggle_superset(4)
        composer.update_entry(2, "target_weight", 80)
        composer.update_entry(3, "notes", "slow eccentric")

        records = composer.serialize()
        rebuilt = RoutineComposer.hydrate(records).serialize()

        assert [(r.exercise_ref, r.target_sets, r.target_reps) for r in rebuilt] == [
            (r.exercise_ref, r.target_sets, r.target_reps) for r in records
        ]
        assert [(r.target_weight, r.rest_seconds, r.notes) for r in rebuilt] == [
            (r.target_weight, r.rest_seconds, r.notes) for r in records
        ]
        assert _partition(rebuilt) == _partition(records) == [(0, 1), (3, 4)]

    def test_hydrate_sorts_and_seeds_counter(self):
        records = [
            EntryRecord(2, 1, 3, 10, 0.0, 60, "", 17),
            EntryRecord(1, 0, 3, 10, 0.0, 60, "", 17),
            EntryRecord(3, 2, 4, 8, 50.0, 90, "", None),
        ]
        composer = RoutineComposer.hydrate(records, names={1: "Squat", 2: "Lunge"})

        assert [e.display_name for e in composer.entries] == ["Squat", "Lunge", ""]
        assert _groups(composer) == [17, 17, None]
        assert composer.next_group_id == 18

        composer.toggle_superset(2)
        assert _groups(composer) == [17, 17, 17]

    def test_hydrate_without_groups_starts_at_one(self):
        composer = RoutineComposer.hydrate([EntryRecord(1, 0, 3, 10, 0.0, 60, "", None)])
        assert composer.next_group_id == 1

    def test_snapshot_round_trip(self):
        composer = _composer("A", "B")
        composer.toggle_superset(1)
        clone = RoutineComposer.from_snapshot(composer.snapshot())

        assert clone.entries == composer.entries
        assert clone.next_group_id == composer.next_group_id


class TestNormalizeSupersets:
    def test_singleton_is_cleared(self):
        composer = _composer("A", "B", "C")
        composer.toggle_superset(1)
        composer.remove_entry(0)

        assert composer.superset_violations() == [1]
        composer.normalize_supersets()
        assert _groups(composer) == [None, None]
        assert composer.superset_violations() == []

    def test_chain_with_middle_removed_stays_grouped(self):
        composer = _composer("A", "B", "C")
        composer.toggle_superset(1)
        composer.toggle_superset(2)
        composer.remove_entry(1)

        composer.normalize_supersets()

        assert _groups(composer) == [1, 1]
        assert composer.next_group_id == 2

    def test_two_runs_of_same_id(self):
        composer = RoutineComposer.hydrate(
            [
                EntryRecord(1, 0, 3, 10, 0.0, 60, "", 4),
                EntryRecord(2, 1, 3, 10, 0.0, 60, "", 4),
                EntryRecord(3, 2, 3, 10, 0.0, 60, "", None),
                EntryRecord(4, 3, 3, 10, 0.0, 60, "", 4),
                EntryRecord(5, 4, 3, 10, 0.0, 60, "", 4),
            ]
        )
        assert composer.superset_violations() == [4]

        composer.normalize_supersets()

        assert _groups(composer) == [4, 4, None, 5, 5]
        assert composer.superset_violations() == []
        assert composer.next_group_id == 6
