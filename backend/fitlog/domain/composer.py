"""
Routine composer: an ordered list of exercise entries with superset grouping.

The composer is the in-memory model behind a routine editing session. It owns
the entry list and the counter used to mint superset group ids; positions are
implicit (list index) and only materialised when the list is serialized.

Superset rules
--------------
* A group id is shared by a contiguous run of at least two entries.
* Entries are only ever joined to their immediate predecessor, so a group
  grows forward one entry at a time.
* Dissolving a link clears the toggled entry and every *following* entry of
  the same group; entries before it keep their group.
* Any reorder clears every group.
* Group ids come from a per-composer counter and are never handed out twice.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import asdict, dataclass, replace
from typing import Any

from .errors import InvalidFieldError, InvalidValueError, OutOfRangeError

DEFAULT_TARGET_SETS = 3
DEFAULT_TARGET_REPS = 10
DEFAULT_TARGET_WEIGHT = 0.0
DEFAULT_REST_SECONDS = 60

INT_FIELDS = frozenset({"target_sets", "target_reps", "rest_seconds"})
EDITABLE_FIELDS = INT_FIELDS | {"target_weight", "notes"}


@dataclass(slots=True)
class RoutineEntry:
    """One exercise placed in a routine.

    :ivar exercise_ref: Identifier of the exercise definition.
    :ivar display_name: Exercise name cached when the entry was added.
    :ivar superset_group: Shared id of the superset run, ``None`` when solo.
    """

    exercise_ref: int
    display_name: str
    target_sets: int = DEFAULT_TARGET_SETS
    target_reps: int = DEFAULT_TARGET_REPS
    target_weight: float = DEFAULT_TARGET_WEIGHT
    rest_seconds: int = DEFAULT_REST_SECONDS
    notes: str = ""
    superset_group: int | None = None


@dataclass(frozen=True, slots=True)
class EntryRecord:
    """Persistence-ready projection of an entry at a given position."""

    exercise_ref: int
    order: int
    target_sets: int
    target_reps: int
    target_weight: float
    rest_seconds: int
    notes: str
    superset_group: int | None


class RoutineComposer:
    """Stateful editor for the entries of a single routine.

    :param entries: Optional initial entries (copied).
    :type entries: Iterable[RoutineEntry] | None
    :param next_group_id: First group id this composer will mint.
    :type next_group_id: int
    """

    def __init__(
        self, entries: Iterable[RoutineEntry] | None = None, *, next_group_id: int = 1
    ) -> None:
        self._entries: list[RoutineEntry] = [replace(e) for e in entries or []]
        self._next_group_id = next_group_id

    # ------------------------------ Introspection ------------------------------

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> tuple[RoutineEntry, ...]:
        """Copies of the current entries, in order."""
        return tuple(replace(e) for e in self._entries)

    @property
    def next_group_id(self) -> int:
        return self._next_group_id

    # -------------------------------- Internals --------------------------------

    def _mint_group_id(self) -> int:
        group_id = self._next_group_id
        self._next_group_id += 1
        return group_id

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._entries):
            raise OutOfRangeError(index, len(self._entries))

    def _runs(self) -> list[tuple[int, int, int]]:
        """Return ``(group, start, length)`` for each maximal grouped run."""
        runs: list[tuple[int, int, int]] = []
        start = 0
        while start < len(self._entries):
            group = self._entries[start].superset_group
            end = start + 1
            while end < len(self._entries) and self._entries[end].superset_group == group:
                end += 1
            if group is not None:
                runs.append((group, start, end - start))
            start = end
        return runs

    # -------------------------------- Operations -------------------------------

    def add_entry(self, exercise_ref: int, display_name: str) -> RoutineEntry:
        """Append an entry with default targets and no group.

        :returns: A copy of the appended entry.
        :rtype: RoutineEntry
        """
        entry = RoutineEntry(exercise_ref=exercise_ref, display_name=display_name)
        self._entries.append(entry)
        return replace(entry)

    def remove_entry(self, index: int) -> None:
        """Delete the entry at ``index``.

        Superset groups are left as they are, even if the removal splits a run
        or leaves a single member behind (see :meth:`normalize_supersets`).

        :raises OutOfRangeError: If ``index`` does not address an entry.
        """
        self._check_index(index)
        del self._entries[index]

    def update_entry(self, index: int, field: str, value: Any) -> None:
        """Set one editable target (or the notes) on the entry at ``index``.

        Integer fields truncate (``12.9 -> 12``), the weight becomes a float
        rounded to two decimals and notes a string. Range checks belong to
        the caller.

        :raises OutOfRangeError: If ``index`` does not address an entry.
        :raises InvalidFieldError: If ``field`` is not editable.
        :raises InvalidValueError: If ``value`` cannot be coerced.
        """
        self._check_index(index)
        if field not in EDITABLE_FIELDS:
            raise InvalidFieldError(field)

        coerced: Any
        try:
            if field in INT_FIELDS:
                coerced = int(float(value))
            elif field == "target_weight":
                coerced = round(float(value), 2)
            else:
                coerced = "" if value is None else str(value)
        except (TypeError, ValueError, OverflowError) as exc:
            raise InvalidValueError(field, value) from exc

        setattr(self._entries[index], field, coerced)

    def toggle_superset(self, index: int) -> None:
        """Link the entry at ``index`` to its predecessor, or unlink it.

        ``index == 0`` is a no-op. When the entry is grouped, it is cleared
        along with the following entries that carry the same group. When it is
        not, it joins the predecessor's group, minting one for the predecessor
        if needed.

        :raises OutOfRangeError: If ``index`` is negative or past the end.
        """
        if index == 0:
            return
        self._check_index(index)

        entry = self._entries[index]
        if entry.superset_group is not None:
            group = entry.superset_group
            entry.superset_group = None
            for follower in self._entries[index + 1 :]:
                if follower.superset_group != group:
                    break
                follower.superset_group = None
            return

        previous = self._entries[index - 1]
        if previous.superset_group is None:
            previous.superset_group = self._mint_group_id()
        entry.superset_group = previous.superset_group

    def reorder(self, from_index: int, to_index: int) -> None:
        """Move an entry and clear every superset group.

        :raises OutOfRangeError: If either index does not address an entry.
        """
        self._check_index(from_index)
        self._check_index(to_index)
        entry = self._entries.pop(from_index)
        self._entries.insert(to_index, entry)
        for item in self._entries:
            item.superset_group = None

    def serialize(self) -> list[EntryRecord]:
        """Return one record per entry with ``order`` taken from the position."""
        return [
            EntryRecord(
                exercise_ref=e.exercise_ref,
                order=position,
                target_sets=e.target_sets,
                target_reps=e.target_reps,
                target_weight=e.target_weight,
                rest_seconds=e.rest_seconds,
                notes=e.notes,
                superset_group=e.superset_group,
            )
            for position, e in enumerate(self._entries)
        ]

    @classmethod
    def hydrate(
        cls,
        persisted: Iterable[EntryRecord],
        *,
        names: Mapping[int, str] | None = None,
    ) -> RoutineComposer:
        """Rebuild a composer from stored records.

        Stored group keys are reused verbatim; the counter starts right after
        the largest one so later joins cannot collide with them.

        :param persisted: Records as returned by :meth:`serialize`.
        :type persisted: Iterable[EntryRecord]
        :param names: Optional ``exercise_ref -> display name`` lookup.
        :type names: Mapping[int, str] | None
        :returns: A composer positioned on the stored order.
        :rtype: RoutineComposer
        """
        names = names or {}
        records = sorted(persisted, key=lambda r: r.order)
        entries = [
            RoutineEntry(
                exercise_ref=r.exercise_ref,
                display_name=names.get(r.exercise_ref, ""),
                target_sets=r.target_sets,
                target_reps=r.target_reps,
                target_weight=r.target_weight,
                rest_seconds=r.rest_seconds,
                notes=r.notes or "",
                superset_group=r.superset_group,
            )
            for r in records
        ]
        groups = [r.superset_group for r in records if r.superset_group is not None]
        return cls(entries, next_group_id=max(groups, default=0) + 1)

    # --------------------------- Superset consistency --------------------------

    def superset_violations(self) -> list[int]:
        """Return the group ids that break the adjacency rules.

        A group is reported when one of its runs has a single member or when
        it appears in more than one run.
        """
        seen: set[int] = set()
        broken: set[int] = set()
        for group, _, length in self._runs():
            if length == 1 or group in seen:
                broken.add(group)
            seen.add(group)
        return sorted(broken)

    def normalize_supersets(self) -> None:
        """Repair groups left inconsistent by removals.

        Single-member runs lose their group; a second (or later) run of an id
        already used earlier in the list gets a freshly minted id.
        """
        seen: set[int] = set()
        for group, start, length in self._runs():
            run = self._entries[start : start + length]
            if length == 1:
                run[0].superset_group = None
            elif group in seen:
                fresh = self._mint_group_id()
                for entry in run:
                    entry.superset_group = fresh
            else:
                seen.add(group)

    # -------------------------------- Snapshots --------------------------------

    def snapshot(self) -> dict[str, Any]:
        """Return a JSON-compatible copy of the whole editing state."""
        return {
            "entries": [asdict(e) for e in self._entries],
            "next_group_id": self._next_group_id,
        }

    @classmethod
    def from_snapshot(cls, data: Mapping[str, Any]) -> RoutineComposer:
        """Inverse of :meth:`snapshot`."""
        entries = [RoutineEntry(**raw) for raw in data.get("entries", [])]
        return cls(entries, next_group_id=int(data.get("next_group_id", 1)))
