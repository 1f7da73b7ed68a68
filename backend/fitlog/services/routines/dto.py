from __future__ import annotations

import hashlib
import json
from collections.abc import Iterable, Mapping
from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any

from fitlog.domain.composer import EntryRecord
from fitlog.services._shared.dto import PageMeta, PaginationIn


# ------------------------------ Output DTOs ------------------------------ #


@dataclass(frozen=True, slots=True)
class RoutineEntryOut:
    """One stored entry of a routine, in execution order."""

    id: int
    order: int
    exercise_id: int
    exercise_name: str
    target_sets: int
    target_reps: int
    target_weight: float
    rest_seconds: int
    notes: str | None
    superset_group: int | None


@dataclass(frozen=True, slots=True)
class RoutineOut:
    """Routine with its entries sorted by ``order``."""

    id: int
    owner_user_id: int
    name: str
    description: str | None
    category: str
    created_at: datetime | None
    updated_at: datetime | None
    entries: list[RoutineEntryOut]

    @property
    def etag(self) -> str:
        """Content fingerprint used for ``ETag`` / ``If-Match``."""
        payload = json.dumps(asdict(self), sort_keys=True, default=str).encode()
        return hashlib.sha256(payload).hexdigest()


@dataclass(frozen=True, slots=True)
class RoutineListOut:
    """Paginated listing of routines with metadata."""

    items: list[RoutineOut]
    meta: PageMeta


@dataclass(frozen=True, slots=True)
class RoutineOwnerListOut:
    """Non-paginated listing of the routines of one owner."""

    items: list[RoutineOut]


@dataclass(frozen=True, slots=True)
class DraftEntryOut:
    order: int
    exercise_id: int
    display_name: str
    target_sets: int
    target_reps: int
    target_weight: float
    rest_seconds: int
    notes: str
    superset_group: int | None


@dataclass(frozen=True, slots=True)
class DraftOut:
    """
    Current state of a routine editing session.

    :ivar violations: Superset group ids that break adjacency; they are
        repaired when the draft is saved.
    """

    id: str
    owner_user_id: int
    routine_id: int | None
    entries: list[DraftEntryOut]
    next_group_id: int
    violations: list[int]


@dataclass(frozen=True, slots=True)
class DraftSaveOut:
    routine: RoutineOut
    created: bool


# ------------------------------ Input DTOs ------------------------------- #


@dataclass(frozen=True, slots=True)
class RoutineUpdateIn:
    """Patch the descriptive fields of a routine (``None`` leaves a field as is)."""

    routine_id: int
    name: str | None = None
    description: str | None = None
    category: str | None = None
    if_match: str | None = None


@dataclass(frozen=True, slots=True)
class RoutineListIn:
    """
    Paginate routines.

    ``owner_user_id`` is only honoured for admins; everyone else is scoped to
    their own routines.
    """

    pagination: PaginationIn = PaginationIn()
    owner_user_id: int | None = None
    category: str | None = None


@dataclass(frozen=True, slots=True)
class RoutineCompositionIn:
    """
    Persist a composed routine.

    :param owner_user_id: Owner of a new routine (ignored in edit mode).
    :param records: Serialized composer entries.
    :param routine_id: Routine to overwrite, ``None`` to create one.
    """

    owner_user_id: int
    name: str
    category: str
    records: list[EntryRecord]
    description: str | None = None
    routine_id: int | None = None


@dataclass(frozen=True, slots=True)
class DraftOpenIn:
    routine_id: int | None = None


@dataclass(frozen=True, slots=True)
class DraftEntryAddIn:
    draft_id: str
    exercise_id: int


@dataclass(frozen=True, slots=True)
class DraftEntryUpdateIn:
    """Apply several field changes to one entry, in mapping order."""

    draft_id: str
    index: int
    changes: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class DraftReorderIn:
    draft_id: str
    from_index: int
    to_index: int


@dataclass(frozen=True, slots=True)
class DraftSaveIn:
    draft_id: str
    name: str
    category: str = "PUSH"
    description: str | None = None


def entry_records(rows: Iterable[RoutineEntryOut]) -> list[EntryRecord]:
    """Project stored entries back into composer records."""
    return [
        EntryRecord(
            exercise_ref=r.exercise_id,
            order=r.order,
            target_sets=r.target_sets,
            target_reps=r.target_reps,
            target_weight=r.target_weight,
            rest_seconds=r.rest_seconds,
            notes=r.notes or "",
            superset_group=r.superset_group,
        )
        for r in rows
    ]
