from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol
from uuid import uuid4


@dataclass(frozen=True)
class DraftRecord:
    """
    Parked routine editing session.

    :ivar draft_id: Opaque identifier handed to the client.
    :ivar owner_id: User that opened the draft.
    :ivar routine_id: Routine being edited, ``None`` for a new routine.
    :ivar state: Composer snapshot (see ``RoutineComposer.snapshot``).
    """

    draft_id: str
    owner_id: int
    routine_id: int | None
    state: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "draft_id": self.draft_id,
            "owner_id": self.owner_id,
            "routine_id": self.routine_id,
            "state": self.state,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> DraftRecord:
        routine_id = raw.get("routine_id")
        return cls(
            draft_id=str(raw["draft_id"]),
            owner_id=int(raw["owner_id"]),
            routine_id=int(routine_id) if routine_id is not None else None,
            state=dict(raw.get("state") or {}),
        )


class RoutineDraftStore(Protocol):
    """
    Keeps routine drafts between requests.

    Reads and writes both push the expiry ``ttl_seconds`` into the future.
    """

    def new_id(self) -> str:
        """Return a fresh, unguessable draft identifier."""
        return uuid4().hex

    def save(self, record: DraftRecord) -> None: ...
    def load(self, draft_id: str) -> DraftRecord | None: ...
    def delete(self, draft_id: str) -> bool: ...
