# comments in English; reST docstrings
from __future__ import annotations

import threading
import time
from collections.abc import Callable
from typing import Any

from fitlog.services._shared.ports import DraftRecord, RoutineDraftStore


class InMemoryRoutineDraftStore(RoutineDraftStore):
    """
    Process-local draft store.

    .. note::
       Drafts are lost on restart and are not shared between gunicorn
       workers; configure ``REDIS_URL`` for multi-worker deployments.
    """

    def __init__(self, ttl_seconds: int = 3600, clock: Callable[[], float] = time.monotonic) -> None:
        self.ttl_seconds = int(ttl_seconds)
        self._clock = clock
        self._drafts: dict[str, tuple[float, dict[str, Any]]] = {}
        self._lock = threading.Lock()

    def _purge(self, now: float) -> None:
        for key in [k for k, (exp, _) in self._drafts.items() if exp <= now]:
            del self._drafts[key]

    def save(self, record: DraftRecord) -> None:
        with self._lock:
            now = self._clock()
            self._purge(now)
            self._drafts[record.draft_id] = (now + self.ttl_seconds, record.to_dict())

    def load(self, draft_id: str) -> DraftRecord | None:
        with self._lock:
            now = self._clock()
            self._purge(now)
            hit = self._drafts.get(draft_id)
            if hit is None:
                return None
            _, payload = hit
            self._drafts[draft_id] = (now + self.ttl_seconds, payload)
            return DraftRecord.from_dict(payload)

    def delete(self, draft_id: str) -> bool:
        with self._lock:
            return self._drafts.pop(draft_id, None) is not None
