# comments in English; reST docstrings
from __future__ import annotations

import json
from dataclasses import dataclass

import redis  # type: ignore[import-untyped]

from fitlog.services._shared.ports import DraftRecord, RoutineDraftStore


@dataclass(slots=True)
class RedisRoutineDraftStore(RoutineDraftStore):
    """
    Redis-backed routine draft store.

    Each draft is one JSON string under ``draft:routine:<id>``; every read or
    write resets its TTL.

    :param r: A Redis client (already connected).
    :param ttl_seconds: Idle lifetime of a draft.
    """

    r: redis.Redis
    ttl_seconds: int = 3600

    @staticmethod
    def _k(draft_id: str) -> str:
        return f"draft:routine:{draft_id}"

    def save(self, record: DraftRecord) -> None:
        self.r.set(self._k(record.draft_id), json.dumps(record.to_dict()), ex=self.ttl_seconds)

    def load(self, draft_id: str) -> DraftRecord | None:
        key = self._k(draft_id)
        with self.r.pipeline(transaction=True) as p:
            p.get(key)
            p.expire(key, self.ttl_seconds)
            raw, _ = p.execute()
        if raw is None:
            return None
        if isinstance(raw, bytes | bytearray):
            raw = raw.decode()
        return DraftRecord.from_dict(json.loads(raw))

    def delete(self, draft_id: str) -> bool:
        return bool(self.r.delete(self._k(draft_id)))
