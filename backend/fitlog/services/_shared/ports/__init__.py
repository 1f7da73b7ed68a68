"""
fitlog.services._shared.ports
=============================

Ports (hexagonal interfaces) the service layer depends on.

- :mod:`routine_draft_store`:
    Defines :class:`~.RoutineDraftStore` and :class:`~.DraftRecord`, the
    storage contract for routine editing sessions.

Concrete stores (in-memory and Redis) live under ``fitlog.infra``.
"""

from __future__ import annotations

from .routine_draft_store import DraftRecord, RoutineDraftStore

__all__ = ["DraftRecord", "RoutineDraftStore"]
