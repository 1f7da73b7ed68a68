"""Routines service layer exposing orchestration services and DTOs."""

from __future__ import annotations

from .command import RoutineCommandService
from .drafts import RoutineDraftService
from .dto import (
    DraftEntryAddIn,
    DraftEntryOut,
    DraftEntryUpdateIn,
    DraftOpenIn,
    DraftOut,
    DraftReorderIn,
    DraftSaveIn,
    DraftSaveOut,
    RoutineCompositionIn,
    RoutineEntryOut,
    RoutineListIn,
    RoutineListOut,
    RoutineOut,
    RoutineOwnerListOut,
    RoutineUpdateIn,
    entry_records,
)
from .query import RoutineQueryService

__all__ = [
    "RoutineCommandService",
    "RoutineDraftService",
    "RoutineQueryService",
    # DTOs
    "DraftEntryAddIn",
    "DraftEntryOut",
    "DraftEntryUpdateIn",
    "DraftOpenIn",
    "DraftOut",
    "DraftReorderIn",
    "DraftSaveIn",
    "DraftSaveOut",
    "RoutineCompositionIn",
    "RoutineEntryOut",
    "RoutineListIn",
    "RoutineListOut",
    "RoutineOut",
    "RoutineOwnerListOut",
    "RoutineUpdateIn",
    "entry_records",
]
