# comments in English; reST docstrings
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from fitlog.services._shared.dto import PageMeta, PaginationIn


# ------------------------------- Inputs ------------------------------------- #


@dataclass(frozen=True, slots=True)
class ExerciseCreateIn:
    """
    Create an exercise.

    Members always create a custom exercise they own; admins create global
    catalog entries.

    :param name: Display name.
    :param muscle_group: One of ``CHEST, BACK, SHOULDERS, LEGS, ARMS, CORE, FULL_BODY``.
    :param equipment: One of ``BARBELL, DUMBBELL, MACHINE, CABLE, BODYWEIGHT, OTHER``.
    :param category: One of ``PUSH, PULL, LEGS, CARDIO, CORE, OTHER``.
    :param slug: Optional explicit slug; derived from ``name`` when omitted.
    :param description: Optional free text.
    """

    name: str
    muscle_group: str
    equipment: str
    category: str = "OTHER"
    slug: str | None = None
    description: str | None = None


@dataclass(frozen=True, slots=True)
class ExerciseListIn:
    """Catalog search: name substring plus optional equality filters."""

    pagination: PaginationIn = PaginationIn()
    search: str | None = None
    muscle_group: str | None = None
    equipment: str | None = None
    category: str | None = None


# ------------------------------- Outputs ------------------------------------ #


@dataclass(frozen=True, slots=True)
class ExerciseRowOut:
    id: int
    name: str
    slug: str
    category: str
    muscle_group: str
    equipment: str
    description: str | None
    is_custom: bool
    owner_user_id: int | None
    created_at: datetime | None
    updated_at: datetime | None


@dataclass(frozen=True, slots=True)
class ExerciseListOut:
    items: list[ExerciseRowOut]
    meta: PageMeta
