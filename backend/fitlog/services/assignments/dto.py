# comments in English; reST docstrings
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class AssignmentCreateIn:
    """
    Assign a routine to a member.

    :param routine_id: Routine owned by the coach (any routine for admins).
    :param student_id: Member receiving the routine.
    :param notes: Optional instructions for the member.
    """

    routine_id: int
    student_id: int
    notes: str | None = None


@dataclass(frozen=True, slots=True)
class AssignmentListIn:
    """
    List assignments of one member.

    ``student_id`` ``None`` (or the actor) lists what was assigned to the
    actor; another id lists what the acting coach assigned to that member.
    """

    student_id: int | None = None


@dataclass(frozen=True, slots=True)
class AssignmentOut:
    id: int
    routine_id: int
    routine_name: str
    routine_category: str
    student_id: int
    assigned_by: int
    coach_name: str
    notes: str | None
    created_at: datetime | None
