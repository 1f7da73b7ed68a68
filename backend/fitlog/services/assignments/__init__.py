"""Routine assignment service and DTOs."""

from __future__ import annotations

from .dto import AssignmentCreateIn, AssignmentListIn, AssignmentOut
from .service import RoutineAssignmentService

__all__ = [
    "AssignmentCreateIn",
    "AssignmentListIn",
    "AssignmentOut",
    "RoutineAssignmentService",
]
