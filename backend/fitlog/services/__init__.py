"""Service layer public API.

This package exposes the essential building blocks for the service layer so that
callers can import from :mod:`fitlog.services` without knowing internal structure.

Re-exports
----------
- Base primitives (from ``fitlog.services._shared.base``)
    * :class:`BaseService`
    * :class:`ServiceContext`

- Shared DTOs (from ``fitlog.services._shared.dto``)
    * :class:`PaginationIn`
    * :class:`PageMeta`

- Exercise catalog (from ``fitlog.services.exercises``)
    * :class:`ExerciseCatalogService`

- Routines (from ``fitlog.services.routines``)
    * :class:`RoutineQueryService`, :class:`RoutineCommandService`
    * :class:`RoutineDraftService` for composer editing sessions

- Workouts (from ``fitlog.services.workouts``)
    * :class:`WorkoutService`

DTOs stay in their feature packages; import them from there.
"""

from __future__ import annotations

# Base primitives (service base + request-scoped context)
from ._shared.base import BaseService, ServiceContext

# Shared DTOs (compose these in endpoint-specific DTOs)
from ._shared.dto import PageMeta, PaginationIn
from .exercises import ExerciseCatalogService
from .routines import RoutineCommandService, RoutineDraftService, RoutineQueryService
from .workouts import WorkoutService

__all__ = [
    # Base
    "BaseService",
    "ServiceContext",
    # Shared DTOs
    "PaginationIn",
    "PageMeta",
    # Features
    "ExerciseCatalogService",
    "RoutineCommandService",
    "RoutineDraftService",
    "RoutineQueryService",
    "WorkoutService",
]
