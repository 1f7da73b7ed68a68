"""
DTOs for BodyMetricsService.

Contracts between the API and the service managing the per-user time series
of body measurements.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

from fitlog.services._shared.dto import PageMeta, PaginationIn

# --------------------------------------------------------------------------- #
# Input DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class BodyMetricRecordIn:
    """
    Record the actor's measurement for one day.

    :param weight_kg: Body weight in kilograms (> 0).
    :type weight_kg: float
    :param measured_on: Measurement day; today (UTC) when omitted.
    :type measured_on: :class:`datetime.date` | None
    :param body_fat_pct: Optional body fat percentage in [0, 100].
    :type body_fat_pct: float | None
    :param notes: Optional notes.
    :type notes: str | None
    """

    weight_kg: float
    measured_on: date | None = None
    body_fat_pct: float | None = None
    notes: str | None = None


@dataclass(frozen=True, slots=True)
class BodyMetricListIn:
    """
    List the actor's measurements within an optional inclusive date range.

    Sort keys: ``measured_on`` (default ``-measured_on``), ``weight_kg``,
    ``created_at``, ``id``.
    """

    pagination: PaginationIn = PaginationIn()
    date_from: date | None = None
    date_to: date | None = None


# --------------------------------------------------------------------------- #
# Output DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class BodyMetricOut:
    id: int
    user_id: int
    measured_on: date
    weight_kg: float
    body_fat_pct: float | None
    notes: str | None
    created_at: datetime | None
    updated_at: datetime | None


@dataclass(frozen=True, slots=True)
class BodyMetricListOut:
    items: list[BodyMetricOut]
    meta: PageMeta
