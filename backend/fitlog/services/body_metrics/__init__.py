"""Body metrics service and DTOs."""

from __future__ import annotations

from .dto import BodyMetricListIn, BodyMetricListOut, BodyMetricOut, BodyMetricRecordIn
from .service import BodyMetricsService

__all__ = [
    "BodyMetricListIn",
    "BodyMetricListOut",
    "BodyMetricOut",
    "BodyMetricRecordIn",
    "BodyMetricsService",
]
