"""
BodyMetricsService
==================

Application service for the actor's body measurements.

Responsibilities
----------------
- Record (upsert) the measurement of one day.
- Retrieve one day, or the latest reading.
- List and paginate with an optional date range.
- Delete one day.

Notes
-----
- Every operation is scoped to the acting user; there is no cross-user access.
- Read operations use ``ro_uow()``; write operations use ``rw_uow()``.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta, timezone

from fitlog.models.body_metrics import BodyMetric
from fitlog.services._shared.base import BaseService
from fitlog.services._shared.errors import InvalidOperationError, NotFoundError

from .dto import BodyMetricListIn, BodyMetricListOut, BodyMetricOut, BodyMetricRecordIn

logger = logging.getLogger(__name__)

# Clients east of UTC may already be a day ahead.
_FUTURE_TOLERANCE = timedelta(days=1)


def _to_out(row: BodyMetric) -> BodyMetricOut:
    return BodyMetricOut(
        id=row.id,
        user_id=row.user_id,
        measured_on=row.measured_on,
        weight_kg=row.weight_kg,
        body_fat_pct=row.body_fat_pct,
        notes=row.notes,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class BodyMetricsService(BaseService):
    """Service orchestrating the body measurements of the acting user."""

    @staticmethod
    def today() -> date:
        return datetime.now(timezone.utc).date()

    # ------------------------------------------------------------------ #
    # Upsert
    # ------------------------------------------------------------------ #

    def record(self, dto: BodyMetricRecordIn) -> tuple[BodyMetricOut, bool]:
        """
        Insert or replace the actor's measurement for ``dto.measured_on``.

        :param dto: Measurement to store.
        :type dto: :class:`BodyMetricRecordIn`
        :returns: The stored row and whether it was created.
        :rtype: tuple[BodyMetricOut, bool]
        :raises InvalidOperationError: ``future_measurement`` when the day lies
            more than one day ahead of today (UTC).
        """
        today = self.today()
        measured_on = dto.measured_on or today
        if measured_on > today + _FUTURE_TOLERANCE:
            raise InvalidOperationError(
                f"measurement date {measured_on.isoformat()} is in the future",
                code="future_measurement",
            )

        with self.rw_uow() as uow:
            actor_id = self.require_actor(uow)
            row, created = uow.body_metrics.upsert_by_day(
                user_id=actor_id,
                measured_on=measured_on,
                weight_kg=dto.weight_kg,
                body_fat_pct=dto.body_fat_pct,
                notes=dto.notes,
            )
            logger.info(
                "Body metric recorded",
                extra={
                    "body_metric_id": row.id,
                    "measured_on": measured_on.isoformat(),
                    "row_created": created,
                },
            )
            return _to_out(row), created

    # ------------------------------------------------------------------ #
    # Retrieval
    # ------------------------------------------------------------------ #

    def get(self, measured_on: date) -> BodyMetricOut:
        """
        :raises NotFoundError: When the actor has no reading for that day.
        """
        with self.ro_uow() as uow:
            actor_id = self.require_actor(uow)
            row = uow.body_metrics.get_for_day(actor_id, measured_on)
            if row is None:
                raise NotFoundError("BodyMetric", measured_on.isoformat())
            return _to_out(row)

    def latest(self) -> BodyMetricOut:
        """Return the most recent reading of the actor.

        :raises NotFoundError: When nothing was recorded yet.
        """
        with self.ro_uow() as uow:
            actor_id = self.require_actor(uow)
            row = uow.body_metrics.latest_for_user(actor_id)
            if row is None:
                raise NotFoundError("BodyMetric", "latest")
            return _to_out(row)

    def list(self, dto: BodyMetricListIn) -> BodyMetricListOut:
        """
        Page through the actor's readings.

        :raises InvalidOperationError: ``invalid_range`` when ``date_from`` is
            after ``date_to``.
        """
        if dto.date_from and dto.date_to and dto.date_from > dto.date_to:
            raise InvalidOperationError("date_from must not be after date_to", code="invalid_range")
        pagination = self.ensure_pagination(
            page=dto.pagination.page, limit=dto.pagination.limit, sort=dto.pagination.sort
        )
        with self.ro_uow() as uow:
            actor_id = self.require_actor(uow)
            page = uow.body_metrics.paginate_for_user(
                actor_id, pagination, date_from=dto.date_from, date_to=dto.date_to
            )
            return BodyMetricListOut(
                items=[_to_out(row) for row in page.items], meta=self.page_meta(page)
            )

    # ------------------------------------------------------------------ #
    # Delete
    # ------------------------------------------------------------------ #

    def delete(self, measured_on: date) -> bool:
        """Delete the actor's reading for ``measured_on`` (idempotent).

        :returns: Whether a row was removed.
        :rtype: bool
        """
        with self.rw_uow() as uow:
            actor_id = self.require_actor(uow)
            row = uow.body_metrics.get_for_day(actor_id, measured_on)
            if row is None:
                return False
            uow.body_metrics.delete(row)
            logger.info("Body metric deleted", extra={"measured_on": measured_on.isoformat()})
            return True
