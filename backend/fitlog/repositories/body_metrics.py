"""Body metrics repository: a per-user time series keyed by day."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date
from typing import Any, cast

from sqlalchemy import Select, select
from sqlalchemy.orm import InstrumentedAttribute

from fitlog.models.body_metrics import BodyMetric
from fitlog.repositories.base import BaseRepository, Page, Pagination


class BodyMetricRepository(BaseRepository[BodyMetric]):
    """
    Persistence-only repository for :class:`BodyMetric`.

    Access patterns:
    - Range queries by ``measured_on``.
    - Latest reading of a user.
    - Idempotent upsert by ``(user_id, measured_on)``.
    """

    model = BodyMetric

    def _sortable_fields(self) -> Mapping[str, InstrumentedAttribute[Any]]:
        return {
            "id": self.model.id,
            "measured_on": self.model.measured_on,
            "weight_kg": self.model.weight_kg,
            "created_at": self.model.created_at,
        }

    def _filterable_fields(self) -> Mapping[str, InstrumentedAttribute[Any]]:
        return {
            "user_id": self.model.user_id,
            "measured_on": self.model.measured_on,
        }

    def _updatable_fields(self) -> set[str]:
        return {"weight_kg", "body_fat_pct", "notes"}

    def get_for_day(self, user_id: int, measured_on: date) -> BodyMetric | None:
        return self.find_one(user_id=user_id, measured_on=measured_on)

    def latest_for_user(self, user_id: int) -> BodyMetric | None:
        """Return the most recent reading of ``user_id``, or ``None``."""
        stmt = self._ordered(
            select(self.model).where(self.model.user_id == user_id), ["-measured_on"]
        )
        return cast(BodyMetric | None, self.session.execute(stmt.limit(1)).scalars().first())

    def paginate_for_user(
        self,
        user_id: int,
        pagination: Pagination,
        *,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> Page[BodyMetric]:
        """
        Page through the readings of a user, newest first by default.

        :param user_id: Owner of the readings.
        :type user_id: int
        :param pagination: Page, limit and sort tokens.
        :type pagination: :class:`fitlog.repositories.base.Pagination`
        :param date_from: Inclusive lower bound for ``measured_on``.
        :type date_from: :class:`datetime.date` | None
        :param date_to: Inclusive upper bound for ``measured_on``.
        :type date_to: :class:`datetime.date` | None
        :rtype: Page[BodyMetric]
        """
        if not pagination.sort:
            pagination = Pagination(
                page=pagination.page, limit=pagination.limit, sort=["-measured_on"]
            )
        stmt: Select[Any] = select(self.model).where(self.model.user_id == user_id)
        if date_from is not None:
            stmt = stmt.where(self.model.measured_on >= date_from)
        if date_to is not None:
            stmt = stmt.where(self.model.measured_on <= date_to)
        return self.paginate_stmt(stmt, pagination)

    def upsert_by_day(
        self,
        *,
        user_id: int,
        measured_on: date,
        weight_kg: float,
        body_fat_pct: float | None = None,
        notes: str | None = None,
    ) -> tuple[BodyMetric, bool]:
        """
        Insert or replace the reading identified by ``(user_id, measured_on)``.

        Every field of an existing row is overwritten, so an omitted body fat
        or note clears the previous value. Assignment goes through ``setattr``
        so the model validators run.

        :returns: The row and whether it was created.
        :rtype: tuple[BodyMetric, bool]
        """
        row = self.get_for_day(user_id, measured_on)
        created = row is None
        if row is None:
            row = self.model(user_id=user_id, measured_on=measured_on, weight_kg=weight_kg)
            self.session.add(row)
        self.assign_updates(
            row,
            {"weight_kg": weight_kg, "body_fat_pct": body_fat_pct, "notes": notes},
        )
        return row, created
