from __future__ import annotations

import logging
from datetime import date

import pytest

from fitlog.services._shared.dto import PaginationIn
from fitlog.services._shared.errors import (
    AuthorizationError,
    InvalidOperationError,
    NotFoundError,
)
from fitlog.services.body_metrics import BodyMetricListIn, BodyMetricRecordIn, BodyMetricsService
from tests.factories.body_metrics import BodyMetricFactory
from tests.factories.user import UserFactory

TODAY = date(2024, 6, 15)


@pytest.fixture()
def fixed_today(monkeypatch):
    monkeypatch.setattr(BodyMetricsService, "today", staticmethod(lambda: TODAY))


@pytest.mark.usefixtures("fixed_today")
class TestRecord:
    def test_defaults_to_today_and_reports_creation(self, session, ctx_for):
        user = UserFactory()
        session.commit()

        out, created = BodyMetricsService(ctx=ctx_for(user)).record(
            BodyMetricRecordIn(weight_kg=81.2, body_fat_pct=19.5)
        )

        assert created is True
        assert (out.user_id, out.measured_on, out.weight_kg, out.body_fat_pct) == (
            user.id,
            TODAY,
            81.2,
            19.5,
        )

    def test_same_day_replaces(self, session, ctx_for):
        user = UserFactory()
        session.commit()
        service = BodyMetricsService(ctx=ctx_for(user))

        first, _ = service.record(BodyMetricRecordIn(weight_kg=81.0, measured_on=TODAY))
        second, created = service.record(
            BodyMetricRecordIn(weight_kg=80.4, measured_on=TODAY, notes="after run")
        )

        assert created is False
        assert second.id == first.id
        assert (second.weight_kg, second.notes) == (80.4, "after run")

    def test_next_day_is_tolerated_but_later_is_not(self, session, ctx_for):
        user = UserFactory()
        session.commit()
        service = BodyMetricsService(ctx=ctx_for(user))

        out, _ = service.record(BodyMetricRecordIn(weight_kg=80.0, measured_on=date(2024, 6, 16)))
        assert out.measured_on == date(2024, 6, 16)

        with pytest.raises(InvalidOperationError) as err:
            service.record(BodyMetricRecordIn(weight_kg=80.0, measured_on=date(2024, 6, 17)))
        assert err.value.code == "future_measurement"

    def test_unknown_actor_is_rejected(self, session):
        with pytest.raises(AuthorizationError):
            BodyMetricsService().record(BodyMetricRecordIn(weight_kg=80.0))

    def test_logs_outcome_with_info_enabled(self, session, ctx_for, caplog):
        user = UserFactory()
        session.commit()
        caplog.set_level(logging.INFO, logger="fitlog")

        BodyMetricsService(ctx=ctx_for(user)).record(BodyMetricRecordIn(weight_kg=80.0))

        (record,) = [r for r in caplog.records if r.getMessage() == "Body metric recorded"]
        assert record.row_created is True
        assert record.measured_on == TODAY.isoformat()


class TestRead:
    def test_get_and_latest_are_scoped_to_actor(self, session, ctx_for):
        user, other = UserFactory(), UserFactory()
        BodyMetricFactory(user=user, measured_on=date(2024, 5, 1), weight_kg=82.0)
        BodyMetricFactory(user=user, measured_on=date(2024, 5, 8), weight_kg=81.0)
        BodyMetricFactory(user=other, measured_on=date(2024, 5, 20))
        session.commit()
        service = BodyMetricsService(ctx=ctx_for(user))

        assert service.get(date(2024, 5, 1)).weight_kg == 82.0
        assert service.latest().measured_on == date(2024, 5, 8)
        with pytest.raises(NotFoundError):
            service.get(date(2024, 5, 20))

    def test_latest_without_readings(self, session, ctx_for):
        user = UserFactory()
        session.commit()

        with pytest.raises(NotFoundError):
            BodyMetricsService(ctx=ctx_for(user)).latest()

    def test_list_pages_newest_first(self, session, ctx_for):
        user = UserFactory()
        for day in (1, 2, 3):
            BodyMetricFactory(user=user, measured_on=date(2024, 5, day))
        session.commit()

        out = BodyMetricsService(ctx=ctx_for(user)).list(
            BodyMetricListIn(pagination=PaginationIn(page=1, limit=2))
        )

        assert [m.measured_on.day for m in out.items] == [3, 2]
        assert (out.meta.total, out.meta.page, out.meta.limit) == (3, 1, 2)

    def test_list_rejects_inverted_range(self, session, ctx_for):
        user = UserFactory()
        session.commit()

        with pytest.raises(InvalidOperationError) as err:
            BodyMetricsService(ctx=ctx_for(user)).list(
                BodyMetricListIn(date_from=date(2024, 5, 2), date_to=date(2024, 5, 1))
            )
        assert err.value.code == "invalid_range"


class TestDelete:
    def test_delete_is_idempotent(self, session, ctx_for):
        metric = BodyMetricFactory(measured_on=date(2024, 5, 1))
        session.commit()
        service = BodyMetricsService(ctx=ctx_for(metric.user))

        assert service.delete(date(2024, 5, 1)) is True
        assert service.delete(date(2024, 5, 1)) is False
        with pytest.raises(NotFoundError):
            service.get(date(2024, 5, 1))
