"""Tests for body measurements."""

from __future__ import annotations

from datetime import date

import pytest
from sqlalchemy.exc import IntegrityError

from fitlog.models.body_metrics import BodyMetric
from tests.factories.body_metrics import BodyMetricFactory
from tests.factories.user import UserFactory


class TestBodyMetric:
    def test_one_reading_per_user_and_day(self, session):
        user = UserFactory()
        BodyMetricFactory(user=user, measured_on=date(2024, 3, 1))
        BodyMetricFactory(measured_on=date(2024, 3, 1))  # other user is fine

        session.add(BodyMetric(user_id=user.id, measured_on=date(2024, 3, 1), weight_kg=81.0))
        with pytest.raises(IntegrityError):
            session.flush()

    @pytest.mark.parametrize("weight", [0, -1.5, 1000.0])
    def test_weight_out_of_range_rejected(self, weight):
        with pytest.raises(ValueError):
            BodyMetric(user_id=1, measured_on=date(2024, 3, 1), weight_kg=weight)

    @pytest.mark.parametrize("fat", [-0.1, 100.5])
    def test_body_fat_out_of_range_rejected(self, fat):
        with pytest.raises(ValueError):
            BodyMetric(user_id=1, measured_on=date(2024, 3, 1), weight_kg=70.0, body_fat_pct=fat)

    def test_numeric_columns_load_as_float(self, session):
        metric = BodyMetricFactory(weight_kg=72.35, body_fat_pct=18.5)
        session.flush()
        session.expire_all()

        assert isinstance(metric.weight_kg, float)
        assert (metric.weight_kg, metric.body_fat_pct) == (72.35, 18.5)

    def test_deleting_user_drops_readings(self, session):
        metric = BodyMetricFactory()
        metric_id, user = metric.id, metric.user
        session.flush()

        session.delete(user)
        session.flush()

        assert session.get(BodyMetric, metric_id) is None
