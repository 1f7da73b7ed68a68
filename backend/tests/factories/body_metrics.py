"""Factory Boy definition for :class:`fitlog.models.body_metrics.BodyMetric`."""

from __future__ import annotations

from datetime import date, timedelta

import factory

from fitlog.models.body_metrics import BodyMetric
from tests.factories import BaseFactory
from tests.factories.user import UserFactory


class BodyMetricFactory(BaseFactory):
    """One reading per day, walking back from 2024-06-01."""

    class Meta:
        model = BodyMetric

    id = None
    user = factory.SubFactory(UserFactory)
    user_id = factory.SelfAttribute("user.id")
    measured_on = factory.Sequence(lambda n: date(2024, 6, 1) - timedelta(days=n))
    weight_kg = 80.0
    body_fat_pct = None
    notes = None
