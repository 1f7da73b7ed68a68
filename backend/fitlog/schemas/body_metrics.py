"""Body metrics schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate

from fitlog.models.body_metrics import MAX_WEIGHT_KG
from fitlog.schemas.common import RoundedFloat


class BodyMetricRecordSchema(Schema):
    """Measurement of one day; ``measured_on`` defaults to today."""

    measured_on = fields.Date(load_default=None)
    weight_kg = RoundedFloat(
        required=True,
        places=2,
        validate=validate.Range(min=0, min_inclusive=False, max=MAX_WEIGHT_KG),
    )
    body_fat_pct = RoundedFloat(
        load_default=None, allow_none=True, places=1, validate=validate.Range(min=0, max=100)
    )
    notes = fields.String(load_default=None, allow_none=True, validate=validate.Length(max=2000))


class BodyMetricFilterSchema(Schema):
    """Query parameters accepted by the body metrics list endpoint."""

    class Meta:
        unknown = EXCLUDE

    date_from = fields.Date(load_default=None)
    date_to = fields.Date(load_default=None)


class BodyMetricSchema(Schema):
    id = fields.Integer(required=True)
    user_id = fields.Integer(required=True)
    measured_on = fields.Date(required=True)
    weight_kg = fields.Float(required=True)
    body_fat_pct = fields.Float(allow_none=True)
    notes = fields.String(allow_none=True)
    created_at = fields.DateTime(allow_none=True)
    updated_at = fields.DateTime(allow_none=True)
