"""Schemas for routine editing sessions (drafts)."""

from __future__ import annotations

from typing import Any

from marshmallow import Schema, ValidationError, fields, validate, validates_schema

from fitlog.models.routine import RoutineCategory
from fitlog.schemas.common import MAX_REPS, MAX_REST_SECONDS, MAX_SETS, Weight


class DraftOpenSchema(Schema):
    routine_id = fields.Integer(load_default=None, validate=validate.Range(min=1))


class DraftEntryAddSchema(Schema):
    exercise_id = fields.Integer(required=True, validate=validate.Range(min=1))


class DraftEntryPatchSchema(Schema):
    """
    Targets to change on one entry.

    Sets and reps must be at least 1; weight and rest cannot be negative.
    Weights keep two decimals.
    """

    target_sets = fields.Integer(validate=validate.Range(min=1, max=MAX_SETS))
    target_reps = fields.Integer(validate=validate.Range(min=1, max=MAX_REPS))
    target_weight = Weight()
    rest_seconds = fields.Integer(validate=validate.Range(min=0, max=MAX_REST_SECONDS))
    notes = fields.String(allow_none=True, validate=validate.Length(max=2000))

    @validates_schema
    def require_one_field(self, data: dict[str, Any], **_: Any) -> None:
        if not data:
            raise ValidationError("Provide at least one field to update.")


class DraftReorderSchema(Schema):
    from_index = fields.Integer(required=True)
    to_index = fields.Integer(required=True)


class DraftSaveSchema(Schema):
    """Name and category for the routine a draft is saved into."""

    name = fields.String(required=True, validate=validate.Length(min=1, max=120))
    description = fields.String(load_default=None, allow_none=True)
    category = fields.String(load_default="PUSH", validate=validate.OneOf(RoutineCategory.enums))


class DraftEntrySchema(Schema):
    order = fields.Integer()
    exercise_id = fields.Integer()
    display_name = fields.String()
    target_sets = fields.Integer()
    target_reps = fields.Integer()
    target_weight = fields.Float()
    rest_seconds = fields.Integer()
    notes = fields.String()
    superset_group = fields.Integer(allow_none=True)


class DraftSchema(Schema):
    id = fields.String()
    routine_id = fields.Integer(allow_none=True)
    entries = fields.List(fields.Nested(DraftEntrySchema))
    next_group_id = fields.Integer()
    violations = fields.List(fields.Integer())
