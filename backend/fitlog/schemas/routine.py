"""Routine resource schemas."""

from __future__ import annotations

from typing import Any

from marshmallow import EXCLUDE, Schema, ValidationError, fields, validate, validates_schema

from fitlog.models.routine import RoutineCategory


class RoutineUpdateSchema(Schema):
    """Patch payload for the descriptive fields of a routine."""

    name = fields.String(validate=validate.Length(min=1, max=120))
    description = fields.String(allow_none=True)
    category = fields.String(validate=validate.OneOf(RoutineCategory.enums))

    @validates_schema
    def require_one_field(self, data: dict[str, Any], **_: Any) -> None:
        if not data:
            raise ValidationError("Provide at least one field to update.")


class RoutineFilterSchema(Schema):
    """Query parameters accepted by the routines list endpoint."""

    class Meta:
        unknown = EXCLUDE

    owner_user_id = fields.Integer(load_default=None)
    category = fields.String(load_default=None, validate=validate.OneOf(RoutineCategory.enums))


class RoutineEntrySchema(Schema):
    id = fields.Integer()
    order = fields.Integer()
    exercise_id = fields.Integer()
    exercise_name = fields.String()
    target_sets = fields.Integer()
    target_reps = fields.Integer()
    target_weight = fields.Float()
    rest_seconds = fields.Integer()
    notes = fields.String(allow_none=True)
    superset_group = fields.Integer(allow_none=True)


class RoutineSchema(Schema):
    """Representation of a routine with its ordered entries."""

    id = fields.Integer(required=True)
    owner_user_id = fields.Integer(required=True)
    name = fields.String(required=True)
    description = fields.String(allow_none=True)
    category = fields.String(required=True)
    created_at = fields.DateTime(allow_none=True)
    updated_at = fields.DateTime(allow_none=True)
    entries = fields.List(fields.Nested(RoutineEntrySchema))
