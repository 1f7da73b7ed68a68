"""Routine assignment schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate


class AssignmentCreateSchema(Schema):
    student_id = fields.Integer(required=True, validate=validate.Range(min=1))
    notes = fields.String(load_default=None, allow_none=True, validate=validate.Length(max=2000))


class AssignmentFilterSchema(Schema):
    """``student_id`` selects whose assignments to list; the caller by default."""

    class Meta:
        unknown = EXCLUDE

    student_id = fields.Integer(load_default=None, validate=validate.Range(min=1))


class AssignmentSchema(Schema):
    id = fields.Integer(required=True)
    routine_id = fields.Integer(required=True)
    routine_name = fields.String(required=True)
    routine_category = fields.String(required=True)
    student_id = fields.Integer(required=True)
    assigned_by = fields.Integer(required=True)
    coach_name = fields.String(required=True)
    notes = fields.String(allow_none=True)
    created_at = fields.DateTime(allow_none=True)
