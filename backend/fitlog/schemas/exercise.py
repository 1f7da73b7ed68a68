"""Exercise resource schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate

from fitlog.models.exercise import Equipment, ExerciseCategory, MuscleGroup


class ExerciseCreateSchema(Schema):
    """Payload for creating a new exercise."""

    name = fields.String(required=True, validate=validate.Length(min=2, max=120))
    slug = fields.String(load_default=None, validate=validate.Length(min=2, max=140))
    muscle_group = fields.String(required=True, validate=validate.OneOf(MuscleGroup.enums))
    equipment = fields.String(required=True, validate=validate.OneOf(Equipment.enums))
    category = fields.String(load_default="OTHER", validate=validate.OneOf(ExerciseCategory.enums))
    description = fields.String(load_default=None)


class ExerciseFilterSchema(Schema):
    """Supported query parameters when listing exercises."""

    class Meta:
        unknown = EXCLUDE

    search = fields.String(load_default=None, validate=validate.Length(min=1, max=120))
    muscle_group = fields.String(load_default=None, validate=validate.OneOf(MuscleGroup.enums))
    equipment = fields.String(load_default=None, validate=validate.OneOf(Equipment.enums))
    category = fields.String(load_default=None, validate=validate.OneOf(ExerciseCategory.enums))


class ExerciseSchema(Schema):
    """Representation of the exercise entity."""

    id = fields.Integer(required=True)
    name = fields.String(required=True)
    slug = fields.String(required=True)
    category = fields.String(required=True)
    muscle_group = fields.String(required=True)
    equipment = fields.String(required=True)
    description = fields.String(allow_none=True)
    is_custom = fields.Boolean(required=True)
    owner_user_id = fields.Integer(allow_none=True)
    created_at = fields.DateTime(allow_none=True)
    updated_at = fields.DateTime(allow_none=True)
