"""Workout resource schemas."""

from __future__ import annotations

from datetime import timezone
from typing import Any

from marshmallow import EXCLUDE, Schema, fields, post_load, validate

from fitlog.domain.workout_log import format_elapsed
from fitlog.schemas.common import MAX_ELAPSED_SECONDS, MAX_REPS, Weight
from fitlog.services.workouts.dto import WorkoutExerciseIn, WorkoutSetIn


class WorkoutSetInputSchema(Schema):
    reps = fields.Integer(required=True, validate=validate.Range(min=0, max=MAX_REPS))
    weight = Weight(load_default=0.0)
    completed = fields.Boolean(load_default=False)

    @post_load
    def make_set(self, data: dict[str, Any], **_: Any) -> WorkoutSetIn:
        return WorkoutSetIn(**data)


class WorkoutExerciseInputSchema(Schema):
    exercise_id = fields.Integer(required=True, validate=validate.Range(min=1))
    notes = fields.String(load_default="", allow_none=True)
    superset_group = fields.Integer(load_default=None, allow_none=True)
    sets = fields.List(fields.Nested(WorkoutSetInputSchema), load_default=list)

    @post_load
    def make_exercise(self, data: dict[str, Any], **_: Any) -> WorkoutExerciseIn:
        data["notes"] = data.get("notes") or ""
        return WorkoutExerciseIn(**data)


class WorkoutCreateSchema(Schema):
    """Payload sent when the user finishes a workout."""

    routine_id = fields.Integer(load_default=None, allow_none=True)
    name = fields.String(load_default=None, validate=validate.Length(min=1, max=120))
    elapsed_seconds = fields.Integer(
        required=True, validate=validate.Range(min=0, max=MAX_ELAPSED_SECONDS)
    )
    completed_at = fields.AwareDateTime(load_default=None, default_timezone=timezone.utc)
    exercises = fields.List(
        fields.Nested(WorkoutExerciseInputSchema), required=True, validate=validate.Length(min=1)
    )


class WorkoutFilterSchema(Schema):
    """Query parameters accepted by the workouts list endpoint."""

    class Meta:
        unknown = EXCLUDE

    routine_id = fields.Integer(load_default=None)


class WorkoutSetSchema(Schema):
    set_number = fields.Integer()
    reps = fields.Integer()
    weight = fields.Float()
    completed = fields.Boolean()


class WorkoutExerciseSchema(Schema):
    order = fields.Integer()
    exercise_id = fields.Integer()
    exercise_name = fields.String()
    notes = fields.String()
    superset_group = fields.Integer(allow_none=True)
    sets = fields.List(fields.Nested(WorkoutSetSchema))


class WorkoutTemplateSchema(Schema):
    routine_id = fields.Integer()
    name = fields.String()
    exercises = fields.List(fields.Nested(WorkoutExerciseSchema))


class WorkoutSchema(Schema):
    """Representation of a logged workout."""

    id = fields.Integer(required=True)
    user_id = fields.Integer(required=True)
    routine_id = fields.Integer(allow_none=True)
    name = fields.String(required=True)
    started_at = fields.DateTime(required=True)
    completed_at = fields.DateTime(required=True)
    duration_minutes = fields.Integer(required=True)
    duration = fields.Method("get_duration")
    exercises = fields.List(fields.Nested(WorkoutExerciseSchema))

    def get_duration(self, obj: Any) -> str:
        return format_elapsed(obj.duration_minutes * 60)
