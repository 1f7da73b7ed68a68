"""Workout log endpoints."""

from __future__ import annotations

from flask import Blueprint, request

from fitlog.api.deps import (
    build_cached_response,
    current_context,
    enforce_idempotency,
    json_response,
    parse_pagination,
    require_auth,
    service_errors,
    store_idempotent_response,
    timing,
)
from fitlog.schemas import MetaSchema, WorkoutCreateSchema, WorkoutFilterSchema, WorkoutSchema
from fitlog.services.workouts import WorkoutListIn, WorkoutLogIn, WorkoutService

bp = Blueprint("workouts", __name__)

workout_schema = WorkoutSchema()
workout_list_schema = WorkoutSchema(many=True)
workout_create_schema = WorkoutCreateSchema()
workout_filter_schema = WorkoutFilterSchema()
meta_schema = MetaSchema()


@bp.get("")
@require_auth
@timing
@service_errors
def list_workouts():
    """Return the caller's workouts, newest first."""

    filters = workout_filter_schema.load(request.args)
    pagination = parse_pagination()
    service = WorkoutService(ctx=current_context())
    out = service.list(WorkoutListIn(pagination=pagination, **filters))
    return json_response(
        {"data": workout_list_schema.dump(out.items), "meta": meta_schema.dump(out.meta)}
    )


@bp.get("/<int:workout_id>")
@require_auth
@timing
@service_errors
def get_workout(workout_id: int):
    service = WorkoutService(ctx=current_context())
    return json_response({"data": workout_schema.dump(service.get(workout_id))})


@bp.post("")
@require_auth
@timing
@service_errors
def log_workout():
    """Record a finished workout; only completed sets are stored."""

    idempotency_key = request.headers.get("Idempotency-Key")
    is_replay, cached = enforce_idempotency(idempotency_key)
    if is_replay and cached:
        return build_cached_response(cached)
    payload = workout_create_schema.load(request.get_json(silent=True) or {})
    service = WorkoutService(ctx=current_context())
    workout = service.log(WorkoutLogIn(**payload))
    body = {"data": workout_schema.dump(workout)}
    store_idempotent_response(idempotency_key, {"body": body, "status": 201})
    return json_response(body, status=201)
