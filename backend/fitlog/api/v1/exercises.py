"""Exercise catalog endpoints."""

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
from fitlog.schemas import ExerciseCreateSchema, ExerciseFilterSchema, ExerciseSchema, MetaSchema
from fitlog.services.exercises import ExerciseCatalogService, ExerciseCreateIn, ExerciseListIn

bp = Blueprint("exercises", __name__)

exercise_schema = ExerciseSchema()
exercise_list_schema = ExerciseSchema(many=True)
exercise_create_schema = ExerciseCreateSchema()
exercise_filter_schema = ExerciseFilterSchema()
meta_schema = MetaSchema()


@bp.get("")
@require_auth
@timing
@service_errors
def list_exercises():
    """Return the global catalog plus the caller's custom exercises."""

    filters = exercise_filter_schema.load(request.args)
    pagination = parse_pagination()
    service = ExerciseCatalogService(ctx=current_context())
    out = service.list(ExerciseListIn(pagination=pagination, **filters))
    return json_response(
        {"data": exercise_list_schema.dump(out.items), "meta": meta_schema.dump(out.meta)}
    )


@bp.get("/<int:exercise_id>")
@require_auth
@timing
@service_errors
def get_exercise(exercise_id: int):
    service = ExerciseCatalogService(ctx=current_context())
    return json_response({"data": exercise_schema.dump(service.get(exercise_id))})


@bp.post("")
@require_auth
@timing
@service_errors
def create_exercise():
    """Create a custom exercise (or a global one when called by an admin)."""

    idempotency_key = request.headers.get("Idempotency-Key")
    is_replay, cached = enforce_idempotency(idempotency_key)
    if is_replay and cached:
        return build_cached_response(cached)
    payload = exercise_create_schema.load(request.get_json(silent=True) or {})
    service = ExerciseCatalogService(ctx=current_context())
    exercise = service.create(ExerciseCreateIn(**payload))
    body = {"data": exercise_schema.dump(exercise)}
    store_idempotent_response(idempotency_key, {"body": body, "status": 201})
    return json_response(body, status=201)
