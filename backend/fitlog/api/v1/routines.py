"""Routine endpoints."""

from __future__ import annotations

from flask import Blueprint, request

from fitlog.api.deps import (
    current_context,
    json_response,
    parse_pagination,
    require_auth,
    service_errors,
    timing,
)
from fitlog.api.etag import if_match_header, set_response_etag
from fitlog.schemas import (
    AssignmentCreateSchema,
    AssignmentSchema,
    MetaSchema,
    RoutineFilterSchema,
    RoutineSchema,
    RoutineUpdateSchema,
    WorkoutTemplateSchema,
)
from fitlog.services.assignments import AssignmentCreateIn, RoutineAssignmentService
from fitlog.services.routines import (
    RoutineCommandService,
    RoutineListIn,
    RoutineQueryService,
    RoutineUpdateIn,
)
from fitlog.services.workouts import WorkoutService

bp = Blueprint("routines", __name__)

routine_schema = RoutineSchema()
routine_list_schema = RoutineSchema(many=True)
routine_update_schema = RoutineUpdateSchema()
routine_filter_schema = RoutineFilterSchema()
template_schema = WorkoutTemplateSchema()
meta_schema = MetaSchema()
assignment_create_schema = AssignmentCreateSchema()
assignment_schema = AssignmentSchema()
assignment_list_schema = AssignmentSchema(many=True)


@bp.get("")
@require_auth
@timing
@service_errors
def list_routines():
    """Return paginated routines of the caller (any owner for admins)."""

    filters = routine_filter_schema.load(request.args)
    pagination = parse_pagination()
    service = RoutineQueryService(ctx=current_context())
    out = service.paginate(RoutineListIn(pagination=pagination, **filters))
    return json_response(
        {"data": routine_list_schema.dump(out.items), "meta": meta_schema.dump(out.meta)}
    )


@bp.get("/<int:routine_id>")
@require_auth
@timing
@service_errors
def get_routine(routine_id: int):
    service = RoutineQueryService(ctx=current_context())
    routine = service.get(routine_id)
    response = json_response({"data": routine_schema.dump(routine)})
    return set_response_etag(response, routine)


@bp.patch("/<int:routine_id>")
@require_auth
@timing
@service_errors
def update_routine(routine_id: int):
    """Rename or recategorize a routine; honours ``If-Match`` when sent."""

    payload = routine_update_schema.load(request.get_json(silent=True) or {})
    service = RoutineCommandService(ctx=current_context())
    routine = service.update(
        RoutineUpdateIn(routine_id=routine_id, if_match=if_match_header(), **payload)
    )
    response = json_response({"data": routine_schema.dump(routine)})
    return set_response_etag(response, routine)


@bp.delete("/<int:routine_id>")
@require_auth
@timing
@service_errors
def delete_routine(routine_id: int):
    RoutineCommandService(ctx=current_context()).delete(routine_id)
    return "", 204


@bp.get("/<int:routine_id>/workout-template")
@require_auth
@timing
@service_errors
def workout_template(routine_id: int):
    """Prefilled sets to start a workout from this routine."""

    template = WorkoutService(ctx=current_context()).start(routine_id)
    return json_response({"data": template_schema.dump(template)})


@bp.post("/<int:routine_id>/assignments")
@require_auth
@timing
@service_errors
def assign_routine(routine_id: int):
    """Assign the routine to a member (coaches and admins)."""

    payload = assignment_create_schema.load(request.get_json(silent=True) or {})
    service = RoutineAssignmentService(ctx=current_context())
    assignment = service.assign(AssignmentCreateIn(routine_id=routine_id, **payload))
    return json_response({"data": assignment_schema.dump(assignment)}, status=201)


@bp.get("/<int:routine_id>/assignments")
@require_auth
@timing
@service_errors
def list_routine_assignments(routine_id: int):
    service = RoutineAssignmentService(ctx=current_context())
    items = service.list_for_routine(routine_id)
    return json_response({"data": assignment_list_schema.dump(items)})
