"""Routine assignment endpoints (the member-facing list and removal)."""

from __future__ import annotations

from flask import Blueprint, request

from fitlog.api.deps import current_context, json_response, require_auth, service_errors, timing
from fitlog.schemas import AssignmentFilterSchema, AssignmentSchema
from fitlog.services.assignments import AssignmentListIn, RoutineAssignmentService

bp = Blueprint("assignments", __name__)

assignment_list_schema = AssignmentSchema(many=True)
filter_schema = AssignmentFilterSchema()


@bp.get("")
@require_auth
@timing
@service_errors
def list_assignments():
    """Routines assigned to the caller, or to ``student_id`` by the calling coach."""

    filters = filter_schema.load(request.args)
    service = RoutineAssignmentService(ctx=current_context())
    items = service.list(AssignmentListIn(**filters))
    return json_response({"data": assignment_list_schema.dump(items)})


@bp.delete("/<int:assignment_id>")
@require_auth
@timing
@service_errors
def delete_assignment(assignment_id: int):
    RoutineAssignmentService(ctx=current_context()).unassign(assignment_id)
    return "", 204
