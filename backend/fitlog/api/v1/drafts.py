"""Routine editing sessions: compose entries, then save them as a routine."""

from __future__ import annotations

from flask import Blueprint, request

from fitlog.api.deps import current_context, json_response, require_auth, service_errors, timing
from fitlog.api.etag import set_response_etag
from fitlog.schemas import (
    DraftEntryAddSchema,
    DraftEntryPatchSchema,
    DraftOpenSchema,
    DraftReorderSchema,
    DraftSaveSchema,
    DraftSchema,
    RoutineSchema,
)
from fitlog.services.routines import (
    DraftEntryAddIn,
    DraftEntryUpdateIn,
    DraftOpenIn,
    DraftReorderIn,
    DraftSaveIn,
    RoutineDraftService,
)

bp = Blueprint("routine_drafts", __name__)

draft_schema = DraftSchema()
open_schema = DraftOpenSchema()
entry_add_schema = DraftEntryAddSchema()
entry_patch_schema = DraftEntryPatchSchema()
reorder_schema = DraftReorderSchema()
save_schema = DraftSaveSchema()
routine_schema = RoutineSchema()


def _service() -> RoutineDraftService:
    return RoutineDraftService(ctx=current_context())


def _body() -> dict:
    return request.get_json(silent=True) or {}


def _draft_response(draft, *, status: int = 200):
    return json_response({"data": draft_schema.dump(draft)}, status=status)


@bp.post("")
@require_auth
@timing
@service_errors
def open_draft():
    """Start a draft, empty or loaded from an existing routine."""

    payload = open_schema.load(_body())
    return _draft_response(_service().open(DraftOpenIn(**payload)), status=201)


@bp.get("/<draft_id>")
@require_auth
@timing
@service_errors
def get_draft(draft_id: str):
    return _draft_response(_service().get(draft_id))


@bp.delete("/<draft_id>")
@require_auth
@timing
@service_errors
def discard_draft(draft_id: str):
    _service().discard(draft_id)
    return "", 204


@bp.post("/<draft_id>/entries")
@require_auth
@timing
@service_errors
def add_entry(draft_id: str):
    payload = entry_add_schema.load(_body())
    draft = _service().add_entry(DraftEntryAddIn(draft_id=draft_id, **payload))
    return _draft_response(draft, status=201)


@bp.patch("/<draft_id>/entries/<int:index>")
@require_auth
@timing
@service_errors
def update_entry(draft_id: str, index: int):
    changes = entry_patch_schema.load(_body())
    draft = _service().update_entry(
        DraftEntryUpdateIn(draft_id=draft_id, index=index, changes=changes)
    )
    return _draft_response(draft)


@bp.delete("/<draft_id>/entries/<int:index>")
@require_auth
@timing
@service_errors
def remove_entry(draft_id: str, index: int):
    return _draft_response(_service().remove_entry(draft_id, index))


@bp.post("/<draft_id>/entries/<int:index>/superset")
@require_auth
@timing
@service_errors
def toggle_superset(draft_id: str, index: int):
    """Link the entry to the one above it, or unlink it."""

    return _draft_response(_service().toggle_superset(draft_id, index))


@bp.post("/<draft_id>/reorder")
@require_auth
@timing
@service_errors
def reorder(draft_id: str):
    payload = reorder_schema.load(_body())
    return _draft_response(_service().reorder(DraftReorderIn(draft_id=draft_id, **payload)))


@bp.post("/<draft_id>/save")
@require_auth
@timing
@service_errors
def save_draft(draft_id: str):
    """Persist the draft as a routine: 201 when created, 200 when edited."""

    payload = save_schema.load(_body())
    out = _service().save(DraftSaveIn(draft_id=draft_id, **payload))
    response = json_response(
        {"data": routine_schema.dump(out.routine)}, status=201 if out.created else 200
    )
    return set_response_etag(response, out.routine)
