from __future__ import annotations

import pytest

from fitlog.core import errors as api_errors
from fitlog.services._shared.base import BaseService
from fitlog.services._shared.errors import (
    AuthorizationError,
    ConflictError,
    InvalidOperationError,
    NotFoundError,
    PreconditionFailedError,
    ServiceError,
)


@pytest.mark.parametrize(
    ("exc", "status", "code"),
    [
        (NotFoundError("Routine", 3), 404, "not_found"),
        (ConflictError("Routine", "taken"), 409, "conflict"),
        (AuthorizationError(), 403, "forbidden"),
        (InvalidOperationError("bad index", code="index_out_of_range"), 422, "index_out_of_range"),
        (PreconditionFailedError(), 412, "precondition_failed"),
        (ServiceError("oops"), 400, "bad_request"),
    ],
)
def test_translate_exceptions_maps_service_errors(exc, status, code):
    translated = BaseService().translate_exceptions(exc)

    assert isinstance(translated, api_errors.APIError)
    assert (translated.status_code, translated.code) == (status, code)


def test_translate_exceptions_passes_through_foreign_errors():
    err = ValueError("boom")
    assert BaseService().translate_exceptions(err) is err


def test_api_error_renders_problem_json(app):
    with app.test_request_context("/api/v1/routines/1", headers={"X-Request-ID": "req-1"}):
        problem = api_errors.NotFound("Routine not found: 1").to_problem()

    assert problem["status"] == 404
    assert problem["title"] == "Not Found"
    assert problem["code"] == "not_found"
    assert problem["instance"] == "/api/v1/routines/1"
    assert problem["request_id"] == "req-1"


def test_unknown_route_is_problem_json(client):
    resp = client.get("/api/v1/nowhere")

    assert resp.status_code == 404
    assert resp.mimetype == "application/problem+json"
    assert resp.get_json()["code"] == "not_found"
