"""Body metrics endpoints: the caller's weight and body fat over time."""

from __future__ import annotations

from datetime import date

from flask import Blueprint, request

from fitlog.api.deps import (
    current_context,
    json_response,
    parse_pagination,
    require_auth,
    service_errors,
    timing,
)
from fitlog.core.errors import UnprocessableEntity
from fitlog.schemas import (
    BodyMetricFilterSchema,
    BodyMetricRecordSchema,
    BodyMetricSchema,
    MetaSchema,
)
from fitlog.services.body_metrics import BodyMetricListIn, BodyMetricRecordIn, BodyMetricsService

bp = Blueprint("body_metrics", __name__)

metric_schema = BodyMetricSchema()
metric_list_schema = BodyMetricSchema(many=True)
record_schema = BodyMetricRecordSchema()
filter_schema = BodyMetricFilterSchema()
meta_schema = MetaSchema()


def _day(raw: str) -> date:
    try:
        return date.fromisoformat(raw)
    except ValueError as exc:
        raise UnprocessableEntity(f"Not an ISO date: {raw!r}", code="invalid_date") from exc


@bp.get("")
@require_auth
@timing
@service_errors
def list_body_metrics():
    """Return the caller's readings, newest day first."""

    filters = filter_schema.load(request.args)
    pagination = parse_pagination()
    service = BodyMetricsService(ctx=current_context())
    out = service.list(BodyMetricListIn(pagination=pagination, **filters))
    return json_response(
        {"data": metric_list_schema.dump(out.items), "meta": meta_schema.dump(out.meta)}
    )


@bp.post("")
@require_auth
@timing
@service_errors
def record_body_metric():
    """Store the reading of one day; a second reading that day replaces it."""

    payload = record_schema.load(request.get_json(silent=True) or {})
    service = BodyMetricsService(ctx=current_context())
    metric, created = service.record(BodyMetricRecordIn(**payload))
    return json_response({"data": metric_schema.dump(metric)}, status=201 if created else 200)


@bp.get("/latest")
@require_auth
@timing
@service_errors
def latest_body_metric():
    service = BodyMetricsService(ctx=current_context())
    return json_response({"data": metric_schema.dump(service.latest())})


@bp.get("/<string:day>")
@require_auth
@timing
@service_errors
def get_body_metric(day: str):
    service = BodyMetricsService(ctx=current_context())
    return json_response({"data": metric_schema.dump(service.get(_day(day)))})


@bp.delete("/<string:day>")
@require_auth
@timing
@service_errors
def delete_body_metric(day: str):
    BodyMetricsService(ctx=current_context()).delete(_day(day))
    return "", 204
