"""Shared API helpers for request parsing and cross-cutting concerns."""

from __future__ import annotations

import functools
import json
import time
from collections.abc import Callable
from typing import Any, TypeVar, cast

from flask import Response, current_app, jsonify, request
from flask_jwt_extended import get_jwt_identity, verify_jwt_in_request

from fitlog.core.errors import Unauthorized
from fitlog.core.logger import ensure_request_id
from fitlog.schemas.common import PaginationQuerySchema
from fitlog.services._shared.base import BaseService, ServiceContext
from fitlog.services._shared.dto import PaginationIn
from fitlog.services._shared.errors import ServiceError

F = TypeVar("F", bound=Callable[..., Any])

IDEMPOTENCY_KEY_PREFIX = "idem"


def parse_pagination(default_limit: int = 20, max_limit: int = 200) -> PaginationIn:
    """Parse pagination parameters from ``request.args`` using Marshmallow."""

    schema = PaginationQuerySchema(default_limit=default_limit, max_limit=max_limit)
    data = schema.load({k: v for k, v in request.args.items() if k in {"page", "limit", "sort"}})
    return PaginationIn(page=data["page"], limit=data["limit"], sort=data["sort"] or None)


def require_auth(func: F) -> F:
    """Ensure the request carries a valid JWT access token."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        verify_jwt_in_request(optional=False)
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def current_context() -> ServiceContext:
    """Build the service context from the verified token and request id."""

    identity = get_jwt_identity()
    try:
        actor_id = int(identity)
    except (TypeError, ValueError) as exc:
        raise Unauthorized("Token subject is not a user id") from exc
    return ServiceContext(actor_id=actor_id, request_id=ensure_request_id())


_translator = BaseService()


def service_errors(func: F) -> F:
    """Re-raise service-layer errors as their HTTP counterparts."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        try:
            return func(*args, **kwargs)
        except ServiceError as exc:
            raise _translator.translate_exceptions(exc) from exc

    return wrapper  # type: ignore[return-value]


# ------------------------------ Idempotency ------------------------------ #


def _idempotency_scope(key: str) -> str:
    """Namespace a client key by endpoint and caller so keys never collide."""

    identity = get_jwt_identity() or "anon"
    return f"{IDEMPOTENCY_KEY_PREFIX}:{request.endpoint}:{identity}:{key}"


def idempotency_cache() -> dict[str, Any]:
    """Return the process-local idempotency cache."""

    default: dict[str, Any] = {}
    store = current_app.extensions.setdefault("idempotency_cache", default)
    return cast(dict[str, Any], store)


def enforce_idempotency(key: str | None) -> tuple[bool, dict[str, Any] | None]:
    """Check whether the provided ``Idempotency-Key`` was already used.

    Replays are looked up in Redis when a client is configured, otherwise in
    the process-local cache.
    """

    if not key:
        return False, None
    scoped = _idempotency_scope(key)
    client = current_app.extensions.get("redis_client")
    if client is not None:
        raw = client.get(scoped)
        cached = json.loads(raw) if raw is not None else None
    else:
        cached = idempotency_cache().get(scoped)
    if cached is None:
        return False, None
    return True, cached


def store_idempotent_response(key: str | None, payload: dict[str, Any]) -> None:
    """Persist the response blueprint for subsequent replays."""

    if not key:
        return
    scoped = _idempotency_scope(key)
    client = current_app.extensions.get("redis_client")
    if client is not None:
        ttl = int(current_app.config.get("IDEMPOTENCY_TTL_S", 86400))
        client.set(scoped, json.dumps(payload), ex=ttl)
        return
    idempotency_cache()[scoped] = payload


def build_cached_response(payload: dict[str, Any]) -> Response:
    """Rehydrate a Flask response object from cached payload metadata."""

    response = json_response(payload.get("body", {}), status=payload.get("status", 200))
    for header, value in payload.get("headers", {}).items():
        if value is not None:
            response.headers[header] = value
    response.headers["Idempotent-Replay"] = "true"
    return response


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
