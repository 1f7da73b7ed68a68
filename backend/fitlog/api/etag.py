"""ETag helpers enabling optimistic concurrency for mutable resources."""

from __future__ import annotations

import hashlib
from datetime import datetime
from typing import Any

from flask import Response, request


def generate_etag(entity: Any) -> str | None:
    """Return the ETag value for ``entity``.

    Objects exposing an ``etag`` attribute (such as routine projections) are
    fingerprinted by content. Otherwise the primary key and ``updated_at``
    timestamp are hashed with SHA-256; ``None`` means no ETag support.
    """

    own = getattr(entity, "etag", None)
    if own:
        return str(own)
    identifier = getattr(entity, "id", None)
    if identifier is None:
        return None
    updated_at: datetime | None = getattr(entity, "updated_at", None)
    payload = f"{identifier}:{updated_at.isoformat() if updated_at else ''}".encode()
    return hashlib.sha256(payload).hexdigest()


def if_match_header() -> str | None:
    """Return the raw ``If-Match`` value with weak validators unwrapped."""

    raw = request.headers.get("If-Match")
    if not raw:
        return None
    value = raw.strip()
    if value.startswith("W/"):
        value = value[2:]
    return value.strip('"')


def set_response_etag(response: Response, entity: Any) -> Response:
    """Attach an ``ETag`` header to a Flask response when possible."""

    value = generate_etag(entity)
    if value is not None:
        response.set_etag(value)
    return response
