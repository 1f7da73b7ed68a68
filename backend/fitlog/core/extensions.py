"""Global Flask extension instances and initialization helpers."""

from __future__ import annotations

import redis  # type: ignore[import-untyped]
from flask import Flask, current_app
from flask_jwt_extended import JWTManager
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from redis.exceptions import RedisError  # type: ignore[import-untyped]
from sqlalchemy import MetaData

# Global naming convention for all constraints
convention = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=convention)

# Global singletons (import-safe)
db: SQLAlchemy = SQLAlchemy(session_options={"autoflush": False}, metadata=metadata)
migrate = Migrate(render_as_batch=True)
jwt = JWTManager()
redis_client: redis.Redis | None = None

DRAFT_STORE_KEY = "routine_draft_store"


def init_app(app: Flask) -> None:
    """Initialize SQLAlchemy, migrations, JWT and the routine draft store.

    Parameters
    ----------
    app: flask.Flask
        Application used to bind extension instances. This call imports the
        :mod:`fitlog.models` package to ensure SQLAlchemy metadata is ready
        for migrations.

    Notes
    -----
    When ``REDIS_URL`` is configured the client is pinged eagerly and drafts
    are stored in Redis; otherwise they live in process memory.
    """
    db.init_app(app)

    # Ensure models are imported so Alembic sees metadata
    from fitlog import models as _models  # noqa: F401

    migrate.init_app(app, db)
    jwt.init_app(app)

    from fitlog.infra.memory.memory_routine_draft_store import InMemoryRoutineDraftStore

    global redis_client
    ttl = int(app.config.get("ROUTINE_DRAFT_TTL_S", 3600))
    redis_url = app.config.get("REDIS_URL")
    if not redis_url:
        redis_client = None
        app.extensions.pop("redis_client", None)
        app.extensions[DRAFT_STORE_KEY] = InMemoryRoutineDraftStore(ttl_seconds=ttl)
        return

    from fitlog.infra.redis.redis_routine_draft_store import RedisRoutineDraftStore

    redis_client = redis.Redis.from_url(redis_url)
    try:
        redis_client.ping()
    except RedisError as exc:
        raise RuntimeError(f"Failed to connect to Redis at {redis_url!r}") from exc
    app.extensions["redis_client"] = redis_client
    app.extensions[DRAFT_STORE_KEY] = RedisRoutineDraftStore(r=redis_client, ttl_seconds=ttl)


def get_redis() -> redis.Redis:
    """Return the initialized Redis client."""
    if redis_client is None:
        raise RuntimeError("Redis client is not initialized. Call init_app() first.")
    return redis_client


def get_routine_draft_store():
    """Return the draft store registered on the current application."""
    store = current_app.extensions.get(DRAFT_STORE_KEY)
    if store is None:
        raise RuntimeError("Routine draft store is not initialized. Call init_app() first.")
    return store
