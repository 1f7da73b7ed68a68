"""Pytest fixtures configuring an isolated transactional database layer.

Each test runs inside a SAVEPOINT-backed transaction against an in-memory
SQLite database so data changes never leak between cases. Sessions joined to
the connection open their own SAVEPOINT, so a service ``commit`` keeps data
for the rest of the test and a service ``rollback`` only discards its own
work.
"""

from __future__ import annotations

import os

import pytest
from flask_jwt_extended import create_access_token
from sqlalchemy import event
from sqlalchemy.orm import scoped_session, sessionmaker

from fitlog.core.config import TestingConfig
from fitlog.core.extensions import db as _db  # Flask-SQLAlchemy instance
from fitlog.factory import create_app  # application factory under test
from fitlog.infra.memory.memory_routine_draft_store import InMemoryRoutineDraftStore
from fitlog.services._shared.base import ServiceContext


@pytest.fixture(scope="session")
def app():
    """Create a Flask application configured for testing.

    Returns
    -------
    flask.Flask
        Application instance with :class:`TestingConfig` applied and logging
        noise reduced.
    """
    # Ensure env-based config does not leak into tests
    os.environ.pop("DATABASE_URL", None)
    app = create_app(TestingConfig, instance_relative_config=False)
    app.logger.setLevel("WARNING")
    return app


@pytest.fixture(scope="session")
def db(app):
    """Create database tables once per test session."""
    with app.app_context():
        _db.create_all()
        yield _db
        _db.session.remove()
        _db.drop_all()


@pytest.fixture(autouse=True)
def _app_context(app):
    """Give each test its own application context, and so its own ``flask.g``."""
    with app.app_context():
        yield


@pytest.fixture(scope="session")
def connection(db):
    """Keep a dedicated DBAPI connection open for the whole session."""
    conn = db.engine.connect()
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture(scope="function")
def session(db, connection):
    """Provide a SQLAlchemy session wrapped in a nested transaction.

    Notes
    -----
    The fixture mirrors the SQLAlchemy 2.0 pattern for transactional tests: it
    begins a top-level transaction, starts a SAVEPOINT per test, and reinstalls
    the SAVEPOINT whenever SQLAlchemy ends one.
    """
    top_trans = connection.begin()

    SessionFactory = sessionmaker(
        bind=connection, future=True, autoflush=False, expire_on_commit=False
    )
    scoped = scoped_session(SessionFactory)

    nested = connection.begin_nested()

    @event.listens_for(scoped(), "after_transaction_end")
    def _restart_savepoint(sess, trans):  # pragma: no cover
        if trans.nested and not trans._parent.nested:
            nonlocal nested
            nested = connection.begin_nested()

    original_session = db.session
    db.session.remove()
    db.session = scoped

    try:
        yield scoped
    finally:
        scoped.remove()
        db.session = original_session
        top_trans.rollback()


@pytest.fixture(scope="session")
def faker():
    """Provide a :class:`faker.Faker` instance seeded for deterministic tests."""
    from faker import Faker

    fk = Faker()
    Faker.seed(1337)
    return fk


# -- Hook up Factory Boy to pytest SQLAlchemy session --------------------------
@pytest.fixture(autouse=True)
def _factories_session(session):
    """Wire Factory Boy's session helper to the transactional session fixture."""
    from tests.factories import SQLAlchemySession

    SQLAlchemySession.set(session)
    yield


# -- Service and HTTP helpers ----------------------------------------------------
@pytest.fixture()
def ctx_for():
    """Return a builder of :class:`ServiceContext` for a given user."""

    def _build(user) -> ServiceContext:
        return ServiceContext(actor_id=user.id if user is not None else None)

    return _build


@pytest.fixture()
def draft_store():
    """A fresh in-memory draft store per test."""
    return InMemoryRoutineDraftStore(ttl_seconds=600)


@pytest.fixture()
def client(app, session):
    return app.test_client()


@pytest.fixture()
def auth_headers(app):
    """Return a builder of ``Authorization`` headers for a given user."""

    def _headers(user, **extra: str) -> dict[str, str]:
        with app.app_context():
            token = create_access_token(identity=str(user.id))
        return {"Authorization": f"Bearer {token}", **extra}

    return _headers
