"""Pytest fixtures configuring an isolated transactional database layer.

Each test runs inside a SAVEPOINT-backed transaction against an in-memory
SQLite database so data changes never leak between cases. External services
(role authority, identity provider, notifier) are replaced by the in-memory
doubles shipped with the ports.
"""

from __future__ import annotations

import os
from datetime import UTC, datetime

import pytest
from sqlalchemy import event
from sqlalchemy.orm import scoped_session, sessionmaker

from tests.helpers.utils import GUILD_ID, ORGANIZER_ROLE, PRIMARY_EVENT, SECONDARY_EVENT
from tripreg.container import EXTENSION_KEY, build_services
from tripreg.core.config import SessionSettings, TestingConfig
from tripreg.core.extensions import db as _db  # Flask-SQLAlchemy instance
from tripreg.factory import create_app  # application factory under test
from tripreg.services._shared.ports import (
    InMemoryRoleAuthority,
    RecordingNotifier,
    StubIdentityProvider,
)


class TestConfig(TestingConfig):
    """Testing configuration for creating the Flask app.

    Notes
    -----
    - Uses an in-memory SQLite database for speed.
    - Two events are enabled so event scoping can be exercised.
    - Avoids hitting external services.
    """

    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    ENABLED_EVENTS = [PRIMARY_EVENT, SECONDARY_EVENT]
    ORGANIZER_ROLE = ORGANIZER_ROLE
    DISCORD_GUILD_ID = GUILD_ID
    SESSION_DURATION_HOURS = 24


@pytest.fixture(scope="session")
def app():
    """Create a Flask application configured for testing.

    Returns
    -------
    flask.Flask
        Application instance with :class:`TestConfig` applied and logging
        noise reduced.
    """
    # Ensure env-based config does not leak into tests
    os.environ.pop("DATABASE_URL", None)
    app = create_app(TestConfig)
    app.logger.setLevel("WARNING")
    return app


def _enable_sqlite_savepoints(engine) -> None:
    """Let pysqlite honour BEGIN/SAVEPOINT as issued by SQLAlchemy."""

    @event.listens_for(engine, "connect")
    def _do_connect(dbapi_connection, connection_record):  # pragma: no cover
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _do_begin(conn):  # pragma: no cover
        conn.exec_driver_sql("BEGIN")


@pytest.fixture(scope="session")
def db(app):
    """Create database tables once per test session.

    Parameters
    ----------
    app: flask.Flask
        Application fixture ensuring the Flask context is available.

    Yields
    ------
    flask_sqlalchemy.SQLAlchemy
        Database extension bound to the testing application.
    """
    with app.app_context():
        if _db.engine.dialect.name == "sqlite":
            _enable_sqlite_savepoints(_db.engine)
        _db.create_all()
        yield _db
        _db.session.remove()
        _db.drop_all()


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

    Yields
    ------
    sqlalchemy.orm.scoping.scoped_session
        Scoped session bound to the shared connection; automatically rolled
        back after each test.

    Notes
    -----
    The fixture follows the SQLAlchemy 2.0 recipe for joining an external
    transaction: a top-level transaction wraps the test and the session runs
    each of its own transactions inside a SAVEPOINT. ``session.commit()``
    releases that SAVEPOINT and ``session.rollback()`` reverts to it, so the
    outer transaction survives until the test ends.
    """
    # 1) Top-level transaction
    top_trans = connection.begin()

    # 2) Scoped session bound to the connection, SAVEPOINT per session txn
    SessionFactory = sessionmaker(
        bind=connection, future=True, join_transaction_mode="create_savepoint"
    )
    scoped = scoped_session(SessionFactory)

    # 3) Monkey-patch db.session so app code uses this scoped session
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


# -- External service doubles --------------------------------------------------
@pytest.fixture()
def authority() -> InMemoryRoleAuthority:
    """Role authority knowing the organizer and paid roles, no members yet."""
    return InMemoryRoleAuthority().define(ORGANIZER_ROLE, f"{PRIMARY_EVENT}::paid")


@pytest.fixture()
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture()
def identity_provider() -> StubIdentityProvider:
    return StubIdentityProvider()


@pytest.fixture()
def settings(app) -> SessionSettings:
    return SessionSettings.from_config(app.config)


@pytest.fixture()
def services(app, settings, authority, notifier, identity_provider):
    """Install a service graph wired to the doubles for the current test."""
    original = app.extensions[EXTENSION_KEY]
    graph = build_services(
        app.config,
        settings,
        role_authority=authority,
        identity_provider=identity_provider,
        notifier=notifier,
    )
    app.extensions[EXTENSION_KEY] = graph
    try:
        yield graph
    finally:
        app.extensions[EXTENSION_KEY] = original


@pytest.fixture()
def client(app, services):
    """Return a Flask test client talking to the doubles."""
    return app.test_client()


class FrozenClock:
    """Manually advanced clock for services and the stub token provider."""

    def __init__(self, start: datetime | None = None) -> None:
        self.current = start or datetime(2025, 6, 1, 12, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.current

    def advance(self, delta) -> None:
        self.current = self.current + delta


@pytest.fixture()
def clock() -> FrozenClock:
    return FrozenClock()
