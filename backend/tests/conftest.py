"""Shared pytest fixtures.

Database isolation
------------------
One in-memory SQLite database lives for the whole run. Every test gets a
session bound to a single connection that sits inside an outer transaction
plus a SAVEPOINT. Because the connection is already in a SAVEPOINT when the
session first uses it, SQLAlchemy joins it in ``conservative_savepoint``
mode: each ``Session.commit()`` issued by a Unit of Work only releases a
SAVEPOINT of its own, and the outer transaction is rolled back when the test
ends.

HTTP tests go through the same session; Flask-SQLAlchemy removes it at the
end of every request, so data a request must see has to be committed (for
instance by calling a service) rather than merely flushed.
"""

from __future__ import annotations

import os

import pytest
from app.core.config import TestingConfig
from app.core.extensions import db as _db
from app.factory import create_app
from flask_jwt_extended import create_access_token
from sqlalchemy.orm import scoped_session, sessionmaker


class TestConfig(TestingConfig):
    """Pin the in-memory database and keep log output to warnings."""

    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_ECHO = False
    LOG_LEVEL = "WARNING"


@pytest.fixture(scope="session")
def app():
    """Application built once for the whole run from :class:`TestConfig`."""
    os.environ.pop("DATABASE_URL", None)
    application = create_app(TestConfig, instance_relative_config=False)
    application.logger.setLevel("WARNING")
    return application


@pytest.fixture(scope="session")
def db(app):
    """Create the schema inside a long-lived application context."""
    with app.app_context():
        _db.create_all()
        yield _db
        _db.session.remove()
        _db.drop_all()


@pytest.fixture(scope="session")
def connection(db):
    """The single connection every test session is bound to."""
    conn = db.engine.connect()
    yield conn
    conn.close()


@pytest.fixture()
def session(app, db, connection):
    """Transactional ``scoped_session`` swapped in for ``db.session``.

    Each test also runs in its own application context, so nothing stored on
    :data:`flask.g` carries over to the next test.

    Yields
    ------
    sqlalchemy.orm.scoping.scoped_session
        Session whose work is discarded when the test finishes.
    """
    with app.app_context():
        outer = connection.begin()
        connection.begin_nested()

        scoped = scoped_session(sessionmaker(bind=connection, autoflush=False))
        flask_session = db.session
        flask_session.remove()
        db.session = scoped
        try:
            yield scoped
        finally:
            scoped.remove()
            db.session = flask_session
            outer.rollback()


@pytest.fixture(scope="session")
def faker():
    """Seeded :class:`faker.Faker` so generated values are reproducible."""
    from faker import Faker

    Faker.seed(1337)
    return Faker()


@pytest.fixture()
def client(app, session):
    return app.test_client()


@pytest.fixture()
def user_service(app):
    """The application's shared :class:`~app.services.users.UserService`."""
    return app.extensions["user_service"]


@pytest.fixture()
def auth_headers(app):
    """Factory for ``Authorization`` headers: ``auth_headers(user_id, "USER_ADMIN")``."""

    def _make(identity: int | str = 1, *authorities: str) -> dict[str, str]:
        token = create_access_token(
            identity=str(identity),
            additional_claims={"authorities": list(authorities)},
        )
        return {"Authorization": f"Bearer {token}"}

    return _make


@pytest.fixture(autouse=True)
def _factories_session(session):
    """Point Factory Boy at the session of the running test."""
    from tests.factories import bind_session

    bind_session(session)
    yield
    bind_session(None)
