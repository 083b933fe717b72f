"""Extension singletons shared by the whole application.

They are created unbound at import time so models and services can import
them freely; :func:`init_app` binds them to a concrete Flask app.
"""

from __future__ import annotations

from flask import Flask
from flask_jwt_extended import JWTManager
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import MetaData

# Deterministic constraint names; ``violates()`` matches on ``uq_users_username``.
NAMING_CONVENTION = {
    "pk": "pk_%(table_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
}

db: SQLAlchemy = SQLAlchemy(
    metadata=MetaData(naming_convention=NAMING_CONVENTION),
    session_options={"autoflush": False},
)
# Batch mode lets Alembic alter tables on SQLite.
migrate = Migrate(render_as_batch=True)
jwt = JWTManager()


def init_app(app: Flask) -> None:
    """Bind the database, migrations and JWT handling to ``app``.

    :param app: Application receiving the extensions.
    :type app: flask.Flask
    """
    db.init_app(app)
    # Populate the metadata before Alembic or ``create_all`` inspect it.
    from app import models  # noqa: F401

    migrate.init_app(app, db)
    jwt.init_app(app)
