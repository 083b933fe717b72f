"""Factory Boy base wired to the per-test transactional session.

``conftest`` binds the session of the running test through
:func:`bind_session`; factories resolve it lazily on every ``create`` so a
factory never outlives the SAVEPOINT it was created in.
"""

from __future__ import annotations

import factory

_bound_session = None


def bind_session(session) -> None:
    """Make ``session`` the target of every factory ``create``/``flush``."""
    global _bound_session
    _bound_session = session


def current_session():
    """Return the bound session or fail loudly when a test forgot the fixture."""
    if _bound_session is None:
        raise RuntimeError("No session bound for factories; request the 'session' fixture.")
    return _bound_session


class BaseFactory(factory.alchemy.SQLAlchemyModelFactory):
    """Flush (never commit) created objects into the test session."""

    class Meta:
        abstract = True
        sqlalchemy_session_factory = current_session
        sqlalchemy_session_persistence = "flush"
