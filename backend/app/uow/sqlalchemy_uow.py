"""
Units of Work over the Flask-SQLAlchemy scoped session.

Both flavours expose the same ``users`` repository; they differ only in how
the transaction ends. :class:`SQLAlchemyUnitOfWork` commits a clean block and
rolls back a failing one. :class:`SQLAlchemyReadOnlyUnitOfWork` never
commits and refuses to flush pending changes while it is open.
"""

from __future__ import annotations

import logging
from contextlib import suppress

from sqlalchemy import event
from sqlalchemy.exc import InvalidRequestError
from sqlalchemy.orm import Session, SessionTransaction, scoped_session

from app.core.extensions import db
from app.repositories.user import UserRepository
from app.uow.base import UnitOfWork

log = logging.getLogger(__name__)


class _SessionBound(UnitOfWork):
    """Bind the repositories to one session (``db.session`` unless given)."""

    def __init__(self, *, session: Session | scoped_session | None = None) -> None:
        self.session = db.session if session is None else session
        self.users = UserRepository(session=self.session)

    def rollback(self) -> None:
        self.session.rollback()


class SQLAlchemyUnitOfWork(_SessionBound):
    """Read-write scope: commit on success, roll back on any error.

    A failing commit is rolled back as well before the error propagates.
    """

    def __enter__(self) -> SQLAlchemyUnitOfWork:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is not None:
            log.debug("uow.rollback: %s", exc_type.__name__)
            self.rollback()
            return
        try:
            self.commit()
        except BaseException:
            self.rollback()
            raise

    def commit(self) -> None:
        self.session.commit()


class SQLAlchemyReadOnlyUnitOfWork(_SessionBound):
    """Read-only scope.

    When the session is idle the scope opens its own transaction and ends it
    with a rollback. When a transaction is already running (a caller's RW
    work, or the test fixture's SAVEPOINT) the scope joins it and leaves it
    alone on exit. In both cases a ``before_flush`` listener rejects any
    flush that carries new, dirty or deleted objects.
    """

    def __init__(self, *, session: Session | scoped_session | None = None) -> None:
        super().__init__(session=session)
        self._owned: SessionTransaction | None = None
        self._guarded: Session | None = None

    def __enter__(self) -> SQLAlchemyReadOnlyUnitOfWork:
        try:
            self._owned = self.session.begin()
        except InvalidRequestError:
            self._owned = None
        # Listen on the concrete Session; a scoped_session proxy is not an event target.
        concrete = self.session() if isinstance(self.session, scoped_session) else self.session
        event.listen(concrete, "before_flush", _reject_pending_writes)
        self._guarded = concrete
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        guarded, self._guarded = self._guarded, None
        owned, self._owned = self._owned, None
        try:
            if owned is not None:
                self.session.rollback()
        finally:
            if guarded is not None:
                with suppress(InvalidRequestError):
                    event.remove(guarded, "before_flush", _reject_pending_writes)

    def commit(self) -> None:
        """
        :raises RuntimeError: always; nothing is ever written from this scope.
        """
        raise RuntimeError("Read-only UnitOfWork does not allow commit().")


def _reject_pending_writes(session: Session, flush_context, instances) -> None:
    if session.new or session.dirty or session.deleted:
        raise RuntimeError(
            "Read-only UnitOfWork: ORM flush blocked (new/dirty/deleted objects present)."
        )
