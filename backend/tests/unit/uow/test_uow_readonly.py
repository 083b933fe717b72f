"""
Unit tests for SQLAlchemyReadOnlyUnitOfWork.

Only ORM-level guards are exercised, so these run on SQLite as well.
"""

from __future__ import annotations

import pytest
from app.models.user import User
from app.uow import SQLAlchemyReadOnlyUnitOfWork as ROuow
from app.uow import SQLAlchemyUnitOfWork as RWuow
from tests.factories.user import UserFactory


class TestSQLAlchemyReadOnlyUnitOfWork:
    def test_blocks_orm_flush_writes(self, app, db, session):
        """
        Ensure that attempting to flush ORM changes inside the RO UoW raises.
        """
        with ROuow() as uow, pytest.raises(RuntimeError, match="ORM flush blocked"):
            user = UserFactory.build()  # not persisted
            uow.session.add(user)
            uow.session.flush()

    def test_allows_reads(self, app, db, session):
        with RWuow() as uow:
            uow.users.save(UserFactory.build())

        with ROuow() as uow:
            assert uow.session.query(User).count() >= 1

    def test_disallows_commit(self, app, db, session):
        with ROuow() as uow, pytest.raises(RuntimeError, match="does not allow commit"):
            uow.commit()

    def test_mutations_do_not_persist(self, app, db, session):
        """
        Any attempted modification is blocked on flush and never stored.
        """
        with RWuow() as uow:
            user = uow.users.save(UserFactory.build(full_name="Original"))
            user_id = user.id

        with ROuow() as uow, pytest.raises(RuntimeError, match="ORM flush blocked"):
            u = uow.session.get(User, user_id)
            u.full_name = "Mutated"
            uow.session.flush()

        with ROuow() as uow:
            persisted = uow.session.get(User, user_id)
            assert persisted.full_name == "Original"

    def test_joins_running_transaction_without_rolling_back(self, app, db, session):
        """
        A RO scope opened while the caller's transaction is active leaves the
        caller's uncommitted work in place.
        """
        pending = UserFactory(username="pending")  # flushed, not committed

        with ROuow() as uow:
            assert uow.users.find_by_username("pending") is not None

        assert session.get(User, pending.id) is not None
        assert session().in_transaction()

    def test_guard_removed_after_exit(self, app, db, session):
        with ROuow():
            pass
        session.add(UserFactory.build())
        session.flush()  # no RuntimeError once the scope is closed
