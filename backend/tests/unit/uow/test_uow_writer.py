"""Read-write unit of work: commit on success, rollback on failure."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from app.models import User
from app.uow import SQLAlchemyUnitOfWork
from sqlalchemy import func, select
from tests.factories.user import UserFactory


def _count(session) -> int:
    return session.scalar(select(func.count()).select_from(User))


class TestSQLAlchemyUnitOfWork:
    def test_clean_exit_commits(self, session):
        before = _count(session)

        with SQLAlchemyUnitOfWork() as uow:
            saved = uow.users.save(UserFactory.build(username="committed"))

        assert _count(session) == before + 1
        assert saved.id is not None

    def test_error_inside_block_rolls_back(self, session):
        before = _count(session)

        with pytest.raises(RuntimeError, match="boom"), SQLAlchemyUnitOfWork() as uow:
            uow.users.save(UserFactory.build())
            raise RuntimeError("boom")

        assert _count(session) == before

    def test_failed_commit_is_rolled_back_and_reraised(self):
        fake = MagicMock(name="session")
        fake.commit.side_effect = RuntimeError("disk full")

        with pytest.raises(RuntimeError, match="disk full"):
            with SQLAlchemyUnitOfWork(session=fake):
                pass

        fake.rollback.assert_called_once_with()

    def test_repository_shares_the_session(self, session):
        with SQLAlchemyUnitOfWork() as uow:
            assert uow.session is session
            assert uow.users.session is uow.session
