# app/services/_shared/base.py
from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass

from app.repositories.base import Pagination
from app.uow.base import UnitOfWork
from app.uow.sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyUnitOfWork,
)

UowFactory = Callable[[], UnitOfWork]


@dataclass(frozen=True, slots=True)
class ServiceContext:
    """
    Who is calling.

    :param actor_id: Id of the authenticated caller, ``None`` when anonymous.
        Stamped on rows as ``created_by``/``modified_by``.
    """

    actor_id: int | None = None


class BaseService:
    """
    Common ground for application services.

    A service reaches the database only through the units of work handed out
    by :meth:`rw_uow` and :meth:`ro_uow`. Both come from factories given at
    construction time; by default they are the SQLAlchemy implementations,
    while tests pass doubles to observe what a use case writes.

    :param rw_uow_factory: Zero-argument callable returning a read-write UoW.
    :type rw_uow_factory: Callable[[], UnitOfWork] | None
    :param ro_uow_factory: Zero-argument callable returning a read-only UoW.
    :type ro_uow_factory: Callable[[], UnitOfWork] | None
    """

    def __init__(
        self,
        *,
        rw_uow_factory: UowFactory | None = None,
        ro_uow_factory: UowFactory | None = None,
    ) -> None:
        self._rw_uow_factory = rw_uow_factory or SQLAlchemyUnitOfWork
        self._ro_uow_factory = ro_uow_factory or SQLAlchemyReadOnlyUnitOfWork

    def rw_uow(self) -> UnitOfWork:
        return self._rw_uow_factory()

    def ro_uow(self) -> UnitOfWork:
        return self._ro_uow_factory()

    @staticmethod
    def ensure_pagination(
        *, page: int, limit: int, sort: Iterable[str] | None = None
    ) -> Pagination:
        """Normalize client paging input; ``page`` and ``limit`` never drop below 1."""
        return Pagination(page=max(int(page), 1), limit=max(int(limit), 1), sort=[*(sort or ())])
