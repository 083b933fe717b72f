"""
Abstract Unit of Work contract.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - typing helper
    from app.repositories.user import UserRepository


class UnitOfWork(ABC):
    """
    Transactional boundary for one use-case.

    Responsibilities:
    - Expose repositories bound to the same session/transaction (``users``).
    - Commit on clean exit, roll back on any exception.
    """

    users: UserRepository

    @abstractmethod
    def __enter__(self) -> UnitOfWork: ...
    @abstractmethod
    def __exit__(self, exc_type, exc, tb) -> None: ...
    @abstractmethod
    def commit(self) -> None: ...
    @abstractmethod
    def rollback(self) -> None: ...
