"""Column mixins shared by account models (typed SQLAlchemy 2.0)."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Integer, func
from sqlalchemy.orm import Mapped, mapped_column


class PKMixin:
    """Integer surrogate primary key named ``id``."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True)


class TimestampMixin:
    """Database-managed ``created_at`` / ``updated_at`` columns.

    Both are timezone-aware and filled by the server, so they are only
    readable after a flush.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )


class AuditMixin:
    """Identifiers of the actors that created and last modified a row.

    Populated by the service layer from :class:`~app.services.ServiceContext`;
    ``None`` for self-registration and CLI bootstrap.
    """

    created_by: Mapped[int | None] = mapped_column(Integer, nullable=True)
    modified_by: Mapped[int | None] = mapped_column(Integer, nullable=True)

    def stamp(self, actor_id: int | None, *, created: bool = False) -> None:
        """Record ``actor_id`` as modifier (and creator when ``created``)."""
        if created:
            self.created_by = actor_id
        self.modified_by = actor_id
