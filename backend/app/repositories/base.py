"""Shared plumbing for SQLAlchemy 2.x repositories.

A repository owns queries and nothing else: it flushes so generated keys
are available, but the surrounding Unit of Work decides whether the work is
committed.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar, cast

from sqlalchemy import Select, select
from sqlalchemy.orm import InstrumentedAttribute, Session

from app.core.extensions import db

E = TypeVar("E")


@dataclass(slots=True)
class Pagination:
    """Page window plus public sort tokens such as ``"-created_at"``."""

    page: int = 1
    limit: int = 20
    sort: list[str] = field(default_factory=list)

    @property
    def offset(self) -> int:
        return (max(self.page, 1) - 1) * max(self.limit, 1)


def parse_sort_tokens(raw: Iterable[str]) -> list[tuple[str, bool]]:
    """Split ``["-created_at", "username"]`` into ``[("created_at", True), ("username", False)]``.

    Tokens that are empty once the ``-`` prefix and whitespace are removed
    are skipped.
    """
    parsed: list[tuple[str, bool]] = []
    for token in raw:
        descending = token.startswith("-")
        name = token.removeprefix("-").strip()
        if name:
            parsed.append((name, descending))
    return parsed


def apply_sorting(
    stmt: Select[Any],
    sortable_fields: Mapping[str, InstrumentedAttribute[Any]],
    tokens: Iterable[str],
    *,
    pk_attr: InstrumentedAttribute[Any] | None,
) -> Select[Any]:
    """Order ``stmt`` by the known tokens, then by primary key.

    Names missing from ``sortable_fields`` are dropped, so clients can never
    sort on arbitrary columns.
    """
    clauses = []
    for name, descending in parse_sort_tokens(tokens):
        column = sortable_fields.get(name)
        if column is not None:
            clauses.append(column.desc() if descending else column.asc())
    if pk_attr is not None:
        clauses.append(pk_attr.asc())
    return stmt.order_by(*clauses) if clauses else stmt


class BaseRepository(Generic[E]):
    """Persistence helpers for one mapped class.

    Subclasses set ``model`` and override :meth:`_sortable_fields` to expose
    sort keys.
    """

    model: type[E]

    def __init__(self, session: Session | None = None) -> None:
        self._session = session

    @property
    def session(self) -> Session:
        """The Unit of Work's session, or ``db.session`` when none was given."""
        return self._session if self._session is not None else cast(Session, db.session)

    def _pk_attr(self) -> InstrumentedAttribute[Any] | None:
        return getattr(self.model, "id", None)

    def _sortable_fields(self) -> Mapping[str, InstrumentedAttribute[Any]]:
        return {}

    def add(self, instance: E) -> E:
        self.session.add(instance)
        self.session.flush()
        return instance

    def get(self, entity_id: Any, *, for_update: bool = False) -> E | None:
        """Load by primary key.

        :param for_update: Lock the row with ``SELECT ... FOR UPDATE``.
            Dialects without row locks (SQLite) ignore it.
        """
        pk_attr = self._pk_attr()
        if pk_attr is None:
            raise RuntimeError(f"{type(self).__name__}.model has no 'id' attribute")
        stmt = select(self.model).where(pk_attr == entity_id)
        if for_update:
            stmt = stmt.with_for_update()
        return cast(E | None, self.session.scalars(stmt).first())

    def fetch(self, stmt: Select[Any], pagination: Pagination | None = None) -> list[E]:
        """Execute ``stmt`` sorted by ``pagination.sort`` and sliced to its page."""
        stmt = apply_sorting(
            stmt,
            self._sortable_fields(),
            pagination.sort if pagination else (),
            pk_attr=self._pk_attr(),
        )
        if pagination is not None:
            stmt = stmt.limit(max(pagination.limit, 1)).offset(pagination.offset)
        return list(self.session.scalars(stmt))
