"""User repository: persistence and lookups for :class:`User` accounts."""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

from sqlalchemy import Select, func, select

from app.models.user import User
from app.repositories.base import BaseRepository, Pagination
from app.services._shared.errors import NotFoundError

if TYPE_CHECKING:  # pragma: no cover - typing helper
    from app.services.users.dto import SearchUsersIn


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    Username uniqueness is enforced by the ``uq_users_username`` constraint,
    not by this class; a duplicate surfaces as ``IntegrityError`` on flush.
    """

    model = User

    def _sortable_fields(self):
        return {
            "id": User.id,
            "username": User.username,
            "full_name": User.full_name,
            "created_at": User.created_at,
            "updated_at": User.updated_at,
        }

    def save(self, user: User) -> User:
        """Persist new or modified ``user`` and flush it.

        :param user: Transient or persistent entity.
        :type user: User
        :returns: The same instance, with ``id`` populated.
        :rtype: User
        """
        return self.add(user)

    def get_by_id(self, user_id: int, *, for_update: bool = False) -> User:
        """Fetch a user by id.

        :param user_id: Primary key.
        :type user_id: int
        :param for_update: Lock the row for the rest of the transaction.
        :type for_update: bool
        :returns: The stored user.
        :rtype: User
        :raises NotFoundError: If no user has ``user_id``.
        """
        user = self.get(user_id, for_update=for_update)
        if user is None:
            raise NotFoundError("User", user_id)
        return user

    def find_by_username(self, username: str) -> User | None:
        """Return the user whose login name equals ``username`` exactly, if any."""
        stmt = select(User).where(User.username == username)
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def exists_by_username(self, username: str) -> bool:
        stmt = select(User.id).where(User.username == username).limit(1)
        return self.session.execute(stmt).first() is not None

    def search_users(
        self, request: SearchUsersIn, pagination: Pagination | None = None
    ) -> list[User]:
        """Filter users by id (exact) and username / full name (substring, any case).

        Blank filters are ignored, so an empty request lists everyone.

        :param request: Search criteria.
        :type request: SearchUsersIn
        :param pagination: Optional page, size and sort tokens.
        :type pagination: Pagination | None
        :returns: Matching users ordered by the sort tokens, then id.
        :rtype: list[User]
        """
        return self.fetch(self._search_select(request), pagination)

    def _search_select(self, request: SearchUsersIn) -> Select:
        stmt = select(User)
        if request.id is not None:
            stmt = stmt.where(User.id == request.id)
        if request.username and request.username.strip():
            needle = request.username.strip().lower()
            stmt = stmt.where(func.lower(User.username).contains(needle, autoescape=True))
        if request.full_name and request.full_name.strip():
            needle = request.full_name.strip().lower()
            stmt = stmt.where(func.lower(User.full_name).contains(needle, autoescape=True))
        return stmt
