"""Pure conversions between user DTOs and the :class:`User` entity."""

from __future__ import annotations

from collections.abc import Iterable

from app.models.user import User
from app.services._shared.ports.user_details import UserDetails

from .dto import CreateUserIn, UpdateUserIn, UserView


class UserEditMapper:
    """Build and mutate entities from request DTOs.

    Only ``full_name`` and ``authorities`` are ever copied onto an existing
    entity; ``username``, ``enabled`` and the password hash are out of reach.
    """

    def create(self, dto: CreateUserIn) -> User:
        """Return a new, unsaved entity. ``password_hash`` is left for the caller."""
        return User(
            username=dto.username,
            full_name=dto.full_name,
            authorities=list(dto.authorities),
            enabled=True,
        )

    def update(self, dto: UpdateUserIn, user: User) -> None:
        if dto.full_name is not None:
            user.full_name = dto.full_name
        if dto.authorities is not None:
            user.authorities = list(dto.authorities)


class UserViewMapper:
    """Project entities onto outward-facing records."""

    def to_user_view(self, user: User) -> UserView:
        return UserView(
            id=user.id,
            username=user.username,
            full_name=user.full_name,
            enabled=bool(user.enabled),
            authorities=tuple(user.authorities or ()),
            created_at=user.created_at,
            updated_at=user.updated_at,
        )

    def to_user_views(self, users: Iterable[User]) -> list[UserView]:
        """Map ``users`` one-to-one, keeping their order."""
        return [self.to_user_view(u) for u in users]

    def to_user_details(self, user: User) -> UserDetails:
        return UserDetails(
            id=user.id,
            username=user.username,
            password_hash=user.password_hash,
            enabled=bool(user.enabled),
            authorities=tuple(user.authorities or ()),
        )
