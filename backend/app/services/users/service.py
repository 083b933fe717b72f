"""
UserService
===========

Application service for user accounts:

- Creation with password confirmation and hashing
- Profile updates and soft deletion
- Lookup, existence probe and search
- Credential lookup for the login flow (:class:`UserDetailsService`)
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from app.repositories.user import UserRepository
from app.services._shared.base import BaseService, ServiceContext, UowFactory
from app.services._shared.dto import PaginationIn
from app.services._shared.errors import (
    ConflictError,
    UsernameNotFoundError,
    ValidationError,
    violates,
)
from app.services._shared.ports.password_encoder import PasswordEncoder
from app.services._shared.ports.user_details import UserDetails, UserDetailsService
from app.services.users.dto import CreateUserIn, SearchUsersIn, UpdateUserIn, UserView
from app.services.users.mappers import UserEditMapper, UserViewMapper

log = logging.getLogger(__name__)


class UserService(BaseService, UserDetailsService):
    """
    Orchestrates account use cases over a :class:`UserRepository`.

    The instance only keeps references to its collaborators, so a single one
    is shared by every request.
    """

    def __init__(
        self,
        *,
        password_encoder: PasswordEncoder,
        edit_mapper: UserEditMapper | None = None,
        view_mapper: UserViewMapper | None = None,
        rw_uow_factory: UowFactory | None = None,
        ro_uow_factory: UowFactory | None = None,
    ) -> None:
        """
        :param password_encoder: One-way hasher for new passwords.
        :type password_encoder: PasswordEncoder
        :param edit_mapper: Request → entity mapper.
        :type edit_mapper: UserEditMapper | None
        :param view_mapper: Entity → view mapper.
        :type view_mapper: UserViewMapper | None
        """
        super().__init__(rw_uow_factory=rw_uow_factory, ro_uow_factory=ro_uow_factory)
        self.password_encoder = password_encoder
        self.edit_mapper = edit_mapper or UserEditMapper()
        self.view_mapper = view_mapper or UserViewMapper()

    # --------------------------------------------------------------------- #
    # Commands
    # --------------------------------------------------------------------- #

    def create(self, dto: CreateUserIn, ctx: ServiceContext | None = None) -> UserView:
        """
        Create an account.

        :param dto: Creation input.
        :type dto: CreateUserIn
        :param ctx: Request context; ``actor_id`` is recorded as creator.
        :type ctx: ServiceContext | None
        :returns: View of the stored account.
        :rtype: UserView
        :raises ValidationError: When ``password`` and ``re_password`` differ.
        :raises ConflictError: When the store rejects a duplicate username.
        """
        if dto.password != dto.re_password:
            raise ValidationError("Passwords don't match!")

        actor_id = ctx.actor_id if ctx else None
        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            try:
                user = self.edit_mapper.create(dto)
                user.password_hash = self.password_encoder.encode(dto.password)
            except ValueError as exc:
                raise ValidationError(str(exc)) from exc
            user.stamp(actor_id, created=True)

            try:
                user = repo.save(user)
            except IntegrityError as exc:
                if violates(exc, "uq_users_username"):
                    raise ConflictError("User", "username already in use") from exc
                raise

            view = self.view_mapper.to_user_view(user)

        log.info("user.created", extra={"user_id": view.id, "actor_id": actor_id})
        return view

    def update(
        self, user_id: int, dto: UpdateUserIn, ctx: ServiceContext | None = None
    ) -> UserView:
        """
        Update profile fields of an account. The password is never touched.

        :param user_id: Account identifier.
        :type user_id: int
        :param dto: Fields to change.
        :type dto: UpdateUserIn
        :returns: View after the change.
        :rtype: UserView
        :raises NotFoundError: When the account does not exist.
        """
        actor_id = ctx.actor_id if ctx else None
        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.get_by_id(user_id, for_update=True)
            try:
                self.edit_mapper.update(dto, user)
            except ValueError as exc:
                raise ValidationError(str(exc)) from exc
            user.stamp(actor_id)
            user = repo.save(user)
            view = self.view_mapper.to_user_view(user)

        log.info("user.updated", extra={"user_id": user_id, "actor_id": actor_id})
        return view

    def delete(self, user_id: int, ctx: ServiceContext | None = None) -> UserView:
        """
        Soft-delete an account by disabling it; the row is kept.

        :param user_id: Account identifier.
        :type user_id: int
        :returns: View with ``enabled == False``.
        :rtype: UserView
        :raises NotFoundError: When the account does not exist.
        """
        actor_id = ctx.actor_id if ctx else None
        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.get_by_id(user_id, for_update=True)
            user.enabled = False
            user.stamp(actor_id)
            user = repo.save(user)
            view = self.view_mapper.to_user_view(user)

        log.info("user.disabled", extra={"user_id": user_id, "actor_id": actor_id})
        return view

    # --------------------------------------------------------------------- #
    # Queries
    # --------------------------------------------------------------------- #

    def load_user_by_username(self, username: str) -> UserDetails:
        """
        Resolve credentials for the login flow.

        :param username: Login name.
        :type username: str
        :returns: Credential record (hash, enabled flag, authorities).
        :rtype: UserDetails
        :raises UsernameNotFoundError: When no account has ``username``.
        """
        with self.ro_uow() as uow:
            user = uow.users.find_by_username(username)
            if user is None:
                raise UsernameNotFoundError(username)
            return self.view_mapper.to_user_details(user)

    def username_exists(self, username: str) -> bool:
        with self.ro_uow() as uow:
            return uow.users.exists_by_username(username)

    def get_user(self, user_id: int) -> UserView:
        """
        :raises NotFoundError: When the account does not exist.
        """
        with self.ro_uow() as uow:
            return self.view_mapper.to_user_view(uow.users.get_by_id(user_id))

    def search_users(
        self, dto: SearchUsersIn, pagination: PaginationIn | None = None
    ) -> list[UserView]:
        """
        Search accounts; order and size of the result follow the repository.

        :param dto: Search criteria.
        :type dto: SearchUsersIn
        :param pagination: Optional page, size and sort tokens.
        :type pagination: PaginationIn | None
        :returns: Matching views, possibly empty.
        :rtype: list[UserView]
        """
        page = None
        if pagination is not None:
            page = self.ensure_pagination(
                page=pagination.page, limit=pagination.limit, sort=pagination.sort
            )
        with self.ro_uow() as uow:
            users = uow.users.search_users(dto, page)
            return self.view_mapper.to_user_views(users)
