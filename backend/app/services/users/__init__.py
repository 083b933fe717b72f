"""Account management use cases."""

from .dto import CreateUserIn, SearchUsersIn, UpdateUserIn, UserView
from .mappers import UserEditMapper, UserViewMapper
from .service import UserService

__all__ = [
    "CreateUserIn",
    "SearchUsersIn",
    "UpdateUserIn",
    "UserView",
    "UserEditMapper",
    "UserViewMapper",
    "UserService",
]
