"""Convenience exports for application schemas."""

from __future__ import annotations

from .auth import LoginSchema, TokenResponseSchema
from .common import PaginationQuerySchema, build_meta
from .user import (
    CreateUserSchema,
    RegisterSchema,
    SearchUsersSchema,
    UpdateUserSchema,
    UserViewSchema,
)

__all__ = [
    "LoginSchema",
    "TokenResponseSchema",
    "PaginationQuerySchema",
    "build_meta",
    "CreateUserSchema",
    "RegisterSchema",
    "SearchUsersSchema",
    "UpdateUserSchema",
    "UserViewSchema",
]
