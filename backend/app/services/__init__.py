"""Service layer public API.

Only framework-agnostic contracts are re-exported here so that importing
``app.services`` never drags in the persistence layer (repositories raise
these errors themselves). Import services from their own packages:

- :mod:`app.services.users`: :class:`UserService` and its DTOs/mappers.
- :mod:`app.services.auth`: :class:`AuthService` and login DTOs.
"""

from __future__ import annotations

from ._shared.dto import PaginationIn
from ._shared.errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ServiceError,
    UsernameNotFoundError,
    ValidationError,
)
from ._shared.ports import PasswordEncoder, TokenProvider, UserDetails, UserDetailsService

__all__ = [
    "PaginationIn",
    "ServiceError",
    "ValidationError",
    "AuthenticationError",
    "NotFoundError",
    "UsernameNotFoundError",
    "ConflictError",
    "PasswordEncoder",
    "TokenProvider",
    "UserDetails",
    "UserDetailsService",
]
