"""
DTOs for UserService.

Data Transfer Objects isolate the service layer from ORM models: inputs are
owned by the calling boundary, outputs never carry the password hash.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

# --------------------------------------------------------------------------- #
# Input DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class CreateUserIn:
    """
    Input DTO for account creation.

    :param username: Login name (unique).
    :type username: str
    :param password: Raw password; hashed by the service.
    :type password: str
    :param re_password: Confirmation; must equal ``password`` exactly.
    :type re_password: str
    :param full_name: Optional display name.
    :type full_name: str | None
    :param authorities: Role names to grant.
    :type authorities: tuple[str, ...]
    """

    username: str
    password: str
    re_password: str
    full_name: str | None = None
    authorities: tuple[str, ...] = ()

    def __repr__(self) -> str:
        return f"CreateUserIn(username={self.username!r}, full_name={self.full_name!r})"


@dataclass(frozen=True, slots=True)
class UpdateUserIn:
    """
    Input DTO for profile updates. Passwords are not changed through here.

    ``None`` leaves a field untouched.

    :param full_name: New display name.
    :type full_name: str | None
    :param authorities: Replacement set of role names.
    :type authorities: tuple[str, ...] | None
    """

    full_name: str | None = None
    authorities: tuple[str, ...] | None = None


@dataclass(frozen=True, slots=True)
class SearchUsersIn:
    """
    Search criteria; every field is optional and blank values are ignored.

    :param id: Exact account id.
    :type id: int | None
    :param username: Case-insensitive substring of the username.
    :type username: str | None
    :param full_name: Case-insensitive substring of the display name.
    :type full_name: str | None
    """

    id: int | None = None
    username: str | None = None
    full_name: str | None = None


# --------------------------------------------------------------------------- #
# Output DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class UserView:
    """
    Public-safe projection of an account.

    :param id: Account identifier.
    :type id: int
    :param username: Login name.
    :type username: str
    :param full_name: Display name.
    :type full_name: str | None
    :param enabled: ``False`` once soft-deleted.
    :type enabled: bool
    :param authorities: Granted role names.
    :type authorities: tuple[str, ...]
    :param created_at: Creation timestamp.
    :type created_at: datetime | None
    :param updated_at: Last modification timestamp.
    :type updated_at: datetime | None
    """

    id: int
    username: str
    full_name: str | None
    enabled: bool
    authorities: tuple[str, ...]
    created_at: datetime | None = None
    updated_at: datetime | None = None
