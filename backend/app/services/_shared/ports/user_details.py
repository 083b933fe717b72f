"""
Credential lookup contract consumed by the authentication flow.

Any service able to resolve a username into a :class:`UserDetails` record
satisfies :class:`UserDetailsService`; the login flow depends on this port
only, never on the concrete account service.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable


@dataclass(frozen=True, slots=True)
class UserDetails:
    """
    Minimal record needed to verify a login attempt.

    :param id: Account identifier (used as token subject).
    :type id: int
    :param username: Login name.
    :type username: str
    :param password_hash: Stored encoder output to compare against.
    :type password_hash: str
    :param enabled: ``False`` for soft-deleted accounts.
    :type enabled: bool
    :param authorities: Granted role names.
    :type authorities: tuple[str, ...]
    """

    id: int
    username: str
    password_hash: str = field(repr=False)
    enabled: bool = True
    authorities: tuple[str, ...] = ()


@runtime_checkable
class UserDetailsService(Protocol):
    """Resolve a username into credentials, raising ``UsernameNotFoundError`` if unknown."""

    def load_user_by_username(self, username: str) -> UserDetails: ...
