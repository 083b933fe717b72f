# app/services/auth/dto.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta


@dataclass(frozen=True, slots=True)
class LoginIn:
    """Credentials as submitted; ``password`` is kept out of ``repr``."""

    username: str
    password: str = field(repr=False)


@dataclass(frozen=True, slots=True)
class LoginOut:
    """
    Result of a successful login.

    :param access_token: Signed JWT; its ``sub`` is the account id as a string.
    :param expires_in: Seconds until the token expires.
    :param user_id: Id of the account that logged in.
    :param username: Its login name.
    :param authorities: Role names carried in the token's ``authorities`` claim.
    :param token_type: Authorization scheme for the header, ``"bearer"``.
    """

    access_token: str
    expires_in: int
    user_id: int
    username: str
    authorities: tuple[str, ...] = ()
    token_type: str = "bearer"


@dataclass(frozen=True, slots=True)
class AuthTokenConfig:
    access_expires: timedelta = timedelta(hours=1)
