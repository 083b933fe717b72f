"""
Errors raised by repositories, mappers and services.

Nothing here knows about Flask or HTTP status codes; ``app/core/errors.py``
decides how each class is rendered for API clients.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError


def violates(exc: IntegrityError, constraint_name: str) -> bool:
    """
    Tell whether ``exc`` was caused by the constraint named ``constraint_name``.

    PostgreSQL reports the constraint name; SQLite only reports the columns,
    so ``uq_<table>_<column>`` names are also matched as ``<table>.<column>``.

    :param exc: The exception raised by SQLAlchemy during flush/commit.
    :type exc: IntegrityError
    :param constraint_name: Constraint to match (e.g. ``"uq_users_username"``).
    :type constraint_name: str
    :returns: ``True`` if the error matches the given constraint.
    :rtype: bool
    """
    message = str(exc.orig).lower() if exc.orig else ""
    name = constraint_name.lower()
    if name in message:
        return True
    if name.startswith("uq_"):
        table, _, column = name[3:].partition("_")
        return f"{table}.{column}" in message
    return False


class ServiceError(Exception):
    """Root of the service error hierarchy."""


class ValidationError(ServiceError):
    """Raised when client input breaks a business rule (e.g. password mismatch)."""


class AuthenticationError(ServiceError):
    """Raised when a login attempt cannot be honoured."""

    def __init__(self, message: str = "Invalid credentials") -> None:
        super().__init__(message)


@dataclass
class NotFoundError(ServiceError):
    """
    No stored entity matches ``key``.

    :param entity: Model name used in the message, e.g. ``"User"``.
    :param key: The id or lookup value that matched nothing.
    """

    entity: str
    key: str | int

    def __str__(self) -> str:
        return f"{self.entity} not found: {self.key}"


class UsernameNotFoundError(NotFoundError):
    """
    Raised by the credential lookup when no account has the given username.

    Kept distinct from :class:`NotFoundError` so authentication callers can
    tell "unknown user" apart from other failures.
    """

    def __init__(self, username: str) -> None:
        super().__init__("User", username)

    def __str__(self) -> str:
        return f"User with username - {self.key}, not found"


@dataclass
class ConflictError(ServiceError):
    """
    The write would break a uniqueness rule, such as a taken username.

    :param entity: Model name used in the message.
    :param detail: What clashed, safe to show to clients.
    """

    entity: str
    detail: str

    def __str__(self) -> str:
        return f"Conflict on {self.entity}: {self.detail}"
