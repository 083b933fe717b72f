"""Account entity backing authentication and user administration."""

from __future__ import annotations

from enum import Enum

from sqlalchemy import JSON, Boolean, String, UniqueConstraint, true
from sqlalchemy.orm import Mapped, mapped_column, validates

from app.core.extensions import db

from .base import AuditMixin, PKMixin, TimestampMixin


class Role(str, Enum):
    """Authorities that can be granted to an account."""

    USER_ADMIN = "USER_ADMIN"
    AUTHOR_ADMIN = "AUTHOR_ADMIN"
    BOOK_ADMIN = "BOOK_ADMIN"


class User(PKMixin, AuditMixin, TimestampMixin, db.Model):
    """
    Persisted user account.

    Fields
    ------
    username : str
        Login name. Unique, trimmed, immutable once created.
    password_hash : str
        Output of the configured password encoder. Never serialized.
    full_name : str | None
        Display name.
    enabled : bool
        ``False`` once the account was soft-deleted.
    authorities : list[str]
        Role names granted to the account (see :class:`Role`).
    """

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(254), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    full_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    enabled: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=true()
    )
    authorities: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    __table_args__ = (UniqueConstraint("username", name="uq_users_username"),)

    @validates("username")
    def _normalize_username(self, key: str, value: str) -> str:
        """
        Trim the username and reject empty values.

        :raises ValueError: If the username is missing or only whitespace.
        """
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Username is required.")
        return value.strip()

    @validates("authorities")
    def _validate_authorities(self, key: str, value: list[str] | None) -> list[str]:
        """
        Keep only known role names, de-duplicated in first-seen order.

        :raises ValueError: On an unknown role name.
        """
        known = {r.value for r in Role}
        out: list[str] = []
        for item in value or []:
            name = item.value if isinstance(item, Role) else str(item)
            if name not in known:
                raise ValueError(f"Unknown authority: {name}")
            if name not in out:
                out.append(name)
        return out

    def has_authority(self, role: Role | str) -> bool:
        name = role.value if isinstance(role, Role) else role
        return name in (self.authorities or [])

    def __repr__(self) -> str:
        return f"<User id={self.id} username={self.username!r}>"
