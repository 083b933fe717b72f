"""Repository package exposing persistence-layer access for the account models."""

from __future__ import annotations

from app.repositories.base import (
    BaseRepository,
    Pagination,
    apply_sorting,
    parse_sort_tokens,
)
from app.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "Pagination",
    "apply_sorting",
    "parse_sort_tokens",
    "UserRepository",
]
