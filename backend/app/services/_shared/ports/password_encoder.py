from __future__ import annotations

from typing import Protocol


class PasswordEncoder(Protocol):
    """
    Port for one-way password hashing.

    Implementations must never be invertible: ``encode`` output is stored,
    plaintext is not.
    """

    def encode(self, raw_password: str) -> str: ...

    def matches(self, raw_password: str, encoded_password: str) -> bool: ...
