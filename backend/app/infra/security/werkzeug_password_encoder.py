# app/infra/security/werkzeug_password_encoder.py
from __future__ import annotations

from dataclasses import dataclass

from werkzeug.security import check_password_hash, generate_password_hash

from app.services._shared.ports import PasswordEncoder


@dataclass(frozen=True, slots=True)
class WerkzeugPasswordEncoder(PasswordEncoder):
    """
    Salted one-way hashing via :mod:`werkzeug.security`.

    :param method: Werkzeug method string (``"scrypt"``, ``"pbkdf2:sha256:600000"``...).
    :type method: str
    :param salt_length: Salt size in characters.
    :type salt_length: int
    """

    method: str = "scrypt"
    salt_length: int = 16

    def encode(self, raw_password: str) -> str:
        if not isinstance(raw_password, str) or not raw_password:
            raise ValueError("Password must be a non-empty string.")
        return generate_password_hash(raw_password, method=self.method, salt_length=self.salt_length)

    def matches(self, raw_password: str, encoded_password: str) -> bool:
        if not encoded_password:
            return False
        # ``check_password_hash`` is untyped; coerce for mypy.
        return bool(check_password_hash(encoded_password, raw_password))
