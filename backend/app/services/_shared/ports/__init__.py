"""
app.services._shared.ports
==========================

*Ports* (hexagonal interfaces) the service layer depends on.

Modules
-------
- :mod:`password_encoder`:
    :class:`~.PasswordEncoder`: one-way hashing and verification of passwords.
- :mod:`token_provider`:
    :class:`~.TokenProvider`: access-token issuing and decoding.
- :mod:`user_details`:
    :class:`~.UserDetailsService` and :class:`~.UserDetails`: credential
    lookup consumed by the login flow.

Concrete adapters live under ``app.infra``.
"""

from __future__ import annotations

from .password_encoder import PasswordEncoder
from .token_provider import StubTokenProvider, TokenProvider
from .user_details import UserDetails, UserDetailsService

__all__ = [
    "PasswordEncoder",
    "TokenProvider",
    "StubTokenProvider",
    "UserDetails",
    "UserDetailsService",
]
