# app/infra/jwt/flask_jwt_token_provider.py
from __future__ import annotations

from datetime import timedelta
from typing import Any

from flask_jwt_extended import create_access_token, decode_token

from app.services._shared.ports import TokenProvider


class JWTTokenProvider(TokenProvider):
    """
    :class:`TokenProvider` backed by flask-jwt-extended.

    Signing key, algorithm and default lifetime come from the app config
    (``JWT_SECRET_KEY`` and friends), so every call needs an app context.
    """

    def create_access_token(
        self,
        *,
        identity: str,
        additional_claims: dict[str, Any] | None = None,
        expires_delta: timedelta | None = None,
    ) -> str:
        token: str = create_access_token(
            identity=identity,
            additional_claims=dict(additional_claims or {}),
            expires_delta=expires_delta,
        )
        return token

    def decode(self, token: str) -> dict[str, Any]:
        """Verify ``token`` and return its claims (``sub``, ``exp``, ``authorities``...)."""
        claims: dict[str, Any] = decode_token(token)
        return claims
