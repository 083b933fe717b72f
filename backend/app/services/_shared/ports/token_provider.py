"""Access-token port plus an in-memory double for service tests."""

from __future__ import annotations

from datetime import timedelta
from itertools import count
from typing import Any, Protocol


class TokenProvider(Protocol):
    def create_access_token(
        self,
        *,
        identity: str,
        additional_claims: dict[str, Any] | None = None,
        expires_delta: timedelta | None = None,
    ) -> str:
        """Sign a token for ``identity`` that expires after ``expires_delta``."""
        ...

    def decode(self, token: str) -> dict[str, Any]:
        """Return the claims of a token this provider issued."""
        ...


class StubTokenProvider:
    """Issue readable tokens (``access.<identity>.<n>``) and remember their claims."""

    def __init__(self) -> None:
        self._counter = count(1)
        self._claims: dict[str, dict[str, Any]] = {}

    def create_access_token(
        self,
        *,
        identity: str,
        additional_claims: dict[str, Any] | None = None,
        expires_delta: timedelta | None = None,
    ) -> str:
        token = f"access.{identity}.{next(self._counter)}"
        claims: dict[str, Any] = {"sub": identity, "type": "access", **(additional_claims or {})}
        if expires_delta is not None:
            claims["ttl"] = int(expires_delta.total_seconds())
        self._claims[token] = claims
        return token

    def decode(self, token: str) -> dict[str, Any]:
        return self._claims[token]
