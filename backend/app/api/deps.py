"""Request-scoped helpers shared by the v1 blueprints."""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar

from flask import Response, current_app, jsonify, request
from flask_jwt_extended import get_jwt, get_jwt_identity, verify_jwt_in_request
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import InvalidTokenError

from app.core.errors import Forbidden
from app.models.user import Role
from app.schemas.common import PaginationQuerySchema
from app.services._shared.base import ServiceContext
from app.services._shared.dto import PaginationIn

if TYPE_CHECKING:
    from app.services.auth.service import AuthService
    from app.services.users.service import UserService

log = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

_pagination_schemas: dict[tuple[int, int], PaginationQuerySchema] = {}


def parse_pagination(default_limit: int = 20, max_limit: int = 200) -> PaginationIn:
    """Read ``page``, ``limit`` and ``sort`` from the query string.

    :raises marshmallow.ValidationError: On non-numeric or out-of-range values.
    """
    key = (default_limit, max_limit)
    schema = _pagination_schemas.get(key)
    if schema is None:
        schema = _pagination_schemas[key] = PaginationQuerySchema(
            default_limit=default_limit, max_limit=max_limit
        )
    args = schema.load(request.args)
    return PaginationIn(page=args["page"], limit=args["limit"], sort=args["sort"])


def require_role(required: Role) -> Callable[[F], F]:
    """Reject the call unless a valid token grants ``required``.

    A missing or broken token surfaces as 401 through the JWT loaders; a
    valid token without the authority raises :class:`Forbidden` (403).
    """

    def decorator(view: F) -> F:
        @functools.wraps(view)
        def guarded(*args: Any, **kwargs: Any):
            verify_jwt_in_request()
            granted = get_jwt().get("authorities") or ()
            if required.value not in granted:
                raise Forbidden("Insufficient authority")
            return view(*args, **kwargs)

        return guarded  # type: ignore[return-value]

    return decorator


def current_actor_id() -> int | None:
    """Id of the caller when a usable token was sent, else ``None``.

    A malformed or expired token on a public route makes the caller
    anonymous instead of failing the request.
    """
    try:
        verify_jwt_in_request(optional=True)
    except (JWTExtendedException, InvalidTokenError):
        log.debug("auth.token_ignored", exc_info=True)
        return None
    identity = get_jwt_identity()
    if identity is None:
        return None
    try:
        return int(identity)
    except (TypeError, ValueError):
        return None


def service_context() -> ServiceContext:
    return ServiceContext(actor_id=current_actor_id())


def _extension(name: str) -> Any:
    service = current_app.extensions.get(name)
    if service is None:
        raise RuntimeError(f"{name!r} is not configured on this application")
    return service


def get_user_service() -> UserService:
    return _extension("user_service")


def get_auth_service() -> AuthService:
    return _extension("auth_service")


def json_response(payload: Any, *, status: int = 200) -> Response:
    """``jsonify`` with an explicit status code."""
    response = jsonify(payload)
    response.status_code = status
    return response
