"""Centralized JSON (RFC 7807) error handling for the API.

Every error leaving the application is rendered as
``application/problem+json`` with a stable ``code`` and the ``request_id``
of the failing request. Service errors map to 400 ``validation_error``,
401 ``unauthorized``, 404 ``not_found`` and 409 ``conflict``; JWT failures
to 401; marshmallow errors to 422 ``unprocessable_entity``; database
errors to 409 or 503; anything else to 500.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from flask import Flask, Response, has_request_context, jsonify, request
from marshmallow import ValidationError as SchemaValidationError
from sqlalchemy.exc import IntegrityError, OperationalError
from werkzeug.exceptions import HTTPException

from app.core.extensions import jwt
from app.core.logger import ensure_request_id
from app.services._shared.errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ServiceError,
    ValidationError,
)

log = logging.getLogger(__name__)

PROBLEM_MIMETYPE = "application/problem+json"

_STATUS_CODES = {
    400: "bad_request",
    401: "unauthorized",
    403: "forbidden",
    404: "not_found",
    405: "method_not_allowed",
    409: "conflict",
    415: "unsupported_media_type",
    422: "unprocessable_entity",
    500: "internal_server_error",
    503: "service_unavailable",
}


def _code_for(status: int) -> str:
    return _STATUS_CODES.get(status, "error")


def problem_body(
    *, status: int, code: str, message: str, details: dict[str, Any] | None = None
) -> dict[str, Any]:
    """
    Assemble the problem document for one failure.

    Besides the RFC 7807 members the body carries ``code``, which clients
    switch on, and ``request_id`` so a report can be matched to the logs.
    """
    body: dict[str, Any] = {
        "type": "about:blank",
        "title": HTTPStatus(status).phrase,
        "status": status,
        "detail": message,
        "instance": request.path if has_request_context() else None,
        "code": code,
        "request_id": ensure_request_id(),
    }
    if details:
        body["details"] = details
    return body


def problem_response(
    status: int,
    message: str,
    *,
    code: str | None = None,
    details: dict[str, Any] | None = None,
    exc_info: bool = False,
) -> tuple[Response, int]:
    """Log the failure and return a ``(response, status)`` pair.

    4xx are logged as warnings without traceback, 5xx as errors.
    """
    status = int(status)
    code = code or _code_for(status)
    body = problem_body(status=status, code=code, message=message, details=details)
    level = logging.ERROR if status >= 500 else logging.WARNING
    log.log(
        level,
        "http.error: code=%s status=%s detail=%s",
        code,
        status,
        message,
        exc_info=exc_info,
    )
    resp = jsonify(body)
    resp.mimetype = PROBLEM_MIMETYPE
    return resp, status


class APIError(Exception):
    """
    An error the API reports to its client as a problem document.

    Subclasses fix :attr:`status_code`, :attr:`code` and the default message;
    any of them can still be overridden per instance.

    :param message: Text placed in the problem's ``detail`` member.
    :param status_code: HTTP status, defaults to the class value.
    :param code: snake_case identifier, defaults to the class value.
    :param details: Extra structured data rendered under ``details``.
    """

    status_code: int = HTTPStatus.BAD_REQUEST
    code: str = "bad_request"
    default_message: str = "Bad request"

    def __init__(
        self,
        message: str | None = None,
        *,
        status_code: int | None = None,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)
        if status_code is not None:
            self.status_code = int(status_code)
        if code is not None:
            self.code = code
        self.details = details or {}


class NotFound(APIError):
    status_code = HTTPStatus.NOT_FOUND
    code = "not_found"
    default_message = "Resource not found"


class Conflict(APIError):
    status_code = HTTPStatus.CONFLICT
    code = "conflict"
    default_message = "Conflict"


class Unauthorized(APIError):
    status_code = HTTPStatus.UNAUTHORIZED
    code = "unauthorized"
    default_message = "Unauthorized"


class Forbidden(APIError):
    """The caller is authenticated but lacks the required authority."""

    status_code = HTTPStatus.FORBIDDEN
    code = "forbidden"
    default_message = "Forbidden"


def from_service_error(exc: ServiceError) -> APIError:
    """
    Translate a domain error raised by the service layer into an :class:`APIError`.

    :param exc: Error raised by a service or repository.
    :type exc: ServiceError
    :returns: HTTP-aware error carrying the same message.
    :rtype: APIError
    """
    if isinstance(exc, NotFoundError):
        return NotFound(str(exc))
    if isinstance(exc, ConflictError):
        return Conflict(str(exc))
    if isinstance(exc, AuthenticationError):
        return Unauthorized(str(exc))
    if isinstance(exc, ValidationError):
        return APIError(str(exc), status_code=HTTPStatus.BAD_REQUEST, code="validation_error")
    return APIError(str(exc), status_code=HTTPStatus.BAD_REQUEST, code="bad_request")


def _register_jwt_callbacks() -> None:
    """Render flask-jwt-extended failures as problems instead of ``{"msg": ...}``."""

    @jwt.unauthorized_loader
    def _missing_token(reason: str):
        return problem_response(HTTPStatus.UNAUTHORIZED, reason)

    @jwt.invalid_token_loader
    def _invalid_token(reason: str):
        return problem_response(HTTPStatus.UNAUTHORIZED, reason)

    @jwt.expired_token_loader
    def _expired_token(_header: dict, _payload: dict):
        return problem_response(HTTPStatus.UNAUTHORIZED, "Token has expired")


def init_app(app: Flask) -> None:
    """Attach the JSON error handlers to ``app``."""

    _register_jwt_callbacks()

    @app.errorhandler(APIError)
    def handle_api_error(err: APIError):
        return problem_response(
            err.status_code, err.message, code=err.code, details=err.details or None
        )

    @app.errorhandler(ServiceError)
    def handle_service_error(err: ServiceError):
        return handle_api_error(from_service_error(err))

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        status = int(err.code or HTTPStatus.INTERNAL_SERVER_ERROR)
        if status == HTTPStatus.NOT_FOUND:
            message = f"Route '{request.path}' not found"
        else:
            message = (err.description or _code_for(status).replace("_", " ")).strip()
        return problem_response(status, message)

    @app.errorhandler(SchemaValidationError)
    def handle_schema_error(err: SchemaValidationError):
        return problem_response(
            HTTPStatus.UNPROCESSABLE_ENTITY,
            "Validation failed",
            details={"errors": err.messages},
        )

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(err: IntegrityError):
        return problem_response(HTTPStatus.CONFLICT, "Resource conflict", exc_info=True)

    @app.errorhandler(OperationalError)
    def handle_operational_error(err: OperationalError):
        return problem_response(
            HTTPStatus.SERVICE_UNAVAILABLE, "Service temporarily unavailable", exc_info=True
        )

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        return problem_response(
            HTTPStatus.INTERNAL_SERVER_ERROR, "Unexpected error", exc_info=True
        )
