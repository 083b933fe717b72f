"""Authentication endpoints using the service layer."""

from __future__ import annotations

from flask import Blueprint, request

from app.api.deps import (
    get_auth_service,
    get_user_service,
    json_response,
    service_context,
)
from app.schemas import LoginSchema, RegisterSchema, TokenResponseSchema, UserViewSchema

bp = Blueprint("auth", __name__)

register_schema = RegisterSchema()
login_schema = LoginSchema()
user_schema = UserViewSchema()
token_schema = TokenResponseSchema()


@bp.post("/register")
def register():
    """Register a new account without authorities and return it."""

    dto = register_schema.load(request.get_json(silent=True) or {})
    view = get_user_service().create(dto, service_context())
    return json_response({"data": user_schema.dump(view)}, status=201)


@bp.post("/login")
def login():
    """Authenticate credentials and issue an access token."""

    dto = login_schema.load(request.get_json(silent=True) or {})
    out = get_auth_service().login(dto)
    return json_response({"data": token_schema.dump(out)})
