"""User account endpoints."""

from __future__ import annotations

from flask import Blueprint, request

from app.api.deps import (
    get_user_service,
    json_response,
    parse_pagination,
    require_role,
    service_context,
)
from app.core.errors import APIError
from app.models.user import Role
from app.schemas import (
    CreateUserSchema,
    SearchUsersSchema,
    UpdateUserSchema,
    UserViewSchema,
    build_meta,
)

bp = Blueprint("users", __name__)

user_schema = UserViewSchema()
user_list_schema = UserViewSchema(many=True)
create_schema = CreateUserSchema()
update_schema = UpdateUserSchema()
search_schema = SearchUsersSchema()


@bp.post("")
@require_role(Role.USER_ADMIN)
def create_user():
    """Create an account on behalf of an administrator."""

    dto = create_schema.load(request.get_json(silent=True) or {})
    view = get_user_service().create(dto, service_context())
    return json_response({"data": user_schema.dump(view)}, status=201)


@bp.put("/<int:user_id>")
@require_role(Role.USER_ADMIN)
def update_user(user_id: int):
    """Update profile fields of an account."""

    dto = update_schema.load(request.get_json(silent=True) or {})
    view = get_user_service().update(user_id, dto, service_context())
    return json_response({"data": user_schema.dump(view)})


@bp.delete("/<int:user_id>")
@require_role(Role.USER_ADMIN)
def delete_user(user_id: int):
    """Disable an account; the row is kept."""

    view = get_user_service().delete(user_id, service_context())
    return json_response({"data": user_schema.dump(view)})


@bp.get("/<int:user_id>")
@require_role(Role.USER_ADMIN)
def get_user(user_id: int):
    """Return a single account."""

    view = get_user_service().get_user(user_id)
    return json_response({"data": user_schema.dump(view)})


@bp.post("/search")
@require_role(Role.USER_ADMIN)
def search_users():
    """Search accounts by id, username or full name."""

    dto = search_schema.load(request.get_json(silent=True) or {})
    pagination = parse_pagination()
    views = get_user_service().search_users(dto, pagination)
    meta = build_meta(page=pagination.page, limit=pagination.limit, count=len(views))
    return json_response({"data": user_list_schema.dump(views), "meta": meta})


@bp.get("/exists")
def username_exists():
    """Report whether ``?username=`` is already taken."""

    username = (request.args.get("username") or "").strip()
    if not username:
        raise APIError("Query parameter 'username' is required", status_code=400)
    exists = get_user_service().username_exists(username)
    return json_response({"data": {"username": username, "exists": exists}})
