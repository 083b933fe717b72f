"""User resource schemas."""

from __future__ import annotations

from typing import Any

from marshmallow import EXCLUDE, Schema, fields, post_load, validate

from app.models.user import Role
from app.services.users.dto import CreateUserIn, SearchUsersIn, UpdateUserIn

_authority = fields.String(validate=validate.OneOf([r.value for r in Role]))


class CreateUserSchema(Schema):
    """Payload for creating an account.

    ``password``/``rePassword`` equality is a business rule checked by the
    service, not here.
    """

    username = fields.String(required=True, validate=validate.Length(min=1, max=254))
    full_name = fields.String(
        data_key="fullName", load_default=None, validate=validate.Length(max=255)
    )
    password = fields.String(required=True, load_only=True, validate=validate.Length(min=1, max=128))
    re_password = fields.String(
        data_key="rePassword", required=True, load_only=True, validate=validate.Length(max=128)
    )
    authorities = fields.List(_authority, load_default=list)

    @post_load
    def make_dto(self, data: dict[str, Any], **_: Any) -> CreateUserIn:
        return CreateUserIn(
            username=data["username"],
            password=data["password"],
            re_password=data["re_password"],
            full_name=data.get("full_name"),
            authorities=tuple(data.get("authorities") or ()),
        )


class RegisterSchema(CreateUserSchema):
    """Self-registration: same as creation, but authorities cannot be requested."""

    class Meta:
        exclude = ("authorities",)


class UpdateUserSchema(Schema):
    """Payload for profile updates; omitted fields are left unchanged."""

    full_name = fields.String(
        data_key="fullName", load_default=None, validate=validate.Length(max=255)
    )
    authorities = fields.List(_authority, load_default=None)

    @post_load
    def make_dto(self, data: dict[str, Any], **_: Any) -> UpdateUserIn:
        authorities = data.get("authorities")
        return UpdateUserIn(
            full_name=data.get("full_name"),
            authorities=tuple(authorities) if authorities is not None else None,
        )


class SearchUsersSchema(Schema):
    """Search criteria body for ``POST /users/search``."""

    class Meta:
        unknown = EXCLUDE

    id = fields.Integer(load_default=None)
    username = fields.String(load_default=None, validate=validate.Length(max=254))
    full_name = fields.String(
        data_key="fullName", load_default=None, validate=validate.Length(max=255)
    )

    @post_load
    def make_dto(self, data: dict[str, Any], **_: Any) -> SearchUsersIn:
        return SearchUsersIn(**data)


class UserViewSchema(Schema):
    """Public representation of an account; never includes the password hash."""

    id = fields.Integer(required=True)
    username = fields.String(required=True)
    full_name = fields.String(data_key="fullName", allow_none=True)
    enabled = fields.Boolean(required=True)
    authorities = fields.List(fields.String())
    created_at = fields.DateTime(data_key="createdAt", allow_none=True)
    updated_at = fields.DateTime(data_key="updatedAt", allow_none=True)
