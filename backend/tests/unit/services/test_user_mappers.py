"""Unit tests for the pure user mappers (no database access)."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
from app.models.user import User
from app.services.users.dto import CreateUserIn, UpdateUserIn
from app.services.users.mappers import UserEditMapper, UserViewMapper


@pytest.fixture()
def edit() -> UserEditMapper:
    return UserEditMapper()


@pytest.fixture()
def view() -> UserViewMapper:
    return UserViewMapper()


def _user(**kw) -> User:
    defaults = dict(
        id=5,
        username="mapped",
        password_hash="hash",
        full_name="Map Ped",
        enabled=True,
        authorities=["USER_ADMIN"],
    )
    defaults.update(kw)
    return User(**defaults)


class TestUserEditMapper:
    def test_create_builds_enabled_entity_without_hash(self, edit):
        dto = CreateUserIn(
            username="new",
            password="pw",
            re_password="pw",
            full_name="New User",
            authorities=("BOOK_ADMIN",),
        )
        user = edit.create(dto)
        assert user.username == "new"
        assert user.full_name == "New User"
        assert user.authorities == ["BOOK_ADMIN"]
        assert user.enabled is True
        assert user.password_hash is None

    def test_update_copies_only_provided_fields(self, edit):
        user = _user()
        edit.update(UpdateUserIn(full_name="Renamed"), user)
        assert user.full_name == "Renamed"
        assert user.authorities == ["USER_ADMIN"]

        edit.update(UpdateUserIn(authorities=()), user)
        assert user.authorities == []
        assert user.username == "mapped"
        assert user.password_hash == "hash"


class TestUserViewMapper:
    def test_to_user_view(self, view):
        ts = datetime(2024, 1, 2, tzinfo=timezone.utc)
        v = view.to_user_view(_user(created_at=ts, updated_at=ts))
        assert v.id == 5
        assert v.username == "mapped"
        assert v.authorities == ("USER_ADMIN",)
        assert v.created_at == ts
        assert not hasattr(v, "password_hash")

    def test_to_user_views_keeps_order(self, view):
        users = [_user(id=i, username=f"u{i}") for i in (3, 1, 2)]
        assert [v.id for v in view.to_user_views(users)] == [3, 1, 2]
        assert view.to_user_views([]) == []

    def test_to_user_details_hides_hash_in_repr(self, view):
        details = view.to_user_details(_user(enabled=False))
        assert details.password_hash == "hash"
        assert details.enabled is False
        assert "hash" not in repr(details)
