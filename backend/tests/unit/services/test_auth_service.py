# tests/unit/services/test_auth_service.py
from __future__ import annotations

from datetime import timedelta

import pytest
from app.infra.security.werkzeug_password_encoder import WerkzeugPasswordEncoder
from app.services._shared.errors import AuthenticationError, ServiceError
from app.services._shared.ports.token_provider import StubTokenProvider
from app.services.auth.dto import AuthTokenConfig, LoginIn, LoginOut
from app.services.auth.service import AuthService
from app.services.users.service import UserService
from tests.factories.user import DEFAULT_PASSWORD, UserFactory


# ------------------------------ Fixtures ---------------------------------- #
@pytest.fixture()
def service() -> AuthService:
    """
    Build an AuthService wired to the real account lookup and a stub token provider.
    """
    encoder = WerkzeugPasswordEncoder(method="pbkdf2:sha256:1000")
    return AuthService(
        user_details_service=UserService(password_encoder=encoder),
        password_encoder=encoder,
        token_provider=StubTokenProvider(),
        token_cfg=AuthTokenConfig(access_expires=timedelta(minutes=5)),
    )


# -------------------------------- Tests ----------------------------------- #
def test_login_issues_access_token(service, session):
    """Login returns an access token whose claims carry the identity and roles."""
    user = UserFactory(username="reader", authorities=["AUTHOR_ADMIN"])
    session.commit()

    out = service.login(LoginIn(username="reader", password=DEFAULT_PASSWORD))

    assert isinstance(out, LoginOut)
    assert out.access_token.startswith(f"access.{user.id}.")
    assert out.expires_in == 300
    assert out.user_id == user.id
    assert out.authorities == ("AUTHOR_ADMIN",)

    claims = service.tokens.decode(out.access_token)
    assert claims["sub"] == str(user.id)
    assert claims["username"] == "reader"
    assert claims["authorities"] == ["AUTHOR_ADMIN"]
    assert claims["ttl"] == 300


def test_login_unknown_user(service):
    with pytest.raises(AuthenticationError, match="Invalid credentials"):
        service.login(LoginIn(username="missing", password="x"))


def test_login_wrong_password(service, session):
    UserFactory(username="wrongpw")
    session.commit()
    with pytest.raises(AuthenticationError):
        service.login(LoginIn(username="wrongpw", password="not-it"))


def test_login_disabled_account(service, session):
    """Soft-deleted accounts keep their row but can no longer log in."""
    UserFactory(username="disabled", enabled=False)
    session.commit()
    with pytest.raises(ServiceError):
        service.login(LoginIn(username="disabled", password=DEFAULT_PASSWORD))


def test_failed_login_is_logged(service, caplog):
    caplog.set_level("WARNING", logger="app.services.auth.service")
    with pytest.raises(AuthenticationError):
        service.login(LoginIn(username="nobody", password="x"))
    assert any(r.getMessage().startswith("auth.login_failed") for r in caplog.records)
