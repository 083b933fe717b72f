# app/services/auth/service.py
from __future__ import annotations

import logging

from app.services._shared.errors import AuthenticationError, UsernameNotFoundError
from app.services._shared.ports.password_encoder import PasswordEncoder
from app.services._shared.ports.token_provider import TokenProvider
from app.services._shared.ports.user_details import UserDetailsService
from app.services.auth.dto import AuthTokenConfig, LoginIn, LoginOut

log = logging.getLogger(__name__)


class AuthService:
    """
    Login: verify credentials and issue an access token.

    Credentials come from any :class:`UserDetailsService`; the service never
    reads the account store directly.
    """

    def __init__(
        self,
        *,
        user_details_service: UserDetailsService,
        password_encoder: PasswordEncoder,
        token_provider: TokenProvider,
        token_cfg: AuthTokenConfig | None = None,
    ) -> None:
        """
        :param user_details_service: Credential lookup.
        :param password_encoder: Verifies raw passwords against stored hashes.
        :param token_provider: Adapter for issuing JWTs.
        :param token_cfg: Access token lifetime.
        """
        self.user_details = user_details_service
        self.password_encoder = password_encoder
        self.tokens = token_provider
        self.cfg = token_cfg or AuthTokenConfig()

    def login(self, dto: LoginIn) -> LoginOut:
        """
        Authenticate ``dto`` and issue an access token.

        Unknown usernames, wrong passwords and disabled accounts all fail with
        the same message so callers cannot probe which one applied.

        :param dto: Login input.
        :returns: Access token and identity summary.
        :raises AuthenticationError: If the credentials are not accepted.
        """
        try:
            details = self.user_details.load_user_by_username(dto.username)
        except UsernameNotFoundError:
            log.warning("auth.login_failed: unknown user", extra={"username": dto.username})
            raise AuthenticationError() from None

        if not self.password_encoder.matches(dto.password, details.password_hash):
            log.warning("auth.login_failed: bad password", extra={"username": dto.username})
            raise AuthenticationError()

        if not details.enabled:
            log.warning("auth.login_failed: disabled", extra={"username": dto.username})
            raise AuthenticationError()

        access = self.tokens.create_access_token(
            identity=str(details.id),
            additional_claims={
                "username": details.username,
                "authorities": list(details.authorities),
            },
            expires_delta=self.cfg.access_expires,
        )
        log.info("auth.login", extra={"user_id": details.id})
        return LoginOut(
            access_token=access,
            expires_in=int(self.cfg.access_expires.total_seconds()),
            user_id=details.id,
            username=details.username,
            authorities=details.authorities,
        )
