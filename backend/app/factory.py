"""Application factory.

Extensions come first, then the account services, then the HTTP surface
(blueprints and error handlers) and finally the ``flask`` CLI commands.
"""

from __future__ import annotations

from datetime import timedelta

from flask import Flask

from app.core.config import BaseConfig, check_secrets, get_config
from app.core.logger import configure_logging


def _init_services(app: Flask) -> None:
    """Publish one shared ``UserService`` and ``AuthService`` on ``app.extensions``."""
    from app.infra.jwt.flask_jwt_token_provider import JWTTokenProvider
    from app.infra.security.werkzeug_password_encoder import WerkzeugPasswordEncoder
    from app.services.auth import AuthService, AuthTokenConfig
    from app.services.users import UserService

    encoder = WerkzeugPasswordEncoder(method=app.config.get("PASSWORD_HASH_METHOD", "scrypt"))
    users = UserService(password_encoder=encoder)
    lifetime = app.config.get("JWT_ACCESS_TOKEN_EXPIRES") or timedelta(hours=1)

    app.extensions["user_service"] = users
    app.extensions["auth_service"] = AuthService(
        user_details_service=users,
        password_encoder=encoder,
        token_provider=JWTTokenProvider(),
        token_cfg=AuthTokenConfig(access_expires=lifetime),
    )


def create_app(
    config: str | type[BaseConfig] | object | None = None,
    *,
    instance_relative_config: bool = True,
    instance_config_filename: str = "config.py",
) -> Flask:
    """Create the accounts application.

    :param config: Config class, import path or object. ``None`` selects the
        class named by ``APP_ENV``.
    :param instance_relative_config: Also read ``instance/<instance_config_filename>``.
    :param instance_config_filename: Optional per-deployment overrides file.
    :raises RuntimeError: When a production config still carries placeholder secrets.
    """
    app = Flask(__name__, instance_relative_config=instance_relative_config)
    app.config.from_object(config if config is not None else get_config())
    if instance_relative_config and instance_config_filename:
        app.config.from_pyfile(instance_config_filename, silent=True)
    check_secrets(app.config)
    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    from app import api, cli
    from app.core import cors, errors, extensions, logger, proxy

    proxy.init_app(app)
    extensions.init_app(app)
    logger.init_app(app)
    cors.init_app(app)
    _init_services(app)
    api.init_app(app)
    errors.init_app(app)
    cli.init_app(app)

    return app
