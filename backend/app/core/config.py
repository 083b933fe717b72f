"""Settings for the accounts service.

Values are read from the process environment (a local ``.env`` is loaded
first) into plain classes; ``APP_ENV`` picks which class the factory uses.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from datetime import timedelta
from typing import Final

from dotenv import load_dotenv

ENV_VAR: Final[str] = "APP_ENV"
PLACEHOLDER_SECRETS: Final[frozenset[str]] = frozenset({"CHANGE_ME", "CHANGE_ME_JWT"})

load_dotenv()


def env_bool(name: str, default: bool = False) -> bool:
    """Read ``name`` as a flag.

    ``1``, ``true``, ``yes``, ``y`` and ``on`` (any case, surrounding blanks
    ignored) are true; any other value is false; ``default`` applies only when
    the variable is unset.
    """
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    return int(raw) if raw else default


class BaseConfig:
    """Settings shared by every environment.

    ``SECRET_KEY`` and ``JWT_SECRET_KEY`` default to placeholders that
    :func:`check_secrets` rejects outside debug and testing.
    ``JWT_ACCESS_TOKEN_MINUTES`` sets the lifetime of login tokens.
    ``PASSWORD_HASH_METHOD`` is handed to
    :func:`werkzeug.security.generate_password_hash`. ``CORS_ORIGINS`` is a
    comma-separated origin list, and ``USE_PROXYFIX`` trusts one layer of
    ``X-Forwarded-*`` headers.
    """

    API_BASE_PREFIX = "/api"

    SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_ME")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "CHANGE_ME_JWT")
    JWT_ACCESS_TOKEN_MINUTES = env_int("JWT_ACCESS_TOKEN_MINUTES", 60)
    # flask-jwt-extended falls back to this for tokens minted without expires_delta.
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(minutes=JWT_ACCESS_TOKEN_MINUTES)

    PASSWORD_HASH_METHOD = os.getenv("PASSWORD_HASH_METHOD", "scrypt")

    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///./accounts.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO")

    JSON_SORT_KEYS = False
    PROPAGATE_EXCEPTIONS = False

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173")
    CORS_MAX_AGE = 600
    USE_PROXYFIX = env_bool("USE_PROXYFIX")

    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    DEBUG = env_bool("FLASK_DEBUG", True)


class TestingConfig(BaseConfig):
    """Test runs.

    In-memory SQLite unless ``TEST_DATABASE_URL`` points elsewhere, and a
    cheap pbkdf2 round count so hashing does not dominate the suite.
    """

    TESTING = True
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    PASSWORD_HASH_METHOD = "pbkdf2:sha256:1000"
    JWT_SECRET_KEY = "testing-jwt-secret-key-with-enough-length"
    PROPAGATE_EXCEPTIONS = True


class ProductionConfig(BaseConfig):
    SQLALCHEMY_ECHO = False


CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Config class named by ``APP_ENV``; unknown or missing means development."""
    env = os.getenv(ENV_VAR, "development").strip().lower()
    return CONFIG_MAP.get(env, DevelopmentConfig)


def check_secrets(config: Mapping[str, object]) -> None:
    """Refuse to run a non-debug, non-testing app on placeholder secrets.

    :param config: Loaded Flask config.
    :raises RuntimeError: If ``SECRET_KEY`` or ``JWT_SECRET_KEY`` is a placeholder.
    """
    if config.get("DEBUG") or config.get("TESTING"):
        return
    weak = [k for k in ("SECRET_KEY", "JWT_SECRET_KEY") if config.get(k) in PLACEHOLDER_SECRETS]
    if weak:
        raise RuntimeError(f"Set real values for {', '.join(weak)} before running in production.")
