"""Application settings with environment-based simple classes."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Final

from dotenv import load_dotenv

# Public selector env var (keep neutral name to avoid collisions)
ENV_VAR: Final[str] = "APP_ENV"  # 'development' | 'testing' | 'production'


# Load .env in development (no-op when the file is absent)
load_dotenv()


def env_bool(name: str, default: bool = False) -> bool:
    """Parse a boolean flag from an environment variable.

    Parameters
    ----------
    name: str
        Environment variable to inspect.
    default: bool, optional
        Value returned when the variable is unset. Defaults to ``False``.

    Returns
    -------
    bool
        ``True`` if the value resembles ``{"1", "true", "yes", "y", "on"}``
        ignoring case; otherwise ``False`` or ``default`` when missing.
    """
    val = os.getenv(name)
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "y", "on"}


def env_list(name: str, default: list[str]) -> list[str]:
    """Parse a comma-separated environment variable into a list of tokens."""
    val = os.getenv(name)
    if val is None:
        return list(default)
    return [item.strip() for item in val.split(",") if item.strip()]


class BaseConfig:
    """Base configuration shared across environments.

    Attributes
    ----------
    API_BASE_PREFIX: str
        Root path for registering API blueprints.
    SECRET_KEY: str
        Flask secret used for the signed Flask session (OAuth ``state``).
    JWT_SECRET_KEY: str
        Key used to sign session tokens.
    SESSION_DURATION_HOURS: int
        Fixed validity window of a session token.
    AUTH_COOKIE_NAME: str
        Cookie carrying the session token.
    API_KEY_HEADER: str
        Request header carrying a raw API key.
    SQLALCHEMY_DATABASE_URI: str
        Database connection string consumed by SQLAlchemy.
    DISCORD_*: str
        OAuth client, guild and bot settings for the identity provider and the
        role authority.
    DISCORD_API_TIMEOUT: float
        Upper bound (seconds) for every outbound Discord call.
    ORGANIZER_ROLE: str
        Role name granting elevated operations.
    ACHIEVEMENT_PREFIX: str
        Prefix applied to the external role created for an achievement.
    ENABLED_EVENTS: list[str]
        Events accepting registrations; the first one is the default.
    LOG_LEVEL: str
        Root logging verbosity (``INFO`` by default).
    CORS_ORIGINS: str
        Comma-separated list of allowed origins for CORS.

    Notes
    -----
    Values are primarily sourced from environment variables, enabling
    configuration without code changes.
    """

    API_BASE_PREFIX = "/api"

    # Secrets / security
    SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_ME")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET", "CHANGE_ME_JWT")
    JWT_ALGORITHM = "HS256"
    JWT_TOKEN_LOCATION = ["cookies"]
    JWT_COOKIE_CSRF_PROTECT = False
    JWT_COOKIE_SECURE = env_bool("JWT_COOKIE_SECURE", False)

    # Sessions & API keys
    SESSION_DURATION_HOURS = int(os.getenv("SESSION_DURATION_HOURS", "24"))
    AUTH_COOKIE_NAME = os.getenv("AUTH_COOKIE_NAME", "auth_token")
    API_KEY_HEADER = os.getenv("API_KEY_HEADER", "X-API-KEY")

    # DB
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///./tripreg.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)

    # Discord (identity provider + role authority + notifications)
    DISCORD_CLIENT_ID = os.getenv("DISCORD_CLIENT_ID", "")
    DISCORD_CLIENT_SECRET = os.getenv("DISCORD_CLIENT_SECRET", "")
    DISCORD_REDIRECT_URL = os.getenv(
        "DISCORD_REDIRECT_URL", "http://127.0.0.1:8000/api/v1/auth/discord/callback"
    )
    DISCORD_GUILD_ID = os.getenv("DISCORD_GUILD_ID", "")
    DISCORD_BOT_TOKEN = os.getenv("DISCORD_BOT_TOKEN", "")
    DISCORD_NOTIFICATIONS_CHANNEL_ID = os.getenv("DISCORD_NOTIFICATIONS_CHANNEL_ID", "")
    DISCORD_API_TIMEOUT = float(os.getenv("DISCORD_API_TIMEOUT", "5"))

    # Domain
    ORGANIZER_ROLE = os.getenv("ORGANIZER_ROLE", "g::t::orgs")
    ACHIEVEMENT_PREFIX = os.getenv("ACHIEVEMENT_PREFIX", "achievement::")
    ENABLED_EVENTS = env_list("ENABLED_EVENTS", ["g::t::7.0.0"])
    FRONTEND_URL = os.getenv("FRONTEND_URL", "http://127.0.0.1:4000/register")

    # Flask & JSON
    JSON_SORT_KEYS = False
    PROPAGATE_EXCEPTIONS = False

    # Logging & CORS
    ENABLE_CORS = env_bool("ENABLE_CORS", True)
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://127.0.0.1:4000")

    # Flask built-ins
    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    """Configuration tailored for local development."""

    DEBUG = env_bool("FLASK_DEBUG", True)
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)
    CORS_MAX_AGE = 600  # 10 minutes


class TestingConfig(BaseConfig):
    """Configuration for automated test runs.

    Notes
    -----
    - Forces ``TESTING`` mode and disables debug logs.
    - Uses an in-memory SQLite database unless ``TEST_DATABASE_URL`` is set.
    - Leaves every Discord setting blank so no network call can happen.
    """

    TESTING = True
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    SQLALCHEMY_ECHO = False
    PROPAGATE_EXCEPTIONS = True
    JWT_SECRET_KEY = "test-secret"
    DISCORD_GUILD_ID = ""
    DISCORD_BOT_TOKEN = ""
    DISCORD_NOTIFICATIONS_CHANNEL_ID = ""


class ProductionConfig(BaseConfig):
    """Configuration defaults for production deployments."""

    DEBUG = False
    SQLALCHEMY_ECHO = False
    PROPAGATE_EXCEPTIONS = False
    JWT_COOKIE_SECURE = env_bool("JWT_COOKIE_SECURE", True)


# Map names -> classes (simple, explicit)
CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Return the configuration class inferred from ``APP_ENV``.

    Returns
    -------
    type[BaseConfig]
        Class to pass to :meth:`flask.Config.from_object`.

    Notes
    -----
    Falls back to :class:`DevelopmentConfig` when ``APP_ENV`` is unset or
    unknown.
    """
    name = os.getenv(ENV_VAR, "development").strip().lower()
    return CONFIG_MAP.get(name, DevelopmentConfig)


@dataclass(frozen=True, slots=True)
class SessionSettings:
    """
    Read-only session settings shared by the issuer and the verifier.

    Built once per application from its config; nothing mutates it afterwards.

    :param secret: Signing secret for session tokens.
    :type secret: str
    :param duration: Fixed validity window ``D`` of a session token.
    :type duration: timedelta
    :param cookie_name: Cookie carrying the session token.
    :type cookie_name: str
    :param api_key_header: Header carrying a raw API key.
    :type api_key_header: str
    """

    secret: str
    duration: timedelta
    cookie_name: str = "auth_token"
    api_key_header: str = "X-API-KEY"

    @property
    def renew_threshold(self) -> timedelta:
        """Remaining lifetime under which a verified token gets renewed."""
        return self.duration / 2

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> SessionSettings:
        """Build settings from a Flask config mapping."""
        return cls(
            secret=str(config["JWT_SECRET_KEY"]),
            duration=timedelta(hours=int(config.get("SESSION_DURATION_HOURS", 24))),
            cookie_name=str(config.get("AUTH_COOKIE_NAME", "auth_token")),
            api_key_header=str(config.get("API_KEY_HEADER", "X-API-KEY")),
        )
