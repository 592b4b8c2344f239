"""API v1 blueprint package bundling versioned routes."""

from __future__ import annotations

from flask import Blueprint

API_VERSION = "v1"

# Import blueprints *only here* to keep imports localized and avoid cycles.
from .achievements import bp as achievements_bp  # noqa: E402
from .api_keys import bp as api_keys_bp  # noqa: E402
from .auth import bp as auth_bp  # noqa: E402
from .health import bp as health_bp  # noqa: E402
from .me import bp as me_bp  # noqa: E402
from .registrations import bp as registrations_bp  # noqa: E402

# Each tuple: (blueprint, url_prefix_relative_to_version)
REGISTRY: list[tuple[Blueprint, str]] = [
    (health_bp, ""),  # -> /api/v1/health
    (auth_bp, "/auth"),  # -> /api/v1/auth
    (me_bp, ""),  # -> /api/v1/me
    (registrations_bp, ""),  # -> /api/v1/register, /history, /registrations
    (achievements_bp, "/achievements"),
    (api_keys_bp, "/api-keys"),
]
