"""CORS configuration helper for API resources."""

from __future__ import annotations

from flask import Flask
from flask_cors import CORS


def init_app(app: Flask) -> None:
    """Configure CORS for API endpoints based on application config.

    Parameters
    ----------
    app: flask.Flask
        Application whose ``ENABLE_CORS``, ``CORS_ORIGINS`` and ``CORS_MAX_AGE``
        settings are consulted.

    Notes
    -----
    The session travels in a cookie, so credentials are only supported for an
    explicit origin list. A blank value or ``"*"`` allows any origin without
    credentials.
    """
    if not app.config.get("ENABLE_CORS", True):
        return

    raw_origins = app.config.get("CORS_ORIGINS", "")
    origins = [o.strip() for o in raw_origins.split(",") if o.strip()]
    wildcard = len(origins) == 0 or origins == ["*"]

    CORS(
        app,
        resources={r"/api/*": {"origins": "*" if wildcard else origins}},
        supports_credentials=not wildcard,
        expose_headers=["X-Request-ID"],
        max_age=app.config.get("CORS_MAX_AGE", 600),
    )
