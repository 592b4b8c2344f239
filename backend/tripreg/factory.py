"""Application factory wiring Flask extensions, services and blueprints."""

from __future__ import annotations

from flask import Flask

from tripreg.core.config import BaseConfig, SessionSettings, get_config
from tripreg.core.logger import configure_logging, init_app as init_logging


def create_app(
    config: str | type[BaseConfig] | object | None = None,
    *,
    instance_relative_config: bool = True,
    instance_config_filename: str = "config.py",
) -> Flask:
    """Build and configure the Flask application."""

    app = Flask(__name__, instance_relative_config=instance_relative_config)

    app.config.from_object(get_config() if config is None else config)
    if instance_relative_config and instance_config_filename:
        app.config.from_pyfile(instance_config_filename, silent=True)

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    from tripreg.core import extensions

    extensions.init_app(app)

    init_logging(app)

    from tripreg.core import cors

    cors.init_app(app)

    # Session settings are built once and injected; nothing reads the secret
    # from app.config afterwards.
    settings = SessionSettings.from_config(app.config)

    from tripreg.infra.jwt import flask_jwt_token_provider

    flask_jwt_token_provider.init_app(app, extensions.jwt, settings)

    from tripreg.container import EXTENSION_KEY, build_services

    app.extensions[EXTENSION_KEY] = build_services(app.config, settings)

    from tripreg.api import init_app as init_api

    init_api(app)

    from tripreg.core import errors

    errors.init_app(app)

    return app
