# tripreg/infra/jwt/flask_jwt_token_provider.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Any, cast

import jwt as pyjwt
from flask import Flask
from flask_jwt_extended import JWTManager
from flask_jwt_extended.exceptions import JWTExtendedException

from tripreg.core.config import SessionSettings
from tripreg.services._shared.ports import (
    ExpiredTokenError,
    InvalidTokenError,
    TokenProvider,
    TokenSigningError,
)


@dataclass(slots=True)
class JWTTokenProvider(TokenProvider):
    """
    Adapter for Flask-JWT-Extended.

    Library exceptions are mapped onto the token port errors so callers never
    depend on PyJWT directly.

    .. note::
       Requires an active Flask app context with proper JWT settings.
    """

    def create_access_token(self, *, identity: int | str, expires_delta: timedelta) -> str:
        from flask_jwt_extended import create_access_token as _create_access

        try:
            # The subject claim must be a string for PyJWT >= 2.10.
            return cast(str, _create_access(identity=str(identity), expires_delta=expires_delta))
        except (pyjwt.PyJWTError, RuntimeError, TypeError) as exc:
            raise TokenSigningError(str(exc)) from exc

    def decode(self, token: str) -> dict[str, Any]:
        from flask_jwt_extended import decode_token

        try:
            return cast(dict[str, Any], decode_token(token))
        except pyjwt.ExpiredSignatureError as exc:
            raise ExpiredTokenError(str(exc)) from exc
        except (pyjwt.PyJWTError, JWTExtendedException) as exc:
            raise InvalidTokenError(str(exc)) from exc


def init_app(app: Flask, manager: JWTManager, settings: SessionSettings) -> None:
    """Point Flask-JWT-Extended at the injected session settings.

    Signing and verification keys come from ``settings`` rather than from
    whatever is left in ``app.config``; the access cookie name follows the
    configured session cookie.
    """
    app.config["JWT_ACCESS_COOKIE_NAME"] = settings.cookie_name
    app.config["JWT_ACCESS_TOKEN_EXPIRES"] = settings.duration

    @manager.encode_key_loader
    def _encode_key(identity: Any) -> str:
        return settings.secret

    @manager.decode_key_loader
    def _decode_key(jwt_header: dict, jwt_data: dict) -> str:
        return settings.secret
