"""Shared API helpers for request parsing and cross-cutting concerns."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import Any, TypeVar

from flask import Flask, Response, current_app, g, jsonify, request
from flask_jwt_extended import set_access_cookies, unset_access_cookies

from tripreg.container import get_services
from tripreg.services.auth.dto import (
    AuthenticatedIdentity,
    AuthMethod,
    IssuedSession,
    select_credential,
)

F = TypeVar("F", bound=Callable[..., Any])


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]


def authenticate() -> AuthenticatedIdentity:
    """Verify the credential presented on the current request.

    The API-key header wins over the session cookie. The resulting identity is
    kept on :data:`flask.g` so the renewal hook can refresh the cookie.

    :raises AuthenticationError: When nothing valid was presented.
    """

    services = get_services()
    settings = services.settings
    credential = select_credential(
        request.headers.get(settings.api_key_header),
        request.cookies.get(settings.cookie_name),
    )
    identity = services.verifier.verify(credential)
    g.identity = identity
    return identity


def current_identity() -> AuthenticatedIdentity:
    """Return the identity verified by :func:`require_identity`."""

    identity = g.get("identity")
    if identity is None:
        return authenticate()
    return identity


def require_identity(func: F) -> F:
    """Ensure the request carries a valid API key or session cookie."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        authenticate()
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def set_session_cookie(response: Response, session: IssuedSession) -> Response:
    """Attach ``session`` as the HttpOnly session cookie with max-age ``D``."""

    max_age = int(get_services().settings.duration.total_seconds())
    set_access_cookies(response, session.token, max_age=max_age)
    return response


def clear_session_cookie(response: Response) -> Response:
    unset_access_cookies(response)
    return response


def init_app(app: Flask) -> None:
    """Register the sliding-session hook.

    A session verified with less than half of its window left carries a
    replacement token; it is sent back as a fresh cookie on any response.
    """

    @app.before_request
    def _forget_identity() -> None:
        g.pop("identity", None)

    @app.after_request
    def _refresh_session_cookie(response: Response) -> Response:
        identity: AuthenticatedIdentity | None = g.get("identity")
        if (
            identity is not None
            and identity.method is AuthMethod.SESSION
            and identity.renewed is not None
        ):
            set_session_cookie(response, identity.renewed)
        return response
