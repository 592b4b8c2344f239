"""Login with the identity provider and session cookie endpoints."""

from __future__ import annotations

import secrets

from flask import Blueprint, redirect, request, session

from tripreg.api.deps import clear_session_cookie, json_response, set_session_cookie, timing
from tripreg.container import get_services
from tripreg.core.errors import BadRequest
from tripreg.schemas import CallbackQuerySchema, LoginResultSchema

bp = Blueprint("auth", __name__)

callback_query_schema = CallbackQuerySchema()
login_result_schema = LoginResultSchema()

STATE_SESSION_KEY = "oauth_state"


@bp.get("/discord/login")
@timing
def discord_login():
    """Redirect to the provider's consent screen with a fresh ``state``."""

    state = secrets.token_urlsafe(16)
    session[STATE_SESSION_KEY] = state
    return redirect(get_services().login.authorize_url(state), code=307)


@bp.get("/discord/callback")
@timing
def discord_callback():
    """Complete the login and hand back the session cookie."""

    query = callback_query_schema.load(request.args)
    expected_state = session.pop(STATE_SESSION_KEY, None)
    if not query["code"]:
        raise BadRequest("Code not found")
    if not expected_state or query["state"] != expected_state:
        raise BadRequest("Invalid OAuth state")

    result = get_services().login.complete(query["code"])
    body = {
        "data": login_result_schema.dump(
            {
                "message": f"Welcome {result.username}! You are logged in.",
                "user_id": result.user_id,
                "expires_at": result.session.expires_at,
            }
        )
    }
    response = json_response(body, status=201 if result.created else 200)
    return set_session_cookie(response, result.session)


@bp.post("/logout")
@timing
def logout():
    """Clear the session cookie; sessions are stateless so nothing is revoked."""

    return clear_session_cookie(json_response({"data": {"message": "Logged out"}}))
