"""
DTOs for credential verification, session issuance and login.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

# ---------------------------- Credentials --------------------------------- #


class AuthMethod(str, Enum):
    """How an identity proved itself on a request."""

    API_KEY = "api_key"
    SESSION = "session"


@dataclass(frozen=True, slots=True)
class ApiKeyCredential:
    """
    Raw key taken from the API-key header.

    :param key: Key material exactly as presented.
    :type key: str
    """

    key: str


@dataclass(frozen=True, slots=True)
class SessionCredential:
    """
    Signed session token taken from the session cookie.

    :param token: Encoded token.
    :type token: str
    """

    token: str


Credential = ApiKeyCredential | SessionCredential


def select_credential(api_key: str | None, session_token: str | None) -> Credential | None:
    """
    Pick the credential to verify from what a request presented.

    A non-empty API-key header wins over the cookie; the cookie is not
    consulted as a fallback once a key is presented.

    :param api_key: Header value, if any.
    :param session_token: Cookie value, if any.
    :returns: The selected credential or ``None`` when nothing was presented.
    """
    if api_key:
        return ApiKeyCredential(key=api_key)
    if session_token:
        return SessionCredential(token=session_token)
    return None


# ------------------------------ Results ----------------------------------- #


@dataclass(frozen=True, slots=True)
class IssuedSession:
    """
    Freshly signed session token.

    :param token: Encoded token.
    :type token: str
    :param expires_at: Absolute expiry (issued-at + D).
    :type expires_at: datetime
    """

    token: str
    expires_at: datetime


@dataclass(frozen=True, slots=True)
class AuthenticatedIdentity:
    """
    Uniform result of a successful verification, threaded explicitly into
    every handler and service call.

    :param user_id: Internal identity id.
    :type user_id: int
    :param method: Credential kind that succeeded.
    :type method: AuthMethod
    :param renewed: Replacement session when the sliding window renewed it.
    :type renewed: IssuedSession | None
    """

    user_id: int
    method: AuthMethod
    renewed: IssuedSession | None = None


# -------------------------------- Login ----------------------------------- #


@dataclass(frozen=True, slots=True)
class LoginOut:
    """
    Outcome of a completed OAuth login.

    :param user_id: Internal identity id (created or refreshed).
    :type user_id: int
    :param username: Display name, for the welcome message.
    :type username: str
    :param session: Session to hand back to the client.
    :type session: IssuedSession
    :param created: ``True`` when this login created the identity.
    :type created: bool
    """

    user_id: int
    username: str
    session: IssuedSession
    created: bool = False
