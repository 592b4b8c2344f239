from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any, Protocol


class TokenError(Exception):
    """Base class for token port failures."""


class InvalidTokenError(TokenError):
    """Bad signature, malformed payload or unknown token."""


class ExpiredTokenError(InvalidTokenError):
    """Well-formed token whose ``exp`` is in the past."""


class TokenSigningError(TokenError):
    """The provider could not sign a token."""


class TokenProvider(Protocol):
    """Port for issuing and decoding signed session tokens.

    Payloads carry ``sub`` (identity id as a string), ``iat`` and ``exp``
    (epoch seconds).
    """

    def create_access_token(self, *, identity: int | str, expires_delta: timedelta) -> str: ...

    def decode(self, token: str) -> dict[str, Any]: ...


class StubTokenProvider(TokenProvider):
    """Deterministic token provider used in unit tests.

    Tokens are opaque strings remembered in memory; expiry is checked against
    the injected clock.
    """

    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        self._clock = clock or (lambda: datetime.now(tz=UTC))
        self._seq = 0
        self._issued: dict[str, dict[str, Any]] = {}
        self.fail_signing = False

    def create_access_token(self, *, identity: int | str, expires_delta: timedelta) -> str:
        if self.fail_signing:
            raise TokenSigningError("stub signing disabled")
        self._seq += 1
        now = self._clock()
        token = f"session.{identity}.{self._seq}"
        self._issued[token] = {
            "sub": str(identity),
            "iat": int(now.timestamp()),
            "exp": int((now + expires_delta).timestamp()),
        }
        return token

    def decode(self, token: str) -> dict[str, Any]:
        payload = self._issued.get(token)
        if payload is None:
            raise InvalidTokenError("unknown token")
        if payload["exp"] <= int(self._clock().timestamp()):
            raise ExpiredTokenError("token expired")
        return dict(payload)
