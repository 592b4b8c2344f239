"""Session issuance: signed tokens with a fixed validity window."""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from tripreg.core.config import SessionSettings
from tripreg.services._shared.base import Clock, utc_now
from tripreg.services._shared.errors import InternalServiceError
from tripreg.services._shared.ports.token_provider import TokenProvider, TokenSigningError
from tripreg.services.auth.dto import IssuedSession

logger = logging.getLogger(__name__)


class SessionIssuer:
    """
    Mint signed session tokens carrying ``{sub, iat, exp = iat + D}``.

    The signing secret lives in the injected :class:`SessionSettings` and the
    token provider; callers never see it.
    """

    def __init__(
        self,
        *,
        settings: SessionSettings,
        token_provider: TokenProvider,
        clock: Clock | None = None,
    ) -> None:
        self.settings = settings
        self.tokens = token_provider
        self.clock = clock or utc_now

    def issue(self, user_id: int) -> IssuedSession:
        """
        Sign a new session for ``user_id``.

        :raises InternalServiceError: If the provider cannot sign.
        """
        now = self.clock()
        try:
            token = self.tokens.create_access_token(
                identity=user_id, expires_delta=self.settings.duration
            )
        except TokenSigningError as exc:
            logger.error("session.sign_failed", extra={"user_id": user_id}, exc_info=True)
            raise InternalServiceError("Could not sign session token") from exc
        return IssuedSession(token=token, expires_at=now + self.settings.duration)

    def remaining(self, payload: dict, now: datetime | None = None) -> float:
        """Seconds left before the decoded token ``payload`` expires."""
        now = now or self.clock()
        expires_at = datetime.fromtimestamp(int(payload["exp"]), tz=UTC)
        return (expires_at - now).total_seconds()

    def needs_renewal(self, payload: dict, now: datetime | None = None) -> bool:
        """``True`` once less than ``D/2`` of the token's lifetime is left."""
        return self.remaining(payload, now) < self.settings.renew_threshold.total_seconds()
