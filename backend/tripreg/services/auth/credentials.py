"""Credential verification: API keys and signed session tokens."""

from __future__ import annotations

import logging

from tripreg.services._shared.base import BaseService, Clock
from tripreg.services._shared.errors import AuthenticationError, InternalServiceError
from tripreg.services._shared.ports.token_provider import (
    ExpiredTokenError,
    InvalidTokenError,
    TokenProvider,
)
from tripreg.services.auth.dto import (
    ApiKeyCredential,
    AuthenticatedIdentity,
    AuthMethod,
    Credential,
    SessionCredential,
)
from tripreg.services.auth.sessions import SessionIssuer

logger = logging.getLogger(__name__)


class CredentialVerifier(BaseService):
    """
    Single entry point turning a presented credential into an identity.

    API keys are looked up by exact match and have their ``last_used_at``
    touched on success. Session tokens are verified locally and renewed
    opportunistically once less than half of their window is left.
    """

    def __init__(
        self,
        *,
        issuer: SessionIssuer,
        token_provider: TokenProvider,
        clock: Clock | None = None,
    ) -> None:
        super().__init__(clock=clock or issuer.clock)
        self.issuer = issuer
        self.tokens = token_provider

    def verify(self, credential: Credential | None) -> AuthenticatedIdentity:
        """
        Verify ``credential`` and return the authenticated identity.

        :raises AuthenticationError: Missing, unknown, expired or malformed
            credential, or an API key whose owner no longer exists.
        """
        if isinstance(credential, ApiKeyCredential):
            return self._verify_api_key(credential)
        if isinstance(credential, SessionCredential):
            return self._verify_session(credential)
        raise AuthenticationError("Missing credentials")

    def _verify_api_key(self, credential: ApiKeyCredential) -> AuthenticatedIdentity:
        now = self.now()
        with self.rw_uow() as uow:
            api_key = uow.api_keys.get_by_key(credential.key)
            if api_key is None:
                raise AuthenticationError("Invalid API key")
            if api_key.is_expired(now):
                raise AuthenticationError("API key expired")
            if uow.users.get(api_key.user_id) is None:
                logger.warning("auth.api_key_orphaned", extra={"user_id": api_key.user_id})
                raise AuthenticationError("Invalid API key")
            uow.api_keys.assign_updates(api_key, {"last_used_at": now})
            user_id = api_key.user_id
        return AuthenticatedIdentity(user_id=user_id, method=AuthMethod.API_KEY)

    def _verify_session(self, credential: SessionCredential) -> AuthenticatedIdentity:
        try:
            payload = self.tokens.decode(credential.token)
        except ExpiredTokenError as exc:
            raise AuthenticationError("Session expired") from exc
        except InvalidTokenError as exc:
            raise AuthenticationError("Invalid session") from exc

        user_id = self._coerce_user_id(payload.get("sub"))
        renewed = None
        if self.issuer.needs_renewal(payload, self.now()):
            try:
                renewed = self.issuer.issue(user_id)
            except InternalServiceError:
                logger.warning("auth.session_renewal_failed", extra={"user_id": user_id})
        return AuthenticatedIdentity(user_id=user_id, method=AuthMethod.SESSION, renewed=renewed)

    @staticmethod
    def _coerce_user_id(subject: object) -> int:
        """Ensure the token subject can be treated as an integer user id."""
        if isinstance(subject, int):
            return subject
        if isinstance(subject, str) and subject.isdigit():
            return int(subject)
        raise AuthenticationError("Invalid session")
