"""OAuth login against the identity provider."""

from __future__ import annotations

import logging

from tripreg.services._shared.errors import AuthorizationError, ExternalServiceError
from tripreg.services._shared.ports.identity_provider import (
    IdentityProvider,
    IdentityProviderError,
)
from tripreg.services.auth.dto import LoginOut
from tripreg.services.auth.sessions import SessionIssuer
from tripreg.services.identity.service import IdentityService

logger = logging.getLogger(__name__)


class LoginService:
    """
    Turn an authorization code into a signed session.

    Steps: code exchange, required-group check, identity upsert, issuance.
    Nothing is written when the exchange or the group check fails.
    """

    def __init__(
        self,
        *,
        provider: IdentityProvider,
        issuer: SessionIssuer,
        identities: IdentityService,
        required_group_id: str | None = None,
    ) -> None:
        self.provider = provider
        self.issuer = issuer
        self.identities = identities
        self.required_group_id = required_group_id or None

    def authorize_url(self, state: str) -> str:
        return self.provider.authorize_url(state)

    def complete(self, code: str) -> LoginOut:
        """
        :raises ExternalServiceError: If the provider exchange fails.
        :raises AuthorizationError: If the user is not in the required group.
        :raises InternalServiceError: If the session cannot be signed.
        """
        try:
            profile = self.provider.exchange_code(code)
        except IdentityProviderError as exc:
            logger.warning("login.exchange_failed", exc_info=True)
            raise ExternalServiceError("Identity provider login failed") from exc

        if self.required_group_id and self.required_group_id not in profile.group_ids:
            logger.info("login.not_in_group")
            raise AuthorizationError("You must be a member of the community server")

        user, created = self.identities.upsert_from_profile(profile)
        session = self.issuer.issue(user.id)
        logger.info("login.completed", extra={"user_id": user.id})
        return LoginOut(user_id=user.id, username=user.username, session=session, created=created)
