"""Per-operation access decisions for self-service and elevated operations."""

from __future__ import annotations

import logging

from tripreg.models.user import User
from tripreg.services._shared.errors import AuthorizationError, NotFoundError
from tripreg.services._shared.policies.common import is_self_target
from tripreg.services.auth.dto import AuthenticatedIdentity
from tripreg.services.authorization.gateway import RoleAuthorityGateway

logger = logging.getLogger(__name__)


class AuthorizationPolicy:
    """
    Compose a verified identity with role lookups.

    Self-service operations only need the identity the caller already holds.
    Elevated operations need the organizer role; gateway failures propagate as
    :class:`ExternalServiceError` so nothing proceeds on ambiguity.
    """

    def __init__(self, gateway: RoleAuthorityGateway, organizer_role: str) -> None:
        self.gateway = gateway
        self.organizer_role = organizer_role

    def is_organizer(self, actor: User) -> bool:
        return self.gateway.has_role(actor.discord_id, self.organizer_role)

    def require_actor(self, actor: User | None, identity: AuthenticatedIdentity) -> User:
        """Return ``actor`` or raise when the acting identity no longer exists."""
        if actor is None:
            raise NotFoundError("User", identity.user_id)
        return actor

    def require_organizer(self, actor: User) -> None:
        """
        :raises AuthorizationError: If ``actor`` lacks the organizer role.
        :raises ExternalServiceError: If the role authority fails.
        """
        if not self.is_organizer(actor):
            logger.info("authz.denied", extra={"user_id": actor.id, "role": self.organizer_role})
            raise AuthorizationError(f"Requires role {self.organizer_role}")

    def require_grant_target(self, actor: User, target_id: int | None) -> None:
        """Granting to oneself is self-service; any other target is elevated."""
        if is_self_target(actor_id=actor.id, target_id=target_id):
            return
        self.require_organizer(actor)
