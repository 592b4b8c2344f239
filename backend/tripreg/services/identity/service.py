"""
IdentityService
===============

Aggregate service responsible for the `User` aggregate:
- Upsert from the identity provider profile (display fields refreshed on login)
- Profile of the acting identity (``/me``)
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy.exc import IntegrityError

from tripreg.models.base import as_utc
from tripreg.models.user import User
from tripreg.services._shared.base import BaseService, Clock
from tripreg.services._shared.errors import (
    ConflictError,
    ExternalServiceError,
    NotFoundError,
    violates,
)
from tripreg.services._shared.ports.identity_provider import ExternalProfile
from tripreg.services.auth.dto import AuthenticatedIdentity
from tripreg.services.authorization.gateway import RoleAuthorityGateway
from tripreg.services.identity.dto import MeOut, UserPublicOut
from tripreg.services.registration.service import RegistrationService

logger = logging.getLogger(__name__)


class IdentityService(BaseService):
    """
    Application service for the `User` aggregate.

    Identities are never deleted here.
    """

    def __init__(
        self,
        *,
        gateway: RoleAuthorityGateway | None = None,
        enabled_events: Sequence[str] = (),
        clock: Clock | None = None,
    ) -> None:
        super().__init__(clock=clock)
        self.gateway = gateway
        self.enabled_events = list(enabled_events)

    def upsert_from_profile(self, profile: ExternalProfile) -> tuple[UserPublicOut, bool]:
        """
        Create the identity on first login, refresh display fields afterwards.

        :returns: ``(user, created)``.
        :raises ConflictError: If a concurrent login created the same identity.
        """
        try:
            with self.rw_uow() as uow:
                user = uow.users.get_by_discord_id(profile.external_id)
                created = user is None
                if user is None:
                    user = uow.users.add(
                        User(
                            discord_id=profile.external_id,
                            username=profile.username,
                            email=profile.email,
                            avatar=profile.avatar,
                        )
                    )
                else:
                    uow.users.assign_updates(
                        user,
                        {
                            "username": profile.username,
                            "email": profile.email,
                            "avatar": profile.avatar,
                        },
                    )
                out = self._to_public(user)
        except IntegrityError as exc:
            if violates(exc, "uq_users_discord_id") or violates(exc, "users.discord_id"):
                raise ConflictError("User", "concurrent login, retry") from exc
            raise
        return out, created

    def me(
        self, identity: AuthenticatedIdentity, registrations: RegistrationService
    ) -> MeOut:
        """
        Profile, paid flag and registrations of the acting identity.

        :raises NotFoundError: If the identity no longer exists.
        """
        with self.ro_uow() as uow:
            user = uow.users.get(identity.user_id)
            if user is None:
                raise NotFoundError("User", identity.user_id)
            out = self._to_public(user)

        return MeOut(
            user=out,
            paid=self._is_paid(out),
            registrations=registrations.list_for_user(out.id),
        )

    def _is_paid(self, user: UserPublicOut) -> bool:
        # Display-only: lookup failures degrade to "not paid".
        if self.gateway is None or not self.enabled_events:
            return False
        role = f"{self.enabled_events[0]}::paid"
        try:
            return self.gateway.has_role(user.discord_id, role)
        except ExternalServiceError:
            logger.warning("me.paid_lookup_failed", extra={"user_id": user.id, "role": role})
            return False

    @staticmethod
    def _to_public(user: User) -> UserPublicOut:
        return UserPublicOut(
            id=user.id,
            discord_id=user.discord_id,
            username=user.username,
            email=user.email,
            avatar=user.avatar,
            created_at=as_utc(user.created_at),
        )
