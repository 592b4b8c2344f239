"""
AchievementService
==================

Defines achievements (organizer only) and grants them to identities.

External role mutations happen before the local rows are written: a failed
role creation or grant leaves the database untouched.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from tripreg.models.achievement import Achievement, AchievementGrant
from tripreg.services._shared.base import BaseService, Clock
from tripreg.services._shared.errors import (
    ConflictError,
    ExternalServiceError,
    NotFoundError,
    violates,
)
from tripreg.services._shared.ports.notifier import Notifier, NotifierError, NullNotifier
from tripreg.services.achievements.dto import (
    AchievementCreateIn,
    AchievementGrantIn,
    AchievementGrantOut,
    AchievementOut,
)
from tripreg.services.auth.dto import AuthenticatedIdentity
from tripreg.services.authorization.policy import AuthorizationPolicy
from tripreg.services.identity.dto import UserPublicOut

logger = logging.getLogger(__name__)


class AchievementService(BaseService):
    """Achievement definition and granting."""

    def __init__(
        self,
        *,
        policy: AuthorizationPolicy,
        notifier: Notifier | None = None,
        role_prefix: str = "achievement::",
        clock: Clock | None = None,
    ) -> None:
        super().__init__(clock=clock)
        self.policy = policy
        self.notifier = notifier or NullNotifier()
        self.role_prefix = role_prefix

    def create(self, identity: AuthenticatedIdentity, dto: AchievementCreateIn) -> AchievementOut:
        """
        Create the external role, then store the achievement.

        :raises AuthorizationError: If the actor is not an organizer.
        :raises ConflictError: If ``code`` is already taken (checked before the
            external call).
        :raises ExternalServiceError: If role creation fails.
        """
        with self.ro_uow() as uow:
            actor = self.policy.require_actor(uow.users.get(identity.user_id), identity)
        self.policy.require_organizer(actor)

        with self.ro_uow() as uow:
            if uow.achievements.code_exists(dto.code):
                raise ConflictError("Achievement", f"code {dto.code!r} already exists")

        try:
            role_id = self.notifier.create_role(f"{self.role_prefix}{dto.name}")
        except NotifierError as exc:
            logger.error("achievement.role_create_failed", extra={"user_id": actor.id}, exc_info=True)
            raise ExternalServiceError("Could not create achievement role") from exc

        try:
            with self.rw_uow() as uow:
                achievement = uow.achievements.add(
                    Achievement(
                        name=dto.name,
                        image=dto.image,
                        code=dto.code,
                        discord_role_id=str(role_id),
                    )
                )
                out = self._to_out(achievement)
        except IntegrityError as exc:
            if violates(exc, "uq_achievements_code") or violates(exc, "achievements.code"):
                logger.warning("achievement.code_race", extra={"user_id": actor.id})
                raise ConflictError("Achievement", f"code {dto.code!r} already exists") from exc
            raise
        logger.info("achievement.created", extra={"user_id": actor.id})
        return out

    def grant(self, identity: AuthenticatedIdentity, dto: AchievementGrantIn) -> AchievementGrantOut:
        """
        Grant an achievement to the actor or, for organizers, to anyone.

        Duplicate check, external grant and local insert run inside one unit of
        work; the announcement afterwards is best-effort.

        :raises AuthorizationError: Granting to someone else without the role.
        :raises NotFoundError: Unknown code or unknown target identity.
        :raises ConflictError: The target already holds the achievement.
        :raises ExternalServiceError: The external role grant failed.
        """
        with self.ro_uow() as uow:
            actor = self.policy.require_actor(uow.users.get(identity.user_id), identity)
        self.policy.require_grant_target(actor, dto.user_id)
        target_id = dto.user_id if dto.user_id is not None else actor.id

        try:
            with self.rw_uow() as uow:
                achievement = uow.achievements.get_by_code(dto.code)
                if achievement is None:
                    raise NotFoundError("Achievement", dto.code)
                target = uow.users.get(target_id)
                if target is None:
                    raise NotFoundError("User", target_id)
                if uow.achievement_grants.is_granted(achievement.id, target.id):
                    raise ConflictError("AchievementGrant", "achievement already granted")

                try:
                    self.notifier.grant_role(target.discord_id, achievement.discord_role_id)
                except NotifierError as exc:
                    logger.error(
                        "achievement.role_grant_failed", extra={"user_id": target.id}, exc_info=True
                    )
                    raise ExternalServiceError("Could not grant achievement role") from exc

                uow.achievement_grants.add(
                    AchievementGrant(
                        achievement_id=achievement.id,
                        user_id=target.id,
                        granted_by_id=actor.id,
                    )
                )
                out = AchievementGrantOut(
                    achievement=self._to_out(achievement),
                    user_id=target.id,
                    granted_by_id=actor.id,
                )
                target_out = self._to_user(target)
                actor_out = self._to_user(actor)
        except IntegrityError as exc:
            if violates(exc, "uq_achievement_grants_achievement_user") or violates(
                exc, "achievement_grants.achievement_id"
            ):
                raise ConflictError("AchievementGrant", "achievement already granted") from exc
            raise

        logger.info("achievement.granted", extra={"user_id": target_id})
        try:
            self.notifier.notify_achievement(
                target_out, out.achievement, actor_out, target_out.id != actor_out.id
            )
        except Exception:
            logger.warning("achievement.notify_failed", extra={"user_id": target_id}, exc_info=True)
        return out

    @staticmethod
    def _to_out(achievement: Achievement) -> AchievementOut:
        return AchievementOut(
            id=achievement.id,
            name=achievement.name,
            code=achievement.code,
            image=achievement.image,
            discord_role_id=achievement.discord_role_id,
        )

    @staticmethod
    def _to_user(user) -> UserPublicOut:
        return UserPublicOut(
            id=user.id, discord_id=user.discord_id, username=user.username, avatar=user.avatar
        )
