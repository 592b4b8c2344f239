"""
RegistrationService
===================

Owns the per-(identity, event) registration ledger:

- Validates the submission before any transaction opens.
- Upserts the current row and appends a history snapshot in one unit of work.
- Renders history newest first, optionally as diffs.
- Notifies the community channel after commit, best-effort.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy.exc import IntegrityError

from tripreg.models.base import as_utc
from tripreg.models.registration import Registration, RegistrationHistory
from tripreg.services._shared.base import BaseService, Clock
from tripreg.services._shared.errors import ConflictError, NotFoundError, ValidationError, violates
from tripreg.services._shared.ports.notifier import Notifier, NullNotifier
from tripreg.services.auth.dto import AuthenticatedIdentity
from tripreg.services.authorization.policy import AuthorizationPolicy
from tripreg.services.identity.dto import UserPublicOut
from tripreg.services.registration.dto import (
    HistoryEntryOut,
    RegistrationIn,
    RegistrationOut,
    RegistrationWithUserOut,
)
from tripreg.services.registration.history import render_history

logger = logging.getLogger(__name__)


class RegistrationService(BaseService):
    """Registration ledger use cases."""

    def __init__(
        self,
        *,
        enabled_events: Sequence[str],
        policy: AuthorizationPolicy,
        notifier: Notifier | None = None,
        clock: Clock | None = None,
    ) -> None:
        super().__init__(clock=clock)
        if not enabled_events:
            raise ValueError("At least one enabled event is required.")
        self.enabled_events = list(enabled_events)
        self.policy = policy
        self.notifier = notifier or NullNotifier()

    @property
    def primary_event(self) -> str:
        return self.enabled_events[0]

    def resolve_event(self, event: str | None) -> str:
        """Default to the primary event; reject events that are not enabled."""
        if not event:
            return self.primary_event
        if event not in self.enabled_events:
            raise ValidationError(f"Event {event!r} is not open for registration")
        return event

    # ------------------------------------------------------------------ #
    # Commands
    # ------------------------------------------------------------------ #

    def submit(self, identity: AuthenticatedIdentity, dto: RegistrationIn) -> RegistrationOut:
        """
        Create or overwrite the registration and append one history snapshot.

        :raises ValidationError: Arrival after departure, or event not enabled.
            Raised before any write.
        :raises NotFoundError: If the acting identity no longer exists.
        :raises ConflictError: If a concurrent first submission won the race.
        """
        if dto.arrival_date > dto.departure_date:
            raise ValidationError("Arrival date cannot be after departure date")
        event = self.resolve_event(dto.event)
        fields = dto.to_fields()

        try:
            with self.rw_uow() as uow:
                user = uow.users.get(identity.user_id)
                if user is None:
                    raise NotFoundError("User", identity.user_id)

                registration = uow.registrations.get_for_user_event(user.id, event, lock=True)
                created = registration is None
                if registration is None:
                    registration = uow.registrations.add(
                        Registration(user_id=user.id, event=event, fields=fields)
                    )
                else:
                    registration.fields = fields
                    uow.registrations.flush()

                uow.registration_history.append(
                    RegistrationHistory(
                        registration_id=registration.id,
                        user_id=user.id,
                        event=event,
                        fields=fields,
                        created_at=self.now(),
                    )
                )
                out = self._to_out(registration, created=created)
                user_out = self._to_user_public(user)
        except IntegrityError as exc:
            if violates(exc, "uq_registrations_user_event") or violates(exc, "registrations.user_id"):
                raise ConflictError("Registration", "concurrent submission, retry") from exc
            raise

        logger.info(
            "registration.submitted",
            extra={"user_id": identity.user_id, "event": event},
        )
        self._notify(user_out, out)
        return out

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #

    def history(
        self,
        identity: AuthenticatedIdentity,
        *,
        event: str | None = None,
        diff: bool = True,
    ) -> list[HistoryEntryOut]:
        """Own history, newest first, rendered as diffs unless ``diff`` is off."""
        with self.ro_uow() as uow:
            entries = uow.registration_history.list_for_user(identity.user_id, event)
            return render_history(entries, diff=diff)

    def list_for_user(self, user_id: int) -> list[RegistrationOut]:
        with self.ro_uow() as uow:
            return [self._to_out(r) for r in uow.registrations.list_for_user(user_id)]

    def list_all(
        self, identity: AuthenticatedIdentity, *, event: str | None = None
    ) -> list[RegistrationWithUserOut]:
        """
        Every registration, optionally for one event. Organizer only.

        :raises AuthorizationError: If the actor lacks the organizer role.
        :raises ExternalServiceError: If the role authority fails.
        """
        with self.ro_uow() as uow:
            actor = self.policy.require_actor(uow.users.get(identity.user_id), identity)
        self.policy.require_organizer(actor)

        with self.ro_uow() as uow:
            return [
                RegistrationWithUserOut(
                    registration=self._to_out(r),
                    username=r.user.username,
                    email=r.user.email,
                    avatar=r.user.avatar,
                )
                for r in uow.registrations.list_all(event)
            ]

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    def _notify(self, user: UserPublicOut, registration: RegistrationOut) -> None:
        try:
            self.notifier.notify_registration(user, registration)
        except Exception:
            logger.warning(
                "registration.notify_failed",
                extra={"user_id": user.id, "event": registration.event},
                exc_info=True,
            )

    @staticmethod
    def _to_out(registration: Registration, *, created: bool = False) -> RegistrationOut:
        return RegistrationOut(
            id=registration.id,
            user_id=registration.user_id,
            event=registration.event,
            fields=registration.fields,
            created=created,
            updated_at=as_utc(registration.updated_at),
        )

    @staticmethod
    def _to_user_public(user) -> UserPublicOut:
        return UserPublicOut(
            id=user.id,
            discord_id=user.discord_id,
            username=user.username,
            email=user.email,
            avatar=user.avatar,
        )
