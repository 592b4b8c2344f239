from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Protocol

logger = logging.getLogger(__name__)


class NotifierError(Exception):
    """Delivery or role mutation failed on the notification side-channel."""


class Notifier(Protocol):
    """Best-effort side-channel towards the community server.

    ``create_role`` and ``grant_role`` are the two calls whose success the
    achievement flow depends on; message delivery is fire-and-forget.
    """

    def notify_registration(self, user: Any, registration: Any) -> None: ...

    def notify_achievement(
        self, user: Any, achievement: Any, granted_by: Any, show_grantor: bool
    ) -> None: ...

    def create_role(self, name: str) -> str: ...

    def grant_role(self, external_id: str, role_id: str) -> None: ...


class NullNotifier(Notifier):
    """Notifier used when no bot is configured: messages are logged, roles fail."""

    def notify_registration(self, user: Any, registration: Any) -> None:
        logger.info("notifier.disabled registration", extra={"user_id": getattr(user, "id", None)})

    def notify_achievement(
        self, user: Any, achievement: Any, granted_by: Any, show_grantor: bool
    ) -> None:
        logger.info("notifier.disabled achievement", extra={"user_id": getattr(user, "id", None)})

    def create_role(self, name: str) -> str:
        raise NotifierError("Notification bot is not configured")

    def grant_role(self, external_id: str, role_id: str) -> None:
        raise NotifierError("Notification bot is not configured")


@dataclass
class RecordingNotifier(Notifier):
    """In-memory notifier keeping every call; ``fail_*`` flags inject errors."""

    registrations: list[tuple[Any, Any]] = field(default_factory=list)
    achievements: list[tuple[Any, Any, Any, bool]] = field(default_factory=list)
    created_roles: list[str] = field(default_factory=list)
    granted_roles: list[tuple[str, str]] = field(default_factory=list)
    fail_messages: bool = False
    fail_roles: bool = False

    def notify_registration(self, user: Any, registration: Any) -> None:
        if self.fail_messages:
            raise NotifierError("message delivery failed")
        self.registrations.append((user, registration))

    def notify_achievement(
        self, user: Any, achievement: Any, granted_by: Any, show_grantor: bool
    ) -> None:
        if self.fail_messages:
            raise NotifierError("message delivery failed")
        self.achievements.append((user, achievement, granted_by, show_grantor))

    def create_role(self, name: str) -> str:
        if self.fail_roles:
            raise NotifierError("role creation failed")
        self.created_roles.append(name)
        return f"role-{len(self.created_roles)}"

    def grant_role(self, external_id: str, role_id: str) -> None:
        if self.fail_roles:
            raise NotifierError("role grant failed")
        self.granted_roles.append((external_id, role_id))
