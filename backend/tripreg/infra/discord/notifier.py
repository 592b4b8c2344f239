"""Discord channel announcements and guild role mutations."""

from __future__ import annotations

import logging
from typing import Any

from tripreg.infra.discord.client import DiscordClient, DiscordHTTPError
from tripreg.services._shared.ports.notifier import Notifier, NotifierError

logger = logging.getLogger(__name__)


def registration_message(user: Any, registration: Any) -> str:
    """Render the channel message for a registration submission."""
    fields = registration.fields
    status = "cancelled registration" if fields.cancelled else "registered/updated registration"
    return (
        "🔔 **Registration Update**\n"
        f"**User:** {user.username} (<@{user.discord_id}>)\n"
        f"**Event:** {registration.event}\n"
        f"**Status:** {status}\n"
        f"**Dates:** {fields.arrival_date.isoformat()} - {fields.departure_date.isoformat()}\n"
        f"**Children:** {fields.children_count}\n"
        f"**Food Restrictions:** {fields.food_restrictions}"
    )


def achievement_message(user: Any, achievement: Any, granted_by: Any, show_grantor: bool) -> str:
    """Render the channel message for an achievement grant."""
    message = f"🏆 <@{user.discord_id}> earned the achievement **{achievement.name}**!"
    if show_grantor:
        message += f"\nGranted by <@{granted_by.discord_id}>."
    if achievement.image:
        message += f"\n{achievement.image}"
    return message


class DiscordNotifier(Notifier):
    """Post to the notifications channel and manage guild roles via the bot."""

    def __init__(self, client: DiscordClient, *, guild_id: str, channel_id: str) -> None:
        self.client = client
        self.guild_id = guild_id
        self.channel_id = channel_id

    def _send(self, content: str) -> None:
        try:
            self.client.request(
                "POST", f"/channels/{self.channel_id}/messages", json={"content": content}
            )
        except DiscordHTTPError as exc:
            raise NotifierError(str(exc)) from exc

    def notify_registration(self, user: Any, registration: Any) -> None:
        self._send(registration_message(user, registration))

    def notify_achievement(
        self, user: Any, achievement: Any, granted_by: Any, show_grantor: bool
    ) -> None:
        self._send(achievement_message(user, achievement, granted_by, show_grantor))

    def create_role(self, name: str) -> str:
        try:
            payload = self.client.request(
                "POST", f"/guilds/{self.guild_id}/roles", json={"name": name, "mentionable": True}
            )
        except DiscordHTTPError as exc:
            raise NotifierError(str(exc)) from exc
        if not payload or "id" not in payload:
            raise NotifierError("Role creation returned no id")
        return str(payload["id"])

    def grant_role(self, external_id: str, role_id: str) -> None:
        try:
            self.client.request(
                "PUT", f"/guilds/{self.guild_id}/members/{external_id}/roles/{role_id}"
            )
        except DiscordHTTPError as exc:
            raise NotifierError(str(exc)) from exc
