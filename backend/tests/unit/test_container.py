"""Tests for adapter selection in the service container."""

from __future__ import annotations

from datetime import timedelta

from tripreg.container import build_services
from tripreg.core.config import SessionSettings
from tripreg.infra.discord.notifier import DiscordNotifier
from tripreg.infra.discord.role_authority import DiscordRoleAuthority
from tripreg.services._shared.ports import NullNotifier

SETTINGS = SessionSettings(secret="s", duration=timedelta(hours=1))


class TestBuildServices:
    def test_without_bot_everything_degrades(self):
        services = build_services({"ENABLED_EVENTS": ["g::t::7.0.0"]}, SETTINGS)

        assert isinstance(services.registrations.notifier, NullNotifier)
        assert services.policy.gateway.configured is False

    def test_with_bot_guild_and_channel(self):
        config = {
            "ENABLED_EVENTS": ["g::t::7.0.0"],
            "DISCORD_BOT_TOKEN": "bot",
            "DISCORD_GUILD_ID": "1",
            "DISCORD_NOTIFICATIONS_CHANNEL_ID": "2",
            "ORGANIZER_ROLE": "crew",
        }

        services = build_services(config, SETTINGS)

        assert isinstance(services.registrations.notifier, DiscordNotifier)
        assert isinstance(services.policy.gateway.authority, DiscordRoleAuthority)
        assert services.policy.organizer_role == "crew"
        assert services.registrations.primary_event == "g::t::7.0.0"
