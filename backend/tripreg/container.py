"""Service wiring: adapters chosen from config, services built once per app."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from flask import current_app

from tripreg.core.config import SessionSettings
from tripreg.infra.discord.client import DiscordClient
from tripreg.infra.discord.identity_provider import DiscordIdentityProvider
from tripreg.infra.discord.notifier import DiscordNotifier
from tripreg.infra.discord.role_authority import DiscordRoleAuthority
from tripreg.infra.jwt.flask_jwt_token_provider import JWTTokenProvider
from tripreg.services._shared.base import Clock
from tripreg.services._shared.ports import (
    IdentityProvider,
    Notifier,
    NullNotifier,
    RoleAuthority,
    TokenProvider,
)
from tripreg.services.achievements.service import AchievementService
from tripreg.services.api_keys.service import ApiKeyService
from tripreg.services.auth.credentials import CredentialVerifier
from tripreg.services.auth.login import LoginService
from tripreg.services.auth.sessions import SessionIssuer
from tripreg.services.authorization.gateway import RoleAuthorityGateway
from tripreg.services.authorization.policy import AuthorizationPolicy
from tripreg.services.identity.service import IdentityService
from tripreg.services.registration.service import RegistrationService

logger = logging.getLogger(__name__)

EXTENSION_KEY = "tripreg"


@dataclass(frozen=True, slots=True)
class Services:
    """Everything a request handler may call, built once at startup."""

    settings: SessionSettings
    issuer: SessionIssuer
    verifier: CredentialVerifier
    login: LoginService
    identities: IdentityService
    registrations: RegistrationService
    achievements: AchievementService
    api_keys: ApiKeyService
    policy: AuthorizationPolicy


def _discord_adapters(
    config: Mapping[str, Any],
) -> tuple[RoleAuthority | None, IdentityProvider, Notifier]:
    timeout = float(config.get("DISCORD_API_TIMEOUT", 5))
    bot_token = config.get("DISCORD_BOT_TOKEN") or None
    guild_id = config.get("DISCORD_GUILD_ID") or None
    channel_id = config.get("DISCORD_NOTIFICATIONS_CHANNEL_ID") or None

    bot = DiscordClient(bot_token, timeout=timeout) if bot_token else None
    authority = DiscordRoleAuthority(bot) if bot is not None else None

    provider = DiscordIdentityProvider(
        DiscordClient(timeout=timeout),
        client_id=str(config.get("DISCORD_CLIENT_ID", "")),
        client_secret=str(config.get("DISCORD_CLIENT_SECRET", "")),
        redirect_url=str(config.get("DISCORD_REDIRECT_URL", "")),
    )

    notifier: Notifier
    if bot is not None and guild_id and channel_id:
        notifier = DiscordNotifier(bot, guild_id=guild_id, channel_id=channel_id)
    else:
        logger.info("notifier.disabled (bot token, guild or channel missing)")
        notifier = NullNotifier()
    return authority, provider, notifier


def build_services(
    config: Mapping[str, Any],
    settings: SessionSettings,
    *,
    token_provider: TokenProvider | None = None,
    role_authority: RoleAuthority | None = None,
    identity_provider: IdentityProvider | None = None,
    notifier: Notifier | None = None,
    clock: Clock | None = None,
) -> Services:
    """
    Build the service graph.

    Adapters default to the Discord and Flask-JWT-Extended implementations
    derived from ``config``; any of them may be overridden (tests pass the
    in-memory doubles from :mod:`tripreg.services._shared.ports`).
    """
    default_authority, default_provider, default_notifier = _discord_adapters(config)
    authority = role_authority if role_authority is not None else default_authority
    provider = identity_provider or default_provider
    notifier = notifier or default_notifier
    tokens = token_provider or JWTTokenProvider()

    enabled_events = list(config.get("ENABLED_EVENTS") or [])
    gateway = RoleAuthorityGateway(authority, config.get("DISCORD_GUILD_ID") or None)
    policy = AuthorizationPolicy(gateway, str(config.get("ORGANIZER_ROLE", "g::t::orgs")))

    issuer = SessionIssuer(settings=settings, token_provider=tokens, clock=clock)
    identities = IdentityService(gateway=gateway, enabled_events=enabled_events, clock=clock)
    return Services(
        settings=settings,
        issuer=issuer,
        verifier=CredentialVerifier(issuer=issuer, token_provider=tokens, clock=clock),
        login=LoginService(
            provider=provider,
            issuer=issuer,
            identities=identities,
            required_group_id=config.get("DISCORD_GUILD_ID") or None,
        ),
        identities=identities,
        registrations=RegistrationService(
            enabled_events=enabled_events, policy=policy, notifier=notifier, clock=clock
        ),
        achievements=AchievementService(
            policy=policy,
            notifier=notifier,
            role_prefix=str(config.get("ACHIEVEMENT_PREFIX", "achievement::")),
            clock=clock,
        ),
        api_keys=ApiKeyService(clock=clock),
        policy=policy,
    )


def get_services() -> Services:
    """Return the service graph of the current application."""
    return current_app.extensions[EXTENSION_KEY]
