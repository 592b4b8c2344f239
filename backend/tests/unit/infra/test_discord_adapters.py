"""Unit tests for the Discord-backed role authority, identity provider and notifier."""

from __future__ import annotations

from datetime import date
from types import SimpleNamespace
from urllib.parse import parse_qs, urlparse

import pytest
import responses
from responses import matchers

from tripreg.infra.discord.client import API_BASE, DiscordClient
from tripreg.infra.discord.identity_provider import AUTHORIZE_URL, DiscordIdentityProvider
from tripreg.infra.discord.notifier import (
    DiscordNotifier,
    achievement_message,
    registration_message,
)
from tripreg.infra.discord.role_authority import DiscordRoleAuthority
from tripreg.models.registration import RegistrationFields
from tripreg.services._shared.ports import (
    IdentityProviderError,
    MemberNotFound,
    NotifierError,
    RoleAuthorityError,
)
from tripreg.services.authorization.gateway import RoleAuthorityGateway

GUILD = "111"


class TestDiscordRoleAuthority:
    @pytest.fixture()
    def authority(self) -> DiscordRoleAuthority:
        return DiscordRoleAuthority(DiscordClient("bot"))

    @responses.activate
    def test_list_roles(self, authority):
        responses.get(
            f"{API_BASE}/guilds/{GUILD}/roles",
            json=[{"id": 5, "name": "g::t::orgs"}, {"id": "6", "name": "other"}],
        )

        roles = authority.list_roles(GUILD)

        assert [(r.id, r.name) for r in roles] == [("5", "g::t::orgs"), ("6", "other")]

    @responses.activate
    def test_membership(self, authority):
        responses.get(f"{API_BASE}/guilds/{GUILD}/members/42", json={"roles": ["5", 7]})

        assert authority.get_membership(GUILD, "42").role_ids == frozenset({"5", "7"})

    @responses.activate
    def test_unknown_member(self, authority):
        responses.get(f"{API_BASE}/guilds/{GUILD}/members/42", status=404)

        with pytest.raises(MemberNotFound):
            authority.get_membership(GUILD, "42")

    @responses.activate
    def test_server_error(self, authority):
        responses.get(f"{API_BASE}/guilds/{GUILD}/roles", status=503)

        with pytest.raises(RoleAuthorityError):
            authority.list_roles(GUILD)

    @responses.activate
    def test_gateway_end_to_end(self, authority):
        responses.get(
            f"{API_BASE}/guilds/{GUILD}/roles", json=[{"id": "5", "name": "g::t::orgs"}]
        )
        responses.get(f"{API_BASE}/guilds/{GUILD}/members/42", json={"roles": ["5"]})

        assert RoleAuthorityGateway(authority, GUILD).has_role("42", "g::t::orgs") is True
        assert len(responses.calls) == 2


class TestDiscordIdentityProvider:
    @pytest.fixture()
    def provider(self) -> DiscordIdentityProvider:
        return DiscordIdentityProvider(
            DiscordClient(),
            client_id="cid",
            client_secret="csecret",
            redirect_url="http://localhost/cb",
        )

    def test_authorize_url(self, provider):
        url = provider.authorize_url("st4te")

        assert url.startswith(AUTHORIZE_URL)
        query = parse_qs(urlparse(url).query)
        assert query["client_id"] == ["cid"]
        assert query["state"] == ["st4te"]
        assert query["response_type"] == ["code"]
        assert query["scope"] == ["identify email guilds"]
        assert query["redirect_uri"] == ["http://localhost/cb"]

    @responses.activate
    def test_exchange_code(self, provider):
        responses.post(
            f"{API_BASE}/oauth2/token",
            json={"access_token": "at", "token_type": "Bearer"},
            match=[
                matchers.urlencoded_params_matcher(
                    {
                        "client_id": "cid",
                        "client_secret": "csecret",
                        "grant_type": "authorization_code",
                        "code": "the-code",
                        "redirect_uri": "http://localhost/cb",
                    }
                )
            ],
        )
        responses.get(
            f"{API_BASE}/users/@me",
            json={"id": "42", "username": "alice", "email": "a@example.com", "avatar": "hash"},
            match=[matchers.header_matcher({"Authorization": "Bearer at"})],
        )
        responses.get(f"{API_BASE}/users/@me/guilds", json=[{"id": GUILD}, {"id": "222"}])

        profile = provider.exchange_code("the-code")

        assert profile.external_id == "42"
        assert profile.username == "alice"
        assert profile.email == "a@example.com"
        assert profile.group_ids == frozenset({GUILD, "222"})

    @responses.activate
    def test_rejected_code(self, provider):
        responses.post(f"{API_BASE}/oauth2/token", status=400, json={"error": "invalid_grant"})

        with pytest.raises(IdentityProviderError):
            provider.exchange_code("bad")

    @responses.activate
    def test_token_response_without_access_token(self, provider):
        responses.post(f"{API_BASE}/oauth2/token", json={})

        with pytest.raises(IdentityProviderError):
            provider.exchange_code("odd")


class TestDiscordNotifier:
    @pytest.fixture()
    def notifier(self) -> DiscordNotifier:
        return DiscordNotifier(DiscordClient("bot"), guild_id=GUILD, channel_id="999")

    @pytest.fixture()
    def user(self):
        return SimpleNamespace(discord_id="42", username="alice")

    def test_registration_message(self, user):
        registration = SimpleNamespace(
            event="g::t::7.0.0",
            fields=RegistrationFields(
                arrival_date=date(2025, 7, 10),
                departure_date=date(2025, 7, 13),
                food_restrictions="vegan",
                children_count=1,
            ),
        )

        message = registration_message(user, registration)

        assert "alice (<@42>)" in message
        assert "registered/updated registration" in message
        assert "2025-07-10 - 2025-07-13" in message
        assert "vegan" in message

    def test_cancelled_registration_message(self, user):
        registration = SimpleNamespace(
            event="g::t::7.0.0",
            fields=RegistrationFields(
                arrival_date=date(2025, 7, 10), departure_date=date(2025, 7, 13), cancelled=True
            ),
        )

        assert "cancelled registration" in registration_message(user, registration)

    def test_achievement_message_grantor_visibility(self, user):
        achievement = SimpleNamespace(name="Early Bird", image="")
        organizer = SimpleNamespace(discord_id="7")

        assert "Granted by" not in achievement_message(user, achievement, user, False)
        assert "Granted by <@7>." in achievement_message(user, achievement, organizer, True)

    @responses.activate
    def test_send_posts_to_channel(self, notifier, user):
        responses.post(
            f"{API_BASE}/channels/999/messages",
            json={"id": "m1"},
            match=[matchers.header_matcher({"Authorization": "Bot bot"})],
        )
        achievement = SimpleNamespace(name="A", image="")

        notifier.notify_achievement(user, achievement, user, False)

        assert len(responses.calls) == 1

    @responses.activate
    def test_create_role(self, notifier):
        responses.post(
            f"{API_BASE}/guilds/{GUILD}/roles",
            json={"id": "555", "name": "achievement::A"},
            match=[matchers.json_params_matcher({"name": "achievement::A", "mentionable": True})],
        )

        assert notifier.create_role("achievement::A") == "555"

    @responses.activate
    def test_grant_role_failure(self, notifier):
        responses.put(f"{API_BASE}/guilds/{GUILD}/members/42/roles/555", status=403)

        with pytest.raises(NotifierError):
            notifier.grant_role("42", "555")
