"""Discord OAuth2 login (authorization code grant)."""

from __future__ import annotations

from urllib.parse import urlencode

from tripreg.infra.discord.client import DiscordClient, DiscordHTTPError
from tripreg.services._shared.ports.identity_provider import (
    ExternalProfile,
    IdentityProvider,
    IdentityProviderError,
)

AUTHORIZE_URL = "https://discord.com/oauth2/authorize"
SCOPES = ("identify", "email", "guilds")


class DiscordIdentityProvider(IdentityProvider):
    """
    Exchange an authorization code for the caller's Discord profile.

    The profile includes the ids of every guild the user belongs to so the
    login flow can enforce community membership.
    """

    def __init__(
        self,
        client: DiscordClient,
        *,
        client_id: str,
        client_secret: str,
        redirect_url: str,
    ) -> None:
        self.client = client
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_url = redirect_url

    def authorize_url(self, state: str) -> str:
        query = urlencode(
            {
                "client_id": self.client_id,
                "redirect_uri": self.redirect_url,
                "response_type": "code",
                "scope": " ".join(SCOPES),
                "state": state,
                "prompt": "none",
            }
        )
        return f"{AUTHORIZE_URL}?{query}"

    def exchange_code(self, code: str) -> ExternalProfile:
        try:
            token = self.client.request(
                "POST",
                "/oauth2/token",
                data={
                    "client_id": self.client_id,
                    "client_secret": self.client_secret,
                    "grant_type": "authorization_code",
                    "code": code,
                    "redirect_uri": self.redirect_url,
                },
            )
            access_token = (token or {}).get("access_token")
            if not access_token:
                raise IdentityProviderError("Token response carried no access_token")
            user = self.client.request("GET", "/users/@me", bearer=access_token) or {}
            guilds = self.client.request("GET", "/users/@me/guilds", bearer=access_token) or []
        except DiscordHTTPError as exc:
            raise IdentityProviderError(str(exc)) from exc

        if "id" not in user:
            raise IdentityProviderError("Profile response carried no id")
        return ExternalProfile(
            external_id=str(user["id"]),
            username=user.get("username") or str(user["id"]),
            email=user.get("email"),
            avatar=user.get("avatar"),
            group_ids=frozenset(str(g["id"]) for g in guilds if "id" in g),
        )
