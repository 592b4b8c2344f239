"""Discord guild roles as the role authority."""

from __future__ import annotations

from tripreg.infra.discord.client import DiscordClient, DiscordHTTPError
from tripreg.services._shared.ports.role_authority import (
    MemberNotFound,
    Membership,
    RoleAuthority,
    RoleAuthorityError,
    RoleRef,
)


class DiscordRoleAuthority(RoleAuthority):
    """Look up guild roles and member role ids with the bot token."""

    def __init__(self, client: DiscordClient) -> None:
        self.client = client

    def list_roles(self, group_id: str) -> list[RoleRef]:
        try:
            payload = self.client.request("GET", f"/guilds/{group_id}/roles")
        except DiscordHTTPError as exc:
            raise RoleAuthorityError(str(exc)) from exc
        return [RoleRef(id=str(r["id"]), name=str(r["name"])) for r in payload or []]

    def get_membership(self, group_id: str, external_id: str) -> Membership:
        try:
            payload = self.client.request("GET", f"/guilds/{group_id}/members/{external_id}")
        except DiscordHTTPError as exc:
            if exc.status == 404:
                raise MemberNotFound(external_id) from exc
            raise RoleAuthorityError(str(exc)) from exc
        return Membership(role_ids=frozenset(str(r) for r in (payload or {}).get("roles", [])))
