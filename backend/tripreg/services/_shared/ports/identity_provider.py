from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol


@dataclass(frozen=True, slots=True)
class ExternalProfile:
    """
    Profile returned by the identity provider after a code exchange.

    :param external_id: Provider-side user id.
    :param username: Display name.
    :param email: Email, when the provider shares it.
    :param avatar: Avatar reference.
    :param group_ids: Ids of the groups (guilds) the user belongs to.
    """

    external_id: str
    username: str
    email: str | None = None
    avatar: str | None = None
    group_ids: frozenset[str] = frozenset()


class IdentityProviderError(Exception):
    """Code exchange or profile lookup failed."""


class IdentityProvider(Protocol):
    """Port for the OAuth identity provider."""

    def authorize_url(self, state: str) -> str: ...

    def exchange_code(self, code: str) -> ExternalProfile: ...


@dataclass
class StubIdentityProvider(IdentityProvider):
    """Identity provider double mapping authorization codes to profiles."""

    profiles: dict[str, ExternalProfile] = field(default_factory=dict)
    base_url: str = "https://id.example.test/authorize"

    def authorize_url(self, state: str) -> str:
        return f"{self.base_url}?state={state}"

    def exchange_code(self, code: str) -> ExternalProfile:
        try:
            return self.profiles[code]
        except KeyError:
            raise IdentityProviderError(f"invalid code {code!r}") from None
