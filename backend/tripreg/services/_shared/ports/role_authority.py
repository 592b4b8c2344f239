from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Protocol


@dataclass(frozen=True, slots=True)
class RoleRef:
    """
    Role defined inside a group on the role authority.

    :param id: Authority-side role id.
    :type id: str
    :param name: Role name (e.g. ``g::t::orgs``).
    :type name: str
    """

    id: str
    name: str


@dataclass(frozen=True, slots=True)
class Membership:
    """Role ids held by one member of a group."""

    role_ids: frozenset[str]


class RoleAuthorityError(Exception):
    """Transport or service failure talking to the role authority."""


class MemberNotFound(RoleAuthorityError):
    """The external identity is not a member of the group."""


class RoleAuthority(Protocol):
    """Port for the external service of record for group/role membership."""

    def list_roles(self, group_id: str) -> list[RoleRef]: ...

    def get_membership(self, group_id: str, external_id: str) -> Membership: ...


@dataclass
class InMemoryRoleAuthority(RoleAuthority):
    """Role authority double for tests.

    ``members`` maps external ids to role names; ``error`` is raised from
    every call when set.
    """

    roles: list[RoleRef] = field(default_factory=list)
    members: dict[str, set[str]] = field(default_factory=dict)
    error: Exception | None = None
    calls: list[str] = field(default_factory=list)

    def define(self, *names: str) -> InMemoryRoleAuthority:
        for name in names:
            if not any(r.name == name for r in self.roles):
                self.roles.append(RoleRef(id=str(1000 + len(self.roles)), name=name))
        return self

    def assign(self, external_id: str, role_names: Iterable[str]) -> InMemoryRoleAuthority:
        names = set(role_names)
        self.define(*names)
        self.members.setdefault(external_id, set()).update(names)
        return self

    def list_roles(self, group_id: str) -> list[RoleRef]:
        self.calls.append("list_roles")
        if self.error is not None:
            raise self.error
        return list(self.roles)

    def get_membership(self, group_id: str, external_id: str) -> Membership:
        self.calls.append("get_membership")
        if self.error is not None:
            raise self.error
        if external_id not in self.members:
            raise MemberNotFound(external_id)
        by_name = {r.name: r.id for r in self.roles}
        return Membership(
            role_ids=frozenset(by_name[n] for n in self.members[external_id] if n in by_name)
        )
