"""Role lookups against the external role authority, fail-closed."""

from __future__ import annotations

import logging

from tripreg.services._shared.errors import ExternalServiceError
from tripreg.services._shared.ports.role_authority import (
    MemberNotFound,
    RoleAuthority,
    RoleAuthorityError,
)

logger = logging.getLogger(__name__)


class RoleAuthorityGateway:
    """
    Resolve ``(external id, role name) -> bool`` against a role authority.

    Every check performs two fresh lookups (role list, then membership);
    nothing is cached between calls.

    - No authority client or no group id: ``False``, no error.
    - Role name unknown in the group: ``False``.
    - Member not found: ``False``.
    - Any other failure (including timeouts): :class:`ExternalServiceError`.
    """

    def __init__(self, authority: RoleAuthority | None, group_id: str | None) -> None:
        self.authority = authority
        self.group_id = group_id or None

    @property
    def configured(self) -> bool:
        return self.authority is not None and self.group_id is not None

    def has_role(self, external_id: str, role_name: str) -> bool:
        """
        Return whether ``external_id`` holds ``role_name`` in the group.

        :raises ExternalServiceError: If the authority fails for any reason
            other than a missing member.
        """
        authority, group_id = self.authority, self.group_id
        if authority is None or group_id is None:
            logger.debug("roles.unconfigured", extra={"role": role_name})
            return False

        try:
            roles = authority.list_roles(group_id)
        except RoleAuthorityError as exc:
            logger.error("roles.list_failed", extra={"role": role_name}, exc_info=True)
            raise ExternalServiceError("Role authority unavailable") from exc

        role_id = next((r.id for r in roles if r.name == role_name), None)
        if role_id is None:
            logger.warning("roles.unknown_role", extra={"role": role_name})
            return False

        try:
            membership = authority.get_membership(group_id, external_id)
        except MemberNotFound:
            return False
        except RoleAuthorityError as exc:
            logger.error("roles.membership_failed", extra={"role": role_name}, exc_info=True)
            raise ExternalServiceError("Role authority unavailable") from exc

        return role_id in membership.role_ids
