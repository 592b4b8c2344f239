"""Fixtures shared by the service-layer tests."""

from __future__ import annotations

import pytest

from tests.helpers.utils import GUILD_ID, ORGANIZER_ROLE
from tripreg.services.auth.dto import AuthenticatedIdentity, AuthMethod
from tripreg.services.authorization.gateway import RoleAuthorityGateway
from tripreg.services.authorization.policy import AuthorizationPolicy


@pytest.fixture()
def gateway(authority) -> RoleAuthorityGateway:
    return RoleAuthorityGateway(authority, GUILD_ID)


@pytest.fixture()
def policy(gateway) -> AuthorizationPolicy:
    return AuthorizationPolicy(gateway, ORGANIZER_ROLE)


@pytest.fixture()
def identity_of():
    """Return a builder for the identity a handler would pass to a service."""

    def _build(user, method: AuthMethod = AuthMethod.SESSION) -> AuthenticatedIdentity:
        return AuthenticatedIdentity(user_id=user.id, method=method)

    return _build
