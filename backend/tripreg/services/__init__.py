"""Service layer public API.

This package exposes the essential building blocks for the service layer so that
callers can import from :mod:`tripreg.services` without knowing internal structure.

Re-exports
----------
- Base primitives (from ``tripreg.services._shared.base``)
    * :class:`BaseService`

- Authentication (from ``tripreg.services.auth``)
    * :class:`CredentialVerifier`, :class:`SessionIssuer`, :class:`LoginService`
    * DTOs: :class:`AuthenticatedIdentity`, :class:`AuthMethod`,
      :class:`IssuedSession`, :class:`LoginOut`

- Authorization (from ``tripreg.services.authorization``)
    * :class:`RoleAuthorityGateway`, :class:`AuthorizationPolicy`

- Identity service (from ``tripreg.services.identity``)
    * :class:`IdentityService`
    * DTOs: :class:`UserPublicOut`, :class:`MeOut`

- Registration ledger (from ``tripreg.services.registration``)
    * :class:`RegistrationService`
    * DTOs: :class:`RegistrationIn`, :class:`RegistrationOut`,
      :class:`RegistrationWithUserOut`, :class:`HistoryEntryOut`

- Achievements and API keys
    * :class:`AchievementService`, :class:`ApiKeyService`
"""

from __future__ import annotations

# Base primitives
from ._shared.base import BaseService

# Achievements and API keys
from .achievements.dto import (
    AchievementCreateIn,
    AchievementGrantIn,
    AchievementGrantOut,
    AchievementOut,
)
from .achievements.service import AchievementService
from .api_keys.dto import ApiKeyCreateIn, ApiKeyOut
from .api_keys.service import ApiKeyService

# Authentication
from .auth.credentials import CredentialVerifier
from .auth.dto import AuthenticatedIdentity, AuthMethod, IssuedSession, LoginOut
from .auth.login import LoginService
from .auth.sessions import SessionIssuer

# Authorization
from .authorization.gateway import RoleAuthorityGateway
from .authorization.policy import AuthorizationPolicy

# Identity
from .identity.dto import MeOut, UserPublicOut
from .identity.service import IdentityService

# Registration ledger
from .registration.dto import (
    HistoryEntryOut,
    RegistrationIn,
    RegistrationOut,
    RegistrationWithUserOut,
)
from .registration.service import RegistrationService

__all__ = [
    # Base
    "BaseService",
    # Authentication
    "CredentialVerifier",
    "SessionIssuer",
    "LoginService",
    "AuthenticatedIdentity",
    "AuthMethod",
    "IssuedSession",
    "LoginOut",
    # Authorization
    "RoleAuthorityGateway",
    "AuthorizationPolicy",
    # Identity
    "IdentityService",
    "UserPublicOut",
    "MeOut",
    # Registrations
    "RegistrationService",
    "RegistrationIn",
    "RegistrationOut",
    "RegistrationWithUserOut",
    "HistoryEntryOut",
    # Achievements
    "AchievementService",
    "AchievementCreateIn",
    "AchievementGrantIn",
    "AchievementOut",
    "AchievementGrantOut",
    # API keys
    "ApiKeyService",
    "ApiKeyCreateIn",
    "ApiKeyOut",
]
