"""
tripreg.services._shared.ports
==============================

*Ports* (hexagonal interfaces) that decouple the service layer from the
infrastructure it talks to, each with an in-memory double for tests.

Modules
-------
- :mod:`token_provider`: :class:`~.TokenProvider`, signing and decoding of
  session tokens.
- :mod:`role_authority`: :class:`~.RoleAuthority`, external group/role
  membership lookups.
- :mod:`identity_provider`: :class:`~.IdentityProvider`, OAuth code exchange.
- :mod:`notifier`: :class:`~.Notifier`, best-effort messages and role
  mutations.

Concrete adapters live under ``tripreg.infra``.
"""

from __future__ import annotations

from .identity_provider import (
    ExternalProfile,
    IdentityProvider,
    IdentityProviderError,
    StubIdentityProvider,
)
from .notifier import Notifier, NotifierError, NullNotifier, RecordingNotifier
from .role_authority import (
    InMemoryRoleAuthority,
    MemberNotFound,
    Membership,
    RoleAuthority,
    RoleAuthorityError,
    RoleRef,
)
from .token_provider import (
    ExpiredTokenError,
    InvalidTokenError,
    StubTokenProvider,
    TokenError,
    TokenProvider,
    TokenSigningError,
)

__all__ = [
    "ExternalProfile",
    "IdentityProvider",
    "IdentityProviderError",
    "StubIdentityProvider",
    "Notifier",
    "NotifierError",
    "NullNotifier",
    "RecordingNotifier",
    "InMemoryRoleAuthority",
    "MemberNotFound",
    "Membership",
    "RoleAuthority",
    "RoleAuthorityError",
    "RoleRef",
    "ExpiredTokenError",
    "InvalidTokenError",
    "StubTokenProvider",
    "TokenError",
    "TokenProvider",
    "TokenSigningError",
]
