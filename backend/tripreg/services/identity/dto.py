"""
DTOs for IdentityService.

Data Transfer Objects (DTOs) isolate the service layer from ORM models,
ensuring clear input/output contracts and type safety.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tripreg.services.registration.dto import RegistrationOut


@dataclass(frozen=True, slots=True)
class UserPublicOut:
    """
    Public representation of an identity.

    :param id: Internal identity id.
    :type id: int
    :param discord_id: External identity-provider id.
    :type discord_id: str
    :param username: Display name.
    :type username: str
    :param email: Email, when known.
    :type email: str | None
    :param avatar: Avatar reference.
    :type avatar: str | None
    :param created_at: Creation timestamp.
    :type created_at: datetime | None
    """

    id: int
    discord_id: str
    username: str
    email: str | None = None
    avatar: str | None = None
    created_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class MeOut:
    """
    Profile of the acting identity.

    ``paid`` is informational only and never used for access decisions.

    :param user: Identity fields.
    :type user: UserPublicOut
    :param paid: Whether the identity holds the paid role of the primary event.
    :type paid: bool
    :param registrations: Current registrations of the identity.
    :type registrations: list[RegistrationOut]
    """

    user: UserPublicOut
    paid: bool = False
    registrations: list[RegistrationOut] = field(default_factory=list)
