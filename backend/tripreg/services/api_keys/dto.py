"""
DTOs for API key management.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class ApiKeyCreateIn:
    """
    :param name: Human label for the key.
    :type name: str
    :param expires_at: Optional absolute expiry.
    :type expires_at: datetime | None
    """

    name: str
    expires_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class ApiKeyOut:
    """
    API key as shown to its owner.

    ``key`` carries the full material only in the creation response; listings
    show a masked suffix.
    """

    id: int
    name: str
    key: str
    created_at: datetime | None = None
    expires_at: datetime | None = None
    last_used_at: datetime | None = None


def mask_key(key: str) -> str:
    """Keep the last four characters so owners can tell keys apart."""
    return f"...{key[-4:]}"
