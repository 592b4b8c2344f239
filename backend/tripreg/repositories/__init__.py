"""Repository package exposing persistence-layer access for all domain models."""

from __future__ import annotations

from tripreg.repositories.achievement import AchievementGrantRepository, AchievementRepository
from tripreg.repositories.api_key import ApiKeyRepository
from tripreg.repositories.base import BaseRepository, apply_sorting
from tripreg.repositories.registration import (
    RegistrationHistoryRepository,
    RegistrationRepository,
)
from tripreg.repositories.user import UserRepository

__all__ = [
    # Base
    "BaseRepository",
    "apply_sorting",
    # Domain
    "AchievementRepository",
    "AchievementGrantRepository",
    "ApiKeyRepository",
    "RegistrationRepository",
    "RegistrationHistoryRepository",
    "UserRepository",
]
