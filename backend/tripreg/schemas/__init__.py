"""Convenience exports for application schemas."""

from __future__ import annotations

from .achievement import (
    AchievementCreateSchema,
    AchievementGrantResultSchema,
    AchievementGrantSchema,
    AchievementSchema,
)
from .api_key import ApiKeyCreateSchema, ApiKeySchema
from .auth import CallbackQuerySchema, LoginResultSchema
from .identity import MeSchema, UserSchema
from .registration import (
    HistoryEntrySchema,
    HistoryQuerySchema,
    RegistrationListQuerySchema,
    RegistrationSchema,
    RegistrationSubmitSchema,
    RegistrationWithUserSchema,
)

__all__ = [
    "AchievementCreateSchema",
    "AchievementGrantResultSchema",
    "AchievementGrantSchema",
    "AchievementSchema",
    "ApiKeyCreateSchema",
    "ApiKeySchema",
    "CallbackQuerySchema",
    "LoginResultSchema",
    "MeSchema",
    "UserSchema",
    "HistoryEntrySchema",
    "HistoryQuerySchema",
    "RegistrationListQuerySchema",
    "RegistrationSchema",
    "RegistrationSubmitSchema",
    "RegistrationWithUserSchema",
]
