from tripreg.models.achievement import Achievement, AchievementGrant
from tripreg.models.api_key import ApiKey
from tripreg.models.registration import Registration, RegistrationFields, RegistrationHistory
from tripreg.models.user import User

__all__ = [
    "Achievement",
    "AchievementGrant",
    "ApiKey",
    "Registration",
    "RegistrationFields",
    "RegistrationHistory",
    "User",
]
