"""
DTOs for achievements and grants.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AchievementCreateIn:
    """
    Input DTO for defining an achievement.

    :param name: Display name; also names the external role.
    :type name: str
    :param code: Redemption code. Unique.
    :type code: str
    :param image: Image URL.
    :type image: str
    """

    name: str
    code: str
    image: str = ""


@dataclass(frozen=True, slots=True)
class AchievementGrantIn:
    """
    Input DTO for granting an achievement.

    :param code: Redemption code of the achievement.
    :type code: str
    :param user_id: Target identity; ``None`` grants to the actor.
    :type user_id: int | None
    """

    code: str
    user_id: int | None = None


@dataclass(frozen=True, slots=True)
class AchievementOut:
    id: int
    name: str
    code: str
    image: str
    discord_role_id: str


@dataclass(frozen=True, slots=True)
class AchievementGrantOut:
    """
    Result of a grant.

    :param achievement: Granted achievement.
    :type achievement: AchievementOut
    :param user_id: Target identity id.
    :type user_id: int
    :param granted_by_id: Acting identity id.
    :type granted_by_id: int
    """

    achievement: AchievementOut
    user_id: int
    granted_by_id: int
