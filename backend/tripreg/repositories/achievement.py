"""Achievement and grant repositories."""

from __future__ import annotations

from tripreg.models.achievement import Achievement, AchievementGrant
from tripreg.repositories.base import BaseRepository


class AchievementRepository(BaseRepository[Achievement]):
    """Persistence-only repository for :class:`Achievement`."""

    model = Achievement

    def _sortable_fields(self):
        return {"id": Achievement.id, "code": Achievement.code, "name": Achievement.name}

    def _filterable_fields(self):
        return {"code": Achievement.code}

    def get_by_code(self, code: str) -> Achievement | None:
        return self.find_one(code=code)

    def code_exists(self, code: str) -> bool:
        return self.exists(code=code)


class AchievementGrantRepository(BaseRepository[AchievementGrant]):
    """Persistence-only repository for :class:`AchievementGrant`."""

    model = AchievementGrant

    def _sortable_fields(self):
        return {"id": AchievementGrant.id, "created_at": AchievementGrant.created_at}

    def _filterable_fields(self):
        return {
            "achievement_id": AchievementGrant.achievement_id,
            "user_id": AchievementGrant.user_id,
        }

    def is_granted(self, achievement_id: int, user_id: int) -> bool:
        """Return ``True`` when ``user_id`` already holds the achievement."""
        return self.exists(achievement_id=achievement_id, user_id=user_id)
