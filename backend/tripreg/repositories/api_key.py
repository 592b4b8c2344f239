"""API key repository."""

from __future__ import annotations

from tripreg.models.api_key import ApiKey
from tripreg.repositories.base import BaseRepository


class ApiKeyRepository(BaseRepository[ApiKey]):
    """Persistence-only repository for :class:`ApiKey`.

    Every owner-facing query is scoped by ``user_id``.
    """

    model = ApiKey

    def _sortable_fields(self):
        return {"id": ApiKey.id, "created_at": ApiKey.created_at, "name": ApiKey.name}

    def _filterable_fields(self):
        return {"user_id": ApiKey.user_id, "key": ApiKey.key}

    def _updatable_fields(self):
        return {"last_used_at"}

    def get_by_key(self, key: str) -> ApiKey | None:
        """Exact match on the raw key material."""
        return self.find_one(key=key)

    def get_owned(self, key_id: int, user_id: int) -> ApiKey | None:
        """Return the key only when ``user_id`` owns it."""
        key = self.get(key_id)
        if key is None or key.user_id != user_id:
            return None
        return key

    def list_for_user(self, user_id: int) -> list[ApiKey]:
        return self.list(filters={"user_id": user_id}, sort=["created_at"])
