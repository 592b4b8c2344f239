"""User repository."""

from __future__ import annotations

from tripreg.models.user import User
from tripreg.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    Lookup by external id backs the login upsert; it never issues sessions.
    """

    model = User

    def _sortable_fields(self):
        return {"id": User.id, "username": User.username, "created_at": User.created_at}

    def _filterable_fields(self):
        return {"discord_id": User.discord_id, "username": User.username}

    def _updatable_fields(self):
        """Display fields refreshed on every login."""
        return {"username", "email", "avatar"}

    def get_by_discord_id(self, discord_id: str) -> User | None:
        """Fetch a user by external identity-provider id."""
        return self.find_one(discord_id=discord_id)
