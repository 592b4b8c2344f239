"""Registration and registration-history repositories."""

from __future__ import annotations

from sqlalchemy import select

from tripreg.models.registration import Registration, RegistrationHistory
from tripreg.repositories.base import BaseRepository


class RegistrationRepository(BaseRepository[Registration]):
    """Persistence-only repository for :class:`Registration`.

    Rows are never deleted; the upsert looks the row up by its natural key.
    """

    model = Registration

    def _sortable_fields(self):
        return {
            "id": Registration.id,
            "event": Registration.event,
            "created_at": Registration.created_at,
            "updated_at": Registration.updated_at,
        }

    def _filterable_fields(self):
        return {"user_id": Registration.user_id, "event": Registration.event}

    def get_for_user_event(self, user_id: int, event: str, *, lock: bool = False) -> Registration | None:
        """Return the row for ``(user_id, event)``, optionally ``FOR UPDATE``."""
        stmt = select(Registration).where(
            Registration.user_id == user_id, Registration.event == event
        )
        if lock:
            stmt = stmt.with_for_update()
        return self.session.execute(stmt).scalars().first()

    def list_for_user(self, user_id: int) -> list[Registration]:
        return self.list(filters={"user_id": user_id}, sort=["event"])

    def list_all(self, event: str | None = None) -> list[Registration]:
        """All registrations, optionally restricted to one event."""
        filters = {"event": event} if event else None
        return self.list(filters=filters, sort=["event"])


class RegistrationHistoryRepository(BaseRepository[RegistrationHistory]):
    """Append-only access to :class:`RegistrationHistory`; no updates, no deletes."""

    model = RegistrationHistory

    def _sortable_fields(self):
        return {"created_at": RegistrationHistory.created_at}

    def _filterable_fields(self):
        return {
            "user_id": RegistrationHistory.user_id,
            "event": RegistrationHistory.event,
            "registration_id": RegistrationHistory.registration_id,
        }

    def append(self, entry: RegistrationHistory) -> RegistrationHistory:
        return self.add(entry)

    def list_for_user(self, user_id: int, event: str | None = None) -> list[RegistrationHistory]:
        """Newest first: ``created_at DESC, id DESC``."""
        filters: dict[str, object] = {"user_id": user_id}
        if event:
            filters["event"] = event
        return self.list(filters=filters, sort=["-created_at"])
