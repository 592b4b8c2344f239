"""
DTOs for the registration ledger.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

from tripreg.models.registration import RegistrationFields

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class RegistrationIn:
    """
    Submission for one (identity, event) pair.

    :param arrival_date: First day on site.
    :type arrival_date: date
    :param departure_date: Last day on site; must not precede arrival.
    :type departure_date: date
    :param event: Event id; ``None`` selects the primary enabled event.
    :type event: str | None
    :param food_restrictions: Free text.
    :type food_restrictions: str
    :param children_count: Number of children joining.
    :type children_count: int
    :param cancelled: Cancellation flag; resubmitting ``False`` un-cancels.
    :type cancelled: bool
    :param note: Free text.
    :type note: str
    """

    arrival_date: date
    departure_date: date
    event: str | None = None
    food_restrictions: str = ""
    children_count: int = 0
    cancelled: bool = False
    note: str = ""

    def to_fields(self) -> RegistrationFields:
        return RegistrationFields(
            arrival_date=self.arrival_date,
            departure_date=self.departure_date,
            food_restrictions=self.food_restrictions,
            children_count=self.children_count,
            cancelled=self.cancelled,
            note=self.note,
        )


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class RegistrationOut:
    """
    Current state of a registration.

    :param id: Registration id.
    :type id: int
    :param user_id: Owning identity id.
    :type user_id: int
    :param event: Event id.
    :type event: str
    :param fields: Submitted data.
    :type fields: RegistrationFields
    :param created: ``True`` when the submission created the row.
    :type created: bool
    :param updated_at: Last write timestamp.
    :type updated_at: datetime | None
    """

    id: int
    user_id: int
    event: str
    fields: RegistrationFields
    created: bool = False
    updated_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class RegistrationWithUserOut:
    """Registration plus the owner's display fields (organizer listing)."""

    registration: RegistrationOut
    username: str
    email: str | None = None
    avatar: str | None = None


@dataclass(frozen=True, slots=True)
class HistoryEntryOut:
    """
    Rendered history snapshot.

    :param id: Snapshot id.
    :type id: int
    :param registration_id: Registration the snapshot belongs to.
    :type registration_id: int
    :param user_id: Owning identity id.
    :type user_id: int
    :param event: Event id.
    :type event: str
    :param created_at: When the snapshot was appended.
    :type created_at: datetime
    :param fields: Rendered fields; only changed ones when diffing.
    :type fields: dict[str, Any]
    """

    id: int
    registration_id: int
    user_id: int
    event: str
    created_at: datetime
    fields: dict[str, Any] = field(default_factory=dict)
