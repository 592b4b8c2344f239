"""Registration current state and its append-only history."""

from __future__ import annotations

import dataclasses
from datetime import date, datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Composite, Mapped, composite, mapped_column, relationship

from tripreg.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin, utcnow

if TYPE_CHECKING:
    from .user import User


@dataclasses.dataclass(frozen=True)
class RegistrationFields:
    """
    Immutable value holding the submitted registration data.

    Embedded by composition in both :class:`Registration` and
    :class:`RegistrationHistory`; replacing the value is the only way to change
    it.
    """

    arrival_date: date
    departure_date: date
    food_restrictions: str = ""
    children_count: int = 0
    cancelled: bool = False
    note: str = ""

    def as_dict(self) -> dict[str, Any]:
        return {name: getattr(self, name) for name in FIELD_NAMES}

    def changed_from(self, previous: RegistrationFields) -> dict[str, Any]:
        """Return only the fields whose value differs from ``previous``."""
        return {
            name: getattr(self, name)
            for name in FIELD_NAMES
            if getattr(self, name) != getattr(previous, name)
        }


FIELD_NAMES: tuple[str, ...] = tuple(f.name for f in dataclasses.fields(RegistrationFields))


def registration_fields_composite() -> Composite[RegistrationFields]:
    """Build a fresh composite (new columns) for one mapped table."""
    return composite(
        RegistrationFields,
        mapped_column("arrival_date", Date, nullable=False),
        mapped_column("departure_date", Date, nullable=False),
        mapped_column("food_restrictions", Text, nullable=False, default=""),
        mapped_column("children_count", Integer, nullable=False, default=0),
        mapped_column("cancelled", Boolean, nullable=False, default=False),
        mapped_column("note", Text, nullable=False, default=""),
    )


class Registration(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """Current registration of a user for one event. Never deleted."""

    __tablename__ = "registrations"

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    event: Mapped[str] = mapped_column(String(100), nullable=False)
    fields: Mapped[RegistrationFields] = registration_fields_composite()

    __table_args__ = (
        UniqueConstraint("user_id", "event", name="uq_registrations_user_event"),
        CheckConstraint("arrival_date <= departure_date", name="arrival_before_departure"),
        Index("ix_registrations_event", "event"),
    )

    user: Mapped[User] = relationship("User", back_populates="registrations", lazy="selectin")
    history: Mapped[list[RegistrationHistory]] = relationship(
        "RegistrationHistory", back_populates="registration", passive_deletes=True
    )


class RegistrationHistory(PKMixin, ReprMixin, db.Model):
    """Immutable snapshot appended with every registration write."""

    __tablename__ = "registration_history"

    registration_id: Mapped[int] = mapped_column(
        ForeignKey("registrations.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    event: Mapped[str] = mapped_column(String(100), nullable=False)
    fields: Mapped[RegistrationFields] = registration_fields_composite()
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    __table_args__ = (
        Index("ix_registration_history_user_created", "user_id", "created_at"),
        Index("ix_registration_history_registration_id", "registration_id"),
    )

    registration: Mapped[Registration] = relationship(
        "Registration", back_populates="history", lazy="selectin"
    )
