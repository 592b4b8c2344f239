"""Static API keys owned by a user."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tripreg.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin, as_utc

if TYPE_CHECKING:
    from .user import User


class ApiKey(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Bearer key presented through the API-key header.

    Only ``last_used_at`` changes after creation; deletion is a hard delete
    scoped by owner.
    """

    __tablename__ = "api_keys"

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    key: Mapped[str] = mapped_column(String(64), nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    expires_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    last_used_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    __table_args__ = (
        UniqueConstraint("key", name="uq_api_keys_key"),
        Index("ix_api_keys_user_id", "user_id"),
    )

    user: Mapped[User | None] = relationship("User", back_populates="api_keys", lazy="selectin")

    def is_expired(self, now: datetime) -> bool:
        """Return ``True`` when an expiry is set and ``now`` is past it."""
        expires_at = as_utc(self.expires_at)
        return expires_at is not None and now > expires_at
