"""Achievements and the grants that award them to users."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tripreg.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .user import User


class Achievement(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Achievement backed by an external role.

    ``code`` is what users redeem; ``discord_role_id`` is the role created on
    the external authority when the achievement was defined.
    """

    __tablename__ = "achievements"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    image: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    code: Mapped[str] = mapped_column(String(100), nullable=False)
    discord_role_id: Mapped[str] = mapped_column(String(64), nullable=False)

    __table_args__ = (UniqueConstraint("code", name="uq_achievements_code"),)

    grants: Mapped[list[AchievementGrant]] = relationship(
        "AchievementGrant", back_populates="achievement", passive_deletes=True
    )


class AchievementGrant(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """One achievement awarded to one user, at most once."""

    __tablename__ = "achievement_grants"

    achievement_id: Mapped[int] = mapped_column(
        ForeignKey("achievements.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    granted_by_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    __table_args__ = (
        UniqueConstraint("achievement_id", "user_id", name="uq_achievement_grants_achievement_user"),
        Index("ix_achievement_grants_user_id", "user_id"),
    )

    achievement: Mapped[Achievement] = relationship(
        "Achievement", back_populates="grants", lazy="selectin"
    )
    user: Mapped[User] = relationship("User", foreign_keys=[user_id], lazy="selectin")
    granted_by: Mapped[User] = relationship("User", foreign_keys=[granted_by_id], lazy="selectin")
