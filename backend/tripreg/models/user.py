"""User model: the durable internal identity behind every credential."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from tripreg.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .api_key import ApiKey
    from .registration import Registration


class User(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Identity created on the first successful external login.

    Display fields are refreshed on every login; rows are never deleted by
    the application.

    Fields
    ------
    discord_id : str
        External identity-provider id. Unique.
    username : str
        Display name reported by the provider.
    email : str | None
        Email reported by the provider, stored lowercased.
    avatar : str | None
        Provider avatar reference (hash).
    """

    __tablename__ = "users"

    discord_id: Mapped[str] = mapped_column(String(64), nullable=False)
    username: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str | None] = mapped_column(String(254), nullable=True)
    avatar: Mapped[str | None] = mapped_column(String(255), nullable=True)

    __table_args__ = (UniqueConstraint("discord_id", name="uq_users_discord_id"),)

    api_keys: Mapped[list[ApiKey]] = relationship(
        "ApiKey", back_populates="user", passive_deletes=True, lazy="selectin"
    )
    registrations: Mapped[list[Registration]] = relationship(
        "Registration", back_populates="user", passive_deletes=True, lazy="selectin"
    )

    @validates("email")
    def _normalize_email(self, key: str, value: str | None) -> str | None:
        """Lowercase and trim the email; blank values become ``None``."""
        if value is None:
            return None
        v = value.strip().lower()
        return v or None

    @validates("username")
    def _normalize_username(self, key: str, value: str) -> str:
        """
        Normalize and validate username.

        :raises ValueError: If username is missing or only whitespace.
        """
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Username is required.")
        return value.strip()
