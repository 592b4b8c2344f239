"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic**: they never import Flask or
HTTP helpers. The translation to HTTP responses (RFC 7807) is handled by
``BaseService.translate_exceptions()`` and the API error handlers.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError


def violates(exc: IntegrityError, constraint_name: str) -> bool:
    """
    Check whether an IntegrityError originates from a specific constraint.

    PostgreSQL reports the constraint name; SQLite reports the columns, so the
    caller may pass either.

    :param exc: The exception raised by SQLAlchemy during flush/commit.
    :param constraint_name: Constraint name or column list to look for.
    :returns: ``True`` if the message mentions ``constraint_name``.
    """
    message = str(exc.orig).lower() if exc.orig else ""
    return constraint_name.lower() in message


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    These are *not* HTTP errors; the API layer translates them.
    """

    pass


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found in the repository.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str | int
    """

    entity: str
    key: str | int

    def __str__(self) -> str:
        return f"{self.entity} not found: {self.key}"


@dataclass(slots=True)
class ConflictError(ServiceError):
    """
    Raised when a unique constraint or business rule conflict occurs.

    :param entity: Entity name (e.g., "AchievementGrant").
    :type entity: str
    :param detail: Short human-readable explanation.
    :type detail: str
    """

    entity: str
    detail: str

    def __str__(self) -> str:
        return f"Conflict on {self.entity}: {self.detail}"


class ValidationError(ServiceError):
    """Input rejected before any write (e.g. arrival after departure)."""


class AuthenticationError(ServiceError):
    """Missing, invalid or expired credential."""

    def __init__(self, reason: str = "Unauthorized") -> None:
        super().__init__(reason)
        self.reason = reason


class AuthorizationError(ServiceError):
    """Valid identity without the role an operation requires."""


class ExternalServiceError(ServiceError):
    """Role authority, identity provider or bot unreachable or failing."""


class InternalServiceError(ServiceError):
    """Failure the caller cannot act upon, such as a signing failure."""
