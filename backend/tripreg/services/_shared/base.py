from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone

from tripreg.core import errors as api_errors
from tripreg.services._shared.errors import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    ExternalServiceError,
    InternalServiceError,
    NotFoundError,
    ServiceError,
    ValidationError,
)
from tripreg.uow.sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyUnitOfWork,
)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Default clock: aware UTC ``now``."""
    return datetime.now(timezone.utc)


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Provide helpers to run read-only and read-write units of work.
    * Centralize error translation.
    * Keep services thin, orchestration-only, no web/ORM leakage.

    Notes
    -----
    - Services never touch the global session; they always use a Unit of Work.
    - The acting identity is passed explicitly to every operation.
    """

    def __init__(self, *, clock: Clock | None = None) -> None:
        """
        :param clock: Source of the current time; defaults to :func:`utc_now`.
        :type clock: Callable[[], datetime] | None
        """
        self.clock: Clock = clock or utc_now

    def now(self) -> datetime:
        return self.clock()

    # -------------------------- UoW helpers ---------------------------------

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        """Create a read-write Unit of Work (commit on success)."""
        return SQLAlchemyUnitOfWork()

    def ro_uow(self, *, enforce_db_readonly: bool = True) -> SQLAlchemyReadOnlyUnitOfWork:
        """Create a read-only Unit of Work (writes blocked, never commits)."""
        return SQLAlchemyReadOnlyUnitOfWork(enforce_db_readonly=enforce_db_readonly)

    # -------------------------- Error handling ------------------------------

    def translate_exceptions(self, exc: Exception) -> Exception:
        """
        Map service-level errors to API-level (HTTP) errors.

        :param exc: Exception raised within the service.
        :type exc: Exception
        :returns: Translated exception ready to be re-raised.
        :rtype: Exception
        """
        if isinstance(exc, NotFoundError):
            return api_errors.NotFound(str(exc))
        if isinstance(exc, ConflictError):
            return api_errors.Conflict(str(exc))
        if isinstance(exc, ValidationError):
            return api_errors.BadRequest(str(exc))
        if isinstance(exc, AuthenticationError):
            return api_errors.Unauthorized(exc.reason)
        if isinstance(exc, AuthorizationError):
            return api_errors.Forbidden(str(exc) or "Forbidden")
        if isinstance(exc, ExternalServiceError):
            return api_errors.BadGateway(str(exc) or "Upstream service failed")
        if isinstance(exc, InternalServiceError):
            return api_errors.InternalError(str(exc) or "Internal error")

        # Any other ServiceError subclass → 400 Bad Request
        if isinstance(exc, ServiceError):
            return api_errors.BadRequest(str(exc))

        # Fallback: untouched (bubbles up to the generic Flask handler)
        return exc
