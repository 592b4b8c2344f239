"""Liveness endpoint; needs no credentials."""

from __future__ import annotations

from flask import Blueprint, current_app
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from tripreg.api.deps import json_response, timing
from tripreg.uow.sqlalchemy_uow import SQLAlchemyReadOnlyUnitOfWork

bp = Blueprint("health", __name__)


def _database_reachable() -> bool:
    try:
        with SQLAlchemyReadOnlyUnitOfWork(enforce_db_readonly=False) as uow:
            uow.session.execute(text("SELECT 1"))
    except SQLAlchemyError:
        current_app.logger.exception("health.db_unreachable")
        return False
    return True


@bp.get("/health")
@timing
def healthcheck():
    """Report whether the store answers and which events accept registrations.

    Always 200; ``db`` is ``"fail"`` when the store is unreachable.
    """
    payload = {
        "status": "ok",
        "db": "ok" if _database_reachable() else "fail",
        "events": list(current_app.config.get("ENABLED_EVENTS", [])),
    }
    return json_response(payload)
