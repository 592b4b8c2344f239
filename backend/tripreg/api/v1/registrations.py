"""Registration ledger endpoints."""

from __future__ import annotations

from flask import Blueprint, request

from tripreg.api.deps import current_identity, json_response, require_identity, timing
from tripreg.container import get_services
from tripreg.schemas import (
    HistoryEntrySchema,
    HistoryQuerySchema,
    RegistrationListQuerySchema,
    RegistrationSchema,
    RegistrationSubmitSchema,
    RegistrationWithUserSchema,
)
from tripreg.services.registration.dto import RegistrationIn

bp = Blueprint("registrations", __name__)

submit_schema = RegistrationSubmitSchema()
registration_schema = RegistrationSchema()
history_query_schema = HistoryQuerySchema()
history_list_schema = HistoryEntrySchema(many=True)
list_query_schema = RegistrationListQuerySchema()
registration_list_schema = RegistrationWithUserSchema(many=True)


@bp.post("/register")
@require_identity
@timing
def submit_registration():
    """Create or overwrite the caller's registration for an event."""

    payload = submit_schema.load(request.get_json(silent=True) or {})
    out = get_services().registrations.submit(current_identity(), RegistrationIn(**payload))
    return json_response(
        {"data": registration_schema.dump(out)}, status=201 if out.created else 200
    )


@bp.get("/history")
@require_identity
@timing
def history():
    """Own history, newest first; ``diff=false`` renders full snapshots."""

    query = history_query_schema.load(request.args)
    entries = get_services().registrations.history(
        current_identity(), event=query["event"], diff=query["diff"]
    )
    return json_response({"data": history_list_schema.dump(entries)})


@bp.get("/registrations")
@require_identity
@timing
def list_registrations():
    """Every registration with owner display fields (organizers only)."""

    query = list_query_schema.load(request.args)
    items = get_services().registrations.list_all(current_identity(), event=query["event"])
    return json_response({"data": registration_list_schema.dump(items)})
