"""Profile of the acting identity."""

from __future__ import annotations

from flask import Blueprint

from tripreg.api.deps import current_identity, json_response, require_identity, timing
from tripreg.container import get_services
from tripreg.schemas import MeSchema

bp = Blueprint("me", __name__)

me_schema = MeSchema()


@bp.get("/me")
@require_identity
@timing
def me():
    """Return identity fields, the paid flag and current registrations."""

    services = get_services()
    out = services.identities.me(current_identity(), services.registrations)
    return json_response({"data": me_schema.dump(out)})
