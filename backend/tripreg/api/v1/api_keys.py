"""API key management for the acting identity."""

from __future__ import annotations

from flask import Blueprint, request

from tripreg.api.deps import current_identity, json_response, require_identity, timing
from tripreg.container import get_services
from tripreg.schemas import ApiKeyCreateSchema, ApiKeySchema
from tripreg.services.api_keys.dto import ApiKeyCreateIn

bp = Blueprint("api_keys", __name__)

create_schema = ApiKeyCreateSchema()
api_key_schema = ApiKeySchema()
api_key_list_schema = ApiKeySchema(many=True)


@bp.post("")
@require_identity
@timing
def create_api_key():
    """Mint a key; the full key is only ever returned here."""

    payload = create_schema.load(request.get_json(silent=True) or {})
    out = get_services().api_keys.create(current_identity(), ApiKeyCreateIn(**payload))
    return json_response({"data": api_key_schema.dump(out)}, status=201)


@bp.get("")
@require_identity
@timing
def list_api_keys():
    items = get_services().api_keys.list(current_identity())
    return json_response({"data": api_key_list_schema.dump(items)})


@bp.delete("/<int:key_id>")
@require_identity
@timing
def delete_api_key(key_id: int):
    get_services().api_keys.delete(current_identity(), key_id)
    return "", 204
