"""Achievement endpoints."""

from __future__ import annotations

from flask import Blueprint, request

from tripreg.api.deps import current_identity, json_response, require_identity, timing
from tripreg.container import get_services
from tripreg.schemas import (
    AchievementCreateSchema,
    AchievementGrantResultSchema,
    AchievementGrantSchema,
    AchievementSchema,
)
from tripreg.services.achievements.dto import AchievementCreateIn, AchievementGrantIn

bp = Blueprint("achievements", __name__)

create_schema = AchievementCreateSchema()
grant_schema = AchievementGrantSchema()
achievement_schema = AchievementSchema()
grant_result_schema = AchievementGrantResultSchema()


@bp.post("/create")
@require_identity
@timing
def create_achievement():
    """Define an achievement and its external role (organizers only)."""

    payload = create_schema.load(request.get_json(silent=True) or {})
    out = get_services().achievements.create(current_identity(), AchievementCreateIn(**payload))
    return json_response({"data": achievement_schema.dump(out)}, status=201)


@bp.post("/grant")
@require_identity
@timing
def grant_achievement():
    """Redeem a code for oneself or, as an organizer, for someone else."""

    payload = grant_schema.load(request.get_json(silent=True) or {})
    out = get_services().achievements.grant(current_identity(), AchievementGrantIn(**payload))
    body = grant_result_schema.dump(out)
    body["message"] = f"Achievement '{out.achievement.name}' granted"
    return json_response({"data": body})
