"""
digital_bhutan.api.routes.cultural — Cultural learning endpoints
=================================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from digital_bhutan.api.deps import acting_user_id, get_config, get_engine, get_session
from digital_bhutan.api.schemas import ActivityComplete
from digital_bhutan.api.serializers import activity_dict, completion_dict, user_dict
from digital_bhutan.config import PlatformConfig
from digital_bhutan.services import catalog_service, points_service

router = APIRouter(prefix="/cultural", tags=["cultural"])


@router.get("/activities")
def list_activities(session: Session = Depends(get_session)):
    return [activity_dict(a) for a in catalog_service.list_activities(session)]


@router.post("/activities/{activity_id}/complete")
def complete_activity(
    activity_id: int,
    body: ActivityComplete | None = None,
    engine=Depends(get_engine),
    cfg: PlatformConfig = Depends(get_config),
):
    """Record a completion and credit the activity's Brownie Points."""
    user_id = acting_user_id(body.user_id if body else None, cfg)
    result = points_service.complete_activity(
        engine, user_id, activity_id, score=body.score if body else None
    )
    return {
        "completion": completion_dict(result.completion),
        "user": user_dict(result.user),
        "pointsAwarded": result.points_awarded,
        "tierChanged": result.tier_changed,
    }
