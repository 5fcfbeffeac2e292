"""
digital_bhutan.api.routes.public — Read-only public endpoints
==============================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from digital_bhutan.api.deps import get_session
from digital_bhutan.api.serializers import (
    completion_dict,
    government_service_dict,
    ledger_dict,
    mini_app_dict,
    tier_dict,
    user_dict,
)
from digital_bhutan.services import catalog_service, points_service, settings_service
from digital_bhutan.services.stats_service import get_dashboard_stats
from digital_bhutan.services.user_service import require_user

router = APIRouter(tags=["public"])


# ---------------------------------------------------------------------------
# GET /dashboard/stats
# ---------------------------------------------------------------------------
@router.get("/dashboard/stats")
def dashboard_stats(session: Session = Depends(get_session)):
    """Headline counters for the dashboard hero section."""
    stats = get_dashboard_stats(session)
    return {
        "totalResidents": stats.total_residents,
        "totalBusinesses": stats.total_businesses,
        "totalBrowniePoints": stats.total_brownie_points,
        "satisfactionRate": stats.satisfaction_rate,
    }


# ---------------------------------------------------------------------------
# Catalogues
# ---------------------------------------------------------------------------
@router.get("/mini-apps")
def list_mini_apps(session: Session = Depends(get_session)):
    return [mini_app_dict(m) for m in catalog_service.list_mini_apps(session)]


@router.get("/government/services")
def list_government_services(session: Session = Depends(get_session)):
    return [
        government_service_dict(s)
        for s in catalog_service.list_government_services(session)
    ]


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------
@router.get("/users/{user_id}")
def get_user(user_id: int, session: Session = Depends(get_session)):
    return user_dict(require_user(session, user_id))


@router.get("/users/{user_id}/activities")
def get_user_activities(user_id: int, session: Session = Depends(get_session)):
    require_user(session, user_id)
    return [completion_dict(c) for c in points_service.get_user_activities(session, user_id)]


@router.get("/users/{user_id}/points")
def get_user_points(
    user_id: int,
    limit: int = Query(50, ge=1, le=500),
    session: Session = Depends(get_session),
):
    """Current balance plus the most recent ledger entries."""
    user = require_user(session, user_id)
    return {
        "userId": user.id,
        "browniePoints": user.brownie_points,
        "tierLevel": user.tier_level,
        "ledger": [ledger_dict(e) for e in points_service.get_ledger(session, user_id, limit)],
    }


@router.get("/users/{user_id}/tier")
def get_user_tier(user_id: int, session: Session = Depends(get_session)):
    return tier_dict(require_user(session, user_id))


# ---------------------------------------------------------------------------
# GET /settings/public
# ---------------------------------------------------------------------------
@router.get("/settings/public")
def public_settings(session: Session = Depends(get_session)):
    return settings_service.get_public_settings(session)
