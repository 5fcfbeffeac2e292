"""
digital_bhutan.api.routes.admin — Admin console endpoints (JWT-protected)
==========================================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from digital_bhutan.api.deps import (
    admin_id,
    get_config,
    get_current_admin,
    get_engine,
    get_session,
)
from digital_bhutan.api.schemas import (
    LogLevelUpdate,
    ManualAward,
    MintRequest,
    SettingUpdate,
    StatusUpdate,
)
from digital_bhutan.api.serializers import (
    audit_dict,
    business_dict,
    transaction_dict,
    user_dict,
)
from digital_bhutan.config import PlatformConfig
from digital_bhutan.services import admin_service, settings_service
from digital_bhutan.services.log_buffer import (
    VALID_LEVELS,
    get_current_level,
    get_logs,
    set_capture_level,
)
from digital_bhutan.services.minting import get_minter, mint_user_credential

router = APIRouter(prefix="/admin", tags=["admin"])


# ---------------------------------------------------------------------------
# Audit Log
# ---------------------------------------------------------------------------
@router.get("/audit")
def get_audit_log(
    page: int = Query(1, ge=1),
    page_size: int = Query(25, ge=1, le=100, alias="pageSize"),
    target_table: str | None = Query(None, alias="targetTable"),
    admin: dict = Depends(get_current_admin),
    session: Session = Depends(get_session),
):
    """Paginated admin audit log."""
    total, rows = admin_service.list_audit_log(
        session, page=page, page_size=page_size, target_table=target_table
    )
    return {
        "total": total,
        "page": page,
        "pageSize": page_size,
        "entries": [audit_dict(r) for r in rows],
    }


# ---------------------------------------------------------------------------
# Brownie Points
# ---------------------------------------------------------------------------
@router.post("/points/award")
def award_points(
    body: ManualAward,
    admin: dict = Depends(get_current_admin),
    engine=Depends(get_engine),
):
    user = admin_service.manual_award(
        engine,
        user_id=body.user_id,
        points=body.points,
        reason=body.reason,
        actor_id=admin_id(admin),
    )
    return user_dict(user)


# ---------------------------------------------------------------------------
# Businesses
# ---------------------------------------------------------------------------
@router.patch("/businesses/{business_id}/status")
def update_business_status(
    business_id: int,
    body: StatusUpdate,
    admin: dict = Depends(get_current_admin),
    engine=Depends(get_engine),
):
    business = admin_service.update_business_status(
        engine,
        business_id=business_id,
        status=body.status,
        actor_id=admin_id(admin),
    )
    return business_dict(business)


# ---------------------------------------------------------------------------
# Credential minting
# ---------------------------------------------------------------------------
@router.post("/users/{user_id}/mint")
def mint_credential(
    user_id: int,
    body: MintRequest,
    admin: dict = Depends(get_current_admin),
    engine=Depends(get_engine),
    cfg: PlatformConfig = Depends(get_config),
):
    """Mint the user's credential NFT through the configured minter."""
    tx = mint_user_credential(
        engine,
        get_minter(cfg.minting),
        user_id,
        body.to_address,
        actor_id=admin_id(admin),
    )
    return transaction_dict(tx)


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------
@router.get("/settings")
def get_all_settings(
    admin: dict = Depends(get_current_admin),
    session: Session = Depends(get_session),
):
    return {"settings": settings_service.get_all_settings(session)}


@router.put("/settings")
def update_settings(
    body: list[SettingUpdate],
    admin: dict = Depends(get_current_admin),
    engine=Depends(get_engine),
):
    items = [
        {
            "key": s.key,
            "value": s.value,
            **({"category": s.category} if s.category else {}),
            **({"description": s.description} if s.description else {}),
        }
        for s in body
    ]
    count = settings_service.bulk_upsert(engine, items, actor_id=admin_id(admin))
    return {"updated": count}


# ---------------------------------------------------------------------------
# Live Logs
# ---------------------------------------------------------------------------
@router.get("/logs")
def get_live_logs(
    tail: int = Query(200, ge=1, le=5000),
    level: str | None = Query(None),
    logger_filter: str | None = Query(None, alias="logger"),
    admin: dict = Depends(get_current_admin),
):
    """Return recent log entries from the in-memory ring buffer."""
    entries = get_logs(tail=tail, level=level, logger_filter=logger_filter)
    return {
        "entries": entries,
        "total": len(entries),
        "captureLevel": get_current_level(),
        "validLevels": list(VALID_LEVELS),
    }


@router.get("/logs/level")
def get_log_level(admin: dict = Depends(get_current_admin)):
    return {"level": get_current_level(), "validLevels": list(VALID_LEVELS)}


@router.put("/logs/level")
def update_log_level(
    body: LogLevelUpdate,
    admin: dict = Depends(get_current_admin),
):
    try:
        level = set_capture_level(body.level)
    except ValueError as exc:
        raise HTTPException(400, str(exc))
    return {"level": level}
