"""
digital_bhutan.api.routes.residency — e-Residency endpoints
============================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from digital_bhutan.api.deps import acting_user_id, get_config, get_engine, get_session
from digital_bhutan.api.schemas import ResidencyApply, StatusUpdate
from digital_bhutan.api.serializers import residency_dict
from digital_bhutan.config import PlatformConfig
from digital_bhutan.services import residency_service

router = APIRouter(prefix="/residency", tags=["residency"])


@router.post("/apply")
def apply(
    body: ResidencyApply,
    engine=Depends(get_engine),
    cfg: PlatformConfig = Depends(get_config),
):
    application = residency_service.create_application(
        engine,
        user_id=acting_user_id(body.user_id, cfg),
        first_name=body.first_name,
        last_name=body.last_name,
        email=body.email,
        country_of_origin=body.country_of_origin,
        reason_for_residency=body.reason_for_residency,
    )
    return residency_dict(application)


@router.get("/applications")
def list_applications(session: Session = Depends(get_session)):
    return [residency_dict(a) for a in residency_service.list_applications(session)]


@router.patch("/applications/{application_id}/status")
def update_status(
    application_id: int,
    body: StatusUpdate,
    engine=Depends(get_engine),
    cfg: PlatformConfig = Depends(get_config),
):
    """Approve or reject an application.  Approval makes the user a resident."""
    application = residency_service.update_status(
        engine,
        application_id,
        body.status,
        reviewer_id=acting_user_id(body.reviewer_id, cfg),
    )
    return residency_dict(application)
