"""
digital_bhutan.api.routes.businesses — Business registry endpoints
===================================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from digital_bhutan.api.deps import acting_user_id, get_config, get_engine, get_session
from digital_bhutan.api.schemas import BusinessCreate
from digital_bhutan.api.serializers import business_dict
from digital_bhutan.config import PlatformConfig
from digital_bhutan.services import business_service

router = APIRouter(prefix="/businesses", tags=["businesses"])


@router.post("")
def create_business(
    body: BusinessCreate,
    engine=Depends(get_engine),
    cfg: PlatformConfig = Depends(get_config),
):
    business = business_service.create_business(
        engine,
        owner_id=acting_user_id(body.owner_id, cfg),
        name=body.name,
        description=body.description,
        category=body.category,
        license_number=body.license_number,
    )
    return business_dict(business)


@router.get("")
def list_businesses(session: Session = Depends(get_session)):
    return [business_dict(b) for b in business_service.list_businesses(session)]
