"""Business registration.  Status changes go through the admin console
(:func:`digital_bhutan.services.admin_service.update_business_status`)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlalchemy.orm import Session

from digital_bhutan.database.engine import get_session
from digital_bhutan.database.models import Business, ReviewStatus
from digital_bhutan.services.user_service import mock_token_id, require_user

if TYPE_CHECKING:
    from sqlalchemy import Engine

logger = logging.getLogger(__name__)


def create_business(
    engine: Engine,
    *,
    owner_id: int,
    name: str,
    description: str,
    category: str,
    license_number: str | None = None,
) -> Business:
    with get_session(engine) as session:
        require_user(session, owner_id)
        business = Business(
            owner_id=owner_id,
            name=name,
            description=description,
            category=category,
            license_number=license_number,
            business_nft_id=mock_token_id("biz_nft"),
            status=ReviewStatus.PENDING.value,
        )
        session.add(business)
        session.flush()
        session.refresh(business)

    logger.info("Business %d (%s) registered by user %d", business.id, name, owner_id)
    return business


def list_businesses(session: Session) -> list[Business]:
    return list(session.scalars(
        select(Business).order_by(Business.created_at.desc(), Business.id.desc())
    ).all())


def list_for_owner(session: Session, owner_id: int) -> list[Business]:
    return list(session.scalars(
        select(Business)
        .where(Business.owner_id == owner_id)
        .order_by(Business.created_at.desc(), Business.id.desc())
    ).all())
