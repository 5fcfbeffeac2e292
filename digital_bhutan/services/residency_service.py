"""
digital_bhutan.services.residency_service — e-Residency Applications
=====================================================================

Applications start ``pending`` and are moved to ``approved`` or
``rejected`` by a reviewer.  Approval flips the applicant's
``is_digital_resident`` flag in the same transaction as the status change.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlalchemy.orm import Session

from digital_bhutan.constants import REVIEW_STATUSES
from digital_bhutan.database.engine import get_session
from digital_bhutan.database.models import (
    AdminActionType,
    ResidencyApplication,
    ReviewStatus,
    User,
)
from digital_bhutan.services.admin_service import log_admin_action, row_to_dict
from digital_bhutan.services.errors import ApplicationNotFound, InvalidStatus
from digital_bhutan.services.user_service import require_user

if TYPE_CHECKING:
    from sqlalchemy import Engine

logger = logging.getLogger(__name__)


def create_application(
    engine: Engine,
    *,
    user_id: int,
    first_name: str,
    last_name: str,
    email: str,
    country_of_origin: str,
    reason_for_residency: str,
) -> ResidencyApplication:
    with get_session(engine) as session:
        require_user(session, user_id)
        application = ResidencyApplication(
            user_id=user_id,
            first_name=first_name,
            last_name=last_name,
            email=email,
            country_of_origin=country_of_origin,
            reason_for_residency=reason_for_residency,
            status=ReviewStatus.PENDING.value,
        )
        session.add(application)
        session.flush()
        session.refresh(application)

    logger.info("Residency application %d submitted by user %d", application.id, user_id)
    return application


def list_applications(session: Session) -> list[ResidencyApplication]:
    return list(session.scalars(
        select(ResidencyApplication)
        .order_by(ResidencyApplication.created_at.desc(), ResidencyApplication.id.desc())
    ).all())


def list_for_user(session: Session, user_id: int) -> list[ResidencyApplication]:
    return list(session.scalars(
        select(ResidencyApplication)
        .where(ResidencyApplication.user_id == user_id)
        .order_by(ResidencyApplication.created_at.desc(), ResidencyApplication.id.desc())
    ).all())


def update_status(
    engine: Engine,
    application_id: int,
    status: str,
    reviewer_id: int,
) -> ResidencyApplication:
    """Set an application's review status.

    Raises :class:`InvalidStatus` before touching the database when
    *status* is not one of pending / approved / rejected, and
    :class:`ApplicationNotFound` for an unknown id and :class:`UserNotFound`
    for an unknown reviewer.
    """
    if status not in REVIEW_STATUSES:
        raise InvalidStatus(status, REVIEW_STATUSES)

    with get_session(engine) as session:
        application = session.get(ResidencyApplication, application_id)
        if application is None:
            raise ApplicationNotFound(application_id)
        require_user(session, reviewer_id)

        before = row_to_dict(application)
        application.status = status
        application.reviewed_by = reviewer_id
        application.reviewed_at = datetime.now(UTC)

        if status == ReviewStatus.APPROVED:
            user = session.get(User, application.user_id)
            if user is not None:
                user.is_digital_resident = True

        session.flush()
        log_admin_action(
            session,
            actor_id=reviewer_id,
            action_type=AdminActionType.STATUS_CHANGE,
            target_table="residency_applications",
            target_id=str(application.id),
            before=before,
            after=row_to_dict(application),
        )
        session.flush()
        session.refresh(application)

    logger.info("Residency application %d → %s (by %d)", application_id, status, reviewer_id)
    return application
