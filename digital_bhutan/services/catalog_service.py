"""
digital_bhutan.services.catalog_service — Read-Only Catalogues
===============================================================

Cultural activities, mini-apps and government services.  Only active
rows are listed; rows are seeded by :mod:`digital_bhutan.database.seed`.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from digital_bhutan.database.models import CulturalActivity, GovernmentService, MiniApp
from digital_bhutan.services.errors import ActivityNotFound


def list_activities(session: Session) -> list[CulturalActivity]:
    return list(session.scalars(
        select(CulturalActivity)
        .where(CulturalActivity.is_active.is_(True))
        .order_by(CulturalActivity.id)
    ).all())


def get_activity(session: Session, activity_id: int) -> CulturalActivity:
    activity = session.get(CulturalActivity, activity_id)
    if activity is None:
        raise ActivityNotFound(activity_id)
    return activity


def list_mini_apps(session: Session) -> list[MiniApp]:
    return list(session.scalars(
        select(MiniApp)
        .where(MiniApp.active.is_(True))
        .order_by(MiniApp.downloads.desc(), MiniApp.id)
    ).all())


def list_government_services(session: Session) -> list[GovernmentService]:
    return list(session.scalars(
        select(GovernmentService)
        .where(GovernmentService.is_active.is_(True))
        .order_by(GovernmentService.id)
    ).all())
