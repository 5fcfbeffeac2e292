"""
digital_bhutan.services.stats_service — Dashboard Counters
===========================================================

Resident and approved-business counts, total Brownie Points, and the
satisfaction rate read from the ``dashboard.satisfaction_rate`` setting.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from digital_bhutan.database.models import Business, ReviewStatus, User
from digital_bhutan.services.settings_service import get_setting_value

DEFAULT_SATISFACTION_RATE = 94


@dataclass(frozen=True)
class DashboardStats:
    total_residents: int
    total_businesses: int
    total_brownie_points: int
    satisfaction_rate: float


def get_dashboard_stats(session: Session) -> DashboardStats:
    residents = session.scalar(
        select(func.count(User.id)).where(User.is_digital_resident.is_(True))
    )
    businesses = session.scalar(
        select(func.count(Business.id)).where(Business.status == ReviewStatus.APPROVED.value)
    )
    points = session.scalar(select(func.coalesce(func.sum(User.brownie_points), 0)))
    rate = get_setting_value(
        session, "dashboard.satisfaction_rate", DEFAULT_SATISFACTION_RATE
    )
    return DashboardStats(
        total_residents=residents or 0,
        total_businesses=businesses or 0,
        total_brownie_points=int(points or 0),
        satisfaction_rate=rate,
    )
