"""
digital_bhutan.services.admin_service — Admin Mutation Service Layer
=====================================================================

Shared service module for admin-console mutations.
Every write follows the pattern:
  1. Begin transaction
  2. Read "before" snapshot
  3. Apply change
  4. Write admin_log with before/after JSONB
  5. Commit
"""

from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from digital_bhutan.constants import REVIEW_STATUSES
from digital_bhutan.database.engine import get_session
from digital_bhutan.database.models import (
    AdminActionType,
    AdminLog,
    Business,
    PointsSource,
    User,
)
from digital_bhutan.services.errors import BusinessNotFound, InvalidStatus, UserNotFound
from digital_bhutan.services.points_service import credit_user

if TYPE_CHECKING:
    from sqlalchemy import Engine

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Generic audit helpers
# ---------------------------------------------------------------------------
def row_to_dict(obj: Any) -> dict | None:
    """Convert a SQLAlchemy model instance to a JSON-serializable dict."""
    if obj is None:
        return None
    result = {}
    for col in obj.__table__.columns:
        val = getattr(obj, col.key if col.key != "metadata" else "metadata_", None)
        if isinstance(val, datetime):
            val = val.isoformat()
        elif isinstance(val, Decimal):
            val = str(val)
        result[col.name] = val
    return result


def log_admin_action(
    session: Session,
    *,
    actor_id: int,
    action_type: str,
    target_table: str,
    target_id: str | None,
    before: dict | None,
    after: dict | None,
    reason: str | None = None,
) -> None:
    """Insert a row into admin_log within the current transaction."""
    session.add(AdminLog(
        actor_id=actor_id,
        action_type=action_type,
        target_table=target_table,
        target_id=target_id,
        before_snapshot=before,
        after_snapshot=after,
        reason=reason,
    ))


def _without_password(snapshot: dict | None) -> dict | None:
    if snapshot is None:
        return None
    return {k: v for k, v in snapshot.items() if k != "password"}


# ---------------------------------------------------------------------------
# Business status
# ---------------------------------------------------------------------------
def update_business_status(
    engine: Engine,
    *,
    business_id: int,
    status: str,
    actor_id: int,
) -> Business:
    """Move a business to *status* (pending / approved / rejected)."""
    if status not in REVIEW_STATUSES:
        raise InvalidStatus(status, REVIEW_STATUSES)

    with get_session(engine) as session:
        business = session.get(Business, business_id)
        if business is None:
            raise BusinessNotFound(business_id)
        before = row_to_dict(business)
        business.status = status
        session.flush()
        log_admin_action(
            session,
            actor_id=actor_id,
            action_type=AdminActionType.STATUS_CHANGE,
            target_table="businesses",
            target_id=str(business.id),
            before=before,
            after=row_to_dict(business),
        )

    logger.info("Business %d → %s (by %d)", business_id, status, actor_id)
    return business


# ---------------------------------------------------------------------------
# Manual Brownie Point awards
# ---------------------------------------------------------------------------
def manual_award(
    engine: Engine,
    *,
    user_id: int,
    points: int,
    reason: str = "",
    actor_id: int,
) -> User:
    """Credit points from the admin console, audited in the same transaction."""
    with get_session(engine) as session:
        before = session.get(User, user_id, with_for_update=True)
        if before is None:
            raise UserNotFound(user_id)
        before_snapshot = _without_password(row_to_dict(before))
        user, _ = credit_user(
            session, user_id, points,
            source=PointsSource.MANUAL_AWARD,
            metadata={"admin_id": actor_id, "reason": reason},
        )
        log_admin_action(
            session,
            actor_id=actor_id,
            action_type=AdminActionType.MANUAL_AWARD,
            target_table="users",
            target_id=str(user_id),
            before=before_snapshot,
            after=_without_password(row_to_dict(user)),
            reason=reason or None,
        )
        session.flush()
        session.refresh(user)

    logger.info("Admin %d awarded %d points to user %d", actor_id, points, user_id)
    return user


# ---------------------------------------------------------------------------
# Audit log reads
# ---------------------------------------------------------------------------
def list_audit_log(
    session: Session,
    *,
    page: int = 1,
    page_size: int = 25,
    target_table: str | None = None,
) -> tuple[int, list[AdminLog]]:
    """One page of the audit log, newest first, plus the total row count."""
    query = select(AdminLog)
    count_query = select(func.count()).select_from(AdminLog)
    if target_table:
        query = query.where(AdminLog.target_table == target_table)
        count_query = count_query.where(AdminLog.target_table == target_table)

    total = session.scalar(count_query) or 0
    rows = session.scalars(
        query.order_by(AdminLog.timestamp.desc(), AdminLog.id.desc())
        .offset((page - 1) * page_size)
        .limit(page_size)
    ).all()
    return total, list(rows)
