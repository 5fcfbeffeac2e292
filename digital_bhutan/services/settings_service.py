"""
digital_bhutan.services.settings_service — Settings CRUD
=========================================================

Provides typed read/write access to the ``settings`` table.  Values are
stored JSON-encoded; admin writes are recorded in ``admin_log``.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from digital_bhutan.database.engine import get_session
from digital_bhutan.database.models import AdminActionType, Setting
from digital_bhutan.services.admin_service import log_admin_action

logger = logging.getLogger(__name__)

# Categories readable without authentication
PUBLIC_CATEGORIES: tuple[str, ...] = ("dashboard", "display", "economy")


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------

def _decode(row: Setting) -> Any:
    try:
        return json.loads(row.value_json)
    except (json.JSONDecodeError, TypeError):
        return row.value_json


def get_setting_value(session: Session, key: str, default=None):
    """Read a single setting's parsed value from an existing session.

    Parameters
    ----------
    session : Session
        An open SQLAlchemy session.
    key : str
        The setting key to look up.
    default
        Returned when the key does not exist.

    Returns
    -------
    The JSON-decoded value, or *default*.  A value that is not valid JSON
    is returned as the raw stored string.
    """
    row = session.get(Setting, key)
    if row is None:
        return default
    return _decode(row)


def get_all_settings(session: Session) -> list[dict]:
    """Every setting, ordered by category then key."""
    rows = session.scalars(
        select(Setting).order_by(Setting.category, Setting.key)
    ).all()
    return [
        {
            "key": r.key,
            "value": _decode(r),
            "category": r.category,
            "description": r.description,
        }
        for r in rows
    ]


def get_public_settings(session: Session) -> dict[str, Any]:
    """``{key: value}`` for the categories the dashboard may read anonymously."""
    rows = session.scalars(
        select(Setting)
        .where(Setting.category.in_(PUBLIC_CATEGORIES))
        .order_by(Setting.key)
    ).all()
    return {r.key: _decode(r) for r in rows}


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------

def bulk_upsert(engine, settings: list[dict], *, actor_id: int | None = None) -> int:
    """Upsert many settings at once.

    Each dict should have at least ``key`` and ``value``.
    Optional: ``category``, ``description``.

    When *actor_id* is provided, each change is individually recorded in the
    ``admin_log`` table with before/after snapshots.  Unchanged values are
    not logged.

    Returns the number of rows touched.
    """
    count = 0
    with get_session(engine) as session:
        for item in settings:
            key = item["key"]
            existing = session.get(Setting, key)

            before_snapshot: dict | None = None
            if existing is not None:
                before_snapshot = {
                    "key": existing.key,
                    "value": _decode(existing),
                    "category": existing.category,
                    "description": existing.description,
                }
                existing.value_json = json.dumps(item["value"])
                if "category" in item:
                    existing.category = item["category"]
                if "description" in item:
                    existing.description = item["description"]
            else:
                existing = Setting(
                    key=key,
                    value_json=json.dumps(item["value"]),
                    category=item.get("category", "general"),
                    description=item.get("description"),
                )
                session.add(existing)

            if actor_id is not None:
                after_snapshot = {
                    "key": key,
                    "value": item["value"],
                    "category": existing.category,
                    "description": existing.description,
                }
                if before_snapshot != after_snapshot:
                    log_admin_action(
                        session,
                        actor_id=actor_id,
                        action_type=(
                            AdminActionType.UPDATE if before_snapshot
                            else AdminActionType.CREATE
                        ),
                        target_table="settings",
                        target_id=key,
                        before=before_snapshot,
                        after=after_snapshot,
                    )
            count += 1

    logger.info("Upserted %d settings", count)
    return count
