"""
digital_bhutan.services.points_service — Brownie Point Ledger
==============================================================

The one stateful business rule of the platform.  Every credit goes
through :func:`_credit`, which adds the points, recomputes the tier with
:func:`~digital_bhutan.constants.tier_for_points` and journals the change
in ``points_ledger``, all inside the caller's transaction.

The user row is read ``FOR UPDATE`` before crediting, so two concurrent
awards serialize on the row instead of losing an update.  Points are
never decremented.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlalchemy.orm import Session

from digital_bhutan.constants import tier_for_points
from digital_bhutan.database.engine import get_session
from digital_bhutan.database.models import (
    CulturalActivity,
    PointsLedger,
    PointsSource,
    Product,
    User,
    UserActivity,
)
from digital_bhutan.services.errors import (
    ActivityNotFound,
    InvalidPoints,
    OutOfStock,
    ProductNotFound,
    UserNotFound,
)

if TYPE_CHECKING:
    from sqlalchemy import Engine

logger = logging.getLogger(__name__)


@dataclass
class CompletionResult:
    """Outcome of completing a cultural activity."""

    completion: UserActivity
    user: User
    points_awarded: int
    tier_changed: bool = False


@dataclass
class PurchaseResult:
    """Outcome of buying a marketplace product."""

    product: Product
    user: User
    points_awarded: int
    tier_changed: bool = False


# ---------------------------------------------------------------------------
# Internals
# ---------------------------------------------------------------------------
def _lock_user(session: Session, user_id: int) -> User:
    """Load *user_id* with a row lock held until the transaction ends."""
    user = session.get(User, user_id, with_for_update=True)
    if user is None:
        raise UserNotFound(user_id)
    return user


def _credit(
    session: Session,
    user: User,
    points: int,
    *,
    source: PointsSource,
    source_id: int | None = None,
    metadata: dict | None = None,
) -> bool:
    """Apply a credit to a locked *user*.  Returns True if the tier changed."""
    if points < 0:
        raise InvalidPoints(points)

    old_tier = user.tier_level
    user.brownie_points += points
    user.tier_level = tier_for_points(user.brownie_points)

    session.add(PointsLedger(
        user_id=user.id,
        source=source.value,
        source_id=source_id,
        points_delta=points,
        balance_after=user.brownie_points,
        tier_after=user.tier_level,
        metadata_=metadata,
    ))
    return user.tier_level != old_tier


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def credit_user(
    session: Session,
    user_id: int,
    points: int,
    *,
    source: PointsSource,
    source_id: int | None = None,
    metadata: dict | None = None,
) -> tuple[User, bool]:
    """Lock, credit and journal inside an existing transaction.

    Returns ``(user, tier_changed)``.  Callers that need to write other
    rows atomically with the credit (audit log, completions) use this.
    """
    if points < 0:
        raise InvalidPoints(points)
    user = _lock_user(session, user_id)
    tier_changed = _credit(
        session, user, points,
        source=source, source_id=source_id, metadata=metadata,
    )
    session.flush()
    return user, tier_changed


def award_points(
    engine: Engine,
    user_id: int,
    points: int,
    *,
    source: PointsSource = PointsSource.MANUAL_AWARD,
    source_id: int | None = None,
    metadata: dict | None = None,
) -> User:
    """Credit *points* (>= 0) to *user_id* and return the updated user.

    Raises :class:`UserNotFound` for an unknown user and
    :class:`InvalidPoints` for a negative amount; nothing is written in
    either case.
    """
    with get_session(engine) as session:
        user, tier_changed = credit_user(
            session, user_id, points,
            source=source, source_id=source_id, metadata=metadata,
        )
        session.refresh(user)

    logger.info(
        "Awarded %d points to user %d (balance=%d tier=%d%s)",
        points, user_id, user.brownie_points, user.tier_level,
        ", tier up" if tier_changed else "",
    )
    return user


def complete_activity(
    engine: Engine,
    user_id: int,
    activity_id: int,
    score: int | None = None,
) -> CompletionResult:
    """Record a completion of *activity_id* and credit its points reward.

    The completion row and the credit share one transaction: an unknown
    activity or user leaves no completion behind and credits nothing.
    Repeat completions are recorded and credited each time.
    """
    with get_session(engine) as session:
        activity = session.get(CulturalActivity, activity_id)
        if activity is None:
            raise ActivityNotFound(activity_id)
        user = _lock_user(session, user_id)

        completion = UserActivity(
            user_id=user_id,
            activity_id=activity_id,
            score=score,
            points_earned=activity.points_reward,
        )
        session.add(completion)
        session.flush()

        tier_changed = _credit(
            session, user, activity.points_reward,
            source=PointsSource.ACTIVITY_COMPLETION,
            source_id=completion.id,
            metadata={"activity_id": activity_id, "score": score},
        )
        session.flush()
        session.refresh(completion)
        session.refresh(user)

    logger.info(
        "User %d completed activity %d (+%d points)",
        user_id, activity_id, completion.points_earned,
    )
    return CompletionResult(
        completion=completion,
        user=user,
        points_awarded=completion.points_earned,
        tier_changed=tier_changed,
    )


def purchase_product(engine: Engine, user_id: int, product_id: int) -> PurchaseResult:
    """Buy *product_id* and credit its ``brownie_points_reward`` to the buyer.

    A zero reward still journals the purchase so the ledger shows it.
    """
    with get_session(engine) as session:
        product = session.get(Product, product_id)
        if product is None:
            raise ProductNotFound(product_id)
        if not product.in_stock:
            raise OutOfStock(product_id)
        user = _lock_user(session, user_id)

        reward = product.brownie_points_reward
        tier_changed = _credit(
            session, user, reward,
            source=PointsSource.PRODUCT_PURCHASE,
            source_id=product.id,
            metadata={"product_name": product.name, "price": str(product.price)},
        )
        session.flush()
        session.refresh(user)

    logger.info("User %d purchased product %d (+%d points)", user_id, product_id, reward)
    return PurchaseResult(
        product=product,
        user=user,
        points_awarded=reward,
        tier_changed=tier_changed,
    )


def get_ledger(session: Session, user_id: int, limit: int = 50) -> list[PointsLedger]:
    """Most recent ledger entries for *user_id*, newest first."""
    return list(session.scalars(
        select(PointsLedger)
        .where(PointsLedger.user_id == user_id)
        .order_by(PointsLedger.timestamp.desc(), PointsLedger.id.desc())
        .limit(limit)
    ).all())


def get_user_activities(session: Session, user_id: int) -> list[UserActivity]:
    """Every activity completion recorded for *user_id*, newest first."""
    return list(session.scalars(
        select(UserActivity)
        .where(UserActivity.user_id == user_id)
        .order_by(UserActivity.completed_at.desc(), UserActivity.id.desc())
    ).all())
