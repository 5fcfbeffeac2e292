"""
digital_bhutan.constants — Shared Constants & Helpers
======================================================

Single source of truth for the tier formula and its presentation.
Import from here instead of duplicating in services and routes.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Status enumerations
# ---------------------------------------------------------------------------
REVIEW_STATUSES: tuple[str, ...] = ("pending", "approved", "rejected")

JOB_APPLICATION_STATUSES: tuple[str, ...] = ("pending", "reviewed", "accepted", "rejected")

# Sentinel filter values sent by the job board's select boxes
ALL_CATEGORIES = "All Categories"
ANY_EXPERIENCE = "Any Experience"


# ---------------------------------------------------------------------------
# Tier formula — THE single canonical implementation
# ---------------------------------------------------------------------------
POINTS_PER_TIER = 1000
MAX_TIER = 5

TIER_NAMES: dict[int, str] = {
    1: "Dragon Egg",
    2: "Young Dragon",
    3: "Mountain Dragon",
    4: "Thunder Dragon",
    5: "Celestial Dragon",
}

TIER_BENEFITS: dict[int, list[str]] = {
    1: ["Basic marketplace access", "Cultural quiz participation"],
    2: ["Priority job applications", "10% marketplace discount"],
    3: [
        "Government service priority",
        "15% marketplace discount",
        "Exclusive cultural content",
    ],
    4: [
        "Premium mini-apps access",
        "20% marketplace discount",
        "Business fast-track approval",
    ],
    5: [
        "VIP support",
        "25% marketplace discount",
        "Early access to new features",
        "Cultural ambassador status",
    ],
}


def tier_for_points(points: int) -> int:
    """Tier reached with *points* cumulative Brownie Points.

    ::

        tier = min(points // 1000 + 1, 5)
    """
    if points < 0:
        raise ValueError(f"Brownie Points cannot be negative: {points}")
    return min(points // POINTS_PER_TIER + 1, MAX_TIER)


def tier_name(tier: int) -> str:
    return TIER_NAMES.get(tier, "Unknown Tier")


def tier_progress(points: int) -> float:
    """Percentage progress through the current 1000-point band.

    The top tier has nowhere left to go and always reports 100.
    """
    if tier_for_points(points) >= MAX_TIER:
        return 100.0
    return (points % POINTS_PER_TIER) / POINTS_PER_TIER * 100


def points_to_next_tier(points: int) -> int | None:
    """Points still needed for the next tier, or ``None`` at the top tier."""
    tier = tier_for_points(points)
    if tier >= MAX_TIER:
        return None
    return tier * POINTS_PER_TIER - points


# ---------------------------------------------------------------------------
# Marketplace presentation
# ---------------------------------------------------------------------------
def reward_badge(points_reward: int) -> str | None:
    """Badge text shown on a product card; only rewarding products get one."""
    if points_reward > 0:
        return f"+{points_reward} Points"
    return None
