"""
digital_bhutan.api.serializers — ORM rows → camelCase JSON dicts
=================================================================

Serializers only read column attributes, never relationships, so they
are safe on objects whose session is already closed.  Money columns are
rendered as strings to keep their two decimal places.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from digital_bhutan.constants import (
    TIER_BENEFITS,
    points_to_next_tier,
    reward_badge,
    tier_name,
    tier_progress,
)
from digital_bhutan.database.models import (
    AdminLog,
    BlockchainTransaction,
    Business,
    CulturalActivity,
    GovernmentService,
    Job,
    JobApplication,
    MiniApp,
    PointsLedger,
    Product,
    ResidencyApplication,
    User,
    UserActivity,
)


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def _money(value: Decimal | None) -> str | None:
    return f"{value:.2f}" if value is not None else None


def user_dict(u: User) -> dict:
    return {
        "id": u.id,
        "email": u.email,
        "firstName": u.first_name,
        "lastName": u.last_name,
        "profileImageUrl": u.profile_image_url,
        "browniePoints": u.brownie_points,
        "tierLevel": u.tier_level,
        "tierName": tier_name(u.tier_level),
        "isDigitalResident": u.is_digital_resident,
        "isAdmin": u.is_admin,
        "nftId": u.nft_id,
        "createdAt": _iso(u.created_at),
        "updatedAt": _iso(u.updated_at),
    }


def tier_dict(u: User) -> dict:
    return {
        "userId": u.id,
        "browniePoints": u.brownie_points,
        "tierLevel": u.tier_level,
        "tierName": tier_name(u.tier_level),
        "progress": tier_progress(u.brownie_points),
        "pointsToNextTier": points_to_next_tier(u.brownie_points),
        "benefits": TIER_BENEFITS.get(u.tier_level, []),
    }


def residency_dict(a: ResidencyApplication) -> dict:
    return {
        "id": a.id,
        "userId": a.user_id,
        "firstName": a.first_name,
        "lastName": a.last_name,
        "email": a.email,
        "countryOfOrigin": a.country_of_origin,
        "reasonForResidency": a.reason_for_residency,
        "status": a.status,
        "reviewedBy": a.reviewed_by,
        "reviewedAt": _iso(a.reviewed_at),
        "createdAt": _iso(a.created_at),
    }


def business_dict(b: Business) -> dict:
    return {
        "id": b.id,
        "ownerId": b.owner_id,
        "name": b.name,
        "description": b.description,
        "category": b.category,
        "licenseNumber": b.license_number,
        "businessNftId": b.business_nft_id,
        "status": b.status,
        "createdAt": _iso(b.created_at),
    }


def job_dict(j: Job) -> dict:
    return {
        "id": j.id,
        "businessId": j.business_id,
        "postedBy": j.posted_by,
        "title": j.title,
        "description": j.description,
        "category": j.category,
        "experienceLevel": j.experience_level,
        "location": j.location,
        "employmentType": j.employment_type,
        "skills": list(j.skills or []),
        "isActive": j.is_active,
        "createdAt": _iso(j.created_at),
    }


def job_application_dict(a: JobApplication) -> dict:
    return {
        "id": a.id,
        "jobId": a.job_id,
        "applicantId": a.applicant_id,
        "coverLetter": a.cover_letter,
        "resumeUrl": a.resume_url,
        "status": a.status,
        "appliedAt": _iso(a.applied_at),
    }


def product_dict(p: Product) -> dict:
    badge = reward_badge(p.brownie_points_reward)
    return {
        "id": p.id,
        "sellerId": p.seller_id,
        "name": p.name,
        "description": p.description,
        "price": _money(p.price),
        "imageUrl": p.image_url,
        "category": p.category,
        "browniePointsReward": p.brownie_points_reward,
        "inStock": p.in_stock,
        "hasRewardBadge": badge is not None,
        "rewardBadge": badge,
        "createdAt": _iso(p.created_at),
    }


def activity_dict(a: CulturalActivity) -> dict:
    return {
        "id": a.id,
        "title": a.title,
        "description": a.description,
        "type": a.type,
        "content": a.content,
        "pointsReward": a.points_reward,
        "imageUrl": a.image_url,
        "difficulty": a.difficulty,
        "isActive": a.is_active,
        "createdAt": _iso(a.created_at),
    }


def completion_dict(c: UserActivity) -> dict:
    return {
        "id": c.id,
        "userId": c.user_id,
        "activityId": c.activity_id,
        "score": c.score,
        "pointsEarned": c.points_earned,
        "completedAt": _iso(c.completed_at),
    }


def mini_app_dict(m: MiniApp) -> dict:
    return {
        "id": m.id,
        "name": m.name,
        "description": m.description,
        "developer": m.developer,
        "version": m.version,
        "price": _money(m.price),
        "rating": _money(m.rating),
        "downloads": m.downloads,
        "active": m.active,
        "codeHash": m.code_hash,
        "permissions": list(m.permissions or []),
        "verified": m.verified,
        "createdAt": _iso(m.created_at),
    }


def government_service_dict(s: GovernmentService) -> dict:
    return {
        "id": s.id,
        "serviceName": s.service_name,
        "description": s.description,
        "department": s.department,
        "contractAddress": s.contract_address,
        "isActive": s.is_active,
        "requiredCredentials": list(s.required_credentials or []),
        "processingTime": s.processing_time,
        "fee": _money(s.fee),
        "createdAt": _iso(s.created_at),
    }


def ledger_dict(e: PointsLedger) -> dict:
    return {
        "id": e.id,
        "source": e.source,
        "sourceId": e.source_id,
        "pointsDelta": e.points_delta,
        "balanceAfter": e.balance_after,
        "tierAfter": e.tier_after,
        "metadata": e.metadata_,
        "timestamp": _iso(e.timestamp),
    }


def transaction_dict(t: BlockchainTransaction) -> dict:
    return {
        "id": t.id,
        "userId": t.user_id,
        "transactionHash": t.transaction_hash,
        "transactionType": t.transaction_type,
        "toAddress": t.to_address,
        "status": t.status,
        "metadata": t.metadata_,
        "createdAt": _iso(t.created_at),
    }


def audit_dict(row: AdminLog) -> dict:
    return {
        "id": row.id,
        "actorId": row.actor_id,
        "actionType": row.action_type,
        "targetTable": row.target_table,
        "targetId": row.target_id,
        "before": row.before_snapshot,
        "after": row.after_snapshot,
        "reason": row.reason,
        "timestamp": _iso(row.timestamp),
    }
