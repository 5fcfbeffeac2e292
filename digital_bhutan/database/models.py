"""
digital_bhutan.database.models — SQLAlchemy 2.0 Data Models
============================================================

Tables:
- users                   — Citizen / resident accounts with Brownie Points
- residency_applications  — e-Residency requests (pending → approved/rejected)
- businesses              — Registered businesses
- jobs                    — Job board postings
- job_applications        — Applications against a job
- products                — Marketplace listings
- cultural_activities     — Quizzes, learning modules, contributions
- user_activities         — Activity completions (points earned)
- mini_apps               — Marketplace mini-app catalogue
- government_services     — Government service catalogue
- blockchain_transactions — Mint / transfer records from the minting relay
- points_ledger           — Append-only Brownie Point journal
- admin_log               — Append-only audit trail
- settings                — Admin-configurable key-value store

Schema-only (no service reads or writes them):
- nfts, soulbound_credentials, service_applications, wallet_balances,
  gamification_rewards, user_language_settings
"""

from __future__ import annotations

import enum
from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    func,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


# ---------------------------------------------------------------------------
# Base
# ---------------------------------------------------------------------------
class Base(DeclarativeBase):
    """Shared base for all Digital Bhutan ORM models."""


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class ReviewStatus(enum.StrEnum):
    """Lifecycle of residency applications and businesses."""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class PointsSource(enum.StrEnum):
    """Where a Brownie Point credit came from."""
    ACTIVITY_COMPLETION = "activity_completion"
    PRODUCT_PURCHASE = "product_purchase"
    MANUAL_AWARD = "manual_award"


class AdminActionType(enum.StrEnum):
    """Categories of admin mutations recorded in admin_log."""
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    STATUS_CHANGE = "STATUS_CHANGE"
    MANUAL_AWARD = "MANUAL_AWARD"
    NFT_MINT = "NFT_MINT"


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------
class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    first_name: Mapped[str] = mapped_column(Text, nullable=False)
    last_name: Mapped[str] = mapped_column(Text, nullable=False)
    password: Mapped[str] = mapped_column(Text, nullable=False)  # pbkdf2 hash
    profile_image_url: Mapped[str | None] = mapped_column(Text, default=None)
    brownie_points: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    tier_level: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    is_digital_resident: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_admin: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    nft_id: Mapped[str | None] = mapped_column(Text, default=None)  # Mock NFT id
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    # Relationships
    residency_applications: Mapped[list[ResidencyApplication]] = relationship(
        back_populates="user", foreign_keys="ResidencyApplication.user_id"
    )
    businesses: Mapped[list[Business]] = relationship(back_populates="owner")
    jobs_posted: Mapped[list[Job]] = relationship(back_populates="poster")
    job_applications: Mapped[list[JobApplication]] = relationship(back_populates="applicant")
    products: Mapped[list[Product]] = relationship(back_populates="seller")
    activities: Mapped[list[UserActivity]] = relationship(back_populates="user")

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r} tier={self.tier_level}>"


# ---------------------------------------------------------------------------
# ResidencyApplication
# ---------------------------------------------------------------------------
class ResidencyApplication(Base):
    __tablename__ = "residency_applications"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False
    )
    first_name: Mapped[str] = mapped_column(Text, nullable=False)
    last_name: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str] = mapped_column(Text, nullable=False)
    country_of_origin: Mapped[str] = mapped_column(Text, nullable=False)
    reason_for_residency: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=ReviewStatus.PENDING.value
    )
    reviewed_by: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=True
    )
    reviewed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    user: Mapped[User] = relationship(
        back_populates="residency_applications", foreign_keys=[user_id]
    )
    reviewer: Mapped[User | None] = relationship(foreign_keys=[reviewed_by])

    __table_args__ = (
        Index("ix_residency_applications_user", "user_id"),
    )

    def __repr__(self) -> str:
        return f"<ResidencyApplication id={self.id} user={self.user_id} status={self.status!r}>"


# ---------------------------------------------------------------------------
# Business
# ---------------------------------------------------------------------------
class Business(Base):
    __tablename__ = "businesses"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    owner_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(Text, nullable=False)
    license_number: Mapped[str | None] = mapped_column(Text, default=None)
    business_nft_id: Mapped[str | None] = mapped_column(Text, default=None)  # Mock NFT id
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=ReviewStatus.PENDING.value
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    owner: Mapped[User] = relationship(back_populates="businesses")
    jobs: Mapped[list[Job]] = relationship(back_populates="business")

    __table_args__ = (
        Index("ix_businesses_owner", "owner_id"),
    )

    def __repr__(self) -> str:
        return f"<Business id={self.id} name={self.name!r} status={self.status!r}>"


# ---------------------------------------------------------------------------
# Job
# ---------------------------------------------------------------------------
class Job(Base):
    __tablename__ = "jobs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    business_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("businesses.id"), nullable=True
    )
    posted_by: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(Text, nullable=False)
    experience_level: Mapped[str] = mapped_column(Text, nullable=False)
    location: Mapped[str] = mapped_column(Text, nullable=False)
    employment_type: Mapped[str] = mapped_column(Text, nullable=False)  # full-time, part-time, contract
    skills: Mapped[list] = mapped_column(JSONB, nullable=False, default=list)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    business: Mapped[Business | None] = relationship(back_populates="jobs")
    poster: Mapped[User] = relationship(back_populates="jobs_posted")
    applications: Mapped[list[JobApplication]] = relationship(back_populates="job")

    __table_args__ = (
        Index("ix_jobs_active_category", "is_active", "category"),
    )

    def __repr__(self) -> str:
        return f"<Job id={self.id} title={self.title!r} category={self.category!r}>"


# ---------------------------------------------------------------------------
# JobApplication
# ---------------------------------------------------------------------------
class JobApplication(Base):
    __tablename__ = "job_applications"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    job_id: Mapped[int] = mapped_column(Integer, ForeignKey("jobs.id"), nullable=False)
    applicant_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    cover_letter: Mapped[str | None] = mapped_column(Text, default=None)
    resume_url: Mapped[str | None] = mapped_column(Text, default=None)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending")
    applied_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    job: Mapped[Job] = relationship(back_populates="applications")
    applicant: Mapped[User] = relationship(back_populates="job_applications")

    __table_args__ = (
        Index("ix_job_applications_job", "job_id"),
        Index("ix_job_applications_applicant", "applicant_id"),
    )

    def __repr__(self) -> str:
        return f"<JobApplication id={self.id} job={self.job_id} applicant={self.applicant_id}>"


# ---------------------------------------------------------------------------
# Product — marketplace listing
# ---------------------------------------------------------------------------
class Product(Base):
    __tablename__ = "products"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    seller_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    image_url: Mapped[str | None] = mapped_column(Text, default=None)
    category: Mapped[str] = mapped_column(Text, nullable=False)
    brownie_points_reward: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    in_stock: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    seller: Mapped[User] = relationship(back_populates="products")

    __table_args__ = (
        Index("ix_products_category", "category"),
    )

    def __repr__(self) -> str:
        return f"<Product id={self.id} name={self.name!r} reward={self.brownie_points_reward}>"


# ---------------------------------------------------------------------------
# CulturalActivity — quizzes, learning modules, contributions
# ---------------------------------------------------------------------------
class CulturalActivity(Base):
    __tablename__ = "cultural_activities"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[str] = mapped_column(String(30), nullable=False)  # quiz, learning_module, contribution
    content: Mapped[dict] = mapped_column(JSONB, nullable=False)
    points_reward: Mapped[int] = mapped_column(Integer, nullable=False)
    image_url: Mapped[str | None] = mapped_column(Text, default=None)
    difficulty: Mapped[str] = mapped_column(String(20), nullable=False, default="beginner")
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    completions: Mapped[list[UserActivity]] = relationship(back_populates="activity")

    def __repr__(self) -> str:
        return f"<CulturalActivity id={self.id} title={self.title!r} points={self.points_reward}>"


# ---------------------------------------------------------------------------
# UserActivity — activity completions
# ---------------------------------------------------------------------------
class UserActivity(Base):
    __tablename__ = "user_activities"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    activity_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("cultural_activities.id"), nullable=False
    )
    score: Mapped[int | None] = mapped_column(Integer, nullable=True)  # quizzes only
    points_earned: Mapped[int] = mapped_column(Integer, nullable=False)
    completed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    user: Mapped[User] = relationship(back_populates="activities")
    activity: Mapped[CulturalActivity] = relationship(back_populates="completions")

    __table_args__ = (
        Index("ix_user_activities_user", "user_id"),
    )

    def __repr__(self) -> str:
        return f"<UserActivity user={self.user_id} activity={self.activity_id}>"


# ---------------------------------------------------------------------------
# MiniApp — catalogue row, no execution sandbox
# ---------------------------------------------------------------------------
class MiniApp(Base):
    __tablename__ = "mini_apps"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    developer: Mapped[str] = mapped_column(Text, nullable=False)
    version: Mapped[str] = mapped_column(String(20), nullable=False, default="1.0.0")
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False, default=Decimal("0.00"))
    rating: Mapped[Decimal] = mapped_column(Numeric(3, 2), nullable=False, default=Decimal("0.00"))
    downloads: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    code_hash: Mapped[str] = mapped_column(Text, nullable=False)
    permissions: Mapped[list] = mapped_column(JSONB, nullable=False, default=list)
    verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    def __repr__(self) -> str:
        return f"<MiniApp id={self.id} name={self.name!r}>"


# ---------------------------------------------------------------------------
# GovernmentService — read-only service catalogue
# ---------------------------------------------------------------------------
class GovernmentService(Base):
    __tablename__ = "government_services"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    service_name: Mapped[str] = mapped_column(String(200), nullable=False, unique=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    department: Mapped[str] = mapped_column(Text, nullable=False)
    contract_address: Mapped[str | None] = mapped_column(Text, default=None)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    required_credentials: Mapped[list | None] = mapped_column(JSONB, default=list)
    processing_time: Mapped[str | None] = mapped_column(Text, default=None)
    fee: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), default=Decimal("0.00"))
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    def __repr__(self) -> str:
        return f"<GovernmentService id={self.id} name={self.service_name!r}>"


# ---------------------------------------------------------------------------
# BlockchainTransaction — records handed back by the minting relay
# ---------------------------------------------------------------------------
class BlockchainTransaction(Base):
    __tablename__ = "blockchain_transactions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int | None] = mapped_column(Integer, ForeignKey("users.id"), nullable=True)
    transaction_hash: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    transaction_type: Mapped[str] = mapped_column(String(30), nullable=False)  # nft_mint, token_transfer, app_purchase
    from_address: Mapped[str | None] = mapped_column(Text, default=None)
    to_address: Mapped[str | None] = mapped_column(Text, default=None)
    amount: Mapped[str | None] = mapped_column(Text, default=None)
    currency: Mapped[str | None] = mapped_column(String(20), default=None)  # NUBUCK, AVAX
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending")
    block_number: Mapped[int | None] = mapped_column(Integer, default=None)
    gas_used: Mapped[str | None] = mapped_column(Text, default=None)
    metadata_: Mapped[dict | None] = mapped_column("metadata", JSONB, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    confirmed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    def __repr__(self) -> str:
        return f"<BlockchainTransaction id={self.id} type={self.transaction_type!r}>"


# ---------------------------------------------------------------------------
# PointsLedger — append-only Brownie Point journal
# ---------------------------------------------------------------------------
class PointsLedger(Base):
    __tablename__ = "points_ledger"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    source: Mapped[str] = mapped_column(String(30), nullable=False)
    source_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    points_delta: Mapped[int] = mapped_column(Integer, nullable=False)
    balance_after: Mapped[int] = mapped_column(Integer, nullable=False)
    tier_after: Mapped[int] = mapped_column(Integer, nullable=False)
    metadata_: Mapped[dict | None] = mapped_column("metadata", JSONB, nullable=True)
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    __table_args__ = (
        Index("ix_points_ledger_user_time", "user_id", "timestamp"),
    )

    def __repr__(self) -> str:
        return f"<PointsLedger id={self.id} user={self.user_id} delta={self.points_delta}>"


# ---------------------------------------------------------------------------
# AdminLog — append-only audit trail
# ---------------------------------------------------------------------------
class AdminLog(Base):
    __tablename__ = "admin_log"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    actor_id: Mapped[int] = mapped_column(Integer, nullable=False)
    action_type: Mapped[str] = mapped_column(String(50), nullable=False)
    target_table: Mapped[str] = mapped_column(String(50), nullable=False)
    target_id: Mapped[str | None] = mapped_column(String(100), nullable=True)
    before_snapshot: Mapped[dict | None] = mapped_column(JSONB, nullable=True)
    after_snapshot: Mapped[dict | None] = mapped_column(JSONB, nullable=True)
    reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    __table_args__ = (
        Index("ix_admin_log_actor_time", "actor_id", "timestamp"),
        Index("ix_admin_log_target", "target_table", "target_id", "timestamp"),
    )

    def __repr__(self) -> str:
        return f"<AdminLog id={self.id} actor={self.actor_id} action={self.action_type}>"


# ---------------------------------------------------------------------------
# Setting — admin-configurable key-value store
# ---------------------------------------------------------------------------
class Setting(Base):
    """Key-value configuration store.

    Dashboard tunables (satisfaction rate, currency display name, titles)
    live here so admins can adjust them without redeploying.  Values are
    stored as JSON strings.
    """
    __tablename__ = "settings"

    key: Mapped[str] = mapped_column(String(100), primary_key=True)
    value_json: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String(50), nullable=False, default="general")
    description: Mapped[str | None] = mapped_column(Text, default=None)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    __table_args__ = (
        Index("ix_settings_category", "category"),
    )

    def __repr__(self) -> str:
        return f"<Setting key={self.key!r} category={self.category!r}>"


# ===========================================================================
# Schema-only tables.  Defined so the database matches the published
# schema; nothing in the service layer reads or writes them yet.
# ===========================================================================
class NFT(Base):
    __tablename__ = "nfts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    token_id: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    contract_address: Mapped[str] = mapped_column(Text, nullable=False)
    owner_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    token_type: Mapped[str] = mapped_column(String(30), nullable=False)  # residency, business, credential
    metadata_: Mapped[dict] = mapped_column("metadata", JSONB, nullable=False)
    is_soulbound: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    minted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    transaction_hash: Mapped[str | None] = mapped_column(Text, default=None)


class SoulboundCredential(Base):
    __tablename__ = "soulbound_credentials"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    nft_id: Mapped[int] = mapped_column(Integer, ForeignKey("nfts.id"), nullable=False)
    credential_type: Mapped[int] = mapped_column(Integer, nullable=False)
    issuer: Mapped[str] = mapped_column(Text, nullable=False)
    issued_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    revoked_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    metadata_: Mapped[dict] = mapped_column("metadata", JSONB, nullable=False)
    verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class ServiceApplication(Base):
    __tablename__ = "service_applications"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    service_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("government_services.id"), nullable=False
    )
    application_data: Mapped[dict] = mapped_column(JSONB, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="submitted")
    submitted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    reviewed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    reviewed_by: Mapped[int | None] = mapped_column(Integer, ForeignKey("users.id"), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, default=None)
    transaction_hash: Mapped[str | None] = mapped_column(Text, default=None)


class WalletBalance(Base):
    __tablename__ = "wallet_balances"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    wallet_address: Mapped[str] = mapped_column(Text, nullable=False)
    nubuck_balance: Mapped[str] = mapped_column(Text, nullable=False, default="0")
    avax_balance: Mapped[str] = mapped_column(Text, nullable=False, default="0")
    last_updated: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )


class GamificationReward(Base):
    __tablename__ = "gamification_rewards"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    activity_type: Mapped[str] = mapped_column(String(30), nullable=False)
    activity_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    points_earned: Mapped[int] = mapped_column(Integer, nullable=False)
    nubucks_earned: Mapped[str] = mapped_column(Text, nullable=False, default="0")
    verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    verification_hash: Mapped[str | None] = mapped_column(Text, default=None)
    earned_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )


class UserLanguageSetting(Base):
    __tablename__ = "user_language_settings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    primary_language: Mapped[str] = mapped_column(String(10), nullable=False, default="en")
    secondary_language: Mapped[str | None] = mapped_column(String(10), default="dz")
    auto_translate: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
