"""Initial Digital Bhutan schema

Revision ID: 0c1d2e3f4a5b
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from collections.abc import Sequence

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

# revision identifiers, used by Alembic.
revision: str = '0c1d2e3f4a5b'
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _created_at(name: str = "created_at") -> sa.Column:
    return sa.Column(name, sa.DateTime(timezone=True), server_default=sa.func.now())


def upgrade() -> None:
    """Create the platform tables, the ledgers and the schema-only tables."""

    # --- users ---
    op.create_table(
        "users",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("first_name", sa.Text, nullable=False),
        sa.Column("last_name", sa.Text, nullable=False),
        sa.Column("password", sa.Text, nullable=False),
        sa.Column("profile_image_url", sa.Text, nullable=True),
        sa.Column("brownie_points", sa.Integer, nullable=False, server_default="0"),
        sa.Column("tier_level", sa.Integer, nullable=False, server_default="1"),
        sa.Column("is_digital_resident", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("is_admin", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("nft_id", sa.Text, nullable=True),
        _created_at(),
        _created_at("updated_at"),
    )

    # --- residency_applications ---
    op.create_table(
        "residency_applications",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.Integer, sa.ForeignKey("users.id"), nullable=False),
        sa.Column("first_name", sa.Text, nullable=False),
        sa.Column("last_name", sa.Text, nullable=False),
        sa.Column("email", sa.Text, nullable=False),
        sa.Column("country_of_origin", sa.Text, nullable=False),
        sa.Column("reason_for_residency", sa.Text, nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("reviewed_by", sa.Integer, sa.ForeignKey("users.id"), nullable=True),
        sa.Column("reviewed_at", sa.DateTime(timezone=True), nullable=True),
        _created_at(),
    )
    op.create_index("ix_residency_applications_user", "residency_applications", ["user_id"])

    # --- businesses ---
    op.create_table(
        "businesses",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("owner_id", sa.Integer, sa.ForeignKey("users.id"), nullable=False),
        sa.Column("name", sa.Text, nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("category", sa.Text, nullable=False),
        sa.Column("license_number", sa.Text, nullable=True),
        sa.Column("business_nft_id", sa.Text, nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        _created_at(),
    )
    op.create_index("ix_businesses_owner", "businesses", ["owner_id"])

    # --- jobs ---
    op.create_table(
        "jobs",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("business_id", sa.Integer, sa.ForeignKey("businesses.id"), nullable=True),
        sa.Column("posted_by", sa.Integer, sa.ForeignKey("users.id"), nullable=False),
        sa.Column("title", sa.Text, nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("category", sa.Text, nullable=False),
        sa.Column("experience_level", sa.Text, nullable=False),
        sa.Column("location", sa.Text, nullable=False),
        sa.Column("employment_type", sa.Text, nullable=False),
        sa.Column("skills", postgresql.JSONB, nullable=False, server_default="[]"),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        _created_at(),
    )
    op.create_index("ix_jobs_active_category", "jobs", ["is_active", "category"])

    # --- job_applications ---
    op.create_table(
        "job_applications",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("job_id", sa.Integer, sa.ForeignKey("jobs.id"), nullable=False),
        sa.Column("applicant_id", sa.Integer, sa.ForeignKey("users.id"), nullable=False),
        sa.Column("cover_letter", sa.Text, nullable=True),
        sa.Column("resume_url", sa.Text, nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        _created_at("applied_at"),
    )
    op.create_index("ix_job_applications_job", "job_applications", ["job_id"])
    op.create_index("ix_job_applications_applicant", "job_applications", ["applicant_id"])

    # --- products ---
    op.create_table(
        "products",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("seller_id", sa.Integer, sa.ForeignKey("users.id"), nullable=False),
        sa.Column("name", sa.Text, nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
        sa.Column("image_url", sa.Text, nullable=True),
        sa.Column("category", sa.Text, nullable=False),
        sa.Column("brownie_points_reward", sa.Integer, nullable=False, server_default="0"),
        sa.Column("in_stock", sa.Boolean, nullable=False, server_default=sa.true()),
        _created_at(),
    )
    op.create_index("ix_products_category", "products", ["category"])

    # --- cultural_activities / user_activities ---
    op.create_table(
        "cultural_activities",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("title", sa.Text, nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("type", sa.String(30), nullable=False),
        sa.Column("content", postgresql.JSONB, nullable=False),
        sa.Column("points_reward", sa.Integer, nullable=False),
        sa.Column("image_url", sa.Text, nullable=True),
        sa.Column("difficulty", sa.String(20), nullable=False, server_default="beginner"),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        _created_at(),
    )
    op.create_table(
        "user_activities",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.Integer, sa.ForeignKey("users.id"), nullable=False),
        sa.Column(
            "activity_id", sa.Integer,
            sa.ForeignKey("cultural_activities.id"), nullable=False,
        ),
        sa.Column("score", sa.Integer, nullable=True),
        sa.Column("points_earned", sa.Integer, nullable=False),
        _created_at("completed_at"),
    )
    op.create_index("ix_user_activities_user", "user_activities", ["user_id"])

    # --- catalogues ---
    op.create_table(
        "mini_apps",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.Text, nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("developer", sa.Text, nullable=False),
        sa.Column("version", sa.String(20), nullable=False, server_default="1.0.0"),
        sa.Column("price", sa.Numeric(10, 2), nullable=False, server_default="0.00"),
        sa.Column("rating", sa.Numeric(3, 2), nullable=False, server_default="0.00"),
        sa.Column("downloads", sa.Integer, nullable=False, server_default="0"),
        sa.Column("active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("code_hash", sa.Text, nullable=False),
        sa.Column("permissions", postgresql.JSONB, nullable=False, server_default="[]"),
        sa.Column("verified", sa.Boolean, nullable=False, server_default=sa.false()),
        _created_at(),
    )
    op.create_table(
        "government_services",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("service_name", sa.String(200), nullable=False, unique=True),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("department", sa.Text, nullable=False),
        sa.Column("contract_address", sa.Text, nullable=True),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("required_credentials", postgresql.JSONB, nullable=True, server_default="[]"),
        sa.Column("processing_time", sa.Text, nullable=True),
        sa.Column("fee", sa.Numeric(10, 2), nullable=True, server_default="0.00"),
        _created_at(),
    )

    # --- blockchain_transactions ---
    op.create_table(
        "blockchain_transactions",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.Integer, sa.ForeignKey("users.id"), nullable=True),
        sa.Column("transaction_hash", sa.String(100), nullable=False, unique=True),
        sa.Column("transaction_type", sa.String(30), nullable=False),
        sa.Column("from_address", sa.Text, nullable=True),
        sa.Column("to_address", sa.Text, nullable=True),
        sa.Column("amount", sa.Text, nullable=True),
        sa.Column("currency", sa.String(20), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("block_number", sa.Integer, nullable=True),
        sa.Column("gas_used", sa.Text, nullable=True),
        sa.Column("metadata", postgresql.JSONB, nullable=True),
        _created_at(),
        sa.Column("confirmed_at", sa.DateTime(timezone=True), nullable=True),
    )

    # --- points_ledger ---
    op.create_table(
        "points_ledger",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "user_id", sa.Integer,
            sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("source", sa.String(30), nullable=False),
        sa.Column("source_id", sa.Integer, nullable=True),
        sa.Column("points_delta", sa.Integer, nullable=False),
        sa.Column("balance_after", sa.Integer, nullable=False),
        sa.Column("tier_after", sa.Integer, nullable=False),
        sa.Column("metadata", postgresql.JSONB, nullable=True),
        _created_at("timestamp"),
    )
    op.create_index("ix_points_ledger_user_time", "points_ledger", ["user_id", "timestamp"])

    # --- admin_log ---
    op.create_table(
        "admin_log",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("actor_id", sa.Integer, nullable=False),
        sa.Column("action_type", sa.String(50), nullable=False),
        sa.Column("target_table", sa.String(50), nullable=False),
        sa.Column("target_id", sa.String(100), nullable=True),
        sa.Column("before_snapshot", postgresql.JSONB, nullable=True),
        sa.Column("after_snapshot", postgresql.JSONB, nullable=True),
        sa.Column("reason", sa.Text, nullable=True),
        _created_at("timestamp"),
    )
    op.create_index("ix_admin_log_actor_time", "admin_log", ["actor_id", "timestamp"])
    op.create_index(
        "ix_admin_log_target", "admin_log", ["target_table", "target_id", "timestamp"],
    )

    # --- settings ---
    op.create_table(
        "settings",
        sa.Column("key", sa.String(100), primary_key=True),
        sa.Column("value_json", sa.Text, nullable=False),
        sa.Column("category", sa.String(50), nullable=False, server_default="general"),
        sa.Column("description", sa.Text, nullable=True),
        _created_at("updated_at"),
    )
    op.create_index("ix_settings_category", "settings", ["category"])

    # --- schema-only tables ---
    op.create_table(
        "nfts",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("token_id", sa.String(100), nullable=False, unique=True),
        sa.Column("contract_address", sa.Text, nullable=False),
        sa.Column("owner_id", sa.Integer, sa.ForeignKey("users.id"), nullable=False),
        sa.Column("token_type", sa.String(30), nullable=False),
        sa.Column("metadata", postgresql.JSONB, nullable=False),
        sa.Column("is_soulbound", sa.Boolean, nullable=False, server_default=sa.false()),
        _created_at("minted_at"),
        sa.Column("transaction_hash", sa.Text, nullable=True),
    )
    op.create_table(
        "soulbound_credentials",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.Integer, sa.ForeignKey("users.id"), nullable=False),
        sa.Column("nft_id", sa.Integer, sa.ForeignKey("nfts.id"), nullable=False),
        sa.Column("credential_type", sa.Integer, nullable=False),
        sa.Column("issuer", sa.Text, nullable=False),
        _created_at("issued_at"),
        sa.Column("revoked_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("metadata", postgresql.JSONB, nullable=False),
        sa.Column("verified", sa.Boolean, nullable=False, server_default=sa.true()),
    )
    op.create_table(
        "service_applications",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.Integer, sa.ForeignKey("users.id"), nullable=False),
        sa.Column(
            "service_id", sa.Integer,
            sa.ForeignKey("government_services.id"), nullable=False,
        ),
        sa.Column("application_data", postgresql.JSONB, nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="submitted"),
        _created_at("submitted_at"),
        sa.Column("reviewed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("reviewed_by", sa.Integer, sa.ForeignKey("users.id"), nullable=True),
        sa.Column("notes", sa.Text, nullable=True),
        sa.Column("transaction_hash", sa.Text, nullable=True),
    )
    op.create_table(
        "wallet_balances",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.Integer, sa.ForeignKey("users.id"), nullable=False),
        sa.Column("wallet_address", sa.Text, nullable=False),
        sa.Column("nubuck_balance", sa.Text, nullable=False, server_default="0"),
        sa.Column("avax_balance", sa.Text, nullable=False, server_default="0"),
        _created_at("last_updated"),
    )
    op.create_table(
        "gamification_rewards",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.Integer, sa.ForeignKey("users.id"), nullable=False),
        sa.Column("activity_type", sa.String(30), nullable=False),
        sa.Column("activity_id", sa.Integer, nullable=True),
        sa.Column("points_earned", sa.Integer, nullable=False),
        sa.Column("nubucks_earned", sa.Text, nullable=False, server_default="0"),
        sa.Column("verified", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("verification_hash", sa.Text, nullable=True),
        _created_at("earned_at"),
    )
    op.create_table(
        "user_language_settings",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.Integer, sa.ForeignKey("users.id"), nullable=False),
        sa.Column("primary_language", sa.String(10), nullable=False, server_default="en"),
        sa.Column("secondary_language", sa.String(10), nullable=True, server_default="dz"),
        sa.Column("auto_translate", sa.Boolean, nullable=False, server_default=sa.false()),
        _created_at("updated_at"),
    )


def downgrade() -> None:
    for table in (
        "user_language_settings",
        "gamification_rewards",
        "wallet_balances",
        "service_applications",
        "soulbound_credentials",
        "nfts",
        "settings",
        "admin_log",
        "points_ledger",
        "blockchain_transactions",
        "government_services",
        "mini_apps",
        "user_activities",
        "cultural_activities",
        "products",
        "job_applications",
        "jobs",
        "businesses",
        "residency_applications",
        "users",
    ):
        op.drop_table(table)
