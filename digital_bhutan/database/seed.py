"""
digital_bhutan.database.seed — Default Settings & Demo Catalogue Seeder
=======================================================================

Baseline rows seeded on first startup so the dashboard is immediately
usable: dashboard settings, a starter set of cultural activities,
mini-apps and the government service catalogue.

Idempotent — settings are inserted only for missing keys, catalogue rows
only for names that don't exist yet.  Admin edits are never overwritten.
"""

from __future__ import annotations

import json
import logging
from decimal import Decimal

from sqlalchemy import Engine, select
from sqlalchemy.orm import Session

from digital_bhutan.database.models import (
    CulturalActivity,
    GovernmentService,
    MiniApp,
    Setting,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Default settings catalogue
# ---------------------------------------------------------------------------
DEFAULT_SETTINGS: dict[str, tuple[object, str, str]] = {
    "dashboard.satisfaction_rate": (
        94, "dashboard", "Citizen satisfaction percentage shown on the dashboard",
    ),
    "dashboard.title": (
        "Digital Bhutan", "display", "Display name for the dashboard / home page",
    ),
    "dashboard.subtitle": (
        "Gross National Happiness, online", "display", "Tagline under the dashboard title",
    ),
    "economy.points_currency_name": (
        "Brownie Points", "economy", "Display name for the gamification currency",
    ),
    "economy.token_currency_name": (
        "NuBucks", "economy", "Display name for the platform token",
    ),
}
"""Each entry maps ``key`` → ``(default_value, category, description)``."""


# ---------------------------------------------------------------------------
# Demo catalogue
# ---------------------------------------------------------------------------
DEFAULT_ACTIVITIES: list[dict] = [
    {
        "title": "Dzongkha Language Quiz",
        "description": "Test your knowledge of everyday Dzongkha greetings and phrases.",
        "type": "quiz",
        "content": {
            "questions": [
                {
                    "question": "How do you say 'hello' in Dzongkha?",
                    "options": ["Kuzuzangpo la", "Tashi delek", "Kadrinchhey la"],
                    "answer": 0,
                },
            ],
        },
        "points_reward": 150,
        "difficulty": "beginner",
    },
    {
        "title": "Festival Traditions",
        "description": "Learn the meaning behind Tshechu masked dances.",
        "type": "learning_module",
        "content": {"sections": ["History of Tshechu", "The Cham dances", "Thongdrel unveiling"]},
        "points_reward": 200,
        "difficulty": "intermediate",
    },
    {
        "title": "Bhutan History",
        "description": "From Zhabdrung Ngawang Namgyal to the constitutional monarchy.",
        "type": "learning_module",
        "content": {"sections": ["Unification", "Wangchuck dynasty", "Democracy in 2008"]},
        "points_reward": 175,
        "difficulty": "intermediate",
    },
    {
        "title": "Community Project",
        "description": "Contribute to a local conservation or heritage project.",
        "type": "contribution",
        "content": {"requirements": ["Project description", "Photo evidence"]},
        "points_reward": 300,
        "difficulty": "advanced",
    },
]

DEFAULT_MINI_APPS: list[dict] = [
    {
        "name": "Learn Dzongkha",
        "description": "Daily Dzongkha lessons with spaced repetition.",
        "developer": "Druk Language Lab",
        "rating": Decimal("4.90"),
        "downloads": 2300,
        "code_hash": "sha256:learn-dzongkha-1.0.0",
        "permissions": ["profile"],
        "verified": True,
    },
    {
        "name": "NuBuck Wallet",
        "description": "Track NuBuck balances and transfers.",
        "developer": "Digital Bhutan",
        "rating": Decimal("4.70"),
        "downloads": 1800,
        "code_hash": "sha256:nubuck-wallet-1.0.0",
        "permissions": ["profile", "wallet"],
        "verified": True,
    },
    {
        "name": "Carbon Tracker",
        "description": "Measure and offset your personal carbon footprint.",
        "developer": "Green Valley Labs",
        "price": Decimal("2.99"),
        "rating": Decimal("4.20"),
        "downloads": 956,
        "code_hash": "sha256:carbon-tracker-1.0.0",
        "permissions": ["profile"],
    },
]

DEFAULT_GOVERNMENT_SERVICES: list[dict] = [
    {
        "service_name": "Digital Residency Application",
        "description": "Apply for official digital residency status in the Kingdom of Bhutan.",
        "department": "Ministry of Home Affairs",
        "processing_time": "5-7 business days",
        "fee": Decimal("50.00"),
        "required_credentials": ["identity_verification", "background_check"],
    },
    {
        "service_name": "Business License Registration",
        "description": "Register and obtain an official business license for operating in Bhutan.",
        "department": "Ministry of Economic Affairs",
        "processing_time": "10-14 business days",
        "fee": Decimal("100.00"),
        "required_credentials": ["digital_residency", "business_plan"],
    },
    {
        "service_name": "Cultural Heritage Certificate",
        "description": "Certification for cultural learning achievements and traditional skills.",
        "department": "Ministry of Education",
        "processing_time": "3-5 business days",
        "fee": Decimal("25.00"),
        "required_credentials": ["cultural_assessment", "community_endorsement"],
    },
    {
        "service_name": "Employment Verification",
        "description": "Verified employment credentials for job applications.",
        "department": "Ministry of Labour",
        "processing_time": "2-3 business days",
        "fee": Decimal("20.00"),
        "required_credentials": ["digital_residency", "employer_confirmation"],
    },
    {
        "service_name": "Educational Credential Verification",
        "description": "Verify and digitize educational qualifications.",
        "department": "Ministry of Education",
        "processing_time": "7-10 business days",
        "fee": Decimal("30.00"),
        "required_credentials": ["academic_transcripts", "institution_verification"],
    },
    {
        "service_name": "Tax Registration & Compliance",
        "description": "Register for tax obligations and keep compliance records.",
        "department": "Ministry of Finance",
        "processing_time": "5-7 business days",
        "fee": Decimal("40.00"),
        "required_credentials": ["business_license", "financial_records"],
    },
]


# ---------------------------------------------------------------------------
# Seeders
# ---------------------------------------------------------------------------
def seed_default_settings(engine: Engine) -> None:
    """Insert default settings that don't yet exist."""
    session = Session(engine)
    inserted = 0
    try:
        for key, (value, category, desc) in DEFAULT_SETTINGS.items():
            existing = session.get(Setting, key)
            if existing is None:
                session.add(Setting(
                    key=key,
                    value_json=json.dumps(value),
                    category=category,
                    description=desc,
                ))
                inserted += 1
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()

    if inserted:
        logger.info("Seeded %d default settings.", inserted)


def seed_catalogue(engine: Engine) -> None:
    """Insert demo activities, mini-apps and government services by name."""
    inserted = 0
    with Session(engine) as session:
        existing_titles = set(session.scalars(select(CulturalActivity.title)).all())
        for row in DEFAULT_ACTIVITIES:
            if row["title"] not in existing_titles:
                session.add(CulturalActivity(**row))
                inserted += 1

        existing_apps = set(session.scalars(select(MiniApp.name)).all())
        for row in DEFAULT_MINI_APPS:
            if row["name"] not in existing_apps:
                session.add(MiniApp(**row))
                inserted += 1

        existing_services = set(session.scalars(select(GovernmentService.service_name)).all())
        for row in DEFAULT_GOVERNMENT_SERVICES:
            if row["service_name"] not in existing_services:
                session.add(GovernmentService(**row))
                inserted += 1

        session.commit()

    if inserted:
        logger.info("Seeded %d catalogue rows.", inserted)
