"""
tests/conftest.py — Shared Test Fixtures
=========================================
"""

from __future__ import annotations

import os

# ---------------------------------------------------------------------------
# Ensure a valid JWT_SECRET is always set for test runs.
# This must happen before any import of digital_bhutan.api.deps which
# validates the secret at module-load time.
# ---------------------------------------------------------------------------
_TEST_JWT_SECRET = "test-secret-for-pytest-only-" + "x" * 40  # > 32 chars
os.environ.setdefault("JWT_SECRET", _TEST_JWT_SECRET)

from decimal import Decimal  # noqa: E402

import pytest  # noqa: E402
from sqlalchemy import Engine, create_engine, event  # noqa: E402

# ---------------------------------------------------------------------------
# Make JSONB columns work in SQLite for testing.
# SQLite doesn't support JSONB natively, but SQLAlchemy's JSON type works.
# We register a custom type compiler so SQLite renders JSONB as TEXT.
# ---------------------------------------------------------------------------
from sqlalchemy.dialects.postgresql import JSONB as PG_JSONB  # noqa: E402
from sqlalchemy.orm import Session  # noqa: E402

from digital_bhutan.config import PlatformConfig  # noqa: E402
from digital_bhutan.database.models import Base  # noqa: E402

_jsonb_sqlite_registered = False


def _register_jsonb_sqlite_compat():
    """Register SQLite compilation for PG JSONB type (idempotent)."""
    global _jsonb_sqlite_registered
    if _jsonb_sqlite_registered:
        return
    from sqlalchemy.ext.compiler import compiles

    @compiles(PG_JSONB, "sqlite")
    def _compile_jsonb_as_text(type_, compiler, **kw):
        return "TEXT"

    _jsonb_sqlite_registered = True


_register_jsonb_sqlite_compat()


ADMIN_EMAIL = "admin@digital.bt"


@pytest.fixture(autouse=True)
def _fast_password_hashing(monkeypatch):
    """Run PBKDF2 at 1000 iterations for the test session."""
    from digital_bhutan.services import user_service

    monkeypatch.setattr(user_service, "PBKDF2_ITERATIONS", 1000)


@pytest.fixture
def db_engine() -> Engine:
    """Create an in-memory SQLite engine with all Digital Bhutan tables.

    Uses StaticPool so the TestClient's worker threads share the same
    in-memory database.
    Foreign keys are enforced, as they are on PostgreSQL.
    """
    from sqlalchemy.pool import StaticPool

    engine = create_engine(
        "sqlite://",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_conn, _record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(engine)
    return engine


@pytest.fixture
def db_session(db_engine: Engine):
    """Provide a session that rolls back after each test."""
    with Session(db_engine) as session:
        yield session
        session.rollback()


@pytest.fixture
def cfg() -> PlatformConfig:
    return PlatformConfig(
        platform_name="Digital Bhutan",
        platform_motto="Gross National Happiness, online",
        dashboard_port=8000,
        demo_user_id=1,
        admin_emails=(ADMIN_EMAIL,),
    )


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------
def make_user(engine: Engine, email: str = "tashi@example.bt", **kwargs):
    """Register a user through the service layer and return it."""
    from digital_bhutan.services.user_service import register_user

    return register_user(
        engine,
        email=email,
        first_name=kwargs.pop("first_name", "Tashi"),
        last_name=kwargs.pop("last_name", "Dorji"),
        password=kwargs.pop("password", "kuzuzangpo-la"),
        **kwargs,
    )


def make_product(engine: Engine, seller_id: int, **kwargs):
    from digital_bhutan.services.product_service import create_product

    return create_product(
        engine,
        seller_id=seller_id,
        name=kwargs.pop("name", "Yak Wool Scarf"),
        description=kwargs.pop("description", "Hand-woven in Bumthang"),
        price=kwargs.pop("price", Decimal("45.00")),
        category=kwargs.pop("category", "Textiles"),
        **kwargs,
    )


@pytest.fixture
def user(db_engine):
    """The demo citizen (id 1)."""
    return make_user(db_engine)


@pytest.fixture
def seeded_engine(db_engine):
    """Engine with default settings and the demo catalogue loaded."""
    from digital_bhutan.database.seed import seed_catalogue, seed_default_settings

    seed_default_settings(db_engine)
    seed_catalogue(db_engine)
    return db_engine


# ---------------------------------------------------------------------------
# API
# ---------------------------------------------------------------------------
def make_token(sub: str = "99999", *, is_admin: bool = True) -> str:
    """Create a JWT.  Usable as both a fixture helper and a factory function."""
    import jwt

    from digital_bhutan.api.deps import JWT_ALGORITHM, JWT_SECRET

    return jwt.encode(
        {"sub": sub, "email": "fixture@digital.bt", "is_admin": is_admin},
        JWT_SECRET,
        algorithm=JWT_ALGORITHM,
    )


def auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_token():
    return make_token()


@pytest.fixture
def client(seeded_engine, cfg):
    """FastAPI TestClient bound to the in-memory database.

    ``raise_server_exceptions=False`` so unhandled errors surface as the
    500 envelope instead of propagating into the test.
    """
    from fastapi.testclient import TestClient

    from digital_bhutan.api.deps import get_config, get_engine
    from digital_bhutan.api.main import app

    app.dependency_overrides[get_engine] = lambda: seeded_engine
    app.dependency_overrides[get_config] = lambda: cfg
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()
