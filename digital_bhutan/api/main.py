"""
digital_bhutan.api.main — FastAPI application entry point
==========================================================

Run with::

    uvicorn digital_bhutan.api.main:app --reload --port 8000

or ``python -m digital_bhutan`` to use ``dashboard_port`` from config.yaml.
"""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

load_dotenv()

from digital_bhutan import __version__  # noqa: E402
from digital_bhutan.api.auth import router as auth_router  # noqa: E402
from digital_bhutan.api.deps import get_engine  # noqa: E402
from digital_bhutan.api.errors import install_error_handlers  # noqa: E402
from digital_bhutan.api.routes.admin import router as admin_router  # noqa: E402
from digital_bhutan.api.routes.businesses import router as businesses_router  # noqa: E402
from digital_bhutan.api.routes.cultural import router as cultural_router  # noqa: E402
from digital_bhutan.api.routes.jobs import router as jobs_router  # noqa: E402
from digital_bhutan.api.routes.products import router as products_router  # noqa: E402
from digital_bhutan.api.routes.public import router as public_router  # noqa: E402
from digital_bhutan.api.routes.residency import router as residency_router  # noqa: E402
from digital_bhutan.database.engine import init_db  # noqa: E402
from digital_bhutan.services.log_buffer import install_handler  # noqa: E402

logger = logging.getLogger(__name__)


def _cors_origins() -> list[str]:
    """Resolve allowed CORS origins from env with safe defaults.

    Priority:
      1) CORS_ALLOW_ORIGINS (comma-separated)
      2) FRONTEND_URL (single origin)
    """
    raw = os.getenv("CORS_ALLOW_ORIGINS", "").strip()
    if raw:
        return [origin.strip().rstrip("/") for origin in raw.split(",") if origin.strip()]

    frontend_url = os.getenv("FRONTEND_URL", "").strip()
    if frontend_url:
        return [frontend_url.rstrip("/")]

    return []


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle — attach the log buffer, create + seed tables."""
    # Uvicorn reconfigures logging when it starts, so the handler is
    # attached here rather than at import time.
    install_handler()

    engine = app.dependency_overrides.get(get_engine, get_engine)()
    init_db(engine)
    logger.info("Digital Bhutan API started — engine ready (%s)", engine.url.database)
    yield
    logger.info("Digital Bhutan API shutting down")


app = FastAPI(
    title="Digital Bhutan API",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

install_error_handlers(app)

# Mount routers
app.include_router(auth_router, prefix="/api")
app.include_router(public_router, prefix="/api")
app.include_router(residency_router, prefix="/api")
app.include_router(businesses_router, prefix="/api")
app.include_router(jobs_router, prefix="/api")
app.include_router(products_router, prefix="/api")
app.include_router(cultural_router, prefix="/api")
app.include_router(admin_router, prefix="/api")


@app.get("/api/health")
def health():
    return {"status": "ok"}
