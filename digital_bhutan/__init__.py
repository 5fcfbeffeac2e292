"""
Digital Bhutan — Civic Engagement Platform API
===============================================
Residency applications, business registration, a job board, a marketplace,
cultural learning with Brownie Points and tiers, and an admin console,
served as a JSON REST API.

Package layout::

    digital_bhutan/
    ├── config.py          # YAML → typed Python config
    ├── constants.py       # Tier formula, tier names/benefits, reward badge
    ├── database/
    │   ├── engine.py      # SQLAlchemy engine + session helper
    │   ├── models.py      # All ORM models
    │   └── seed.py        # Default settings + demo catalogue
    ├── services/
    │   ├── points_service.py     # Brownie Point ledger (award, complete, purchase)
    │   ├── user_service.py       # Registration, password hashing, login
    │   ├── residency_service.py  # Applications + approve/reject
    │   ├── business_service.py   # Business registration + status
    │   ├── job_service.py        # Job board + search + applications
    │   ├── product_service.py    # Marketplace listings
    │   ├── catalog_service.py    # Activities, mini-apps, government services
    │   ├── stats_service.py      # Dashboard counters
    │   ├── admin_service.py      # Audit-logged admin mutations
    │   ├── settings_service.py   # Settings CRUD
    │   ├── minting.py            # Optional NFT minting integration
    │   └── log_buffer.py         # In-memory log tail for the admin console
    └── api/
        ├── main.py        # FastAPI app
        ├── deps.py        # Engine/session/config/JWT dependencies
        ├── errors.py      # {"message": ...} error envelope
        ├── auth.py        # Register / login / me
        └── routes/        # Public + admin REST endpoints
"""

__version__ = "0.1.0"
