"""
digital_bhutan.config — YAML Configuration Loader
==================================================

Reads ``config.yaml`` for **infrastructure-only** settings (platform
identity, demo user fallback, admin emails, minting relay).  Secrets live
in the environment (``DATABASE_URL``, ``JWT_SECRET``) and dashboard
tunables live in the ``settings`` database table.

Usage::

    from digital_bhutan.config import load_config

    cfg = load_config()          # reads ./config.yaml by default
    print(cfg.platform_name)     # "Digital Bhutan"
    print(cfg.demo_user_id)      # 1
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml


# ---------------------------------------------------------------------------
# Typed settings objects
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class MintingConfig:
    """Optional blockchain relay used to mint credential NFTs.

    When ``enabled`` is false the platform uses a mock minter and never
    leaves the process.
    """

    enabled: bool = False
    relay_url: str | None = None
    contract_address: str | None = None
    timeout_seconds: float = 10.0


@dataclass(frozen=True, slots=True)
class PlatformConfig:
    """Immutable configuration loaded from ``config.yaml``."""

    # Identity
    platform_name: str
    platform_motto: str

    # Server
    dashboard_port: int

    # Acting user for citizen endpoints that receive no explicit id
    demo_user_id: int

    # Emails that are flagged ``is_admin`` when they register
    admin_emails: tuple[str, ...] = ()

    minting: MintingConfig = field(default_factory=MintingConfig)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def _load_minting(raw: dict | None) -> MintingConfig:
    if not raw:
        return MintingConfig()
    return MintingConfig(
        enabled=bool(raw.get("enabled", False)),
        relay_url=raw.get("relay_url") or None,
        contract_address=raw.get("contract_address") or None,
        timeout_seconds=float(raw.get("timeout_seconds", 10.0)),
    )


def load_config(path: str | Path = "config.yaml") -> PlatformConfig:
    """Read *path* and return a :class:`PlatformConfig` instance.

    Parameters
    ----------
    path:
        Filesystem path to the YAML configuration file.
        Defaults to ``config.yaml`` in the current working directory.

    Raises
    ------
    FileNotFoundError
        If the YAML file doesn't exist.
    KeyError
        If a required key is missing from the YAML file.
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(
            f"Configuration file not found: {config_path.resolve()}\n"
            "Hint: copy config.yaml.example → config.yaml and edit it."
        )

    with open(config_path, encoding="utf-8") as fh:
        raw: dict = yaml.safe_load(fh) or {}

    return PlatformConfig(
        platform_name=raw["platform_name"],
        platform_motto=raw["platform_motto"],
        dashboard_port=int(raw["dashboard_port"]),
        demo_user_id=int(raw["demo_user_id"]),
        admin_emails=tuple(
            email.strip().lower() for email in raw.get("admin_emails") or []
        ),
        minting=_load_minting(raw.get("minting")),
    )
