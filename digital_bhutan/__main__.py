"""
Entry point: ``python -m digital_bhutan``

Serves the API with uvicorn on ``dashboard_port`` from config.yaml.
"""

from __future__ import annotations

import logging

import uvicorn
from dotenv import load_dotenv

from digital_bhutan.config import load_config

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s │ %(levelname)-8s │ %(name)s │ %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger("digital_bhutan")


def main() -> None:
    """Load secrets and config, then serve the API."""
    load_dotenv()
    cfg = load_config()
    logger.info("Starting %s on port %d", cfg.platform_name, cfg.dashboard_port)
    uvicorn.run("digital_bhutan.api.main:app", host="0.0.0.0", port=cfg.dashboard_port)


if __name__ == "__main__":
    main()
