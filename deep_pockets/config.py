"""Configuration management for the Deep Pockets engine.

This module centralizes all configuration values including seed paths,
logging defaults, and environment variable overrides.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional, Union

# Base package root - assumes this file is in deep_pockets/
_PACKAGE_ROOT = Path(__file__).parent.resolve()

# Seed data
DATA_DIR = Path(os.getenv("DEEP_POCKETS_DATA_DIR", _PACKAGE_ROOT / "data")).resolve()

CATALOG_PATH = Path(
    os.getenv("DEEP_POCKETS_CATALOG_PATH", DATA_DIR / "categories.json")
).resolve()

# Logging
LOG_LEVEL = os.getenv("DEEP_POCKETS_LOG_LEVEL", "WARNING")
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: Optional[Union[str, int]] = None) -> None:
    """Attach a basic handler to the ``deep_pockets`` logger.

    Library modules only create loggers; hosts that want output call this
    once at startup. ``level`` defaults to ``DEEP_POCKETS_LOG_LEVEL``.
    """
    resolved = level if level is not None else LOG_LEVEL
    if isinstance(resolved, str):
        resolved = logging.getLevelName(resolved.upper())
        if not isinstance(resolved, int):
            resolved = logging.WARNING

    logger = logging.getLogger("deep_pockets")
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(resolved)


def get_catalog_path() -> str:
    """Get the catalog seed path as a string."""
    return str(CATALOG_PATH)
