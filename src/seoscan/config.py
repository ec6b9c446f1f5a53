# src/seoscan/config.py
"""
Miljøstyret konfiguration.

Alle værdier læses én gang ved import (efter ``load_dotenv``), så en
``.env`` i arbejdsmappen kan styre browser, timeouts, cache og logging.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

log = logging.getLogger(__name__)


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        log.warning("Ugyldig værdi for %s=%r, bruger %s", name, raw, default)
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        log.warning("Ugyldig værdi for %s=%r, bruger %s", name, raw, default)
        return default


def _env_bool(name: str, default: bool) -> bool:
    raw = (os.getenv(name) or "").strip().lower()
    if not raw:
        return default
    return raw in ("1", "true", "yes", "on")


# --- Browser ---
CHROMIUM_EXECUTABLE_PATH: Optional[str] = os.getenv("CHROMIUM_EXECUTABLE_PATH") or None
HEADLESS: bool = _env_bool("SEOSCAN_HEADLESS", True)
NAVIGATION_TIMEOUT_MS: int = _env_int("SEOSCAN_NAV_TIMEOUT_MS", 30_000)

# --- HTTP-prober (robots.txt / sitemap) ---
PROBE_TIMEOUT_S: float = _env_float("SEOSCAN_PROBE_TIMEOUT", 10.0)
PROBE_RETRIES: int = max(1, _env_int("SEOSCAN_PROBE_RETRIES", 2))
MAX_CONNECTIONS: int = max(1, _env_int("SEOSCAN_MAX_CONNECTIONS", 10))

# --- Cache ---
CACHE_DIR = Path(os.getenv("SEOSCAN_CACHE_DIR", ".seoscan_cache"))
CACHE_TTL_S: int = _env_int("SEOSCAN_CACHE_TTL", 24 * 60 * 60)

# --- Regler ---
RULES_PATH = Path(os.getenv("SEOSCAN_RULES_PATH") or Path(__file__).parent / "scoring" / "seo_rules.yml")

# --- Logging ---
LOG_LEVEL: str = os.getenv("SEOSCAN_LOG_LEVEL", "INFO").upper()
LOG_FORMAT: str = os.getenv("SEOSCAN_LOG_FMT", "%(asctime)s - %(levelname)s - %(message)s")
LOG_DATEFMT: str = os.getenv("SEOSCAN_LOG_DATEFMT", "%H:%M:%S")
