"""
Runtime settings read from the environment (and a local .env file).

INVISISNAKE_START_LEVEL       level the first session starts on (clamped 1-10)
INVISISNAKE_OVERLAY_DELAY_MS  delay before a terminal overlay is shown
INVISISNAKE_SEED              optional seed for reproducible sessions
LOG_LEVEL                     logging level name
CORS_ALLOWED_ORIGINS          comma-separated origins allowed on /api/*
"""

import logging
import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

from domain.constants import OVERLAY_DELAY_MS, clamp_level

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_ALLOWED_ORIGINS = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:3000",
]


@dataclass
class Settings:
    start_level: int = 1
    overlay_delay_ms: int = OVERLAY_DELAY_MS
    seed: Optional[int] = None
    log_level: str = "INFO"
    allowed_origins: List[str] = field(default_factory=lambda: list(DEFAULT_ALLOWED_ORIGINS))


def _int_env(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Ignoring {name}={raw!r}: not an integer, using {default}")
        return default


def load_settings() -> Settings:
    origins_env = os.getenv("CORS_ALLOWED_ORIGINS")
    if origins_env:
        origins = [o.strip() for o in origins_env.split(",") if o.strip()]
    else:
        origins = list(DEFAULT_ALLOWED_ORIGINS)

    overlay_delay_ms = _int_env("INVISISNAKE_OVERLAY_DELAY_MS", OVERLAY_DELAY_MS)
    if overlay_delay_ms < 0:
        logger.warning(f"Negative overlay delay {overlay_delay_ms}, using {OVERLAY_DELAY_MS}")
        overlay_delay_ms = OVERLAY_DELAY_MS

    return Settings(
        start_level=clamp_level(os.getenv("INVISISNAKE_START_LEVEL", "1")),
        overlay_delay_ms=overlay_delay_ms,
        seed=_int_env("INVISISNAKE_SEED", None),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        allowed_origins=origins,
    )
