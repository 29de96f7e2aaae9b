# backend/calendar_app/config.py
"""Environment-driven settings for the events API."""

from __future__ import annotations

import logging
import os


def _clean(s: str | None) -> str | None:
    return s.strip().rstrip("/") if s and s.strip() else None


DATABASE_URL = os.getenv("DATABASE_URL")

# ───────────────────────── CORS ─────────────────────────────────────
# Open by default; set FRONTEND_ORIGIN to pin the API to one client origin.
FRONTEND_ORIGIN = _clean(os.getenv("FRONTEND_ORIGIN"))
_raw_extra = os.getenv("EXTRA_CORS_ORIGINS", "")
EXTRA_CORS_ORIGINS = [x for x in (_clean(p) for p in _raw_extra.split(",")) if x]

if not FRONTEND_ORIGIN or "*" in EXTRA_CORS_ORIGINS:
    ALLOW_ORIGINS = ["*"]
else:
    ALLOW_ORIGINS = [o for o in {FRONTEND_ORIGIN, *EXTRA_CORS_ORIGINS} if o]

# IANA zone used for month boundaries; empty means the host's local zone.
CAL_TIMEZONE = _clean(os.getenv("CAL_TIMEZONE"))

AUTO_MIGRATE = os.getenv("AUTO_MIGRATE") == "1"

API_HOST = os.getenv("API_HOST", "127.0.0.1")
API_PORT = int(os.getenv("API_PORT", "8000"))

LOG_LEVEL = (os.getenv("LOG_LEVEL") or "INFO").upper()


def configure_logging() -> None:
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
