# frontend/calendar_view/config.py
"""Client settings read from the environment."""

from __future__ import annotations

import os

API_BASE = (os.getenv("CAL_API_BASE") or "http://127.0.0.1:8000/api").rstrip("/")
API_TIMEOUT = float(os.getenv("CAL_API_TIMEOUT", "10.0"))

# IANA zone the grid is drawn in; empty means the host's local zone.
CAL_TIMEZONE = (os.getenv("CAL_TIMEZONE") or "").strip() or None
