# backend/calendar_app/timeutil.py
"""Instant parsing, wire formatting and local-calendar month ranges."""

from __future__ import annotations

import re
from datetime import datetime, timezone, tzinfo
from typing import Any, Optional, Tuple

from dateutil import tz
from dateutil.parser import isoparse as iso_parse
from dateutil.relativedelta import relativedelta

UTC = timezone.utc

MONTH_RE = re.compile(r"^(?P<year>\d{1,4})-(?P<month>\d{1,2})$")


def local_zone(name: Optional[str] = None) -> tzinfo:
    """Resolve an IANA zone name, falling back to the host's local zone."""
    if not name:
        return tz.tzlocal()
    zone = tz.gettz(name)
    if zone is None:
        raise ValueError(f"unknown time zone: {name}")
    return zone


def as_utc(dt: datetime) -> datetime:
    # SQLite hands DateTime columns back naive; everything is stored as UTC
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def parse_instant(value: Any) -> Optional[datetime]:
    """
    Parse an ISO-8601 timestamp into a UTC instant truncated to milliseconds.
    Values without an offset are read as UTC. Returns None when unparseable.
    """
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        dt = as_utc(iso_parse(value.strip()))
    except (ValueError, OverflowError):
        return None
    return dt.replace(microsecond=dt.microsecond // 1000 * 1000)


def to_wire(dt: datetime) -> str:
    return as_utc(dt).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_month(token: Optional[str]) -> Optional[Tuple[int, int]]:
    if not token:
        return None
    m = MONTH_RE.match(token.strip())
    if not m:
        return None
    year, month = int(m.group("year")), int(m.group("month"))
    if year < 1 or not 1 <= month <= 12:
        return None
    return year, month


def month_range(year: int, month: int, zone: tzinfo) -> Optional[Tuple[datetime, datetime]]:
    """
    Half-open UTC range covering one local-calendar month.

    Both ends are built as local wall-clock midnights on the 1st and only
    then converted, so month length and DST shifts come out right.
    """
    try:
        first = datetime(year, month, 1, tzinfo=zone)
        following = first + relativedelta(months=1)
        return first.astimezone(UTC), following.astimezone(UTC)
    except (ValueError, OverflowError):
        return None


def utcnow() -> datetime:
    now = datetime.now(UTC)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)
