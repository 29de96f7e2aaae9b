# frontend/calendar_view/dates.py
"""Local-calendar helpers: month cursors, grid anchors, input/label formatting."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Optional

from dateutil import tz
from dateutil.parser import isoparse as iso_parse
from dateutil.relativedelta import relativedelta

UTC = timezone.utc

WEEKDAYS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


def local_zone(name: Optional[str] = None) -> tzinfo:
    if not name:
        return tz.tzlocal()
    zone = tz.gettz(name)
    if zone is None:
        raise ValueError(f"unknown time zone: {name}")
    return zone


def month_start(d: date) -> date:
    return d.replace(day=1)


def shift_month(d: date, months: int) -> date:
    """Move a month cursor by whole calendar months; the result is a 1st."""
    return month_start(d) + relativedelta(months=months)


def month_token(d: date) -> str:
    return f"{d.year:04d}-{d.month:02d}"


def sunday_index(d: date) -> int:
    # date.weekday() is Monday=0; the grid starts on Sunday
    return (d.weekday() + 1) % 7


def grid_start(current: date) -> date:
    """Sunday on or before the 1st of ``current``'s month."""
    first = month_start(current)
    return first - timedelta(days=sunday_index(first))


def parse_instant(value: str) -> datetime:
    dt = iso_parse(value)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def to_wire(dt: datetime) -> str:
    return dt.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def local_date(instant: datetime, zone: tzinfo) -> date:
    return instant.astimezone(zone).date()


def date_input(instant: datetime, zone: tzinfo) -> str:
    return instant.astimezone(zone).strftime("%Y-%m-%d")


def time_input(instant: datetime, zone: tzinfo) -> str:
    return instant.astimezone(zone).strftime("%H:%M")


def combine_local(date_text: str, time_text: str, zone: tzinfo) -> Optional[datetime]:
    """
    Join a ``YYYY-MM-DD`` date field and an ``HH:MM`` time field into a UTC
    instant, reading them as wall-clock time in ``zone``. None if either
    field does not parse.
    """
    try:
        day = datetime.strptime(date_text.strip(), "%Y-%m-%d").date()
        tod = datetime.strptime(time_text.strip(), "%H:%M").time()
    except (ValueError, AttributeError):
        return None
    local = datetime.combine(day, time(tod.hour, tod.minute), tzinfo=zone)
    return local.astimezone(UTC)


def format_month_label(d: date) -> str:
    return f"{d:%B} {d.year}"


def format_day_label(d: date) -> str:
    return f"{d.year}-{d.month:02d}-{d.day:02d} ({WEEKDAYS[sunday_index(d)]})"


def format_time_range(start: datetime, end: datetime, zone: tzinfo) -> str:
    return f"{time_input(start, zone)} - {time_input(end, zone)}"
