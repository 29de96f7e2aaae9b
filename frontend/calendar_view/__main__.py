# frontend/calendar_view/__main__.py
"""Print one month of the calendar: python -m calendar_view --month 2026-02"""

from __future__ import annotations

import argparse
import sys
from datetime import date, datetime

from .api import CalendarApiClient
from .config import API_BASE, CAL_TIMEZONE
from .controller import CalendarController
from .dates import local_zone
from .render import render_month


def _parse_day(args) -> date | None:
    if args.day:
        return datetime.strptime(args.day, "%Y-%m-%d").date()
    if args.month:
        return datetime.strptime(args.month, "%Y-%m").date()
    return None


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="calendar_view", description="Show a month of calendar events")
    parser.add_argument("--api", default=API_BASE, help="API base URL (default: %(default)s)")
    parser.add_argument("--month", help="month to show, YYYY-MM")
    parser.add_argument("--day", help="day to select, YYYY-MM-DD (implies its month)")
    parser.add_argument("--tz", default=CAL_TIMEZONE, help="IANA time zone for the grid")
    args = parser.parse_args(argv)

    try:
        today = _parse_day(args)
        zone = local_zone(args.tz)
    except ValueError as exc:
        parser.error(str(exc))

    errors: list[str] = []
    with CalendarApiClient(args.api) as api:
        controller = CalendarController(api, zone, today=today, notify=errors.append)
        state = controller.start()

    print(render_month(state, zone))
    for message in errors:
        print(f"error: {message}", file=sys.stderr)
    return 1 if errors else 0


if __name__ == "__main__":
    sys.exit(main())
