# frontend/calendar_view/projection.py
"""
Derive the month grid and the selected day's list from a ViewState.

Everything here is a pure function of (state, zone): rendering the same
inputs twice gives equal output.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import date, timedelta, tzinfo
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .dates import format_time_range, grid_start, local_date
from .models import CalendarEvent
from .state import ViewState

GRID_DAYS = 42
MAX_CHIPS = 3


@dataclass(frozen=True)
class DayCell:
    day: date
    in_month: bool
    selected: bool
    chips: Tuple[str, ...]
    overflow: int = 0

    @property
    def overflow_label(self) -> Optional[str]:
        return f"+{self.overflow}" if self.overflow else None


@dataclass(frozen=True)
class DayListItem:
    event_id: int
    title: str
    time_range: str
    memo: str


def _by_start(event: CalendarEvent):
    return (event.start_at, event.id)


def events_by_date(events: Iterable[CalendarEvent], zone: tzinfo) -> Dict[date, List[CalendarEvent]]:
    """Group events by the local calendar date they start on."""
    grouped: Dict[date, List[CalendarEvent]] = defaultdict(list)
    for event in events:
        grouped[local_date(event.start_at, zone)].append(event)
    for day_events in grouped.values():
        day_events.sort(key=_by_start)
    return dict(grouped)


def chips_for(day_events: Sequence[CalendarEvent]) -> Tuple[Tuple[str, ...], int]:
    shown = tuple(e.title for e in day_events[:MAX_CHIPS])
    return shown, max(0, len(day_events) - MAX_CHIPS)


def build_grid(state: ViewState, zone: tzinfo) -> List[DayCell]:
    """Six full weeks starting on the Sunday on/before the 1st of the month."""
    grouped = events_by_date(state.events, zone)
    start = grid_start(state.current)
    cells: List[DayCell] = []
    for offset in range(GRID_DAYS):
        day = start + timedelta(days=offset)
        chips, overflow = chips_for(grouped.get(day, []))
        cells.append(DayCell(
            day=day,
            in_month=(day.year, day.month) == (state.current.year, state.current.month),
            selected=day == state.selected,
            chips=chips,
            overflow=overflow,
        ))
    return cells


def weeks(cells: Sequence[DayCell]) -> List[List[DayCell]]:
    return [list(cells[i:i + 7]) for i in range(0, len(cells), 7)]


def day_list(state: ViewState, zone: tzinfo) -> List[DayListItem]:
    todays = sorted(
        (e for e in state.events if local_date(e.start_at, zone) == state.selected),
        key=_by_start,
    )
    return [
        DayListItem(
            event_id=e.id,
            title=e.title,
            time_range=format_time_range(e.start_at, e.end_at, zone),
            memo=e.memo,
        )
        for e in todays
    ]
