# frontend/calendar_view/render.py
"""Plain-text rendering of the month grid and the selected day's events."""

from __future__ import annotations

from datetime import tzinfo
from typing import List

from .dates import WEEKDAYS, format_day_label, format_month_label
from .projection import DayCell, build_grid, day_list, weeks
from .state import ViewState

CELL_WIDTH = 14


def _fit(text: str, width: int = CELL_WIDTH) -> str:
    if len(text) > width:
        text = text[: width - 1] + "…"
    return text.ljust(width)


def _cell_lines(cell: DayCell) -> List[str]:
    number = f"{cell.day.day:2d}"
    if cell.selected:
        number = f"[{number}]"
    elif not cell.in_month:
        number = f"({number})"
    lines = [number, *cell.chips]
    if cell.overflow_label:
        lines.append(cell.overflow_label)
    return lines


def render_grid(state: ViewState, zone: tzinfo) -> str:
    out = [" ".join(_fit(day) for day in WEEKDAYS)]
    for week in weeks(build_grid(state, zone)):
        columns = [_cell_lines(cell) for cell in week]
        height = max(len(c) for c in columns)
        for row in range(height):
            out.append(" ".join(_fit(c[row] if row < len(c) else "") for c in columns).rstrip())
        out.append("")
    return "\n".join(out)


def render_day_list(state: ViewState, zone: tzinfo) -> str:
    items = day_list(state, zone)
    lines = [format_day_label(state.selected)]
    if not items:
        lines.append("  No events")
    for item in items:
        lines.append(f"  #{item.event_id} {item.time_range}  {item.title}")
        if item.memo:
            lines.append(f"      {item.memo}")
    return "\n".join(lines)


def render_month(state: ViewState, zone: tzinfo) -> str:
    return "\n".join([
        format_month_label(state.current),
        "",
        render_grid(state, zone),
        render_day_list(state, zone),
    ])
