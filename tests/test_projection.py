from datetime import date, datetime, timedelta, timezone

from dateutil import tz

from calendar_view.models import CalendarEvent
from calendar_view.projection import (
    GRID_DAYS,
    build_grid,
    day_list,
    events_by_date,
    weeks,
)
from calendar_view.state import ViewState

UTC = timezone.utc


def _event(event_id, title, start, minutes=60, memo=""):
    return CalendarEvent(
        id=event_id,
        title=title,
        start_at=start,
        end_at=start + timedelta(minutes=minutes),
        memo=memo,
    )


def _state(events=(), current=date(2026, 2, 1), selected=date(2026, 2, 2)):
    return ViewState(current=current, selected=selected, events=tuple(events))


def test_grid_has_six_weeks_starting_sunday():
    cells = build_grid(_state(current=date(2026, 10, 1), selected=date(2026, 10, 1)), tz.UTC)
    assert len(cells) == GRID_DAYS
    assert cells[0].day == date(2026, 9, 27)
    assert cells[0].day.weekday() == 6
    assert cells[-1].day == date(2026, 11, 7)
    assert len(weeks(cells)) == 6


def test_grid_starts_on_the_first_when_it_is_sunday():
    cells = build_grid(_state(), tz.UTC)
    # 2026-02-01 is a Sunday
    assert cells[0].day == date(2026, 2, 1)
    assert [c.in_month for c in cells].count(True) == 28


def test_grid_marks_outside_days_and_selection():
    state = _state(current=date(2026, 10, 1), selected=date(2026, 10, 15))
    cells = build_grid(state, tz.UTC)
    assert not cells[0].in_month
    selected = [c for c in cells if c.selected]
    assert [c.day for c in selected] == [date(2026, 10, 15)]


def test_outside_cells_still_show_events():
    september = _event(1, "late sept", datetime(2026, 9, 28, 9, tzinfo=UTC))
    cells = build_grid(_state([september], current=date(2026, 10, 1), selected=date(2026, 10, 1)), tz.UTC)
    assert cells[1].day == date(2026, 9, 28)
    assert not cells[1].in_month
    assert cells[1].chips == ("late sept",)


def test_chip_overflow():
    day = datetime(2026, 2, 3, tzinfo=UTC)
    events = [_event(i, f"e{i}", day + timedelta(hours=10 - i)) for i in range(5)]
    cell = next(c for c in build_grid(_state(events), tz.UTC) if c.day == date(2026, 2, 3))
    # sorted by start, so the latest-created (earliest) come first
    assert cell.chips == ("e4", "e3", "e2")
    assert cell.overflow == 2
    assert cell.overflow_label == "+2"


def test_no_overflow_label_at_three():
    day = datetime(2026, 2, 3, 8, tzinfo=UTC)
    events = [_event(i, f"e{i}", day + timedelta(hours=i)) for i in range(3)]
    cell = next(c for c in build_grid(_state(events), tz.UTC) if c.day == date(2026, 2, 3))
    assert len(cell.chips) == 3
    assert cell.overflow_label is None


def test_grouping_uses_local_date():
    # 16:00 UTC on Feb 1 is already Feb 2 in Tokyo
    event = _event(1, "late", datetime(2026, 2, 1, 16, tzinfo=UTC))
    assert list(events_by_date([event], tz.UTC)) == [date(2026, 2, 1)]
    assert list(events_by_date([event], tz.gettz("Asia/Tokyo"))) == [date(2026, 2, 2)]


def test_grid_is_idempotent():
    events = [
        _event(1, "a", datetime(2026, 2, 2, 9, tzinfo=UTC)),
        _event(2, "b", datetime(2026, 2, 2, 8, tzinfo=UTC)),
    ]
    state = _state(events)
    assert build_grid(state, tz.UTC) == build_grid(state, tz.UTC)


def test_day_list_filters_and_sorts():
    events = [
        _event(1, "afternoon", datetime(2026, 2, 2, 14, tzinfo=UTC), memo="bring notes"),
        _event(2, "other day", datetime(2026, 2, 3, 9, tzinfo=UTC)),
        _event(3, "morning", datetime(2026, 2, 2, 9, tzinfo=UTC), minutes=30),
    ]
    items = day_list(_state(events), tz.UTC)
    assert [i.title for i in items] == ["morning", "afternoon"]
    assert items[0].time_range == "09:00 - 09:30"
    assert items[0].event_id == 3
    assert items[1].memo == "bring notes"


def test_day_list_empty():
    assert day_list(_state(), tz.UTC) == []
