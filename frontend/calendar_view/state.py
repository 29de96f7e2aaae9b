# frontend/calendar_view/state.py
"""
View-model and reducer for the calendar client.

User actions and network outcomes arrive as intents; ``reduce`` maps
(state, intent) to a new state plus the effects to run. It never performs
I/O itself; CalendarController executes the effects and feeds their
outcome back as another intent.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, tzinfo
from typing import Any, Dict, List, Optional, Tuple, Union

from .dates import (
    combine_local,
    date_input,
    month_start,
    month_token,
    shift_month,
    time_input,
    to_wire,
)
from .models import CalendarEvent, EventForm

# ───────────────────────── Dialog states ────────────────────────────
@dataclass(frozen=True)
class Closed:
    pass


@dataclass(frozen=True)
class CreatingNew:
    form: EventForm


@dataclass(frozen=True)
class EditingExisting:
    event_id: int
    form: EventForm


Dialog = Union[Closed, CreatingNew, EditingExisting]


@dataclass(frozen=True)
class ViewState:
    current: date                       # month cursor, always a 1st
    selected: date
    events: Tuple[CalendarEvent, ...] = ()
    dialog: Dialog = Closed()
    busy: bool = False                  # a create/update/delete is in flight
    last_error: Optional[str] = None

    @property
    def editing_id(self) -> Optional[int]:
        return self.dialog.event_id if isinstance(self.dialog, EditingExisting) else None

    @property
    def month(self) -> str:
        return month_token(self.current)


def initial_state(today: date) -> ViewState:
    return ViewState(current=month_start(today), selected=today)


# ───────────────────────── Intents ──────────────────────────────────
@dataclass(frozen=True)
class NavigatePrev:
    pass


@dataclass(frozen=True)
class NavigateNext:
    pass


@dataclass(frozen=True)
class SelectDay:
    day: date


@dataclass(frozen=True)
class Refresh:
    pass


@dataclass(frozen=True)
class OpenCreate:
    pass


@dataclass(frozen=True)
class OpenEdit:
    event_id: int


@dataclass(frozen=True)
class Cancel:
    pass


@dataclass(frozen=True)
class Submit:
    form: EventForm


@dataclass(frozen=True)
class Delete:
    pass


@dataclass(frozen=True)
class EventsLoaded:
    month: str
    events: Tuple[CalendarEvent, ...]


@dataclass(frozen=True)
class LoadFailed:
    message: str


@dataclass(frozen=True)
class MutationSucceeded:
    pass


@dataclass(frozen=True)
class MutationFailed:
    message: str


Intent = Union[
    NavigatePrev, NavigateNext, SelectDay, Refresh, OpenCreate, OpenEdit,
    Cancel, Submit, Delete, EventsLoaded, LoadFailed, MutationSucceeded,
    MutationFailed,
]

# ───────────────────────── Effects ──────────────────────────────────
@dataclass(frozen=True)
class LoadMonth:
    month: str


@dataclass(frozen=True)
class CreateEvent:
    payload: Dict[str, Any]


@dataclass(frozen=True)
class UpdateEvent:
    event_id: int
    payload: Dict[str, Any]


@dataclass(frozen=True)
class DeleteEvent:
    event_id: int


@dataclass(frozen=True)
class Notify:
    message: str


Effect = Union[LoadMonth, CreateEvent, UpdateEvent, DeleteEvent, Notify]


# ───────────────────────── Form helpers ─────────────────────────────
def form_for_event(event: CalendarEvent, zone: tzinfo) -> EventForm:
    return EventForm(
        title=event.title,
        date=date_input(event.start_at, zone),
        start=time_input(event.start_at, zone),
        end=time_input(event.end_at, zone),
        memo=event.memo,
    )


def form_payload(form: EventForm, zone: tzinfo) -> Tuple[Optional[Dict[str, Any]], Optional[str]]:
    """Check a dialog form locally; returns (payload, None) or (None, error)."""
    title = form.title.strip()
    if not title:
        return None, "title required"
    start = combine_local(form.date, form.start, zone)
    end = combine_local(form.date, form.end, zone)
    if start is None or end is None:
        return None, "invalid date or time"
    if end <= start:
        return None, "end must be after start"
    return {
        "title": title,
        "start_at": to_wire(start),
        "end_at": to_wire(end),
        "memo": form.memo.strip(),
    }, None


def _navigate(state: ViewState, months: int) -> Tuple[ViewState, List[Effect]]:
    current = shift_month(state.current, months)
    new_state = replace(state, current=current, selected=current)
    return new_state, [LoadMonth(new_state.month)]


# ───────────────────────── Reducer ──────────────────────────────────
def reduce(state: ViewState, intent: Intent, zone: tzinfo) -> Tuple[ViewState, List[Effect]]:
    if isinstance(intent, NavigatePrev):
        return _navigate(state, -1)

    if isinstance(intent, NavigateNext):
        return _navigate(state, 1)

    if isinstance(intent, SelectDay):
        return replace(state, selected=intent.day), []

    if isinstance(intent, Refresh):
        return state, [LoadMonth(state.month)]

    if isinstance(intent, OpenCreate):
        form = EventForm(date=state.selected.isoformat())
        return replace(state, dialog=CreatingNew(form), last_error=None), []

    if isinstance(intent, OpenEdit):
        target = next((e for e in state.events if e.id == intent.event_id), None)
        if target is None:
            return state, []
        dialog = EditingExisting(target.id, form_for_event(target, zone))
        return replace(state, dialog=dialog, last_error=None), []

    if isinstance(intent, Cancel):
        return replace(state, dialog=Closed(), last_error=None), []

    if isinstance(intent, Submit):
        if state.busy or isinstance(state.dialog, Closed):
            return state, []
        dialog = replace(state.dialog, form=intent.form)
        payload, error = form_payload(intent.form, zone)
        if error:
            return replace(state, dialog=dialog, last_error=error), [Notify(error)]
        if isinstance(dialog, EditingExisting):
            effect: Effect = UpdateEvent(dialog.event_id, payload)
        else:
            effect = CreateEvent(payload)
        return replace(state, dialog=dialog, busy=True, last_error=None), [effect]

    if isinstance(intent, Delete):
        if state.busy or not isinstance(state.dialog, EditingExisting):
            return state, []
        return replace(state, busy=True, last_error=None), [DeleteEvent(state.dialog.event_id)]

    if isinstance(intent, MutationSucceeded):
        # never patch the local list: drop it and reload the whole month
        return replace(state, dialog=Closed(), busy=False, last_error=None), [LoadMonth(state.month)]

    if isinstance(intent, MutationFailed):
        return replace(state, busy=False, last_error=intent.message), [Notify(intent.message)]

    if isinstance(intent, EventsLoaded):
        if intent.month != state.month:
            return state, []
        return replace(state, events=tuple(intent.events)), []

    if isinstance(intent, LoadFailed):
        return replace(state, last_error=intent.message), [Notify(intent.message)]

    raise TypeError(f"unknown intent: {intent!r}")
