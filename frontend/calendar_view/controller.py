# frontend/calendar_view/controller.py
"""Runs the reducer's effects against the API and re-renders after each action."""

from __future__ import annotations

import logging
from collections import deque
from datetime import date, datetime, tzinfo
from typing import Callable, Optional

from .api import ApiError, CalendarApiClient
from .state import (
    CreateEvent,
    DeleteEvent,
    Effect,
    EventsLoaded,
    Intent,
    LoadFailed,
    LoadMonth,
    MutationFailed,
    MutationSucceeded,
    Notify,
    Refresh,
    UpdateEvent,
    ViewState,
    initial_state,
    reduce,
)

logger = logging.getLogger(__name__)


class CalendarController:
    """
    Owns the current ViewState. ``dispatch`` feeds an intent through the
    reducer, runs every resulting effect to completion (API calls block),
    queues the outcome intents, and calls ``render`` once when settled.
    Notifications go to ``notify``; the caller decides how to surface them.
    """

    def __init__(
        self,
        api: CalendarApiClient,
        zone: tzinfo,
        *,
        today: Optional[date] = None,
        render: Optional[Callable[[ViewState], None]] = None,
        notify: Optional[Callable[[str], None]] = None,
    ):
        self.api = api
        self.zone = zone
        self.state = initial_state(today or datetime.now(zone).date())
        self._render = render
        self._notify = notify or logger.warning

    def start(self) -> ViewState:
        return self.dispatch(Refresh())

    def dispatch(self, intent: Intent) -> ViewState:
        pending = deque([intent])
        while pending:
            self.state, effects = reduce(self.state, pending.popleft(), self.zone)
            for effect in effects:
                outcome = self._run(effect)
                if outcome is not None:
                    pending.append(outcome)
        if self._render:
            self._render(self.state)
        return self.state

    def _run(self, effect: Effect) -> Optional[Intent]:
        if isinstance(effect, Notify):
            self._notify(effect.message)
            return None
        if isinstance(effect, LoadMonth):
            try:
                events = self.api.list_events(effect.month)
            except ApiError as exc:
                logger.warning("loading %s failed: %s", effect.month, exc.message)
                return LoadFailed(exc.message)
            return EventsLoaded(effect.month, tuple(events))
        try:
            if isinstance(effect, CreateEvent):
                new_id = self.api.create_event(effect.payload)
                logger.info("created event %s", new_id)
            elif isinstance(effect, UpdateEvent):
                self.api.update_event(effect.event_id, effect.payload)
            elif isinstance(effect, DeleteEvent):
                self.api.delete_event(effect.event_id)
            else:
                raise TypeError(f"unknown effect: {effect!r}")
        except ApiError as exc:
            return MutationFailed(exc.message)
        return MutationSucceeded()
