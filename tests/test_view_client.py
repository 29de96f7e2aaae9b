"""
Client-side tests: the httpx API client, the controller loop run against
the real app, and the text renderer.
"""

import json
from datetime import date

import httpx
import pytest
from dateutil import tz

from calendar_view.__main__ import main as cli_main
from calendar_view.api import ApiError, CalendarApiClient
from calendar_view.controller import CalendarController
from calendar_view.models import EventForm
from calendar_view.render import render_month
from calendar_view.state import (
    Cancel,
    Closed,
    Delete,
    EditingExisting,
    NavigateNext,
    NavigatePrev,
    OpenCreate,
    OpenEdit,
    SelectDay,
    Submit,
)

BASE = "http://calendar.test/api"


def _client(handler):
    return CalendarApiClient(BASE, transport=httpx.MockTransport(handler))


# ---------------------------------------------------------------------------
# CalendarApiClient
# ---------------------------------------------------------------------------


def test_list_events_parses_payload():
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        return httpx.Response(200, json={"events": [{
            "id": 1,
            "title": "Focus",
            "start_at": "2026-02-02T09:00:00.000Z",
            "end_at": "2026-02-02T10:00:00.000Z",
            "memo": "",
            "created_at": "2026-01-30T00:00:00.000Z",
            "updated_at": "2026-01-30T00:00:00.000Z",
        }]})

    [event] = _client(handler).list_events("2026-02")
    assert seen["url"] == "http://calendar.test/api/events?month=2026-02"
    assert event.title == "Focus"
    assert event.start_at.isoformat() == "2026-02-02T09:00:00+00:00"


def test_error_body_becomes_api_error():
    api = _client(lambda request: httpx.Response(404, json={"error": "event not found"}))
    with pytest.raises(ApiError) as excinfo:
        api.delete_event(3)
    assert excinfo.value.message == "event not found"
    assert excinfo.value.status_code == 404


def test_non_json_error_body():
    api = _client(lambda request: httpx.Response(502, text="<html>bad gateway</html>"))
    with pytest.raises(ApiError) as excinfo:
        api.health()
    assert excinfo.value.message == "Unknown error"


@pytest.mark.parametrize("body", [[], "events", {"events": [{"id": 1}]}])
def test_unexpected_event_payload_becomes_api_error(body):
    api = _client(lambda request: httpx.Response(200, json=body))
    with pytest.raises(ApiError) as excinfo:
        api.list_events("2026-02")
    assert excinfo.value.message == "invalid event data from server"


def test_create_without_id_becomes_api_error():
    api = _client(lambda request: httpx.Response(200, json=["ok"]))
    with pytest.raises(ApiError):
        api.create_event({"title": "x"})


def test_transport_failure_becomes_api_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ApiError):
        _client(handler).list_events("2026-02")


def test_create_sends_json():
    captured = {}

    def handler(request):
        captured["method"] = request.method
        captured["body"] = request.content
        return httpx.Response(200, json={"id": 42})

    assert _client(handler).create_event({"title": "x"}) == 42
    assert captured["method"] == "POST"
    assert json.loads(captured["body"]) == {"title": "x"}


# ---------------------------------------------------------------------------
# Controller against the app
# ---------------------------------------------------------------------------


@pytest.fixture
def controller(api_transport):
    notes = []
    renders = []
    api = CalendarApiClient(BASE, transport=api_transport)
    ctl = CalendarController(
        api,
        tz.UTC,
        today=date(2026, 2, 2),
        render=renders.append,
        notify=notes.append,
    )
    ctl.notes = notes
    ctl.renders = renders
    return ctl


def test_create_edit_delete_round(controller):
    controller.start()
    assert controller.state.events == ()

    controller.dispatch(OpenCreate())
    controller.dispatch(Submit(EventForm(title="Focus", date="2026-02-02", start="09:00", end="10:00")))
    assert controller.state.dialog == Closed()
    assert [e.title for e in controller.state.events] == ["Focus"]
    event_id = controller.state.events[0].id

    controller.dispatch(OpenEdit(event_id))
    form = controller.state.dialog.form
    controller.dispatch(Submit(EventForm(title="Focus renamed", date=form.date, start=form.start, end=form.end)))
    [renamed] = controller.state.events
    assert renamed.title == "Focus renamed"
    assert renamed.start_at.hour == 9

    controller.dispatch(OpenEdit(event_id))
    controller.dispatch(Delete())
    assert controller.state.events == ()
    assert controller.state.dialog == Closed()
    assert controller.notes == []
    assert len(controller.renders) == 7


def test_server_error_keeps_dialog_open(controller, api_transport):
    controller.start()
    controller.dispatch(OpenCreate())
    controller.dispatch(Submit(EventForm(title="Focus", date="2026-02-02")))
    event_id = controller.state.events[0].id

    # someone else deleted it in the meantime
    CalendarApiClient(BASE, transport=api_transport).delete_event(event_id)

    controller.dispatch(OpenEdit(event_id))
    controller.dispatch(Submit(EventForm(title="too late", date="2026-02-02")))
    assert isinstance(controller.state.dialog, EditingExisting)
    assert controller.state.last_error == "event not found"
    assert controller.notes == ["event not found"]
    assert not controller.state.busy

    controller.dispatch(Cancel())
    assert controller.state.dialog == Closed()


def test_navigation_refetches(controller):
    controller.start()
    controller.dispatch(OpenCreate())
    controller.dispatch(Submit(EventForm(title="Feb", date="2026-02-02")))

    controller.dispatch(NavigateNext())
    assert controller.state.month == "2026-03"
    assert controller.state.events == ()

    controller.dispatch(NavigatePrev())
    assert [e.title for e in controller.state.events] == ["Feb"]
    assert controller.state.selected == date(2026, 2, 1)


def test_failed_load_leaves_view_stale():
    def handler(request):
        return httpx.Response(500, json={"error": "Internal Server Error"})

    notes = []
    ctl = CalendarController(_client(handler), tz.UTC, today=date(2026, 2, 2), notify=notes.append)
    ctl.start()
    assert ctl.state.events == ()
    assert notes == ["Internal Server Error"]


def test_non_object_month_payload_is_a_load_failure():
    notes = []
    api = _client(lambda request: httpx.Response(200, json=["not", "an", "object"]))
    ctl = CalendarController(api, tz.UTC, today=date(2026, 2, 2), notify=notes.append)
    ctl.start()
    assert ctl.state.events == ()
    assert notes == ["invalid event data from server"]


# ---------------------------------------------------------------------------
# Rendering / CLI
# ---------------------------------------------------------------------------


def test_render_month(controller):
    controller.start()
    controller.dispatch(OpenCreate())
    controller.dispatch(Submit(EventForm(title="Focus", date="2026-02-02", memo="deep work")))
    controller.dispatch(SelectDay(date(2026, 2, 2)))

    text = render_month(controller.state, tz.UTC)
    assert text.startswith("February 2026")
    assert "[ 2]" in text
    assert "Focus" in text
    assert "09:00 - 10:00" in text
    assert "deep work" in text

    assert render_month(controller.state, tz.UTC) == text


def test_cli_prints_month(monkeypatch, capsys, api_transport):
    import calendar_view.__main__ as cli

    monkeypatch.setattr(cli, "CalendarApiClient", lambda base: CalendarApiClient(base, transport=api_transport))
    assert cli_main(["--month", "2026-02", "--tz", "UTC"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("February 2026")
    assert "No events" in out
