# frontend/calendar_view/api.py
"""Thin httpx client for the calendar events API."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from .config import API_BASE, API_TIMEOUT
from .models import CalendarEvent

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Non-2xx response or transport failure; ``message`` is user-facing."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _error_message(response: httpx.Response) -> str:
    try:
        detail = response.json()
    except ValueError:
        return "Unknown error"
    if isinstance(detail, dict) and detail.get("error"):
        return str(detail["error"])
    return "API error"


class CalendarApiClient:
    def __init__(
        self,
        base_url: str = API_BASE,
        *,
        timeout: float = API_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ):
        self._client = httpx.Client(base_url=base_url, timeout=timeout, transport=transport)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "CalendarApiClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = self._client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise ApiError(f"request failed: {exc}") from exc
        if response.is_error:
            raise ApiError(_error_message(response), response.status_code)
        try:
            return response.json()
        except ValueError as exc:
            raise ApiError("invalid response from server", response.status_code) from exc

    def health(self) -> bool:
        data = self._request("GET", "/health")
        return isinstance(data, dict) and bool(data.get("ok"))

    def list_events(self, month: str) -> List[CalendarEvent]:
        data = self._request("GET", "/events", params={"month": month})
        try:
            return [CalendarEvent.from_json(item) for item in data.get("events") or []]
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise ApiError("invalid event data from server") from exc

    def get_event(self, event_id: int) -> CalendarEvent:
        data = self._request("GET", f"/events/{event_id}")
        try:
            return CalendarEvent.from_json(data)
        except (KeyError, TypeError, ValueError) as exc:
            raise ApiError("invalid event data from server") from exc

    def create_event(self, payload: Dict[str, Any]) -> int:
        data = self._request("POST", "/events", json=payload)
        try:
            return int(data["id"])
        except (KeyError, TypeError, ValueError) as exc:
            raise ApiError("invalid response from server") from exc

    def update_event(self, event_id: int, payload: Dict[str, Any]) -> None:
        self._request("PUT", f"/events/{event_id}", json=payload)

    def delete_event(self, event_id: int) -> None:
        self._request("DELETE", f"/events/{event_id}")
