# frontend/calendar_view/models.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from .dates import parse_instant


@dataclass(frozen=True)
class CalendarEvent:
    """One event as returned by ``GET /api/events``; instants are UTC."""
    id: int
    title: str
    start_at: datetime
    end_at: datetime
    memo: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "CalendarEvent":
        return cls(
            id=int(data["id"]),
            title=str(data["title"]),
            start_at=parse_instant(data["start_at"]),
            end_at=parse_instant(data["end_at"]),
            memo=data.get("memo") or "",
            created_at=parse_instant(data["created_at"]) if data.get("created_at") else None,
            updated_at=parse_instant(data["updated_at"]) if data.get("updated_at") else None,
        )


@dataclass(frozen=True)
class EventForm:
    """Raw dialog fields, as typed: local date and HH:MM times."""
    title: str = ""
    date: str = ""
    start: str = "09:00"
    end: str = "10:00"
    memo: str = ""
