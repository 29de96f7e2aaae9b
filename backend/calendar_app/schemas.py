# backend/calendar_app/schemas.py
from __future__ import annotations
from datetime import datetime
from pydantic import BaseModel, ConfigDict, field_serializer

from .timeutil import to_wire


class EventIn(BaseModel):
    """Validated create/update payload. Instants are UTC."""
    title:    str
    start_at: datetime
    end_at:   datetime
    memo:     str = ""


class EventOut(EventIn):
    """Response schema for an event row (includes ID and audit stamps)."""
    id: int
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)

    @field_serializer("start_at", "end_at", "created_at", "updated_at")
    def _instant(self, value: datetime) -> str:
        return to_wire(value)


class EventList(BaseModel):
    events: list[EventOut]


class Created(BaseModel):
    id: int


class Ok(BaseModel):
    ok: bool = True


class DbCheck(Ok):
    db: str = "ok"
