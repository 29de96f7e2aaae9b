# backend/calendar_app/repository.py
"""
Storage port for events. Every function issues exactly one parameterized
statement and hands back rows, a generated id or an affected-row count.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import select, insert, update, delete
from sqlalchemy.orm import Session

from .models import Event
from .schemas import EventIn

events = Event.__table__


def list_starting_between(db: Session, start: datetime, end: datetime) -> List[Dict[str, Any]]:
    q = (
        select(events)
        .where(events.c.start_at >= start, events.c.start_at < end)
        .order_by(events.c.start_at.asc(), events.c.id.asc())
    )
    return [dict(row) for row in db.execute(q).mappings()]


def get_event(db: Session, event_id: int) -> Optional[Dict[str, Any]]:
    row = db.execute(select(events).where(events.c.id == event_id)).mappings().first()
    return dict(row) if row else None


def insert_event(db: Session, data: EventIn, now: datetime) -> int:
    result = db.execute(
        insert(events).values(
            title=data.title,
            start_at=data.start_at,
            end_at=data.end_at,
            memo=data.memo,
            created_at=now,
            updated_at=now,
        )
    )
    db.commit()
    return result.inserted_primary_key[0]


def update_event(db: Session, event_id: int, data: EventIn, now: datetime) -> int:
    result = db.execute(
        update(events)
        .where(events.c.id == event_id)
        .values(
            title=data.title,
            start_at=data.start_at,
            end_at=data.end_at,
            memo=data.memo,
            updated_at=now,
        )
    )
    db.commit()
    return result.rowcount


def delete_event(db: Session, event_id: int) -> int:
    result = db.execute(delete(events).where(events.c.id == event_id))
    db.commit()
    return result.rowcount
