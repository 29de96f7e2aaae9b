# backend/calendar_app/validation.py
"""
Payload checks for event mutations.

Checks run in a fixed order and the first failure wins:
1. title is present after trimming
2. start_at / end_at both parse
3. end_at is strictly after start_at
"""

from __future__ import annotations

from typing import Any

from .errors import MalformedRequestError, NotFoundError, ValidationError
from .schemas import EventIn
from .timeutil import parse_instant

TITLE_MAX_LENGTH = 200

# largest value an INTEGER primary key can hold (SQLite and Postgres bigint)
MAX_EVENT_ID = 2**63 - 1


def validate_event_payload(body: Any) -> EventIn:
    if not isinstance(body, dict):
        raise MalformedRequestError("request body must be a JSON object")

    raw_title = body.get("title")
    title = raw_title.strip() if isinstance(raw_title, str) else ""
    if not title:
        raise ValidationError("title required")
    if len(title) > TITLE_MAX_LENGTH:
        raise ValidationError(f"title must be at most {TITLE_MAX_LENGTH} characters")

    start = parse_instant(body.get("start_at"))
    end = parse_instant(body.get("end_at"))
    if start is None or end is None:
        raise ValidationError("invalid timestamps")
    if end <= start:
        raise ValidationError("end before start")

    memo = body.get("memo")
    if memo is None:
        memo = ""
    elif not isinstance(memo, str):
        raise ValidationError("memo must be a string")

    return EventIn(title=title, start_at=start, end_at=end, memo=memo)


def validate_event_id(event_id: int) -> int:
    if event_id <= 0:
        raise ValidationError("invalid id")
    if event_id > MAX_EVENT_ID:
        raise NotFoundError("event not found")
    return event_id
