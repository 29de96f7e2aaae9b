# backend/calendar_app/errors.py
"""Errors raised by the events API and the HTTP status each one maps to."""

from __future__ import annotations


class CalendarError(Exception):
    """Base error; rendered as ``{"error": message}`` with ``status_code``."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(CalendarError):
    """Missing, malformed or out-of-range input."""
    status_code = 400


class MalformedRequestError(CalendarError):
    """Request body is not a JSON object."""
    status_code = 400


class NotFoundError(CalendarError):
    status_code = 404
