# frontend/calendar_view/__init__.py
"""
Month-grid client for the calendar events API.

Package init: load environment variables from a .env file if present.
"""

from dotenv import load_dotenv

load_dotenv()
