# backend/calendar_app/__init__.py
"""
Package init: load environment variables from a .env file if present.
This runs before calendar_app modules read their configuration.
"""

from dotenv import load_dotenv

load_dotenv()
