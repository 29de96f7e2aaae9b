"""
Pytest configuration and shared fixtures.

The API runs against a private in-memory SQLite database per test; the
month-boundary zone defaults to UTC so instants in tests read literally.
"""

import httpx
import pytest
from dateutil import tz
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import calendar_app.models  # noqa: F401
from calendar_app.db import Base, get_db
from calendar_app.main import app, get_local_zone


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture
def zone():
    return tz.UTC


@pytest.fixture
def client(session_factory, zone):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_local_zone] = lambda: zone
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def api_transport(client):
    """httpx transport that hands client-side requests to the test app."""

    def handler(request: httpx.Request) -> httpx.Response:
        response = client.request(
            request.method,
            request.url.path,
            params=request.url.params,
            content=request.content,
            headers={"content-type": request.headers.get("content-type", "application/json")},
        )
        return httpx.Response(response.status_code, content=response.content, headers={"content-type": "application/json"})

    return httpx.MockTransport(handler)


@pytest.fixture
def sample_payload():
    return {
        "title": "Focus",
        "start_at": "2026-02-02T09:00:00.000Z",
        "end_at": "2026-02-02T10:00:00.000Z",
        "memo": "Deep work",
    }
