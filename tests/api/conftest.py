"""API test fixtures — FastAPI test client over an in-memory store, plus tokens.

Invariants:
    - get_db dependency overridden to use the per-test SQLite session factory
    - Tokens are real HS256 JWTs signed with the suite's AUTH_JWT_SECRET
    - Lifespan is not run; the in-memory store is created by test_engine

Design Decisions:
    - raise_app_exceptions=False so the catch-all handler's 500 body is observable
"""

import os
import time

import jwt
import pytest
from httpx import ASGITransport, AsyncClient

from events_api.infrastructure.database import get_db
from events_api.main import app

LAUNCH = {
    "title": "Launch",
    "eventType": "Webinar",
    "date": "2025-01-10T10:00:00Z",
    "location": "HQ",
    "organizer": "Alice",
}


def make_token(secret: str | None = None, **claims) -> str:
    payload = {"sub": "organizer-1", "exp": int(time.time()) + 3600, **claims}
    return jwt.encode(
        payload, secret or os.environ["AUTH_JWT_SECRET"], algorithm="HS256",
    )


@pytest.fixture
async def client(test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def launch() -> dict:
    return dict(LAUNCH)


@pytest.fixture
def token_factory():
    return make_token


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token()}"}


@pytest.fixture
def create_event(client, auth_headers):
    """POST an event and return its id."""
    async def _create(**overrides) -> str:
        res = await client.post(
            "/api/v1/createEvent", json={**LAUNCH, **overrides}, headers=auth_headers,
        )
        assert res.status_code == 201, res.text
        return res.json()["id"]
    return _create
