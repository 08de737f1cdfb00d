"""
Shared fixtures: a throwaway SQLite database, fake Redis, and signed session tokens.

Environment is set before anything under ``app`` is imported, because the
engine and settings are created at import time.
"""

from __future__ import annotations

import os
import tempfile

_tmpdir = tempfile.mkdtemp(prefix="skillmatch-tests-")
os.environ["SKILLMATCH_DATABASE_URL"] = f"sqlite+aiosqlite:///{_tmpdir}/test.db"
os.environ["SKILLMATCH_VERIFY_SCHEMA"] = "false"
os.environ["SKILLMATCH_AUTH_JWT_SECRET"] = "test-secret-that-is-long-enough-for-hs256"
os.environ["SKILLMATCH_LOG_JSON"] = "false"

import fakeredis.aioredis  # noqa: E402
import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from app.core import events  # noqa: E402
from app.core.auth import create_session_token  # noqa: E402
from app.core.database import async_session_factory, drop_db, engine, init_db  # noqa: E402
from app.main import app  # noqa: E402


@pytest.fixture(autouse=True)
async def database():
    """Fresh tables for every test."""
    await drop_db()
    await init_db()
    yield
    await engine.dispose()


@pytest.fixture(autouse=True)
async def fake_redis(monkeypatch):
    redis = fakeredis.aioredis.FakeRedis(decode_responses=True)

    async def _get_redis():
        return redis

    monkeypatch.setattr(events, "get_redis", _get_redis)
    yield redis
    await redis.aclose()


@pytest.fixture
async def client():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def db():
    """Session factory for direct store checks.

    Open a short-lived session per check; a long-lived one would hold a
    SQLite read lock across API calls.
    """
    return async_session_factory


@pytest.fixture
def auth_headers():
    """Build Authorization headers for a given user id."""

    def _headers(user_id: str, **claims) -> dict:
        claims.setdefault("email", f"{user_id}@example.com")
        claims.setdefault("given_name", user_id.capitalize())
        token = create_session_token(user_id, **claims)
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def project_payload():
    def _payload(**overrides) -> dict:
        body = {
            "title": "Realtime Chat",
            "shortDescription": "A small websocket chat",
            "description": "Build a chat app with rooms and presence.",
            "category": "Web",
            "difficulty": "Intermediate",
            "requiredSkills": "React, Node.js, React",
            "durationWeeks": 4,
            "teamSize": 3,
            "status": "Open",
        }
        body.update(overrides)
        return body

    return _payload


@pytest.fixture
def create_project(client, auth_headers, project_payload):
    """Create a project through the API and return its JSON."""

    async def _create(creator: str = "alice", **overrides) -> dict:
        resp = await client.post(
            "/api/v1/projects",
            json=project_payload(**overrides),
            headers=auth_headers(creator),
        )
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _create


@pytest.fixture
def apply_to(client, auth_headers):
    """Apply to a project as a user and return the response."""

    async def _apply(project_id: str, user_id: str, **overrides):
        body = {
            "projectId": project_id,
            "fullName": f"{user_id.capitalize()} Tester",
            "contactInfo": f"{user_id}@example.com",
            "skills": ["Python"],
            "preferredRole": "Backend",
            "motivation": "I want to learn.",
            "agreedToGuidelines": True,
        }
        body.update(overrides)
        return await client.post(
            "/api/v1/projects/join", json=body, headers=auth_headers(user_id)
        )

    return _apply
