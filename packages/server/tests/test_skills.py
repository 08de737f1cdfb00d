"""
Tests for the skill registry (/api/v1/user-skills).
"""

from __future__ import annotations

import uuid

import pytest
from sqlmodel import select

from app.models.skill import Skill

SKILL = {"name": "Python", "level": "Advanced", "category": "Programming", "type": "taught"}


class TestSkills:
    @pytest.mark.asyncio
    async def test_add_and_list(self, client, auth_headers):
        headers = auth_headers("alice")
        resp = await client.post("/api/v1/user-skills", json=SKILL, headers=headers)
        assert resp.status_code == 201
        created = resp.json()
        assert created["userId"] == "alice"
        assert created["level"] == "Advanced"
        assert created["type"] == "taught"

        listed = await client.get("/api/v1/user-skills", headers=headers)
        assert [s["id"] for s in listed.json()] == [created["id"]]

    @pytest.mark.asyncio
    async def test_list_is_per_user(self, client, auth_headers):
        await client.post("/api/v1/user-skills", json=SKILL, headers=auth_headers("alice"))
        listed = await client.get("/api/v1/user-skills", headers=auth_headers("bob"))
        assert listed.json() == []

    @pytest.mark.asyncio
    async def test_empty_name_is_rejected(self, client, auth_headers, db):
        resp = await client.post(
            "/api/v1/user-skills", json={**SKILL, "name": ""}, headers=auth_headers("alice")
        )
        assert resp.status_code == 400
        async with db() as s:
            rows = await s.execute(select(Skill))
            assert rows.scalars().all() == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("field", ["level", "category", "type"])
    async def test_missing_field(self, client, auth_headers, field):
        body = {k: v for k, v in SKILL.items() if k != field}
        resp = await client.post("/api/v1/user-skills", json=body, headers=auth_headers("alice"))
        assert resp.status_code == 400

    @pytest.mark.asyncio
    async def test_unknown_level(self, client, auth_headers):
        resp = await client.post(
            "/api/v1/user-skills", json={**SKILL, "level": "Guru"}, headers=auth_headers("alice")
        )
        assert resp.status_code == 400

    @pytest.mark.asyncio
    async def test_requires_authentication(self, client):
        assert (await client.get("/api/v1/user-skills")).status_code == 401
        assert (await client.post("/api/v1/user-skills", json=SKILL)).status_code == 401

    @pytest.mark.asyncio
    async def test_owner_deletes(self, client, auth_headers):
        headers = auth_headers("alice")
        created = (await client.post("/api/v1/user-skills", json=SKILL, headers=headers)).json()
        resp = await client.delete(
            "/api/v1/user-skills", params={"id": created["id"]}, headers=headers
        )
        assert resp.status_code == 200
        assert resp.json() == {"success": True}
        listed = await client.get("/api/v1/user-skills", headers=headers)
        assert listed.json() == []

    @pytest.mark.asyncio
    async def test_delete_with_json_body(self, client, auth_headers):
        headers = auth_headers("alice")
        created = (await client.post("/api/v1/user-skills", json=SKILL, headers=headers)).json()
        resp = await client.request(
            "DELETE", "/api/v1/user-skills", json={"id": created["id"]}, headers=headers
        )
        assert resp.status_code == 200

    @pytest.mark.asyncio
    async def test_other_user_cannot_delete(self, client, auth_headers):
        created = (
            await client.post("/api/v1/user-skills", json=SKILL, headers=auth_headers("alice"))
        ).json()
        resp = await client.delete(
            "/api/v1/user-skills", params={"id": created["id"]}, headers=auth_headers("bob")
        )
        assert resp.status_code == 403
        listed = await client.get("/api/v1/user-skills", headers=auth_headers("alice"))
        assert len(listed.json()) == 1

    @pytest.mark.asyncio
    async def test_delete_unknown(self, client, auth_headers):
        resp = await client.delete(
            "/api/v1/user-skills", params={"id": str(uuid.uuid4())}, headers=auth_headers("alice")
        )
        assert resp.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_without_id(self, client, auth_headers):
        resp = await client.delete("/api/v1/user-skills", headers=auth_headers("alice"))
        assert resp.status_code == 400
