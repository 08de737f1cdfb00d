"""
Tests for the project registry.

Tests cover:
- Listing helpers (filter normalization, text query, shaping)
- Create with validation, tag normalization and owner auto-membership
- Listing filters, the duration cap and degraded listing on store failure
- Get by id and creator-only delete with membership cascade
"""

from __future__ import annotations

import uuid

import pytest
from sqlalchemy.exc import OperationalError
from sqlmodel import select

from app.models.project import Project
from app.models.project_member import ProjectMember
from app.models.user import User
from app.repositories import ProjectRepository
from app.services.projects import matches_query, normalize_filter, shape_project


# ---------------------------------------------------------------------------
# Unit tests for listing helpers
# ---------------------------------------------------------------------------


def _project(**kw) -> Project:
    defaults = dict(
        title="Realtime Chat",
        short_description="A websocket chat",
        description="Rooms and presence",
        category="Web",
        difficulty="Beginner",
        required_skills=["React", "Node.js"],
        creator_id="alice",
    )
    defaults.update(kw)
    return Project(**defaults)


class TestNormalizeFilter:
    def test_all_means_no_filter(self):
        assert normalize_filter("All") is None

    def test_blank_means_no_filter(self):
        assert normalize_filter("   ") is None
        assert normalize_filter(None) is None

    def test_value_is_trimmed(self):
        assert normalize_filter(" Web ") == "Web"


class TestMatchesQuery:
    def test_empty_query_matches(self):
        assert matches_query(_project(), "")
        assert matches_query(_project(), None)

    def test_title_case_insensitive(self):
        assert matches_query(_project(), "realtime")

    def test_short_description(self):
        assert matches_query(_project(), "WEBSOCKET")

    def test_skill_tag(self):
        assert matches_query(_project(), "node")

    def test_long_description_not_searched(self):
        assert not matches_query(_project(), "presence")

    def test_no_match(self):
        assert not matches_query(_project(), "kotlin")


class TestShapeProject:
    def test_creator_and_collaborators(self):
        project = _project()
        alice = User(id="alice", first_name="Alice", last_name="Smith", image_url="a.png")
        bob = User(id="bob", email="bob@example.com")
        members = [
            ProjectMember(
                user_id="bob",
                project_id=project.id,
                role="Backend",
                status="APPLIED",
                motivation="hi",
                agreed_to_guidelines=True,
            ),
            ProjectMember(user_id="ghost", project_id=project.id, role="Owner", status="ACCEPTED"),
        ]
        shaped = shape_project(project, members, {"alice": alice, "bob": bob})

        assert shaped.creator.name == "Alice Smith"
        assert shaped.creator.avatar == "a.png"
        bob_row, ghost_row = shaped.collaborators
        assert bob_row.name == "bob@example.com"
        assert bob_row.application.motivation == "hi"
        assert ghost_row.name == "Member"
        assert ghost_row.application is None

    def test_missing_creator(self):
        shaped = shape_project(_project(creator_id="gone"), [], {})
        assert shaped.creator.id is None
        assert shaped.creator.name == "Unknown"


# ---------------------------------------------------------------------------
# Create
# ---------------------------------------------------------------------------


class TestCreateProject:
    @pytest.mark.asyncio
    async def test_create_returns_shaped_project(self, create_project):
        project = await create_project("alice")
        assert project["title"] == "Realtime Chat"
        assert project["status"] == "Open"
        assert project["requiredSkills"] == ["React", "Node.js"]
        assert project["creator"]["id"] == "alice"
        assert project["creator"]["name"] == "Alice"
        assert project["featured"] is False

    @pytest.mark.asyncio
    async def test_creator_becomes_owner_member(self, create_project):
        project = await create_project("alice")
        (owner,) = project["collaborators"]
        assert owner["id"] == "alice"
        assert owner["role"] == "Owner"
        assert owner["status"] == "ACCEPTED"
        assert owner["acceptedAt"] is not None

    @pytest.mark.asyncio
    async def test_missing_fields(self, client, auth_headers, project_payload):
        body = project_payload()
        del body["title"]
        body["category"] = "  "
        resp = await client.post("/api/v1/projects", json=body, headers=auth_headers("alice"))
        assert resp.status_code == 400
        error = resp.json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert "title" in error["message"]
        assert "category" in error["message"]

    @pytest.mark.asyncio
    async def test_invalid_difficulty(self, client, auth_headers, project_payload):
        body = project_payload(difficulty="Impossible")
        resp = await client.post("/api/v1/projects", json=body, headers=auth_headers("alice"))
        assert resp.status_code == 400

    @pytest.mark.asyncio
    async def test_requires_authentication(self, client, project_payload):
        resp = await client.post("/api/v1/projects", json=project_payload())
        assert resp.status_code == 401
        assert resp.json()["error"]["code"] == "UNAUTHENTICATED"

    @pytest.mark.asyncio
    async def test_cannot_create_for_someone_else(self, client, auth_headers, project_payload):
        body = project_payload(creatorId="bob")
        resp = await client.post("/api/v1/projects", json=body, headers=auth_headers("alice"))
        assert resp.status_code == 403

    @pytest.mark.asyncio
    async def test_owner_hook_failure_does_not_fail_create(
        self, client, auth_headers, project_payload, monkeypatch
    ):
        async def broken(*args, **kwargs):
            raise RuntimeError("membership store down")

        monkeypatch.setattr(
            "app.repositories.members.MemberRepository.get_membership", broken
        )
        resp = await client.post(
            "/api/v1/projects", json=project_payload(), headers=auth_headers("alice")
        )
        assert resp.status_code == 201
        assert resp.json()["collaborators"] == []


# ---------------------------------------------------------------------------
# List / Get
# ---------------------------------------------------------------------------


class TestListProjects:
    @pytest.mark.asyncio
    async def test_list_is_public_and_newest_first(self, client, create_project):
        first = await create_project("alice", title="First")
        second = await create_project("alice", title="Second")
        resp = await client.get("/api/v1/projects")
        assert resp.status_code == 200
        ids = [p["id"] for p in resp.json()]
        assert ids == [second["id"], first["id"]]

    @pytest.mark.asyncio
    async def test_max_duration_keeps_unset(self, client, create_project):
        await create_project("alice", title="Long", durationWeeks=6)
        await create_project("alice", title="Open-ended", durationWeeks=None)
        await create_project("alice", title="Short", durationWeeks=4)
        resp = await client.get("/api/v1/projects", params={"maxDuration": 4})
        titles = {p["title"] for p in resp.json()}
        assert titles == {"Open-ended", "Short"}

    @pytest.mark.asyncio
    async def test_exact_filters_and_all(self, client, create_project):
        await create_project("alice", title="Web one", category="Web", difficulty="Beginner")
        await create_project("alice", title="ML one", category="ML", difficulty="Advanced")

        resp = await client.get("/api/v1/projects", params={"category": "ML"})
        assert [p["title"] for p in resp.json()] == ["ML one"]

        resp = await client.get(
            "/api/v1/projects",
            params={"category": "All", "difficulty": "Beginner", "status": "All"},
        )
        assert [p["title"] for p in resp.json()] == ["Web one"]

    @pytest.mark.asyncio
    async def test_text_query(self, client, create_project):
        await create_project("alice", title="Chat", requiredSkills=["Elixir"])
        await create_project("alice", title="Blog", requiredSkills=["Django"])
        resp = await client.get("/api/v1/projects", params={"q": "elix"})
        assert [p["title"] for p in resp.json()] == ["Chat"]

    @pytest.mark.asyncio
    async def test_store_failure_degrades_to_empty(self, client, create_project, monkeypatch):
        await create_project("alice")

        async def broken(self, **kwargs):
            raise OperationalError("SELECT", {}, Exception("connection refused"))

        monkeypatch.setattr(ProjectRepository, "list_filtered", broken)
        resp = await client.get("/api/v1/projects")
        assert resp.status_code == 200
        assert resp.json() == []

    @pytest.mark.asyncio
    async def test_unshapeable_row_degrades_to_empty(self, client, db):
        async with db() as s:
            s.add(User(id="alice"))
            s.add(
                Project(
                    title="Legacy",
                    short_description="Imported row",
                    description="Difficulty outside the known levels",
                    category="Web",
                    difficulty="Expert",
                    creator_id="alice",
                )
            )
            await s.commit()

        resp = await client.get("/api/v1/projects")
        assert resp.status_code == 200
        assert resp.json() == []

    @pytest.mark.asyncio
    async def test_get_by_id(self, client, create_project):
        project = await create_project("alice")
        resp = await client.get(f"/api/v1/projects/{project['id']}")
        assert resp.status_code == 200
        assert resp.json()["id"] == project["id"]

    @pytest.mark.asyncio
    async def test_get_unknown(self, client):
        resp = await client.get(f"/api/v1/projects/{uuid.uuid4()}")
        assert resp.status_code == 404


# ---------------------------------------------------------------------------
# Delete
# ---------------------------------------------------------------------------


class TestDeleteProject:
    @pytest.mark.asyncio
    async def test_delete_cascades_members(
        self, client, auth_headers, create_project, apply_to, db
    ):
        project = await create_project("alice")
        await apply_to(project["id"], "bob")

        resp = await client.delete(
            "/api/v1/projects", params={"id": project["id"]}, headers=auth_headers("alice")
        )
        assert resp.status_code == 200
        assert resp.json() == {"success": True}

        async with db() as s:
            members = await s.execute(
                select(ProjectMember).where(
                    ProjectMember.project_id == uuid.UUID(project["id"])
                )
            )
            assert members.scalars().all() == []

        listed = await client.get("/api/v1/projects")
        assert project["id"] not in [p["id"] for p in listed.json()]

    @pytest.mark.asyncio
    async def test_delete_with_json_body(self, client, auth_headers, create_project):
        project = await create_project("alice")
        resp = await client.request(
            "DELETE",
            "/api/v1/projects",
            json={"id": project["id"]},
            headers=auth_headers("alice"),
        )
        assert resp.status_code == 200

    @pytest.mark.asyncio
    async def test_non_creator_forbidden(self, client, auth_headers, create_project):
        project = await create_project("alice")
        resp = await client.delete(
            "/api/v1/projects", params={"id": project["id"]}, headers=auth_headers("bob")
        )
        assert resp.status_code == 403
        still = await client.get(f"/api/v1/projects/{project['id']}")
        assert still.status_code == 200

    @pytest.mark.asyncio
    async def test_missing_id(self, client, auth_headers):
        resp = await client.delete("/api/v1/projects", headers=auth_headers("alice"))
        assert resp.status_code == 400

    @pytest.mark.asyncio
    async def test_unknown_project(self, client, auth_headers):
        resp = await client.delete(
            "/api/v1/projects", params={"id": str(uuid.uuid4())}, headers=auth_headers("alice")
        )
        assert resp.status_code == 404

    @pytest.mark.asyncio
    async def test_unauthenticated(self, client, create_project):
        project = await create_project("alice")
        resp = await client.delete("/api/v1/projects", params={"id": project["id"]})
        assert resp.status_code == 401
