"""
Tests for engine setup: SQLite stores enforce foreign keys so memberships
follow their project on delete.
"""

from __future__ import annotations

import uuid

import pytest
from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError
from sqlmodel import select

from app.core.database import is_sqlite
from app.models.project import Project
from app.models.project_member import ProjectMember


def test_is_sqlite():
    assert is_sqlite("sqlite+aiosqlite:///tmp/test.db")
    assert not is_sqlite("postgresql+asyncpg://postgres@localhost/skillmatch")


class TestForeignKeys:
    @pytest.mark.asyncio
    async def test_member_of_unknown_project_is_rejected(self, client, auth_headers, db):
        await client.get("/api/v1/users/me", headers=auth_headers("bob"))
        async with db() as s:
            s.add(ProjectMember(user_id="bob", project_id=uuid.uuid4(), role="Backend"))
            with pytest.raises(IntegrityError):
                await s.commit()

    @pytest.mark.asyncio
    async def test_deleting_project_row_cascades(self, create_project, apply_to, db):
        project = await create_project("alice")
        await apply_to(project["id"], "bob")
        project_id = uuid.UUID(project["id"])

        async with db() as s:
            await s.execute(delete(Project).where(Project.id == project_id))
            await s.commit()

        async with db() as s:
            rows = await s.execute(
                select(ProjectMember).where(ProjectMember.project_id == project_id)
            )
            assert rows.scalars().all() == []
