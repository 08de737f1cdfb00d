"""Repository for ProjectMember rows (unique per user and project)."""

from __future__ import annotations

import uuid
from typing import Optional

from sqlalchemy import delete
from sqlmodel import select

from app.models.project_member import ProjectMember
from app.repositories.base import BaseRepository


class MemberRepository(BaseRepository[ProjectMember]):
    model = ProjectMember

    async def get_membership(
        self, project_id: uuid.UUID, user_id: str
    ) -> Optional[ProjectMember]:
        result = await self.session.execute(
            select(ProjectMember).where(
                ProjectMember.project_id == project_id,
                ProjectMember.user_id == user_id,
            )
        )
        return result.scalar_one_or_none()

    async def list_for_projects(
        self, project_ids: list[uuid.UUID]
    ) -> dict[uuid.UUID, list[ProjectMember]]:
        """Memberships grouped by project, in join order."""
        grouped: dict[uuid.UUID, list[ProjectMember]] = {pid: [] for pid in project_ids}
        if not project_ids:
            return grouped
        result = await self.session.execute(
            select(ProjectMember)
            .where(ProjectMember.project_id.in_(project_ids))
            .order_by(ProjectMember.joined_at, ProjectMember.id)
        )
        for member in result.scalars().all():
            grouped[member.project_id].append(member)
        return grouped

    async def delete_membership(self, project_id: uuid.UUID, user_id: str) -> int:
        """Delete by (project, user). Returns the number of rows removed (0 or 1)."""
        result = await self.session.execute(
            delete(ProjectMember).where(
                ProjectMember.project_id == project_id,
                ProjectMember.user_id == user_id,
            )
        )
        return result.rowcount or 0
