"""Repository for Project rows."""

from __future__ import annotations

from typing import Optional

from sqlalchemy import delete, or_
from sqlmodel import select

from app.models.project import Project
from app.models.project_member import ProjectMember
from app.repositories.base import BaseRepository


class ProjectRepository(BaseRepository[Project]):
    model = Project

    async def list_filtered(
        self,
        category: Optional[str] = None,
        difficulty: Optional[str] = None,
        status: Optional[str] = None,
        max_duration_weeks: Optional[int] = None,
    ) -> list[Project]:
        """Projects matching the exact-value filters, newest first.

        Projects without a duration are never excluded by the duration cap.
        """
        stmt = select(Project)
        if category:
            stmt = stmt.where(Project.category == category)
        if difficulty:
            stmt = stmt.where(Project.difficulty == difficulty)
        if status:
            stmt = stmt.where(Project.status == status)
        if max_duration_weeks is not None:
            stmt = stmt.where(
                or_(
                    Project.duration_weeks.is_(None),
                    Project.duration_weeks <= max_duration_weeks,
                )
            )
        stmt = stmt.order_by(Project.created_at.desc(), Project.id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def delete_cascade(self, project: Project) -> None:
        """Delete a project's memberships, then the project itself."""
        await self.session.execute(
            delete(ProjectMember).where(ProjectMember.project_id == project.id)
        )
        await self.session.delete(project)
        await self.session.flush()
