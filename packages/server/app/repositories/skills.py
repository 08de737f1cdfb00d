"""Repository for Skill rows."""

from __future__ import annotations

from sqlmodel import select

from app.models.skill import Skill
from app.repositories.base import BaseRepository


class SkillRepository(BaseRepository[Skill]):
    model = Skill

    async def list_for_user(self, user_id: str) -> list[Skill]:
        result = await self.session.execute(
            select(Skill).where(Skill.user_id == user_id).order_by(Skill.name)
        )
        return list(result.scalars().all())

    async def list_for_users(self, user_ids: set[str]) -> dict[str, list[Skill]]:
        """Skills grouped by owner, for embedding in user listings."""
        grouped: dict[str, list[Skill]] = {uid: [] for uid in user_ids}
        if not user_ids:
            return grouped
        result = await self.session.execute(
            select(Skill).where(Skill.user_id.in_(user_ids)).order_by(Skill.name)
        )
        for skill in result.scalars().all():
            grouped[skill.user_id].append(skill)
        return grouped
