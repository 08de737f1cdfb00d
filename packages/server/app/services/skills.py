"""Skill service: a user's learned and taught skills."""

from __future__ import annotations

import uuid
from typing import Optional

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import ForbiddenError, NotFoundError, ValidationError
from app.core.events import SKILL_ADDED, SKILL_REMOVED
from app.core.hooks import PostCommitHooks
from app.models.skill import Skill
from app.models.user import User
from app.repositories import SkillRepository
from skillmatch_shared.schemas.skills import SkillCreate

log = structlog.get_logger()


async def list_skills(session: AsyncSession, caller: User) -> list[Skill]:
    return await SkillRepository(session).list_for_user(caller.id)


async def add_skill(
    session: AsyncSession,
    caller: User,
    req: SkillCreate,
    hooks: PostCommitHooks,
) -> Skill:
    name = (req.name or "").strip()
    category = (req.category or "").strip()
    if not name or not category or req.level is None or req.type is None:
        raise ValidationError("name, level, category and type are required")

    skill = SkillRepository(session).add(
        Skill(
            user_id=caller.id,
            name=name,
            level=req.level.value,
            category=category,
            type=req.type.value,
        )
    )
    await session.flush()

    hooks.notify(SKILL_ADDED, {"skillId": skill.id, "userId": caller.id})
    log.info("skill.added", skill_id=str(skill.id), user_id=caller.id)
    return skill


async def remove_skill(
    session: AsyncSession,
    caller: User,
    skill_id: Optional[uuid.UUID],
    hooks: PostCommitHooks,
) -> None:
    if skill_id is None:
        raise ValidationError("id is required")

    skills = SkillRepository(session)
    skill = await skills.get_by_id(skill_id)
    if skill is None:
        raise NotFoundError("Skill not found")
    if skill.user_id != caller.id:
        raise ForbiddenError("Cannot delete another user's skill")

    await skills.delete(skill)
    hooks.notify(SKILL_REMOVED, {"skillId": skill_id, "userId": caller.id})
    log.info("skill.removed", skill_id=str(skill_id), user_id=caller.id)
