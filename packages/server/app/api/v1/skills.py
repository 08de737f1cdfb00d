"""
Skill endpoints for the signed-in user.

GET    /api/v1/user-skills  List my skills
POST   /api/v1/user-skills  Add a skill
DELETE /api/v1/user-skills?id=  Remove one of my skills
"""

from __future__ import annotations

import uuid
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import get_current_user
from app.core.database import get_session
from app.core.hooks import PostCommitHooks, get_hooks
from app.models.user import User
from app.services import skills as skill_service
from skillmatch_shared.schemas.common import SuccessResponse
from skillmatch_shared.schemas.skills import SkillCreate, SkillDeleteRequest, SkillRead

router = APIRouter()


@router.get("", response_model=List[SkillRead])
async def list_skills(
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
):
    return await skill_service.list_skills(session, user)


@router.post("", response_model=SkillRead, status_code=201)
async def add_skill(
    body: SkillCreate,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
    hooks: PostCommitHooks = Depends(get_hooks),
):
    skill = await skill_service.add_skill(session, user, body, hooks)
    await session.commit()
    response = SkillRead.model_validate(skill)
    await hooks.run(session)
    return response


@router.delete("", response_model=SuccessResponse)
async def remove_skill(
    id: Optional[uuid.UUID] = Query(None),
    body: Optional[SkillDeleteRequest] = Body(None),
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
    hooks: PostCommitHooks = Depends(get_hooks),
):
    """Delete a skill. Only its owner may do so."""
    skill_id = id or (body.id if body else None)
    await skill_service.remove_skill(session, user, skill_id, hooks)
    await session.commit()
    await hooks.run(session)
    return SuccessResponse()
