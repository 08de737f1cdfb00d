"""
User service: profile, visibility and the public directory.
"""

from __future__ import annotations

from typing import Any

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import ValidationError
from app.models.base import utcnow
from app.models.user import User
from app.repositories import SkillRepository, UserRepository
from skillmatch_shared.schemas.skills import SkillRead
from skillmatch_shared.schemas.users import DirectoryEntry, ProfileUpdateRequest, UserRead

log = structlog.get_logger()


async def update_profile(
    session: AsyncSession, caller: User, req: ProfileUpdateRequest
) -> User:
    """Apply only the fields present in the request."""
    changes = req.model_dump(exclude_unset=True)
    for field, value in changes.items():
        setattr(caller, field, value)
    if changes:
        caller.updated_at = utcnow()
        session.add(caller)
        await session.flush()
        log.info("user.updated", user_id=caller.id, fields=sorted(changes))
    return caller


async def set_visibility(session: AsyncSession, caller: User, show_profile: Any) -> User:
    # Strict: "true", 1 and friends are rejected
    if not isinstance(show_profile, bool):
        raise ValidationError("showProfile must be a boolean")
    caller.show_profile_in_learn = show_profile
    caller.updated_at = utcnow()
    session.add(caller)
    await session.flush()
    log.info("user.visibility_changed", user_id=caller.id, visible=show_profile)
    return caller


async def list_directory(session: AsyncSession) -> list[DirectoryEntry]:
    """Users who opted in, each with their skills."""
    users = await UserRepository(session).list_visible()
    skills = await SkillRepository(session).list_for_users({u.id for u in users})
    return [
        DirectoryEntry(
            **UserRead.model_validate(user).model_dump(),
            skills=[SkillRead.model_validate(s) for s in skills.get(user.id, [])],
        )
        for user in users
    ]
