"""
User profile API endpoints.

GET   /api/v1/users/me  My profile
PATCH /api/v1/users/me  Update my profile
GET   /api/v1/users/me/visibility  Am I listed in the directory?
POST  /api/v1/users/me/visibility  Opt in or out of the directory
GET   /api/v1/users/directory  Public directory of opted-in users
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import get_current_user
from app.core.database import get_session
from app.models.user import User
from app.services import users as user_service
from skillmatch_shared.schemas.users import (
    DirectoryEntry,
    ProfileUpdateRequest,
    UserRead,
    VisibilityRequest,
    VisibilityResponse,
)

router = APIRouter()


@router.get("/me", response_model=UserRead)
async def get_me(user: User = Depends(get_current_user)):
    return user


@router.patch("/me", response_model=UserRead)
async def update_me(
    body: ProfileUpdateRequest,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
):
    """Update only the profile fields present in the body."""
    user = await user_service.update_profile(session, user, body)
    await session.commit()
    return user


@router.get("/me/visibility", response_model=VisibilityResponse)
async def get_visibility(user: User = Depends(get_current_user)):
    return VisibilityResponse(show_profile_in_learn=user.show_profile_in_learn)


@router.post("/me/visibility", response_model=UserRead)
async def set_visibility(
    body: VisibilityRequest,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
):
    user = await user_service.set_visibility(session, user, body.show_profile)
    await session.commit()
    return user


@router.get("/directory", response_model=List[DirectoryEntry])
async def list_directory(session: AsyncSession = Depends(get_session)):
    """Everyone who opted into the public directory, with their skills."""
    return await user_service.list_directory(session)
