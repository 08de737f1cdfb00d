"""
Project endpoints: browse, create, delete, and the membership workflow.

GET    /api/v1/projects  List projects (public, filterable)
POST   /api/v1/projects  Create a project
DELETE /api/v1/projects?id=  Delete a project (creator only)
POST   /api/v1/projects/join  Apply to a project
PATCH  /api/v1/projects/member  Accept or reject an applicant (creator only)
DELETE /api/v1/projects/member  Remove a member (creator or self)
GET    /api/v1/projects/{project_id}  Get one project
"""

from __future__ import annotations

import uuid
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import get_current_user
from app.core.database import get_session
from app.core.errors import ValidationError
from app.core.hooks import PostCommitHooks, get_hooks
from app.models.user import User
from app.services import membership as membership_service
from app.services import projects as project_service
from skillmatch_shared.schemas.common import SuccessResponse
from skillmatch_shared.schemas.members import (
    JoinRequest,
    MemberRead,
    MemberRef,
    MemberResponse,
    RespondRequest,
)
from skillmatch_shared.schemas.projects import (
    ProjectCreate,
    ProjectDeleteRequest,
    ProjectRead,
)

router = APIRouter()


# ---------------------------------------------------------------------------
# Projects
# ---------------------------------------------------------------------------


@router.get("", response_model=List[ProjectRead])
async def list_projects(
    q: Optional[str] = None,
    category: Optional[str] = None,
    difficulty: Optional[str] = None,
    status: Optional[str] = None,
    max_duration: Optional[int] = Query(None, alias="maxDuration", ge=0),
    session: AsyncSession = Depends(get_session),
):
    """List projects newest-first. "All" for a filter means no filter."""
    return await project_service.list_projects(
        session,
        q=q,
        category=category,
        difficulty=difficulty,
        status=status,
        max_duration_weeks=max_duration,
    )


@router.post("", response_model=ProjectRead, status_code=201)
async def create_project(
    project_in: ProjectCreate,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
    hooks: PostCommitHooks = Depends(get_hooks),
):
    """Create a project. The creator joins it as owner."""
    project = await project_service.create_project(session, project_in, user, hooks)
    await session.commit()
    project_id = project.id
    await hooks.run(session)
    return await project_service.get_project(session, project_id)


@router.delete("", response_model=SuccessResponse)
async def delete_project(
    id: Optional[uuid.UUID] = Query(None),
    body: Optional[ProjectDeleteRequest] = Body(None),
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
    hooks: PostCommitHooks = Depends(get_hooks),
):
    """Delete a project and its memberships. Irreversible."""
    project_id = id or (body.id if body else None)
    if project_id is None:
        raise ValidationError("Project id is required")
    await project_service.delete_project(session, project_id, user, hooks)
    await session.commit()
    await hooks.run(session)
    return SuccessResponse()


# ---------------------------------------------------------------------------
# Membership
# ---------------------------------------------------------------------------


@router.post("/join", response_model=MemberResponse)
async def apply_to_project(
    body: JoinRequest,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
    hooks: PostCommitHooks = Depends(get_hooks),
):
    """Submit (or resubmit) an application to join a project."""
    member = await membership_service.apply(session, user, body, hooks)
    await session.commit()
    response = MemberResponse(member=MemberRead.model_validate(member))
    await hooks.run(session)
    return response


@router.patch("/member", response_model=MemberResponse)
async def respond_to_application(
    project_id: Optional[uuid.UUID] = Query(None, alias="projectId"),
    user_id: Optional[str] = Query(None, alias="userId"),
    action: Optional[str] = Query(None),
    body: Optional[RespondRequest] = Body(None),
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
    hooks: PostCommitHooks = Depends(get_hooks),
):
    """Accept or reject an applicant. Query parameters win over the body."""
    if body is not None:
        project_id = project_id or body.project_id
        user_id = user_id or body.user_id
        action = action or body.action
    member = await membership_service.respond(
        session, user, project_id, user_id, action, hooks
    )
    await session.commit()
    response = MemberResponse(member=MemberRead.model_validate(member))
    await hooks.run(session)
    return response


@router.delete("/member", response_model=SuccessResponse)
async def remove_member(
    project_id: Optional[uuid.UUID] = Query(None, alias="projectId"),
    user_id: Optional[str] = Query(None, alias="userId"),
    body: Optional[MemberRef] = Body(None),
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
    hooks: PostCommitHooks = Depends(get_hooks),
):
    """Remove a member. Removing a missing membership still succeeds."""
    if body is not None:
        project_id = project_id or body.project_id
        user_id = user_id or body.user_id
    await membership_service.remove(session, user, project_id, user_id, hooks)
    await session.commit()
    await hooks.run(session)
    return SuccessResponse()


# ---------------------------------------------------------------------------
# Single project (declared last so /join and /member are matched first)
# ---------------------------------------------------------------------------


@router.get("/{project_id}", response_model=ProjectRead)
async def get_project(
    project_id: uuid.UUID,
    session: AsyncSession = Depends(get_session),
):
    return await project_service.get_project(session, project_id)
