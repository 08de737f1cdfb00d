"""
Membership service: the apply / review / remove workflow.

A membership row is keyed on (user, project). Applying twice updates the
same row; the reviewer (project creator) moves it to ACCEPTED or REJECTED.
"""

from __future__ import annotations

import uuid
from typing import Optional

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import ConflictError, ForbiddenError, NotFoundError, ValidationError
from app.core.events import MEMBER_ACCEPTED, MEMBER_APPLIED, MEMBER_REJECTED, MEMBER_REMOVED
from app.core.hooks import PostCommitHooks
from app.models.base import utcnow
from app.models.project_member import ProjectMember
from app.models.user import User
from app.repositories import MemberRepository
from app.services.projects import get_project_or_404
from skillmatch_shared.schemas.common import (
    DEFAULT_MEMBER_ROLE,
    MEMBER_ACTION_STATUS,
    MemberAction,
    MemberStatus,
)
from skillmatch_shared.schemas.members import JoinRequest, parse_action

log = structlog.get_logger()

APPLICATION_FIELDS = (
    "full_name",
    "contact_info",
    "portfolio_url",
    "skills",
    "preferred_role",
    "availability",
    "motivation",
    "agreed_to_guidelines",
)


def _event_payload(member: ProjectMember) -> dict:
    return {
        "projectId": member.project_id,
        "userId": member.user_id,
        "status": member.status,
    }


async def apply(
    session: AsyncSession,
    caller: User,
    req: JoinRequest,
    hooks: PostCommitHooks,
) -> ProjectMember:
    """Submit or update the caller's application to a project.

    Re-applying overwrites the application fields but leaves an existing
    decision (status, acceptedAt) untouched.
    """
    if req.project_id is None:
        raise ValidationError("projectId is required")
    if not req.agreed_to_guidelines:
        raise ValidationError("You must agree to the community guidelines")

    await get_project_or_404(session, req.project_id)

    members = MemberRepository(session)
    member = await members.get_membership(req.project_id, caller.id)
    application = {name: getattr(req, name) for name in APPLICATION_FIELDS}

    if member is None:
        member = ProjectMember(
            user_id=caller.id,
            project_id=req.project_id,
            role=req.preferred_role or DEFAULT_MEMBER_ROLE,
            status=MemberStatus.APPLIED.value,
            **application,
        )
        members.add(member)
        created = True
    else:
        for name, value in application.items():
            setattr(member, name, value)
        member.role = req.preferred_role or member.role or DEFAULT_MEMBER_ROLE
        created = False

    try:
        await session.flush()
    except IntegrityError as exc:
        # Another request created the row between our read and write
        await session.rollback()
        raise ConflictError("Application is already being processed; retry") from exc

    hooks.notify(MEMBER_APPLIED, _event_payload(member))
    log.info(
        "member.applied",
        project_id=str(req.project_id),
        user_id=caller.id,
        created=created,
    )
    return member


async def respond(
    session: AsyncSession,
    caller: User,
    project_id: Optional[uuid.UUID],
    user_id: Optional[str],
    action: Optional[str],
    hooks: PostCommitHooks,
) -> ProjectMember:
    """Accept or reject an application. Only the project creator may review."""
    if project_id is None or not user_id or not action:
        raise ValidationError("projectId, userId and action are required")
    decision = parse_action(action)
    if decision is None:
        raise ValidationError("action must be 'accept' or 'reject'")

    project = await get_project_or_404(session, project_id)
    if project.creator_id != caller.id:
        raise ForbiddenError("Only the project creator can review applications")

    member = await MemberRepository(session).get_membership(project_id, user_id)
    if member is None:
        raise NotFoundError("Membership not found")

    new_status = MEMBER_ACTION_STATUS[decision]
    if decision is MemberAction.ACCEPT:
        if member.status != MemberStatus.ACCEPTED.value:
            member.status = new_status.value
            member.accepted_at = utcnow()
    else:
        member.status = new_status.value
        member.accepted_at = None
    await session.flush()

    event = MEMBER_ACCEPTED if decision is MemberAction.ACCEPT else MEMBER_REJECTED
    hooks.notify(event, _event_payload(member))
    log.info(
        "member.reviewed",
        project_id=str(project_id),
        user_id=user_id,
        status=member.status,
    )
    return member


async def remove(
    session: AsyncSession,
    caller: User,
    project_id: Optional[uuid.UUID],
    user_id: Optional[str],
    hooks: PostCommitHooks,
) -> bool:
    """Remove a membership. Allowed for the creator or the member themself.

    Returns False when there was nothing to remove; that is not an error.
    """
    if project_id is None or not user_id:
        raise ValidationError("projectId and userId are required")

    project = await get_project_or_404(session, project_id)
    if caller.id not in (project.creator_id, user_id):
        raise ForbiddenError("Not allowed to remove this member")

    removed = await MemberRepository(session).delete_membership(project_id, user_id) > 0
    if removed:
        hooks.notify(MEMBER_REMOVED, {"projectId": project_id, "userId": user_id})
    log.info(
        "member.removed",
        project_id=str(project_id),
        user_id=user_id,
        removed=removed,
    )
    return removed
