"""
Project service: business logic for project listing, creation and deletion.
"""

from __future__ import annotations

import uuid
from typing import Iterable, Optional

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import ForbiddenError, NotFoundError, ValidationError
from app.core.events import PROJECT_CREATED, PROJECT_DELETED
from app.core.hooks import PostCommitHooks
from app.models.base import utcnow
from app.models.project import Project
from app.models.project_member import ProjectMember
from app.models.user import User
from app.repositories import MemberRepository, ProjectRepository, UserRepository
from skillmatch_shared.schemas.common import (
    ALL_FILTER,
    OWNER_ROLE,
    MemberStatus,
    display_name,
)
from skillmatch_shared.schemas.projects import (
    ApplicationPayload,
    CollaboratorRead,
    CreatorSummary,
    ProjectCreate,
    ProjectRead,
)

log = structlog.get_logger()

REQUIRED_FIELDS = ("title", "short_description", "description", "category", "difficulty")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def normalize_filter(value: Optional[str]) -> Optional[str]:
    """Blank and "All" both mean no filter."""
    if value is None:
        return None
    value = value.strip()
    if not value or value == ALL_FILTER:
        return None
    return value


def matches_query(project: Project, query: Optional[str]) -> bool:
    """Case-insensitive substring match on title, short description or any skill tag."""
    if not query or not query.strip():
        return True
    needle = query.strip().lower()
    if needle in (project.title or "").lower():
        return True
    if needle in (project.short_description or "").lower():
        return True
    return any(needle in str(tag).lower() for tag in project.required_skills or [])


def _application(member: ProjectMember) -> Optional[ApplicationPayload]:
    if not member.agreed_to_guidelines:
        return None
    return ApplicationPayload(
        full_name=member.full_name,
        contact_info=member.contact_info,
        portfolio_url=member.portfolio_url,
        skills=member.skills or [],
        preferred_role=member.preferred_role,
        availability=member.availability,
        motivation=member.motivation,
        agreed_to_guidelines=member.agreed_to_guidelines,
    )


def shape_project(
    project: Project,
    members: Iterable[ProjectMember],
    users: dict[str, User],
) -> ProjectRead:
    """Listing shape: project fields plus creator and collaborator summaries."""
    creator_user = users.get(project.creator_id)
    if creator_user:
        creator = CreatorSummary(
            id=creator_user.id,
            name=display_name(creator_user.first_name, creator_user.last_name, creator_user.email),
            avatar=creator_user.image_url,
        )
    else:
        creator = CreatorSummary(id=None, name="Unknown")

    collaborators = []
    for member in members:
        user = users.get(member.user_id)
        collaborators.append(
            CollaboratorRead(
                id=member.user_id,
                name=(
                    display_name(user.first_name, user.last_name, user.email, fallback="Member")
                    if user
                    else "Member"
                ),
                avatar=user.image_url if user else None,
                role=member.role,
                status=MemberStatus(member.status),
                accepted_at=member.accepted_at,
                application=_application(member),
            )
        )

    return ProjectRead(
        id=project.id,
        title=project.title,
        short_description=project.short_description,
        description=project.description,
        category=project.category,
        difficulty=project.difficulty,
        duration_weeks=project.duration_weeks,
        team_size=project.team_size,
        status=project.status,
        required_skills=list(project.required_skills or []),
        attachments=list(project.attachments or []),
        banner_url=project.banner_url,
        featured=bool(project.featured),
        created_at=project.created_at,
        updated_at=project.updated_at,
        creator=creator,
        collaborators=collaborators,
    )


async def _shape_many(session: AsyncSession, projects: list[Project]) -> list[ProjectRead]:
    if not projects:
        return []
    members_by_project = await MemberRepository(session).list_for_projects(
        [p.id for p in projects]
    )
    user_ids = {p.creator_id for p in projects}
    for members in members_by_project.values():
        user_ids.update(m.user_id for m in members)
    users = await UserRepository(session).get_many(user_ids)
    return [shape_project(p, members_by_project.get(p.id, []), users) for p in projects]


async def get_project_or_404(session: AsyncSession, project_id: uuid.UUID) -> Project:
    project = await ProjectRepository(session).get_by_id(project_id)
    if not project:
        raise NotFoundError("Project not found")
    return project


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------

async def list_projects(
    session: AsyncSession,
    q: Optional[str] = None,
    category: Optional[str] = None,
    difficulty: Optional[str] = None,
    status: Optional[str] = None,
    max_duration_weeks: Optional[int] = None,
) -> list[ProjectRead]:
    """List projects newest-first.

    Never raises: a store failure or a row that cannot be shaped degrades the
    listing to an empty result so the browse page stays usable.
    """
    try:
        projects = await ProjectRepository(session).list_filtered(
            category=normalize_filter(category),
            difficulty=normalize_filter(difficulty),
            status=normalize_filter(status),
            max_duration_weeks=max_duration_weeks,
        )
        projects = [p for p in projects if matches_query(p, q)]
        return await _shape_many(session, projects)
    except Exception as exc:
        await session.rollback()
        log.error("project.list_failed", error=str(exc), error_type=type(exc).__name__)
        return []


async def get_project(session: AsyncSession, project_id: uuid.UUID) -> ProjectRead:
    project = await get_project_or_404(session, project_id)
    shaped = await _shape_many(session, [project])
    return shaped[0]


async def create_project(
    session: AsyncSession,
    req: ProjectCreate,
    caller: User,
    hooks: PostCommitHooks,
) -> Project:
    """Create a project owned by the caller.

    The creator's own membership is added by a post-commit hook, so a failure
    there never undoes the project.
    """
    creator_id = req.creator_id or caller.id
    missing = [
        name for name in REQUIRED_FIELDS
        if getattr(req, name) is None or not str(getattr(req, name)).strip()
    ]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")
    if creator_id != caller.id:
        raise ForbiddenError("Projects can only be created for yourself")

    project = Project(
        title=req.title.strip(),
        short_description=req.short_description.strip(),
        description=req.description.strip(),
        category=req.category.strip(),
        difficulty=req.difficulty.value,
        team_size=req.team_size,
        duration_weeks=req.duration_weeks,
        status=req.status.value,
        required_skills=req.required_skills,
        attachments=req.attachments,
        banner_url=req.banner_url,
        creator_id=creator_id,
    )
    ProjectRepository(session).add(project)
    await session.flush()

    project_id = project.id

    async def add_owner_membership(hook_session: AsyncSession) -> None:
        members = MemberRepository(hook_session)
        if await members.get_membership(project_id, creator_id):
            return
        now = utcnow()
        members.add(
            ProjectMember(
                user_id=creator_id,
                project_id=project_id,
                role=OWNER_ROLE,
                status=MemberStatus.ACCEPTED.value,
                joined_at=now,
                accepted_at=now,
            )
        )
        await hook_session.flush()

    hooks.add("owner_membership", add_owner_membership)
    hooks.notify(PROJECT_CREATED, {"projectId": project_id, "title": project.title})

    log.info("project.created", project_id=str(project_id), creator=creator_id)
    return project


async def delete_project(
    session: AsyncSession,
    project_id: uuid.UUID,
    caller: User,
    hooks: PostCommitHooks,
) -> None:
    """Delete a project and all its memberships. Creator only; irreversible."""
    project = await get_project_or_404(session, project_id)
    if project.creator_id != caller.id:
        raise ForbiddenError("Only the project creator can delete this project")

    await ProjectRepository(session).delete_cascade(project)
    hooks.notify(PROJECT_DELETED, {"projectId": project_id})
    log.info("project.deleted", project_id=str(project_id), caller=caller.id)
