from __future__ import annotations

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from .common import CamelModel, Difficulty, MemberStatus, ProjectStatus, normalize_tags


class ProjectCreate(CamelModel):
    """Create payload.

    Required fields are declared optional so that a missing one is reported
    as a single readable validation message rather than a schema dump.
    """

    title: Optional[str] = None
    short_description: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    difficulty: Optional[Difficulty] = None
    required_skills: List[str] = Field(default_factory=list)
    team_size: Optional[int] = Field(default=None, ge=0)
    duration_weeks: Optional[int] = Field(default=None, ge=0)
    status: ProjectStatus = ProjectStatus.OPEN
    creator_id: Optional[str] = None
    attachments: List[str] = Field(default_factory=list)
    banner_url: Optional[str] = None

    @field_validator("required_skills", "attachments", mode="before")
    @classmethod
    def _normalize_list(cls, v):
        return normalize_tags(v)


class ProjectDeleteRequest(CamelModel):
    id: Optional[uuid.UUID] = None


class CreatorSummary(CamelModel):
    id: Optional[str] = None
    name: str
    avatar: Optional[str] = None


class ApplicationPayload(CamelModel):
    full_name: Optional[str] = None
    contact_info: Optional[str] = None
    portfolio_url: Optional[str] = None
    skills: List[str] = Field(default_factory=list)
    preferred_role: Optional[str] = None
    availability: Optional[str] = None
    motivation: Optional[str] = None
    agreed_to_guidelines: bool = False


class CollaboratorRead(CamelModel):
    id: str
    name: str
    avatar: Optional[str] = None
    role: Optional[str] = None
    status: MemberStatus
    accepted_at: Optional[datetime] = None
    application: Optional[ApplicationPayload] = None


class ProjectRead(CamelModel):
    id: uuid.UUID
    title: str
    short_description: str
    description: str
    category: str
    difficulty: Difficulty
    duration_weeks: Optional[int] = None
    team_size: Optional[int] = None
    status: ProjectStatus
    required_skills: List[str] = Field(default_factory=list)
    attachments: List[str] = Field(default_factory=list)
    banner_url: Optional[str] = None
    featured: bool = False
    created_at: datetime
    updated_at: datetime
    creator: CreatorSummary
    collaborators: List[CollaboratorRead] = Field(default_factory=list)
