"""Membership workflow schemas: applications, reviews, removal."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from .common import CamelModel, MemberAction, MemberStatus, normalize_tags


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------

class JoinRequest(CamelModel):
    """Application to join a project."""
    project_id: Optional[uuid.UUID] = None
    full_name: Optional[str] = None
    contact_info: Optional[str] = None
    portfolio_url: Optional[str] = None
    skills: List[str] = Field(default_factory=list)
    preferred_role: Optional[str] = None
    availability: Optional[str] = None
    motivation: Optional[str] = None
    agreed_to_guidelines: bool = False

    @field_validator("skills", mode="before")
    @classmethod
    def _normalize_skills(cls, v):
        return normalize_tags(v)


class MemberRef(CamelModel):
    """Identifies one membership: a user within a project."""
    project_id: Optional[uuid.UUID] = None
    user_id: Optional[str] = None


class RespondRequest(MemberRef):
    action: Optional[str] = None


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------

class MemberRead(CamelModel):
    id: uuid.UUID
    user_id: str
    project_id: uuid.UUID
    role: Optional[str] = None
    status: MemberStatus
    joined_at: datetime
    accepted_at: Optional[datetime] = None
    full_name: Optional[str] = None
    contact_info: Optional[str] = None
    portfolio_url: Optional[str] = None
    skills: List[str] = Field(default_factory=list)
    preferred_role: Optional[str] = None
    availability: Optional[str] = None
    motivation: Optional[str] = None
    agreed_to_guidelines: bool = False


class MemberResponse(CamelModel):
    success: bool = True
    member: MemberRead


def parse_action(value: Optional[str]) -> Optional[MemberAction]:
    """Case-insensitive lookup of a review action; None when unknown."""
    if not value:
        return None
    try:
        return MemberAction(value.strip().lower())
    except ValueError:
        return None
