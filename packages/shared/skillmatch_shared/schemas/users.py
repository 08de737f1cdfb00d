"""User profile schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional

from pydantic import Field

from .common import CamelModel
from .skills import SkillRead


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------

class ProfileUpdateRequest(CamelModel):
    """Partial profile update; only fields present in the body are applied."""
    first_name: Optional[str] = Field(default=None, max_length=200)
    last_name: Optional[str] = Field(default=None, max_length=200)
    image_url: Optional[str] = None
    github_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    portfolio_url: Optional[str] = None


class VisibilityRequest(CamelModel):
    # Left untyped so a non-boolean reaches the service and is reported there
    show_profile: Any = None


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------

class UserRead(CamelModel):
    id: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    image_url: Optional[str] = None
    github_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    portfolio_url: Optional[str] = None
    show_profile_in_learn: bool = False
    created_at: datetime
    updated_at: datetime


class VisibilityResponse(CamelModel):
    show_profile_in_learn: bool


class DirectoryEntry(UserRead):
    """A publicly listed user with their skills."""
    skills: List[SkillRead] = Field(default_factory=list)
