"""Project membership: one row per (user, project), carrying the application and decision."""

from datetime import datetime
from typing import Optional
import uuid

import sqlalchemy as sa
from sqlmodel import Field, SQLModel

from .base import JSONList, UUIDMixin, utcnow


class ProjectMember(UUIDMixin, SQLModel, table=True):
    __tablename__ = "project_members"
    __table_args__ = (
        sa.UniqueConstraint("user_id", "project_id", name="uq_project_members_user_project"),
    )

    user_id: str = Field(foreign_key="users.id", nullable=False, index=True, ondelete="CASCADE")
    project_id: uuid.UUID = Field(
        foreign_key="projects.id", nullable=False, index=True, ondelete="CASCADE"
    )
    role: Optional[str] = None
    status: str = Field(default="APPLIED", nullable=False)  # APPLIED | ACCEPTED | REJECTED
    joined_at: datetime = Field(
        default_factory=utcnow,
        nullable=False,
        sa_column_kwargs={"server_default": sa.func.now()},
        sa_type=sa.DateTime(timezone=True),
    )
    accepted_at: Optional[datetime] = Field(default=None, sa_type=sa.DateTime(timezone=True))

    # Application payload
    full_name: Optional[str] = None
    contact_info: Optional[str] = None
    portfolio_url: Optional[str] = None
    skills: list = Field(default_factory=list, sa_type=JSONList, nullable=False)
    preferred_role: Optional[str] = None
    availability: Optional[str] = None
    motivation: Optional[str] = None
    agreed_to_guidelines: bool = Field(default=False, nullable=False)
