"""Project model."""

from typing import Optional

from sqlmodel import Field, SQLModel

from .base import JSONList, TimestampMixin, UUIDMixin


class Project(UUIDMixin, TimestampMixin, SQLModel, table=True):
    __tablename__ = "projects"

    title: str = Field(nullable=False)
    short_description: str = Field(nullable=False)
    description: str = Field(nullable=False)
    category: str = Field(nullable=False, index=True)
    difficulty: str = Field(nullable=False)  # Beginner | Intermediate | Advanced
    team_size: Optional[int] = None
    duration_weeks: Optional[int] = None
    status: str = Field(default="Open", nullable=False)  # Open | Closed
    required_skills: list = Field(default_factory=list, sa_type=JSONList, nullable=False)
    attachments: list = Field(default_factory=list, sa_type=JSONList, nullable=False)
    banner_url: Optional[str] = None
    featured: bool = Field(default=False, nullable=False)
    creator_id: str = Field(
        foreign_key="users.id", nullable=False, index=True, ondelete="CASCADE"
    )
