"""Skill model: a user's learned or taught skill."""

from sqlmodel import Field, SQLModel

from .base import UUIDMixin


class Skill(UUIDMixin, SQLModel, table=True):
    __tablename__ = "skills"

    user_id: str = Field(foreign_key="users.id", nullable=False, index=True, ondelete="CASCADE")
    name: str = Field(nullable=False)
    level: str = Field(nullable=False)  # Beginner | Intermediate | Advanced | Expert
    category: str = Field(nullable=False)
    type: str = Field(nullable=False)  # learned | taught
