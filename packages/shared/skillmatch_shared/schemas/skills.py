from __future__ import annotations

import uuid
from typing import Optional

from .common import CamelModel, SkillLevel, SkillType


class SkillCreate(CamelModel):
    name: Optional[str] = None
    level: Optional[SkillLevel] = None
    category: Optional[str] = None
    type: Optional[SkillType] = None


class SkillDeleteRequest(CamelModel):
    id: Optional[uuid.UUID] = None


class SkillRead(CamelModel):
    id: uuid.UUID
    user_id: str
    name: str
    level: SkillLevel
    category: str
    type: SkillType
