# SQLModel definitions, imported here to ensure metadata is populated for Alembic.
from .base import UUIDMixin, TimestampMixin  # noqa: F401
from .user import User  # noqa: F401
from .project import Project  # noqa: F401
from .project_member import ProjectMember  # noqa: F401
from .skill import Skill  # noqa: F401
