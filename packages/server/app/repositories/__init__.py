from .members import MemberRepository  # noqa: F401
from .projects import ProjectRepository  # noqa: F401
from .skills import SkillRepository  # noqa: F401
from .users import UserRepository  # noqa: F401
