from enum import Enum
from typing import Iterable, Optional, Union

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Difficulty(str, Enum):
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"


class ProjectStatus(str, Enum):
    OPEN = "Open"
    CLOSED = "Closed"


class SkillLevel(str, Enum):
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"
    EXPERT = "Expert"


class SkillType(str, Enum):
    LEARNED = "learned"
    TAUGHT = "taught"


class MemberStatus(str, Enum):
    APPLIED = "APPLIED"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"


class MemberAction(str, Enum):
    ACCEPT = "accept"
    REJECT = "reject"


# Decision applied by each reviewer action
MEMBER_ACTION_STATUS: dict["MemberAction", "MemberStatus"] = {
    MemberAction.ACCEPT: MemberStatus.ACCEPTED,
    MemberAction.REJECT: MemberStatus.REJECTED,
}

# Filter value meaning "no filter" in listing queries
ALL_FILTER = "All"

DEFAULT_MEMBER_ROLE = "Contributor"
OWNER_ROLE = "Owner"


def normalize_tags(value: Union[str, Iterable[object], None]) -> list[str]:
    """Normalize a list or comma-separated string into unique, trimmed tags.

    Order of first appearance is kept; empty entries are dropped.
    """
    if value is None:
        return []
    if isinstance(value, str):
        items: Iterable[object] = value.split(",")
    else:
        items = value
    seen: set[str] = set()
    tags: list[str] = []
    for item in items:
        if item is None:
            continue
        tag = str(item).strip()
        if tag and tag not in seen:
            seen.add(tag)
            tags.append(tag)
    return tags


def display_name(
    first_name: Optional[str],
    last_name: Optional[str],
    email: Optional[str] = None,
    fallback: str = "User",
) -> str:
    name = " ".join(part for part in (first_name, last_name) if part)
    return name or email or fallback


class CamelModel(BaseModel):
    """Base for wire models: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class SuccessResponse(CamelModel):
    success: bool = True
