"""
Live-update notifications over Redis Pub/Sub.

Connected clients refresh their views when one of these events arrives.
Publishing is fire-and-forget: a missing or unreachable Redis never fails
the operation that produced the event.
"""

from __future__ import annotations

import json
from typing import Any

import structlog
from fastapi.encoders import jsonable_encoder

from app.core.config import get_settings
from app.core.redis import get_redis

log = structlog.get_logger()

SKILL_ADDED = "skill.added"
SKILL_REMOVED = "skill.removed"
PROJECT_CREATED = "project.created"
PROJECT_DELETED = "project.deleted"
MEMBER_APPLIED = "member.applied"
MEMBER_ACCEPTED = "member.accepted"
MEMBER_REJECTED = "member.rejected"
MEMBER_REMOVED = "member.removed"

EVENT_TYPES = frozenset({
    SKILL_ADDED,
    SKILL_REMOVED,
    PROJECT_CREATED,
    PROJECT_DELETED,
    MEMBER_APPLIED,
    MEMBER_ACCEPTED,
    MEMBER_REJECTED,
    MEMBER_REMOVED,
})


def encode_event(event_type: str, data: Any) -> str:
    return json.dumps({"event": event_type, "data": jsonable_encoder(data)})


async def publish_event(event_type: str, data: Any) -> bool:
    """Publish one event to the notification channel.

    Returns True when the message was handed to Redis.
    """
    if event_type not in EVENT_TYPES:
        raise ValueError(f"Unknown event type: {event_type}")

    settings = get_settings()
    if not settings.notify_enabled:
        return False

    try:
        redis = await get_redis()
        await redis.publish(settings.notify_channel, encode_event(event_type, data))
    except Exception as exc:
        log.warning("event.publish_failed", event_type=event_type, error=str(exc))
        return False

    log.debug("event.published", event_type=event_type)
    return True
