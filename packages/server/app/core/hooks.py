"""
Post-commit hooks: best-effort side effects of a successful write.

Services register hooks while handling a request; the endpoint commits the
primary change and then calls ``run``. A hook that raises has its own
writes rolled back and is logged; it never changes the primary result.
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.events import publish_event

log = structlog.get_logger()

Hook = Callable[[AsyncSession], Awaitable[Any]]


class PostCommitHooks:
    """Per-request collector of post-commit side effects."""

    def __init__(self) -> None:
        self._hooks: list[tuple[str, Hook]] = []

    def __len__(self) -> int:
        return len(self._hooks)

    def add(self, name: str, hook: Hook) -> None:
        self._hooks.append((name, hook))

    def notify(self, event_type: str, data: Any) -> None:
        """Queue a live-update notification."""

        async def _publish(session: AsyncSession) -> None:
            await publish_event(event_type, data)

        self.add(f"notify:{event_type}", _publish)

    async def run(self, session: AsyncSession) -> list[str]:
        """Run queued hooks in order. Returns the names of hooks that failed."""
        hooks, self._hooks = self._hooks, []
        failed: list[str] = []
        for name, hook in hooks:
            try:
                await hook(session)
                await session.commit()
            except Exception as exc:
                await session.rollback()
                failed.append(name)
                log.warning("hook.failed", hook=name, error=str(exc))
        return failed


def get_hooks() -> PostCommitHooks:
    """FastAPI dependency: a fresh hook collector per request."""
    return PostCommitHooks()
