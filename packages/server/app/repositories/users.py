"""Repository for User rows."""

from __future__ import annotations

from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import select

from app.models.user import User
from app.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    model = User

    async def get_or_create(self, user_id: str, **profile: Optional[str]) -> tuple[User, bool]:
        """Fetch a user, inserting a minimal row on first sight.

        Returns (user, created). Profile fields only seed a new row. If a
        concurrent request inserted the same id first, its row is returned.
        """
        user = await self.get_by_id(user_id)
        if user:
            return user, False

        user = User(id=user_id, **profile)
        self.session.add(user)
        try:
            await self.session.flush()
        except IntegrityError:
            await self.session.rollback()
            existing = await self.get_by_id(user_id)
            if existing is None:
                raise
            return existing, False
        return user, True

    async def get_many(self, user_ids: set[str]) -> dict[str, User]:
        if not user_ids:
            return {}
        result = await self.session.execute(select(User).where(User.id.in_(user_ids)))
        return {user.id: user for user in result.scalars().all()}

    async def list_visible(self) -> list[User]:
        """Users who opted into the public directory."""
        result = await self.session.execute(
            select(User)
            .where(User.show_profile_in_learn == True)  # noqa: E712
            .order_by(User.created_at)
        )
        return list(result.scalars().all())
