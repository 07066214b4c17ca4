"""User repository. Interface methods return application DTOs."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from docroute.application.dtos.user import UserResult
from docroute.infrastructure.persistence.models.user import User
from docroute.infrastructure.persistence.repositories.base import BaseRepository


def _user_to_result(u: User) -> UserResult:
    """Map ORM User to application UserResult."""
    return UserResult(
        id=u.id,
        username=u.username,
        email=u.email,
        is_active=u.is_active,
    )


class UserRepository(BaseRepository[User]):
    """User repository. Lookups for token subjects and routing targets."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, User)

    async def get_by_id(self, user_id: str) -> UserResult | None:
        row = await self.get(user_id)
        return _user_to_result(row) if row else None
