"""SQLAlchemy-backed storage for user records."""
from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy import exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from account_service.core.errors import UserConflictError
from account_service.models.user import User

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserRepository:
    """Persist users and own identity and timestamp assignment."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def list_all(self) -> list[User]:
        result = await self.session.execute(select(User).order_by(User.id))
        return list(result.scalars().all())

    async def get(self, user_id: int) -> User | None:
        return await self.session.get(User, user_id)

    async def get_by_username(self, username: str) -> User | None:
        result = await self.session.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def email_taken(self, email: str, exclude_id: int | None = None) -> bool:
        return await self._exists(User.email == email, exclude_id)

    async def username_taken(self, username: str, exclude_id: int | None = None) -> bool:
        return await self._exists(User.username == username, exclude_id)

    async def _exists(self, clause, exclude_id: int | None) -> bool:
        query = exists().where(clause)
        if exclude_id is not None:
            query = query.where(User.id != exclude_id)
        result = await self.session.execute(select(query))
        return bool(result.scalar())

    async def add(self, user: User) -> User:
        now = _utcnow()
        user.created_at = now
        user.updated_at = now
        self.session.add(user)
        await self._flush(user)
        return user

    async def save(self, user: User) -> User:
        user.updated_at = _utcnow()
        await self._flush(user)
        return user

    async def delete(self, user: User) -> None:
        await self.session.delete(user)
        await self.session.flush()

    async def _flush(self, user: User) -> None:
        try:
            await self.session.flush()
        except IntegrityError as exc:
            await self.session.rollback()
            logger.info("Unique constraint rejected write for user %s", user.username)
            raise UserConflictError("Email or username already exists") from exc
        # Reload so the stored representation matches later reads.
        await self.session.refresh(user)
