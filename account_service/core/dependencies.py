"""Reusable dependencies for FastAPI routes."""
from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from account_service.core.security import PasswordHasher
from account_service.db.session import get_session
from account_service.models.user import User
from account_service.repositories.users import UserRepository
from account_service.services.users import UserService

_hasher = PasswordHasher()


async def get_db() -> AsyncIterator[AsyncSession]:
    async with get_session() as session:
        yield session


def get_password_hasher() -> PasswordHasher:
    return _hasher


async def get_user_service(
    session: AsyncSession = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> UserService:
    return UserService(UserRepository(session), hasher)


async def get_current_user(request: Request) -> User:
    # Populated by AccessGateMiddleware for protected paths.
    user = getattr(request.state, "user", None)
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    return user
