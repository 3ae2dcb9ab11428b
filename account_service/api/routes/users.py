"""User resource endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from account_service.core.config import get_settings
from account_service.core.dependencies import get_db, get_user_service
from account_service.core.errors import UserConflictError, UserNotFoundError, UserValidationError
from account_service.models.user import User
from account_service.schemas.user import UserCreate, UserRead, UserUpdate
from account_service.services.users import UserService

router = APIRouter(prefix="/users", tags=["users"])


def user_to_read(user: User) -> UserRead:
    """Build the public representation, dropping the hash unless it is exposed."""
    read = UserRead.model_validate(user)
    if not get_settings().expose_password_hash:
        read.password_hash = None
    return read


def _bad_request(exc: UserValidationError | UserConflictError) -> HTTPException:
    if isinstance(exc, UserValidationError):
        detail = [error.as_dict() for error in exc.errors]
    else:
        detail = str(exc)
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


@router.get("", response_model=list[UserRead], response_model_exclude_none=True)
async def list_users(service: UserService = Depends(get_user_service)) -> list[UserRead]:
    return [user_to_read(user) for user in await service.list_users()]


@router.get("/{user_id}", response_model=UserRead, response_model_exclude_none=True)
async def get_user(user_id: int, service: UserService = Depends(get_user_service)) -> UserRead:
    try:
        return user_to_read(await service.get_user(user_id))
    except UserNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc


@router.post("", response_model=UserRead, response_model_exclude_none=True)
async def create_user(
    payload: UserCreate,
    session: AsyncSession = Depends(get_db),
    service: UserService = Depends(get_user_service),
) -> UserRead:
    try:
        user = await service.create_user(payload)
    except (UserValidationError, UserConflictError) as exc:
        await session.rollback()
        raise _bad_request(exc) from exc
    await session.commit()
    return user_to_read(user)


@router.put("/{user_id}", response_model=UserRead, response_model_exclude_none=True)
async def update_user(
    user_id: int,
    payload: UserUpdate,
    session: AsyncSession = Depends(get_db),
    service: UserService = Depends(get_user_service),
) -> UserRead:
    try:
        user = await service.update_user(user_id, payload)
    except UserNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except (UserValidationError, UserConflictError) as exc:
        await session.rollback()
        raise _bad_request(exc) from exc
    await session.commit()
    return user_to_read(user)


@router.delete("/{user_id}", status_code=status.HTTP_200_OK)
async def delete_user(
    user_id: int,
    session: AsyncSession = Depends(get_db),
    service: UserService = Depends(get_user_service),
) -> Response:
    try:
        await service.delete_user(user_id)
    except UserNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    await session.commit()
    return Response(status_code=status.HTTP_200_OK)
