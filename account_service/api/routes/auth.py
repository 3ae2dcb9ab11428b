"""Endpoints for the authenticated caller."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from account_service.core.config import get_settings
from account_service.core.dependencies import get_current_user
from account_service.core.security import CSRFSigner
from account_service.middleware.access_gate import CSRF_COOKIE_NAME
from account_service.models.user import User
from account_service.schemas.auth import CSRFTokenResponse
from account_service.schemas.user import UserRead
from account_service.api.routes.users import user_to_read

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get("/me", response_model=UserRead, response_model_exclude_none=True)
async def get_current_user_info(current_user: User = Depends(get_current_user)) -> UserRead:
    return user_to_read(current_user)


@router.get("/csrf", response_model=CSRFTokenResponse)
async def issue_csrf_token(response: Response, _: User = Depends(get_current_user)) -> CSRFTokenResponse:
    token = CSRFSigner().issue()
    response.set_cookie(
        key=CSRF_COOKIE_NAME,
        value=token,
        httponly=False,
        samesite="strict",
        max_age=get_settings().csrf_token_max_age_seconds,
    )
    return CSRFTokenResponse(csrf_token=token)
