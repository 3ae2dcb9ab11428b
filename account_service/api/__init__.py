"""API router aggregator."""
from fastapi import APIRouter

from account_service.api.routes import auth, users

api_router = APIRouter(prefix="/api")
api_router.include_router(users.router)
api_router.include_router(auth.router)

__all__ = ["api_router"]
