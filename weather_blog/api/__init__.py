"""API router definitions."""

from fastapi import APIRouter

from .posts import router as posts_router
from .routes import system_router

api_router = APIRouter()
api_router.include_router(system_router)
api_router.include_router(posts_router)

__all__ = ["api_router"]
