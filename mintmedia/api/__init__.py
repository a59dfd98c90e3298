"""API routes for mintmedia"""

from fastapi import APIRouter

from .health import router as health_router
from .resolve import router as resolve_router

# Create the main API router
api_router = APIRouter(prefix="/api")

api_router.include_router(health_router, tags=["Health"])
api_router.include_router(resolve_router, tags=["Resolve"])

__all__ = ["api_router"]
