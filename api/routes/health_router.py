"""
Health check endpoint.
"""
from fastapi import APIRouter, Depends

from api.schemas.response import HealthResponse
from config import Settings, get_settings

health_router = APIRouter(prefix="", tags=["health"])


@health_router.get("/health", response_model=HealthResponse)
async def health(settings: Settings = Depends(get_settings)):
    """Liveness probe; never touches Drive."""
    return HealthResponse(status="OK", environment=settings.environment)
