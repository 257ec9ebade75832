"""Health check endpoints."""

from datetime import datetime

from fastapi import APIRouter
from pydantic import BaseModel

from appforge import __version__
from appforge.api.deps import CacheDep
from appforge.config import settings

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "healthy"
    version: str
    environment: str
    model: str
    cached_artifacts: int
    timestamp: datetime


@router.get("/health", response_model=HealthResponse)
async def health_check(cache: CacheDep) -> HealthResponse:
    """Check API health status."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        environment=settings.app_env,
        model=settings.anthropic_model,
        cached_artifacts=len(cache),
        timestamp=datetime.utcnow(),
    )
