"""Health check endpoints."""

from fastapi import APIRouter
from pydantic import BaseModel

from app import __version__
from app.config import settings
from src.signal_timing import __engine_version__

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str


class HealthDetailResponse(HealthResponse):
    """Detailed health check response with runtime settings."""

    environment: str
    engine_version: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check."""
    return HealthResponse(status="ok", version=__version__)


@router.get("/health/ready", response_model=HealthDetailResponse)
async def readiness_check() -> HealthDetailResponse:
    """Readiness check reporting environment and engine version."""
    return HealthDetailResponse(
        status="ok",
        version=__version__,
        environment=settings.app_env,
        engine_version=__engine_version__,
    )
