"""Health check endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter

from .. import __version__
from .schemas import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/api/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Report service status. No authentication required."""
    return HealthResponse(
        status="operational",
        timestamp=datetime.now(timezone.utc),
        version=__version__,
    )
